import logging
from fastapi import APIRouter, Depends, HTTPException
from datetime import datetime

from linkscan.schemas import AnalysisResult, LinkReport, UrlSubmission
from linkscan.services.analysis_service import AnalysisService
from linkscan.config import settings

logger = logging.getLogger(__name__)

router = APIRouter()


def get_analysis_service() -> AnalysisService:
    """Dependency for FastAPI routes"""
    return AnalysisService()

# ============================================================================
# ANALYSIS ENDPOINTS
# ============================================================================

@router.post("/analyze", response_model=AnalysisResult)
def analyze_url(
    submission: UrlSubmission,
    service: AnalysisService = Depends(get_analysis_service)
):
    """Score a single URL"""
    try:
        return service.analyze_url(submission.url)
    except Exception as e:
        logger.exception(f"❌ Error in /analyze: {e}")
        raise HTTPException(status_code=500, detail=f"Analysis failed: {str(e)}")


@router.post("/report", response_model=LinkReport)
def link_report(
    submission: UrlSubmission,
    service: AnalysisService = Depends(get_analysis_service)
):
    """Score a URL and attach the full threat profile"""
    try:
        return service.build_report(submission.url)
    except Exception as e:
        logger.exception(f"❌ Error in /report: {e}")
        raise HTTPException(status_code=500, detail=f"Report failed: {str(e)}")

# ============================================================================
# SYSTEM
# ============================================================================

@router.get("/health")
def health_check():
    return {"status": "healthy", "timestamp": datetime.utcnow(), "service": settings.APP_NAME}
