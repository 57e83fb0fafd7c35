import time
import logging
from typing import Optional

from linkscan.core.url_analyzer import UrlAnalyzer
from linkscan.core import threat_profile
from linkscan.schemas import AnalysisResult, LinkReport, RiskLevel
from linkscan.config import settings

logger = logging.getLogger(__name__)


class AnalysisService:
    def __init__(self, analyzer: Optional[UrlAnalyzer] = None):
        self.analyzer = analyzer or UrlAnalyzer(
            new_domain_probability=settings.NEW_DOMAIN_PROBABILITY
        )

    def analyze_url(self, url: str) -> AnalysisResult:
        """Run the heuristic scan and log the verdict"""
        result = self.analyzer.analyze(url)
        self._log_verdict(url, result)
        return result

    def build_report(self, url: str) -> LinkReport:
        """Complete link report: scan result plus every profile section"""
        start_time = time.time()

        result = self.analyze_url(url)
        level = result.risk_level

        report = LinkReport(
            url=url,
            display_url=threat_profile.display_url(url.strip()),
            analysis=result,
            verdict=threat_profile.verdict_headline(level, result.risk_score),
            badge=threat_profile.risk_badge(level),
            actions=threat_profile.security_actions(level),
            metadata=threat_profile.link_metadata(level, url.strip()),
            reputation=threat_profile.reputation_summary(level),
            intelligence=threat_profile.pro_intelligence(result),
            processing_time=time.time() - start_time,
        )

        logger.debug(f"Report for {url!r} built in {report.processing_time:.4f}s")
        return report

    def _log_verdict(self, url: str, result: AnalysisResult):
        message = f"{result.risk_level.value.upper()} ({result.risk_score}/100): {url}"
        if result.risk_level == RiskLevel.DANGEROUS:
            logger.warning(f"🚨 {message}")
        elif result.risk_level == RiskLevel.SUSPICIOUS:
            logger.info(f"⚠️ {message}")
        else:
            logger.info(f"✓ {message}")
