from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Tuple

from linkscan.config import settings

# ==========================================
# 🧱 SHARED MODELS
# ==========================================

class RiskLevel(str, Enum):
    SAFE = "safe"
    SUSPICIOUS = "suspicious"
    DANGEROUS = "dangerous"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class FactorIcon(str, Enum):
    """Presentation tags the UI maps onto its icon set"""
    SHIELD = "Shield"
    LOCK = "Lock"
    SHIELD_OFF = "ShieldOff"
    LINK = "Link2"
    ALERT_TRIANGLE = "AlertTriangle"
    SKULL = "Skull"
    GIT_BRANCH = "GitBranch"
    TYPE = "Type"
    CLOCK = "Clock"


class RiskFactor(BaseModel):
    model_config = ConfigDict(frozen=True)

    icon: FactorIcon
    label: str
    severity: Severity


class AnalysisResult(BaseModel):
    """Result of a single URL scan. Built once per call, never mutated."""
    model_config = ConfigDict(frozen=True)

    risk_score: int = Field(ge=0, le=100)
    risk_level: RiskLevel
    explanation: str
    risk_factors: Tuple[RiskFactor, ...] = ()
    recommendation: str

# ==========================================
# 📤 REPORT MODELS
# ==========================================

class RiskBadge(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    code: str


class SecurityAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    description: str


class LinkMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    domain: str
    referrer: str
    ip_region: str
    registrar: str
    owner: str
    intent: str


class ReputationSource(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    excerpt: str
    is_negative: bool = True


class ReputationSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: str
    summary: str
    source_count: int = 0
    sources: List[ReputationSource] = []


class SiteBehavior(BaseModel):
    model_config = ConfigDict(frozen=True)

    redirects: int = 0
    asks_creds: bool = False
    asks_payment: bool = False
    initiates_download: bool = False


class ScamStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    detected: bool = False
    patterns: List[str] = []


class SiteProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    domain_age: str
    domain_age_new: bool
    domain: str
    title: str
    hosting: str
    brand_impersonation: bool = False


class ProIntelligence(BaseModel):
    model_config = ConfigDict(frozen=True)

    resolved_url: str
    behavior: SiteBehavior
    scam_status: ScamStatus
    profile: SiteProfile
    intent: str
    guidance: List[str]


class LinkReport(BaseModel):
    """Everything the result panels render for one scanned link"""
    url: str
    display_url: str
    analysis: AnalysisResult
    verdict: str
    badge: RiskBadge
    actions: List[SecurityAction]
    metadata: LinkMetadata
    reputation: ReputationSummary
    intelligence: ProIntelligence
    processing_time: float

# ==========================================
# 📥 INPUT MODELS
# ==========================================

class UrlSubmission(BaseModel):
    url: str

    @field_validator("url")
    @classmethod
    def url_must_not_be_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("URL must not be empty")
        if len(value) > settings.MAX_URL_LENGTH:
            raise ValueError(f"URL exceeds {settings.MAX_URL_LENGTH} characters")
        return value
