"""
Canned threat profile shown next to a scan result.

None of this is looked up anywhere: every section is a fixed template keyed
by the risk level the analyzer produced, so the result panels have something
to render without a reputation or WHOIS backend.
"""
from typing import List

from linkscan.core.url_analyzer import split_web_url
from linkscan.schemas import (
    AnalysisResult,
    LinkMetadata,
    ProIntelligence,
    ReputationSource,
    ReputationSummary,
    RiskBadge,
    RiskLevel,
    ScamStatus,
    SecurityAction,
    SiteBehavior,
    SiteProfile,
)

RISK_BADGES = {
    RiskLevel.SAFE: RiskBadge(label="SAFE", code="0x00"),
    RiskLevel.SUSPICIOUS: RiskBadge(label="SUSPICIOUS", code="0x01"),
    RiskLevel.DANGEROUS: RiskBadge(label="DANGEROUS", code="0xFF"),
}

SECURITY_ACTIONS = {
    RiskLevel.SAFE: (
        SecurityAction(label="You're good to go", description="This link passed all safety checks."),
        SecurityAction(label="Save for later", description="Bookmark this page if you need it again."),
        SecurityAction(label="Share with confidence", description="Safe to send to friends or colleagues."),
    ),
    RiskLevel.SUSPICIOUS: (
        SecurityAction(label="Double-check the source", description="Verify who sent you this link before clicking."),
        SecurityAction(label="Ask the sender", description="Confirm if they actually meant to share this."),
        SecurityAction(label="Report if unsure", description="When in doubt, report it as potential spam."),
    ),
    RiskLevel.DANGEROUS: (
        SecurityAction(label="Do not open this link", description="Clicking may expose you to scams or malware."),
        SecurityAction(label="Delete the message", description="Remove it from your inbox or chat immediately."),
        SecurityAction(label="Report as phishing", description="Help protect others by reporting this threat."),
    ),
}

# referrer, ip_region, registrar, owner, intent
LINK_METADATA = {
    RiskLevel.SAFE: (
        "Direct / Organic", "United States (California)", "GoDaddy LLC",
        "Verified Corporation", "Informational",
    ),
    RiskLevel.SUSPICIOUS: (
        "Shortened link service", "Netherlands (Amsterdam)", "NameCheap Inc",
        "Privacy Protected", "Data Collection",
    ),
    RiskLevel.DANGEROUS: (
        "Email campaign / Unknown", "Russia (Moscow)", "Unknown Registrar",
        "Hidden / Anonymous", "Credential Theft",
    ),
}

REPUTATION = {
    RiskLevel.SAFE: ReputationSummary(
        status="clean",
        summary="No negative public reports detected",
    ),
    RiskLevel.SUSPICIOUS: ReputationSummary(
        status="warning",
        summary="User complaints found on community forums",
        source_count=2,
        sources=[
            ReputationSource(
                name="Community Forum", type="forum",
                excerpt="Several users reported unexpected redirects from this domain.",
            ),
            ReputationSource(
                name="Security Discussion", type="report",
                excerpt="Domain flagged in spam discussions, unconfirmed threat.",
            ),
        ],
    ),
    RiskLevel.DANGEROUS: ReputationSummary(
        status="danger",
        summary="Reported in public scam discussions",
        source_count=4,
        sources=[
            ReputationSource(
                name="Phishing Database", type="database",
                excerpt="Listed in community-reported phishing attempts.",
            ),
            ReputationSource(
                name="Reddit r/Scams", type="forum",
                excerpt="Multiple reports of credential theft attempts.",
            ),
            ReputationSource(
                name="Security Blog", type="report",
                excerpt="Analyzed as part of phishing campaign targeting users.",
            ),
            ReputationSource(
                name="User Reports", type="forum",
                excerpt="Flagged by community members for suspicious behavior.",
            ),
        ],
    ),
}

SAMPLE_DOMAINS = {
    RiskLevel.SAFE: "example.com",
    RiskLevel.SUSPICIOUS: "suspicious-site.net",
    RiskLevel.DANGEROUS: "malware-host.ru",
}

SITE_PROFILES = {
    RiskLevel.SAFE: dict(
        domain_age="8 years", title="Example Corporation - Official Website",
        hosting="United States (AWS)",
    ),
    RiskLevel.SUSPICIOUS: dict(
        domain_age="3 months", title="Account Verification Required",
        hosting="Netherlands (Unknown)",
    ),
    RiskLevel.DANGEROUS: dict(
        domain_age="12 days", title="URGENT: Verify Your Account Now!",
        hosting="Russia (Bulletproof hosting)",
    ),
}

SCAM_PATTERNS = {
    RiskLevel.SAFE: [],
    RiskLevel.SUSPICIOUS: ["Unusual URL structure", "Generic content"],
    RiskLevel.DANGEROUS: ["Fake login form", "Urgency manipulation", "Brand impersonation"],
}

INTENTS = {
    RiskLevel.SAFE: "Informational browsing",
    RiskLevel.SUSPICIOUS: "Collect login credentials",
    RiskLevel.DANGEROUS: "Steal personal data and payment info",
}

GUIDANCE = {
    RiskLevel.SAFE: [
        "Safe to proceed with this website",
        "Standard security practices apply",
        "No additional precautions needed",
    ],
    RiskLevel.SUSPICIOUS: [
        "Avoid entering any personal information",
        "Do not log in with your real credentials",
        "Verify the sender if you received this link",
    ],
    RiskLevel.DANGEROUS: [
        "Do not interact with this website in any way",
        "Report this link to your IT security team",
        "If you already clicked, run a security scan",
    ],
}


def verdict_headline(level: RiskLevel, score: int) -> str:
    """One-line verdict, worded more strongly towards the ends of each band"""
    if level == RiskLevel.SAFE:
        if score <= 10:
            return "This link looks completely safe to open."
        if score <= 20:
            return "Safe to use — nothing unusual detected."
        return "Looks okay, but stay cautious."
    if level == RiskLevel.SUSPICIOUS:
        if score <= 50:
            return "Something feels off — better to avoid."
        return "Suspicious patterns found — proceed with care."
    if score >= 80:
        return "High risk detected — do not click this link."
    return "This link shows dangerous warning signs."


def risk_badge(level: RiskLevel) -> RiskBadge:
    return RISK_BADGES[level]


def security_actions(level: RiskLevel) -> List[SecurityAction]:
    return list(SECURITY_ACTIONS[level])


def _split_url(url: str):
    return split_web_url(url if url.startswith("http") else f"https://{url}")


def display_url(url: str) -> str:
    """Hostname and path, without scheme or query"""
    try:
        parts = _split_url(url)
        hostname = parts.hostname
    except ValueError:
        return url
    if not hostname:
        return url
    return hostname + (parts.path or "/")


def link_metadata(level: RiskLevel, url: str) -> LinkMetadata:
    try:
        domain = _split_url(url).hostname or url.split("/")[0]
    except ValueError:
        domain = url.split("/")[0]

    referrer, ip_region, registrar, owner, intent = LINK_METADATA[level]
    return LinkMetadata(
        domain=domain,
        referrer=referrer,
        ip_region=ip_region,
        registrar=registrar,
        owner=owner,
        intent=intent,
    )


def reputation_summary(level: RiskLevel) -> ReputationSummary:
    return REPUTATION[level]


def pro_intelligence(result: AnalysisResult) -> ProIntelligence:
    level = result.risk_level
    domain = SAMPLE_DOMAINS[level]

    return ProIntelligence(
        resolved_url=f"https://{domain}/landing-page",
        behavior=SiteBehavior(
            redirects={RiskLevel.SAFE: 0, RiskLevel.SUSPICIOUS: 1, RiskLevel.DANGEROUS: 3}[level],
            asks_creds=level != RiskLevel.SAFE,
            asks_payment=level == RiskLevel.DANGEROUS,
            initiates_download=level == RiskLevel.DANGEROUS,
        ),
        scam_status=ScamStatus(
            detected=level != RiskLevel.SAFE,
            patterns=SCAM_PATTERNS[level],
        ),
        profile=SiteProfile(
            domain=domain,
            domain_age_new=level != RiskLevel.SAFE,
            brand_impersonation=level == RiskLevel.DANGEROUS,
            **SITE_PROFILES[level],
        ),
        intent=INTENTS[level],
        guidance=GUIDANCE[level],
    )
