import pytest

from linkscan.core import threat_profile
from linkscan.schemas import AnalysisResult, RiskLevel


def _result(level, score):
    return AnalysisResult(
        risk_score=score,
        risk_level=level,
        explanation="",
        recommendation="",
    )


@pytest.mark.parametrize("level,score,expected", [
    (RiskLevel.SAFE, 5, "This link looks completely safe to open."),
    (RiskLevel.SAFE, 20, "Safe to use — nothing unusual detected."),
    (RiskLevel.SUSPICIOUS, 35, "Something feels off — better to avoid."),
    (RiskLevel.DANGEROUS, 55, "This link shows dangerous warning signs."),
    (RiskLevel.DANGEROUS, 80, "High risk detected — do not click this link."),
])
def test_verdict_headline(level, score, expected):
    assert threat_profile.verdict_headline(level, score) == expected


def test_risk_badges():
    assert threat_profile.risk_badge(RiskLevel.SAFE).code == "0x00"
    assert threat_profile.risk_badge(RiskLevel.SUSPICIOUS).label == "SUSPICIOUS"
    assert threat_profile.risk_badge(RiskLevel.DANGEROUS).code == "0xFF"


@pytest.mark.parametrize("level", list(RiskLevel))
def test_three_security_actions_per_level(level):
    actions = threat_profile.security_actions(level)
    assert len(actions) == 3
    assert all(action.label and action.description for action in actions)


def test_dangerous_actions_say_do_not_open():
    actions = threat_profile.security_actions(RiskLevel.DANGEROUS)
    assert actions[0].label == "Do not open this link"


@pytest.mark.parametrize("url,expected", [
    ("https://example.com", "example.com/"),
    ("bit.ly/xyz123", "bit.ly/xyz123"),
    ("http://Shop.Example.com/cart?id=1", "shop.example.com/cart"),
    ("https://[[[", "https://[[["),
    ("https://evil.net\\@google.com", "evil.net/@google.com"),
])
def test_display_url(url, expected):
    assert threat_profile.display_url(url) == expected


def test_link_metadata_uses_hostname_and_level_template():
    metadata = threat_profile.link_metadata(RiskLevel.SUSPICIOUS, "bit.ly/xyz123")

    assert metadata.domain == "bit.ly"
    assert metadata.referrer == "Shortened link service"
    assert metadata.registrar == "NameCheap Inc"
    assert metadata.intent == "Data Collection"


def test_link_metadata_falls_back_to_first_path_segment():
    metadata = threat_profile.link_metadata(RiskLevel.DANGEROUS, "https://[[[/x")
    assert metadata.domain == "https:"
    assert metadata.owner == "Hidden / Anonymous"


@pytest.mark.parametrize("level,status,count", [
    (RiskLevel.SAFE, "clean", 0),
    (RiskLevel.SUSPICIOUS, "warning", 2),
    (RiskLevel.DANGEROUS, "danger", 4),
])
def test_reputation_summary(level, status, count):
    summary = threat_profile.reputation_summary(level)

    assert summary.status == status
    assert summary.source_count == count
    assert len(summary.sources) == count


def test_pro_intelligence_for_dangerous_link():
    intel = threat_profile.pro_intelligence(_result(RiskLevel.DANGEROUS, 90))

    assert intel.resolved_url == "https://malware-host.ru/landing-page"
    assert intel.behavior.redirects == 3
    assert intel.behavior.asks_payment is True
    assert intel.scam_status.detected is True
    assert "Fake login form" in intel.scam_status.patterns
    assert intel.profile.brand_impersonation is True
    assert intel.profile.domain_age == "12 days"
    assert len(intel.guidance) == 3


def test_pro_intelligence_for_safe_link():
    intel = threat_profile.pro_intelligence(_result(RiskLevel.SAFE, 5))

    assert intel.behavior.redirects == 0
    assert intel.behavior.asks_creds is False
    assert intel.scam_status.patterns == []
    assert intel.profile.domain_age_new is False
    assert intel.intent == "Informational browsing"
