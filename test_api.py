import logging
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from linkscan.main import app
from linkscan.api.routes import get_analysis_service
from linkscan.config import settings
from linkscan.core.url_analyzer import UrlAnalyzer
from linkscan.services.analysis_service import AnalysisService

PREFIX = settings.API_PREFIX


def _service(draw):
    rng = MagicMock()
    rng.random.return_value = draw
    return AnalysisService(analyzer=UrlAnalyzer(rng=rng))


@pytest.fixture
def client():
    app.dependency_overrides[get_analysis_service] = lambda: _service(0.99)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["message"] == f"{settings.APP_NAME} API"


def test_health(client):
    response = client.get(f"{PREFIX}/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_analyze_trusted_domain(client):
    response = client.post(f"{PREFIX}/analyze", json={"url": "https://www.google.com"})
    assert response.status_code == 200

    data = response.json()
    assert data["risk_score"] == 5
    assert data["risk_level"] == "safe"
    assert data["risk_factors"] == [
        {"icon": "Shield", "label": "Verified trusted domain", "severity": "low"}
    ]


def test_analyze_dangerous_link(client):
    response = client.post(f"{PREFIX}/analyze", json={"url": "http://example.com/login-verify-account"})
    assert response.status_code == 200

    data = response.json()
    assert data["risk_level"] == "dangerous"
    assert data["risk_score"] == 55
    assert [f["icon"] for f in data["risk_factors"]] == ["ShieldOff", "AlertTriangle"]


@pytest.mark.parametrize("payload", [{"url": ""}, {"url": "   "}, {}, {"url": "x" * (settings.MAX_URL_LENGTH + 1)}])
def test_analyze_rejects_invalid_submission(client, payload):
    response = client.post(f"{PREFIX}/analyze", json=payload)
    assert response.status_code == 422


def test_report_contains_every_section(client):
    response = client.post(f"{PREFIX}/report", json={"url": "bit.ly/xyz123"})
    assert response.status_code == 200

    data = response.json()
    assert data["url"] == "bit.ly/xyz123"
    assert data["display_url"] == "bit.ly/xyz123"
    assert data["analysis"]["risk_score"] == 20
    assert data["verdict"] == "Safe to use — nothing unusual detected."
    assert data["badge"] == {"label": "SAFE", "code": "0x00"}
    assert len(data["actions"]) == 3
    assert data["metadata"]["domain"] == "bit.ly"
    assert data["reputation"]["status"] == "clean"
    assert data["intelligence"]["behavior"]["redirects"] == 0
    assert data["processing_time"] >= 0


def test_report_scores_host_hidden_behind_backslash(client):
    response = client.post(f"{PREFIX}/report", json={"url": "https://evil.net\\@google.com"})
    assert response.status_code == 200

    data = response.json()
    assert [f["icon"] for f in data["analysis"]["risk_factors"]] == ["Lock"]
    assert data["metadata"]["domain"] == "evil.net"
    assert data["display_url"] == "evil.net/@google.com"


def test_analyze_surfaces_unexpected_errors_as_500(client):
    broken = MagicMock()
    broken.analyze_url.side_effect = RuntimeError("boom")
    app.dependency_overrides[get_analysis_service] = lambda: broken

    response = client.post(f"{PREFIX}/analyze", json={"url": "example.com"})
    assert response.status_code == 500
    assert "boom" in response.json()["detail"]


def test_service_logs_dangerous_verdict_as_warning(caplog):
    service = _service(0.99)
    with caplog.at_level(logging.INFO, logger="linkscan.services.analysis_service"):
        service.analyze_url("http://example.com/login-verify-account")

    assert any(r.levelno == logging.WARNING and "DANGEROUS (55/100)" in r.getMessage() for r in caplog.records)


def test_service_logs_safe_verdict_as_info(caplog):
    service = _service(0.99)
    with caplog.at_level(logging.INFO, logger="linkscan.services.analysis_service"):
        service.analyze_url("https://github.com")

    assert any(r.levelno == logging.INFO and "SAFE (5/100)" in r.getMessage() for r in caplog.records)
