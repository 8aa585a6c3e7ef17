"""Tests for API endpoints and the HTTP client (no external API keys required)."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import httpx
from anthropic import APIStatusError
from fastapi.testclient import TestClient

from seo_extract import client as api_client
from seo_extract.api.main import app
from seo_extract.domains.registry import Domain, extract

client = TestClient(app)

KEYWORD_NARRATIVE = (
    'Analysis for "running shoes"\n'
    "Search volume: 12,000\n"
    "Trend: Increasing over the last year\n"
    "Competition level: High\n"
)


def _overloaded() -> APIStatusError:
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    return APIStatusError(
        "Overloaded", response=httpx.Response(529, request=request), body=None
    )


def test_health() -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


# ---------------------------------------------------------------------------
# /api/extract/{domain}
# ---------------------------------------------------------------------------


class TestExtractEndpoint:
    def test_keyword_narrative(self) -> None:
        response = client.post("/api/extract/keyword", json={"narrative": KEYWORD_NARRATIVE})
        assert response.status_code == 200
        data = response.json()
        assert data["domain"] == "keyword"
        assert data["record"]["keyword"] == "running shoes"
        assert data["record"]["search_volume"] == 12000
        assert data["record"]["trend"] == "Increasing"
        assert data["record"]["difficulty"] == 9

    def test_empty_narrative_yields_full_defaults(self) -> None:
        response = client.post("/api/extract/technical", json={"narrative": ""})
        assert response.status_code == 200
        record = response.json()["record"]
        assert list(record) == list(extract("", Domain.TECHNICAL).fields)
        assert record["performance_score"] == 65

    def test_matches_engine_output(self) -> None:
        response = client.post("/api/extract/content", json={"narrative": "Keyword density: 1.2%"})
        assert response.json()["record"] == extract("Keyword density: 1.2%", "content").as_dict()

    def test_unknown_domain_rejected(self) -> None:
        response = client.post("/api/extract/backlinks", json={"narrative": "x"})
        assert response.status_code == 422

    def test_missing_narrative_rejected(self) -> None:
        response = client.post("/api/extract/keyword", json={})
        assert response.status_code == 422


# ---------------------------------------------------------------------------
# Narrated analysis endpoints
# ---------------------------------------------------------------------------


class TestAnalysisEndpoints:
    @patch("seo_extract.api.routes.analysis.run_keyword_research")
    def test_keyword_research(self, mock_run: MagicMock) -> None:
        mock_run.return_value = extract(KEYWORD_NARRATIVE, Domain.KEYWORD)

        response = client.post(
            "/api/keyword-research", json={"keyword": "running shoes", "business": "Shoe Shop"}
        )

        assert response.status_code == 200
        mock_run.assert_called_once_with("running shoes", "Shoe Shop")
        data = response.json()
        assert data["competition_level"] == "High"
        assert data["related_keywords"] == ["running shoes guide", "running shoes tutorial"]

    @patch("seo_extract.api.routes.analysis.run_content_optimization")
    def test_content_optimization(self, mock_run: MagicMock) -> None:
        mock_run.return_value = extract("", Domain.CONTENT)

        response = client.post(
            "/api/content-optimization", json={"content": "Some body text", "keyword": "email"}
        )

        assert response.status_code == 200
        mock_run.assert_called_once_with("Some body text", "email", "")
        data = response.json()
        assert data["content_score"] == extract("", Domain.CONTENT)["content_score"]
        assert all("category" in item for item in data["recommendations"])

    @patch("seo_extract.api.routes.analysis.run_technical_audit")
    def test_technical_audit(self, mock_run: MagicMock) -> None:
        mock_run.return_value = extract(
            "Performance score: 45/100\nCanonical URL: Missing", Domain.TECHNICAL
        )

        response = client.post("/api/technical-audit", json={"url": "example.com"})

        assert response.status_code == 200
        data = response.json()
        assert data["performance_score"] == 45
        assert [item["text"] for item in data["critical_issues"]] == ["Missing canonical URL"]
        assert data["critical_issues"][0]["priority"] is None

    @patch("seo_extract.api.routes.analysis.run_keyword_research")
    def test_narrator_overloaded_returns_503(self, mock_run: MagicMock) -> None:
        mock_run.side_effect = _overloaded()

        response = client.post("/api/keyword-research", json={"keyword": "a", "business": "b"})

        assert response.status_code == 503
        assert "Narrator unavailable" in response.json()["detail"]

    def test_keyword_research_validation(self) -> None:
        response = client.post("/api/keyword-research", json={"keyword": "", "business": "b"})
        assert response.status_code == 422

    def test_technical_audit_requires_url(self) -> None:
        response = client.post("/api/technical-audit", json={})
        assert response.status_code == 422


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------


class TestApiClient:
    @patch("seo_extract.client.httpx.post")
    def test_extract_narrative(self, mock_post: MagicMock) -> None:
        mock_post.return_value.json.return_value = {"domain": "keyword", "record": {}}

        result = api_client.extract_narrative("text", "keyword")

        assert result == {"domain": "keyword", "record": {}}
        args, kwargs = mock_post.call_args
        assert args[0].endswith("/api/extract/keyword")
        assert kwargs["json"] == {"narrative": "text"}

    @patch("seo_extract.client.httpx.post")
    def test_http_error_returns_empty(self, mock_post: MagicMock) -> None:
        mock_post.side_effect = httpx.ConnectError("refused")

        assert api_client.audit_site("example.com") == {}

    @patch("seo_extract.client.httpx.get")
    def test_check_health_offline(self, mock_get: MagicMock) -> None:
        mock_get.side_effect = httpx.ConnectError("refused")

        assert api_client.check_health() is False

    @patch("seo_extract.client.httpx.post")
    def test_optimize_content_payload(self, mock_post: MagicMock) -> None:
        mock_post.return_value.json.return_value = {}

        api_client.optimize_content("body", "kw")

        assert mock_post.call_args.kwargs["json"] == {"content": "body", "keyword": "kw", "topic": ""}
