"""HTTP client wrapper for the SEO extraction FastAPI backend."""

from __future__ import annotations

import logging
import os

import httpx

API_URL = os.getenv("API_URL", "http://localhost:8000")

logger = logging.getLogger(__name__)


def check_health() -> bool:
    """Return True if the API server responds to /health."""
    try:
        r = httpx.get(f"{API_URL}/health", timeout=5.0)
        return r.status_code == 200
    except httpx.ConnectError:
        return False


def _post(path: str, payload: dict[str, str], timeout: float, action: str) -> dict:  # type: ignore[type-arg]
    try:
        r = httpx.post(f"{API_URL}{path}", json=payload, timeout=timeout)
        r.raise_for_status()
        return r.json()  # type: ignore[no-any-return]
    except httpx.HTTPError as e:
        logger.error("%s failed: %s", action, e)
        return {}


def extract_narrative(narrative: str, domain: str) -> dict:  # type: ignore[type-arg]
    """Extract a record from an existing narrative; no narrator call is made."""
    return _post(f"/api/extract/{domain}", {"narrative": narrative}, 30.0, "Extraction")


def research_keyword(keyword: str, business: str) -> dict:  # type: ignore[type-arg]
    """Run keyword research through the narrator."""
    return _post(
        "/api/keyword-research",
        {"keyword": keyword, "business": business},
        120.0,
        "Keyword research",
    )


def optimize_content(content: str, keyword: str, topic: str = "") -> dict:  # type: ignore[type-arg]
    """Run a content optimization review through the narrator."""
    return _post(
        "/api/content-optimization",
        {"content": content, "keyword": keyword, "topic": topic},
        120.0,
        "Content optimization",
    )


def audit_site(url: str) -> dict:  # type: ignore[type-arg]
    """Run a technical SEO audit through the narrator."""
    return _post("/api/technical-audit", {"url": url}, 120.0, "Technical audit")
