"""Analysis endpoints: narrate with Claude, then extract the domain record."""

from __future__ import annotations

from anthropic import APIStatusError
from fastapi import APIRouter, HTTPException

from seo_extract.api.models import (
    ContentOptimizationRequest,
    ContentOptimizationResponse,
    KeywordAnalysisResponse,
    KeywordResearchRequest,
    TechnicalAuditRequest,
    TechnicalSeoResponse,
)
from seo_extract.narration.service import (
    run_content_optimization,
    run_keyword_research,
    run_technical_audit,
)

router = APIRouter()


def _narrator_unavailable(exc: APIStatusError) -> HTTPException:
    # Claude overloaded (529) or another upstream error: answer with JSON so the
    # CORS headers survive.
    return HTTPException(status_code=503, detail=f"Narrator unavailable: {exc.message}")


@router.post("/api/keyword-research", response_model=KeywordAnalysisResponse)
async def keyword_research(request: KeywordResearchRequest) -> KeywordAnalysisResponse:
    try:
        record = run_keyword_research(request.keyword, request.business)
    except APIStatusError as exc:
        raise _narrator_unavailable(exc) from exc
    return KeywordAnalysisResponse(**record.as_dict())


@router.post("/api/content-optimization", response_model=ContentOptimizationResponse)
async def content_optimization(request: ContentOptimizationRequest) -> ContentOptimizationResponse:
    try:
        record = run_content_optimization(request.content, request.keyword, request.topic)
    except APIStatusError as exc:
        raise _narrator_unavailable(exc) from exc
    return ContentOptimizationResponse(**record.as_dict())


@router.post("/api/technical-audit", response_model=TechnicalSeoResponse)
async def technical_audit(request: TechnicalAuditRequest) -> TechnicalSeoResponse:
    """Run a technical SEO audit of one URL.

    The narrator is asked about the URL; this service does not crawl it.
    """
    try:
        record = run_technical_audit(request.url)
    except APIStatusError as exc:
        raise _narrator_unavailable(exc) from exc
    return TechnicalSeoResponse(**record.as_dict())
