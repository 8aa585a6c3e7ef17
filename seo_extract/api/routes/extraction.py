"""Extraction endpoint: turn a caller-supplied narrative into a record."""

from __future__ import annotations

from fastapi import APIRouter

from seo_extract.api.models import ExtractRequest, ExtractResponse
from seo_extract.domains.registry import Domain, extract

router = APIRouter()


@router.post("/api/extract/{domain}", response_model=ExtractResponse)
async def extract_narrative(domain: Domain, request: ExtractRequest) -> ExtractResponse:
    """Extract a structured record from an existing narrative.

    No narrator is involved. Unknown domains are rejected with 422 by
    path validation.
    """
    record = extract(request.narrative, domain)
    return ExtractResponse(domain=domain, record=record.as_dict())
