"""Pydantic request/response schemas for the SEO extraction API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from seo_extract.domains.registry import Domain


class ExtractRequest(BaseModel):
    """Request body for the /api/extract/{domain} endpoint."""

    narrative: str


class ExtractResponse(BaseModel):
    """A record extracted from a caller-supplied narrative."""

    domain: Domain
    record: dict[str, Any]


class KeywordResearchRequest(BaseModel):
    keyword: str = Field(min_length=1)
    business: str = Field(min_length=1)


class ContentOptimizationRequest(BaseModel):
    content: str = Field(min_length=1)
    keyword: str = Field(min_length=1)
    topic: str = ""


class TechnicalAuditRequest(BaseModel):
    url: str = Field(min_length=1)


class FindingModel(BaseModel):
    """A classified finding; axes a domain does not use are null."""

    text: str
    category: str
    priority: str | None = None
    effort: str | None = None
    impact: str | None = None
    recommendation: str | None = None


class KeywordAnalysisResponse(BaseModel):
    keyword: str
    search_volume: int
    trend: str
    competition_level: str
    relevance_score: int
    commercial_intent: str
    difficulty: int
    recommendation: str
    related_keywords: list[str]


class ContentOptimizationResponse(BaseModel):
    readability_score: int
    keyword_density: float
    keyword_in_h1: bool
    keyword_in_intro: bool
    keyword_score: int
    topic_coverage: float
    semantic_score: int
    content_score: int
    missing_subtopics: list[str]
    recommendations: list[FindingModel]
    keyword: str
    improved_title: str
    improved_meta_description: str


class TechnicalSeoResponse(BaseModel):
    performance_score: int
    mobile_score: int
    structure_score: int
    schema_score: int
    overall_score: int
    critical_issues: list[FindingModel]
    improvements: list[FindingModel]
