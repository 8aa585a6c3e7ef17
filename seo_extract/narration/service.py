"""Analysis services: narrate a request, then extract its structured record."""

from __future__ import annotations

import logging

from seo_extract.domains.registry import Domain, extract
from seo_extract.extraction.models import ExtractionRecord
from seo_extract.narration.narrator import narrate
from seo_extract.narration.prompts import (
    CONTENT_INSTRUCTION,
    CONTENT_SYSTEM_PROMPT,
    KEYWORD_INSTRUCTION,
    KEYWORD_SYSTEM_PROMPT,
    TECHNICAL_INSTRUCTION,
    TECHNICAL_SYSTEM_PROMPT,
)

logger = logging.getLogger(__name__)


def _run(domain: Domain, instruction: str, system_prompt: str) -> ExtractionRecord:
    try:
        narrative = narrate(instruction, system_prompt)
    except Exception:
        logger.exception("Narrator failed for %s analysis", domain.value)
        raise
    logger.info("Narrated %s analysis (%d characters)", domain.value, len(narrative))
    record = extract(narrative, domain)
    logger.info("Produced %s record with %d fields", domain.value, len(record))
    return record


def run_keyword_research(keyword: str, business: str) -> ExtractionRecord:
    """Research *keyword* for *business* and return the keyword record."""
    instruction = KEYWORD_INSTRUCTION.format(keyword=keyword, business=business)
    return _run(Domain.KEYWORD, instruction, KEYWORD_SYSTEM_PROMPT)


def run_content_optimization(content: str, keyword: str, topic: str) -> ExtractionRecord:
    """Review *content* against *keyword* and *topic* and return the content record."""
    instruction = CONTENT_INSTRUCTION.format(content=content, keyword=keyword, topic=topic)
    return _run(Domain.CONTENT, instruction, CONTENT_SYSTEM_PROMPT)


def run_technical_audit(url: str) -> ExtractionRecord:
    """Audit *url* and return the technical record."""
    if not url.startswith(("http://", "https://")):
        url = f"https://{url}"
    instruction = TECHNICAL_INSTRUCTION.format(url=url)
    return _run(Domain.TECHNICAL, instruction, TECHNICAL_SYSTEM_PROMPT)
