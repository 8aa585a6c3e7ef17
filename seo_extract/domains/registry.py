"""Domain lookup: map an analysis domain to its extraction schema."""

from __future__ import annotations

import logging
from enum import StrEnum

from seo_extract.domains.content import CONTENT_SCHEMA
from seo_extract.domains.keyword import KEYWORD_SCHEMA
from seo_extract.domains.technical import TECHNICAL_SCHEMA
from seo_extract.extraction.assembler import assemble
from seo_extract.extraction.models import ExtractionRecord
from seo_extract.extraction.schema import ExtractionSchema

logger = logging.getLogger(__name__)


class Domain(StrEnum):
    KEYWORD = "keyword"
    CONTENT = "content"
    TECHNICAL = "technical"


SCHEMAS: dict[Domain, ExtractionSchema] = {
    Domain.KEYWORD: KEYWORD_SCHEMA,
    Domain.CONTENT: CONTENT_SCHEMA,
    Domain.TECHNICAL: TECHNICAL_SCHEMA,
}


def get_schema(domain: str | Domain) -> ExtractionSchema:
    """Return the schema for *domain*.

    Raises:
        ValueError: If *domain* is not one of :class:`Domain`.
    """
    try:
        return SCHEMAS[Domain(domain)]
    except ValueError:
        raise ValueError(
            f"Unknown domain {domain!r}; expected one of {', '.join(d.value for d in Domain)}"
        ) from None


def extract(text: str, domain: str | Domain) -> ExtractionRecord:
    """Extract the structured record for *domain* from narrative *text*."""
    schema = get_schema(domain)
    logger.info("Extracting %s record from %d characters of narrative", schema.domain, len(text or ""))
    return assemble(text, schema)
