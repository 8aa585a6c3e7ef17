"""Near-duplicate removal for classified findings."""

from __future__ import annotations

from collections.abc import Iterable

from seo_extract.extraction.models import Finding

DEFAULT_PREFIX_LENGTH = 20


def is_duplicate(first: Finding, second: Finding, prefix_length: int = DEFAULT_PREFIX_LENGTH) -> bool:
    """Two findings are duplicates when they share a category and one's
    lower-cased text prefix is contained in the other's prefix.

    Prefix containment only counts when both texts are at least
    *prefix_length* characters long; shorter texts must match exactly.
    """
    if first.category != second.category:
        return False
    a = first.text.lower()
    b = second.text.lower()
    if a == b:
        return True
    if min(len(a), len(b)) < prefix_length:
        return False
    a, b = a[:prefix_length], b[:prefix_length]
    return a in b or b in a


def dedupe(findings: Iterable[Finding], prefix_length: int = DEFAULT_PREFIX_LENGTH) -> tuple[Finding, ...]:
    """Drop later near-duplicates, keeping the first occurrence and the input order."""
    kept: list[Finding] = []
    for finding in findings:
        if any(is_duplicate(existing, finding, prefix_length) for existing in kept):
            continue
        kept.append(finding)
    return tuple(kept)
