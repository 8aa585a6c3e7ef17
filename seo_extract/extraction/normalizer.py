"""Value normalizer: turn raw evidence into typed values."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass

from seo_extract.extraction.matcher import split_fragments
from seo_extract.extraction.models import Evidence

logger = logging.getLogger(__name__)


def clamp(value: float, minimum: float, maximum: float | None) -> float:
    """Clamp *value* into ``[minimum, maximum]`` (no upper bound if ``None``)."""
    if value < minimum:
        return minimum
    if maximum is not None and value > maximum:
        return maximum
    return value


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding up (72.5 -> 73)."""
    return math.floor(value + 0.5)


def parse_number(raw: str, integer: bool = True) -> float | int | None:
    """Parse a captured numeric string, or return ``None`` if it is not a number.

    Thousands separators are removed. Integer parsing truncates the
    fractional part, so ``"7.9"`` reads as ``7``.
    """
    cleaned = raw.replace(",", "").strip()
    try:
        value = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return int(value) if integer else value


@dataclass(frozen=True)
class NumberRule:
    """Integer-in-range (or float-in-range) normalization."""

    minimum: float = 0
    maximum: float | None = 100
    integer: bool = True

    def coerce(self, value: float) -> float | int:
        bounded = clamp(value, self.minimum, self.maximum)
        return int(bounded) if self.integer else float(bounded)

    def apply(self, evidence: Evidence | None) -> float | int | None:
        """Return the clamped value, or ``None`` when evidence is absent or not numeric."""
        if evidence is None:
            return None
        parsed = parse_number(evidence.text, integer=False)
        if parsed is None:
            logger.debug("Discarding non-numeric evidence %r", evidence.text)
            return None
        value = parsed * evidence.scale
        if self.integer:
            value = int(value)
        return self.coerce(value)


@dataclass(frozen=True)
class Label:
    """A ``{keywordRegex, label}`` pair of an enumerated rule."""

    pattern: re.Pattern[str]
    label: str


def label(regex: str, name: str) -> Label:
    return Label(pattern=re.compile(regex, re.IGNORECASE), label=name)


@dataclass(frozen=True)
class LabelRule:
    """Enumerated-label normalization: first matching keyword group wins."""

    labels: tuple[Label, ...]
    default: str

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(dict.fromkeys(item.label for item in self.labels))

    def apply(self, evidence: Evidence | None) -> str:
        if evidence is None:
            return self.default
        for item in self.labels:
            if item.pattern.search(evidence.text):
                return item.label
        logger.debug("No label matched %r; using default %r", evidence.text, self.default)
        return self.default


@dataclass(frozen=True)
class ListRule:
    """String-list normalization with sentinel exclusion."""

    default: tuple[str, ...] = ()
    exclude: frozenset[str] = frozenset()

    def apply(self, evidence: Evidence | None) -> tuple[str, ...]:
        if evidence is None:
            return self.default
        excluded = {item.casefold() for item in self.exclude}
        fragments = tuple(
            fragment
            for fragment in split_fragments(evidence.text)
            if fragment.casefold() not in excluded
        )
        return fragments or self.default


Rule = NumberRule | LabelRule | ListRule


def normalize(evidence: Evidence | None, rule: Rule) -> float | int | str | tuple[str, ...] | None:
    """Convert *evidence* into a typed value according to *rule*."""
    return rule.apply(evidence)
