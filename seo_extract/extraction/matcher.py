"""Pattern matcher: locate a field's evidence with ordered alternative recognizers.

Recognizers are tried in declaration order and the first one that matches
wins, so the most specific or most reliable phrasing is listed first. All
recognizers are compiled case-insensitive.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from seo_extract.extraction.models import Evidence

_LIST_SEPARATOR_RE = re.compile(r"[,;]")
_SENTENCE_BREAK_RE = re.compile(r"[.;]")


@dataclass(frozen=True)
class Recognizer:
    """One alternative phrasing for a field.

    Attributes:
        pattern: Compiled, case-insensitive regular expression.
        group: Capture group holding the evidence (0 for the whole match).
        min_length: Captures shorter than this (after stripping) do not count
            as a match, and the next recognizer is tried.
        scale: Multiplier the normalizer applies to a numeric capture, e.g.
            ``0.1`` for a percentage feeding a 0-10 field.
    """

    pattern: re.Pattern[str]
    group: int = 1
    min_length: int = 1
    scale: float = 1.0

    def capture(self, match: re.Match[str]) -> str | None:
        try:
            raw = match.group(self.group)
        except IndexError:
            return None
        if raw is None:
            return None
        raw = raw.strip()
        if len(raw) < self.min_length:
            return None
        return raw


def recognizer(regex: str, *, group: int = 1, min_length: int = 1, scale: float = 1.0) -> Recognizer:
    """Compile *regex* into a case-insensitive :class:`Recognizer`."""
    return Recognizer(
        pattern=re.compile(regex, re.IGNORECASE),
        group=group,
        min_length=min_length,
        scale=scale,
    )


def find(text: str, recognizers: Sequence[Recognizer]) -> Evidence | None:
    """Return the evidence of the first recognizer that matches *text*.

    Precedence follows the order of *recognizers*, not the position of the
    match in the text. Returns ``None`` when nothing matches.
    """
    for index, rec in enumerate(recognizers):
        match = rec.pattern.search(text)
        if match is None:
            continue
        captured = rec.capture(match)
        if captured is None:
            continue
        span = match.span(rec.group)
        return Evidence(
            text=captured,
            start=span[0],
            end=span[1],
            recognizer_index=index,
            scale=rec.scale,
        )
    return None


def find_all(
    text: str,
    recognizers: Sequence[Recognizer],
    limit: int | None = None,
) -> list[Evidence]:
    """Collect every match of every recognizer, recognizer by recognizer.

    Matches of one recognizer are non-overlapping and in text order. Scanning
    stops once *limit* pieces of evidence have been collected.
    """
    found: list[Evidence] = []
    for index, rec in enumerate(recognizers):
        for match in rec.pattern.finditer(text):
            captured = rec.capture(match)
            if captured is None:
                continue
            span = match.span(rec.group)
            found.append(
                Evidence(
                    text=captured,
                    start=span[0],
                    end=span[1],
                    recognizer_index=index,
                    scale=rec.scale,
                )
            )
            if limit is not None and len(found) >= limit:
                return found
    return found


def split_fragments(captured: str) -> list[str]:
    """Split a captured list on comma/semicolon separators, dropping empties."""
    return [part.strip() for part in _LIST_SEPARATOR_RE.split(captured) if part.strip()]


def first_sentence(fragment: str) -> str:
    """Cut *fragment* at its first ``.`` or ``;``.

    Abbreviations such as "e.g." end the sentence early; this is accepted
    behaviour rather than something to special-case.
    """
    return _SENTENCE_BREAK_RE.split(fragment, maxsplit=1)[0].strip()
