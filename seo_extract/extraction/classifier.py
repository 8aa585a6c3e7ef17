"""Keyword-based classification of findings into a fixed taxonomy."""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class Axis:
    """One taxonomy axis: ordered ``(pattern, label)`` groups plus a neutral default."""

    groups: tuple[tuple[re.Pattern[str], str], ...]
    default: str

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(dict.fromkeys([*(name for _, name in self.groups), self.default]))

    def label(self, fragment: str) -> str:
        for pattern, name in self.groups:
            if pattern.search(fragment):
                return name
        return self.default


def axis(default: str, *groups: tuple[str, str]) -> Axis:
    """Build an :class:`Axis` from ``(regex, label)`` pairs, compiled case-insensitive."""
    return Axis(
        groups=tuple((re.compile(regex, re.IGNORECASE), name) for regex, name in groups),
        default=default,
    )


@dataclass(frozen=True)
class Taxonomy:
    """The axes a finding list is classified along. Only ``category`` is required."""

    category: Axis
    priority: Axis | None = None
    effort: Axis | None = None
    impact: Axis | None = None


@dataclass(frozen=True)
class Classification:
    category: str
    priority: str | None = None
    effort: str | None = None
    impact: str | None = None


def classify(fragment: str, taxonomy: Taxonomy) -> Classification:
    """Assign *fragment* a label on every axis of *taxonomy*.

    Each axis is tested independently; the first matching group wins and
    no match yields the axis default.
    """
    return Classification(
        category=taxonomy.category.label(fragment),
        priority=taxonomy.priority.label(fragment) if taxonomy.priority else None,
        effort=taxonomy.effort.label(fragment) if taxonomy.effort else None,
        impact=taxonomy.impact.label(fragment) if taxonomy.impact else None,
    )


@dataclass(frozen=True)
class Remedy:
    """Pulls a suggested fix out of an issue's own wording."""

    pattern: re.Pattern[str]
    default: str


def remedy(regex: str, default: str) -> Remedy:
    return Remedy(pattern=re.compile(regex, re.IGNORECASE), default=default)


def suggest_remedy(fragment: str, rule: Remedy) -> str:
    """Return the fix phrased inside *fragment*, capitalized and ending in a period."""
    match = rule.pattern.search(fragment)
    if match is None or not match.group(1) or not match.group(1).strip():
        return rule.default
    suggestion = match.group(1).strip()
    suggestion = suggestion[0].upper() + suggestion[1:]
    if not suggestion.endswith("."):
        suggestion += "."
    return suggestion
