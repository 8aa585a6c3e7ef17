"""Data models for narrative extraction results."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class Evidence:
    """The text span a recognizer matched for a field."""

    text: str
    start: int
    end: int
    recognizer_index: int = 0
    scale: float = 1.0


@dataclass(frozen=True)
class Finding:
    """A classified fragment of free text (an issue or a recommendation)."""

    text: str
    category: str
    priority: str | None = None
    effort: str | None = None
    impact: str | None = None
    recommendation: str | None = None

    def as_dict(self) -> dict[str, str | None]:
        return {
            "text": self.text,
            "category": self.category,
            "priority": self.priority,
            "effort": self.effort,
            "impact": self.impact,
            "recommendation": self.recommendation,
        }


def _plain(value: Any) -> Any:
    """Convert record values into JSON-friendly builtins."""
    if isinstance(value, Finding):
        return value.as_dict()
    if isinstance(value, tuple):
        return [_plain(v) for v in value]
    return value


@dataclass(frozen=True)
class ExtractionRecord:
    """The completed, immutable output of one extraction call.

    ``values`` holds every field declared by the schema, in declaration
    order. Lists are stored as tuples so the record cannot be mutated
    after construction.
    """

    domain: str
    values: Mapping[str, Any]

    def __post_init__(self) -> None:
        # Freeze the mapping even if the caller handed us a plain dict.
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def __getitem__(self, name: str) -> Any:
        return self.values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(self.values)

    def as_dict(self) -> dict[str, Any]:
        """Return a plain ``dict`` suitable for JSON serialization."""
        return {name: _plain(value) for name, value in self.values.items()}
