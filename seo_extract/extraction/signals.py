"""Signal scorer: derive a score from weighted boolean detectors over the narrative.

A detector is a small frozen object called as ``detector(text, values)``,
where ``values`` holds the fields already resolved for the record. Detectors
expose the names of the fields they read through ``fields`` so the schema
can check that those fields are declared earlier.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from seo_extract.extraction.normalizer import clamp, parse_number, round_half_up


class Detector(Protocol):
    @property
    def fields(self) -> tuple[str, ...]: ...

    def __call__(self, text: str, values: Mapping[str, Any]) -> bool: ...


# ---------------------------------------------------------------------------
# Text detectors
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Contains:
    pattern: re.Pattern[str]
    fields: tuple[str, ...] = ()

    def __call__(self, text: str, values: Mapping[str, Any]) -> bool:
        return self.pattern.search(text) is not None


@dataclass(frozen=True)
class Lacks:
    pattern: re.Pattern[str]
    fields: tuple[str, ...] = ()

    def __call__(self, text: str, values: Mapping[str, Any]) -> bool:
        return self.pattern.search(text) is None


@dataclass(frozen=True)
class CapturedAbove:
    """True when the number captured by *pattern* exceeds *threshold*.

    When the pattern is absent (or its capture is not numeric) *default*
    stands in for the captured number.
    """

    pattern: re.Pattern[str]
    threshold: float
    default: float | None = None
    fields: tuple[str, ...] = ()

    def __call__(self, text: str, values: Mapping[str, Any]) -> bool:
        match = self.pattern.search(text)
        number = parse_number(match.group(1), integer=False) if match else None
        if number is None:
            number = self.default
        return number is not None and number > self.threshold


def contains(regex: str) -> Contains:
    return Contains(re.compile(regex, re.IGNORECASE))


def lacks(regex: str) -> Lacks:
    return Lacks(re.compile(regex, re.IGNORECASE))


def captured_above(regex: str, threshold: float, default: float | None = None) -> CapturedAbove:
    return CapturedAbove(re.compile(regex, re.IGNORECASE), threshold, default)


# ---------------------------------------------------------------------------
# Value detectors (read fields resolved earlier in the record)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValueBetween:
    """Range test on a resolved numeric field; either bound may be open."""

    name: str
    low: float | None = None
    high: float | None = None
    include_low: bool = True
    include_high: bool = True

    @property
    def fields(self) -> tuple[str, ...]:
        return (self.name,)

    def __call__(self, text: str, values: Mapping[str, Any]) -> bool:
        value = values.get(self.name)
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            return False
        if self.low is not None:
            if value < self.low or (value == self.low and not self.include_low):
                return False
        if self.high is not None:
            if value > self.high or (value == self.high and not self.include_high):
                return False
        return True


@dataclass(frozen=True)
class ValueIs:
    name: str
    expected: Any

    @property
    def fields(self) -> tuple[str, ...]:
        return (self.name,)

    def __call__(self, text: str, values: Mapping[str, Any]) -> bool:
        return values.get(self.name) == self.expected


def value_between(
    name: str,
    low: float,
    high: float,
    *,
    include_low: bool = True,
    include_high: bool = True,
) -> ValueBetween:
    return ValueBetween(name, low, high, include_low, include_high)


def value_below(name: str, threshold: float) -> ValueBetween:
    return ValueBetween(name, high=threshold, include_high=False)


def value_above(name: str, threshold: float) -> ValueBetween:
    return ValueBetween(name, low=threshold, include_low=False)


def value_is(name: str, expected: Any) -> ValueIs:
    return ValueIs(name, expected)


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AllOf:
    detectors: tuple[Detector, ...]

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(name for d in self.detectors for name in d.fields)

    def __call__(self, text: str, values: Mapping[str, Any]) -> bool:
        return all(d(text, values) for d in self.detectors)


@dataclass(frozen=True)
class AnyOf:
    detectors: tuple[Detector, ...]

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(name for d in self.detectors for name in d.fields)

    def __call__(self, text: str, values: Mapping[str, Any]) -> bool:
        return any(d(text, values) for d in self.detectors)


@dataclass(frozen=True)
class Not:
    detector: Detector

    @property
    def fields(self) -> tuple[str, ...]:
        return self.detector.fields

    def __call__(self, text: str, values: Mapping[str, Any]) -> bool:
        return not self.detector(text, values)


def all_of(*detectors: Detector) -> AllOf:
    return AllOf(tuple(detectors))


def any_of(*detectors: Detector) -> AnyOf:
    return AnyOf(tuple(detectors))


def negate(detector: Detector) -> Not:
    return Not(detector)


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Signal:
    """A detector and the delta it contributes when it fires (may be negative)."""

    detector: Detector
    delta: float


@dataclass(frozen=True)
class Tier:
    """An alternative starting point for a score, chosen when *detector* fires."""

    detector: Detector
    value: float


def resolve_baseline(
    text: str,
    tiers: Sequence[Tier],
    default: float,
    values: Mapping[str, Any] | None = None,
) -> float:
    """Return the value of the first tier whose detector fires, else *default*."""
    values = values or {}
    for tier in tiers:
        if tier.detector(text, values):
            return tier.value
    return default


def score(
    text: str,
    signals: Sequence[Signal],
    baseline: float,
    values: Mapping[str, Any] | None = None,
    minimum: float = 0,
    maximum: float = 100,
) -> int:
    """Sum *baseline* and the deltas of every firing signal, then clamp once.

    Clamping happens after all deltas are applied, so the order of
    *signals* never changes the result.
    """
    values = values or {}
    total = baseline + sum(s.delta for s in signals if s.detector(text, values))
    return round_half_up(clamp(total, minimum, maximum))
