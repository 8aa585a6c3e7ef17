"""Extraction schemas: the static, per-domain description of a record.

A schema lists its fields in resolution order. Each field kind carries its
own recognizers, normalization rule, default and (for derived fields) its
signal table. Schemas are validated when they are constructed, so a
misconfigured domain fails at import time rather than during extraction.
"""

from __future__ import annotations

import string
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, NoReturn

from seo_extract.extraction.classifier import Remedy, Taxonomy
from seo_extract.extraction.dedupe import DEFAULT_PREFIX_LENGTH
from seo_extract.extraction.matcher import Recognizer
from seo_extract.extraction.normalizer import Label, LabelRule, ListRule, NumberRule
from seo_extract.extraction.signals import Detector, Signal, Tier

# A template is either a ``str.format`` string over earlier field values or a
# callable receiving ``(values, text)``.
Template = str | Callable[[Mapping[str, Any], str], str]


class SchemaError(ValueError):
    """Raised when an extraction schema is internally inconsistent."""


def render(template: Template, values: Mapping[str, Any], text: str) -> str:
    if callable(template):
        return template(values, text)
    return template.format_map(values)


def template_fields(template: Template) -> tuple[str, ...]:
    """Names of the fields a string template interpolates."""
    if callable(template):
        return ()
    names: list[str] = []
    for _, name, _, _ in string.Formatter().parse(template):
        if name:
            names.append(name.split(".")[0].split("[")[0])
    return tuple(names)


# ---------------------------------------------------------------------------
# Field kinds
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NumberField:
    """An explicitly stated number, clamped to ``[minimum, maximum]``."""

    name: str
    recognizers: tuple[Recognizer, ...]
    default: float
    minimum: float = 0
    maximum: float | None = 100
    integer: bool = True

    @property
    def rule(self) -> NumberRule:
        return NumberRule(minimum=self.minimum, maximum=self.maximum, integer=self.integer)


@dataclass(frozen=True)
class LabelField:
    """An enumerated label picked from the first recognizer's capture."""

    name: str
    recognizers: tuple[Recognizer, ...]
    labels: tuple[Label, ...]
    default: str

    @property
    def rule(self) -> LabelRule:
        return LabelRule(labels=self.labels, default=self.default)


@dataclass(frozen=True)
class TextRule:
    """A conditional default for a text field."""

    when: Detector
    template: Template


@dataclass(frozen=True)
class TextField:
    """Free text; unresolved values come from the first matching rule, else the default."""

    name: str
    recognizers: tuple[Recognizer, ...]
    default: Template
    default_rules: tuple[TextRule, ...] = ()


@dataclass(frozen=True)
class FlagField:
    """True when any recognizer matches anywhere in the narrative."""

    name: str
    recognizers: tuple[Recognizer, ...]
    default: bool = False


@dataclass(frozen=True)
class ListField:
    """A comma/semicolon separated list captured by the first matching recognizer."""

    name: str
    recognizers: tuple[Recognizer, ...]
    default: tuple[Template, ...]
    exclude: frozenset[str] = frozenset()

    @property
    def rule(self) -> ListRule:
        return ListRule(default=(), exclude=self.exclude)


@dataclass(frozen=True)
class ScoreField:
    """A score derived from weighted signals, unless stated explicitly.

    An explicit recognizer match takes precedence. Otherwise scoring starts
    from the first firing tier (or ``baseline``) and adds every firing
    signal's delta before clamping.
    """

    name: str
    baseline: float
    signals: tuple[Signal, ...]
    recognizers: tuple[Recognizer, ...] = ()
    tiers: tuple[Tier, ...] = ()
    minimum: float = 0
    maximum: float = 100


@dataclass(frozen=True)
class AggregateField:
    """A rounded weighted sum of earlier numeric fields."""

    name: str
    weights: tuple[tuple[str, float], ...]
    minimum: float = 0
    maximum: float = 100


@dataclass(frozen=True)
class FallbackFinding:
    """A canned finding emitted when *when* holds and too few direct findings exist."""

    when: Detector
    text: Template
    category: str
    priority: str | None = None
    effort: str | None = None
    impact: str | None = None
    recommendation: str | None = None


@dataclass(frozen=True)
class FindingField:
    """A classified, deduplicated, truncated list of findings.

    Attributes:
        recognizers: Every match of every recognizer is a candidate fragment.
        taxonomy: Axes each fragment is classified along.
        max_items: Length of the emitted list.
        scan_limit: Stop collecting direct fragments after this many.
        fallback_below: Fallbacks are appended when fewer direct findings exist.
        fallbacks: Conditional canned findings, in order.
        first_sentence: Cut fragments at their first ``.`` or ``;``.
        terminal_period: Ensure fragments end with a period.
        remedy: Pulls a suggested fix from the fragment's own wording.
        prefix_length: Prefix compared by the deduplicator.
    """

    name: str
    recognizers: tuple[Recognizer, ...]
    taxonomy: Taxonomy
    max_items: int
    scan_limit: int | None = None
    fallback_below: int = 0
    fallbacks: tuple[FallbackFinding, ...] = ()
    first_sentence: bool = False
    terminal_period: bool = False
    remedy: Remedy | None = None
    prefix_length: int = DEFAULT_PREFIX_LENGTH


FieldSpec = (
    NumberField
    | LabelField
    | TextField
    | FlagField
    | ListField
    | ScoreField
    | AggregateField
    | FindingField
)

_NUMERIC_KINDS = (NumberField, ScoreField, AggregateField)


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ExtractionSchema:
    """Ordered field specs for one analysis domain."""

    domain: str
    fields: tuple[FieldSpec, ...]
    _index: Mapping[str, FieldSpec] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_index", {spec.name: spec for spec in self.fields})
        validate_schema(self)

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    def get(self, name: str) -> FieldSpec:
        return self._index[name]


def _fail(schema: ExtractionSchema, spec: FieldSpec | None, message: str) -> NoReturn:
    where = f"{schema.domain}.{spec.name}" if spec is not None else schema.domain
    raise SchemaError(f"{where}: {message}")


def _check_references(
    schema: ExtractionSchema,
    spec: FieldSpec,
    names: tuple[str, ...],
    declared: dict[str, FieldSpec],
) -> None:
    for name in names:
        if name not in declared:
            _fail(schema, spec, f"references {name!r} before it is declared")


def _check_bounds(
    schema: ExtractionSchema,
    spec: FieldSpec,
    value: float,
    minimum: float,
    maximum: float | None,
) -> None:
    if maximum is not None and minimum > maximum:
        _fail(schema, spec, f"minimum {minimum} exceeds maximum {maximum}")
    if value < minimum or (maximum is not None and value > maximum):
        _fail(schema, spec, f"default {value} outside [{minimum}, {maximum}]")


def validate_schema(schema: ExtractionSchema) -> None:
    """Raise :class:`SchemaError` if *schema* is malformed."""
    if not schema.fields:
        _fail(schema, None, "schema declares no fields")

    declared: dict[str, FieldSpec] = {}
    for spec in schema.fields:
        if not spec.name or spec.name in declared:
            _fail(schema, spec, "field names must be unique and non-empty")

        if isinstance(spec, NumberField):
            if not spec.recognizers:
                _fail(schema, spec, "number fields need at least one recognizer")
            _check_bounds(schema, spec, spec.default, spec.minimum, spec.maximum)

        elif isinstance(spec, LabelField):
            if not spec.recognizers or not spec.labels:
                _fail(schema, spec, "label fields need recognizers and labels")
            if spec.default not in spec.rule.names:
                _fail(schema, spec, f"default {spec.default!r} is not one of its labels")

        elif isinstance(spec, TextField):
            _check_references(schema, spec, template_fields(spec.default), declared)
            for rule in spec.default_rules:
                _check_references(schema, spec, rule.when.fields, declared)
                _check_references(schema, spec, template_fields(rule.template), declared)

        elif isinstance(spec, FlagField):
            if not spec.recognizers:
                _fail(schema, spec, "flag fields need at least one recognizer")

        elif isinstance(spec, ListField):
            if not spec.default:
                _fail(schema, spec, "list fields need a non-empty default")
            for template in spec.default:
                _check_references(schema, spec, template_fields(template), declared)

        elif isinstance(spec, ScoreField):
            _check_bounds(schema, spec, spec.baseline, spec.minimum, spec.maximum)
            for tier in spec.tiers:
                _check_bounds(schema, spec, tier.value, spec.minimum, spec.maximum)
                _check_references(schema, spec, tier.detector.fields, declared)
            for signal in spec.signals:
                _check_references(schema, spec, signal.detector.fields, declared)

        elif isinstance(spec, AggregateField):
            if not spec.weights:
                _fail(schema, spec, "aggregate fields need weights")
            for name, _ in spec.weights:
                _check_references(schema, spec, (name,), declared)
                if not isinstance(declared[name], _NUMERIC_KINDS):
                    _fail(schema, spec, f"weight over non-numeric field {name!r}")

        elif isinstance(spec, FindingField):
            if spec.max_items < 1:
                _fail(schema, spec, "max_items must be positive")
            if spec.scan_limit is not None and spec.scan_limit < 1:
                _fail(schema, spec, "scan_limit must be positive")
            if spec.prefix_length < 1:
                _fail(schema, spec, "prefix_length must be positive")
            for fallback in spec.fallbacks:
                _check_references(schema, spec, fallback.when.fields, declared)
                _check_references(schema, spec, template_fields(fallback.text), declared)

        else:
            _fail(schema, spec, f"unsupported field kind {type(spec).__name__}")

        declared[spec.name] = spec
