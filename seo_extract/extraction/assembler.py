"""Record assembler: resolve every schema field from one narrative.

Each call is a single pass over the schema's fields in declaration order.
Fields see the values resolved before them, which is how derived scores,
conditional defaults and fallback findings read earlier results. The
assembler never raises for any input text: a field with no usable evidence
takes its declared default.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from seo_extract.extraction.classifier import classify, suggest_remedy
from seo_extract.extraction.dedupe import dedupe
from seo_extract.extraction.matcher import find, find_all, first_sentence
from seo_extract.extraction.models import ExtractionRecord, Finding
from seo_extract.extraction.normalizer import NumberRule, clamp, normalize, round_half_up
from seo_extract.extraction.schema import (
    AggregateField,
    ExtractionSchema,
    FieldSpec,
    FindingField,
    FlagField,
    LabelField,
    ListField,
    NumberField,
    ScoreField,
    TextField,
    render,
)
from seo_extract.extraction.signals import resolve_baseline, score

logger = logging.getLogger(__name__)

Values = dict[str, Any]


def _resolve_number(spec: NumberField, text: str, values: Values) -> float | int:
    value = normalize(find(text, spec.recognizers), spec.rule)
    if value is None:
        return spec.rule.coerce(spec.default)
    return value  # type: ignore[return-value]


def _resolve_label(spec: LabelField, text: str, values: Values) -> str:
    return normalize(find(text, spec.recognizers), spec.rule)  # type: ignore[return-value]


def _resolve_text(spec: TextField, text: str, values: Values) -> str:
    evidence = find(text, spec.recognizers)
    if evidence is not None:
        return evidence.text
    for rule in spec.default_rules:
        if rule.when(text, values):
            return render(rule.template, values, text)
    return render(spec.default, values, text)


def _resolve_flag(spec: FlagField, text: str, values: Values) -> bool:
    if any(rec.pattern.search(text) for rec in spec.recognizers):
        return True
    return spec.default


def _resolve_list(spec: ListField, text: str, values: Values) -> tuple[str, ...]:
    fragments = normalize(find(text, spec.recognizers), spec.rule)
    if fragments:
        return fragments  # type: ignore[return-value]
    return tuple(render(template, values, text) for template in spec.default)


def _resolve_score(spec: ScoreField, text: str, values: Values) -> int:
    if spec.recognizers:
        stated = normalize(
            find(text, spec.recognizers),
            NumberRule(minimum=spec.minimum, maximum=spec.maximum),
        )
        if stated is not None:
            return int(stated)
    baseline = resolve_baseline(text, spec.tiers, spec.baseline, values)
    return score(text, spec.signals, baseline, values, spec.minimum, spec.maximum)


def _resolve_aggregate(spec: AggregateField, text: str, values: Values) -> int:
    total = sum(values[name] * weight for name, weight in spec.weights)
    return round_half_up(clamp(total, spec.minimum, spec.maximum))


def _direct_findings(spec: FindingField, text: str) -> list[Finding]:
    findings: list[Finding] = []
    for evidence in find_all(text, spec.recognizers, limit=spec.scan_limit):
        fragment = evidence.text
        labels = classify(fragment, spec.taxonomy)
        remedy = suggest_remedy(fragment, spec.remedy) if spec.remedy else None
        if spec.first_sentence:
            fragment = first_sentence(fragment)
        if spec.terminal_period and not fragment.endswith("."):
            fragment += "."
        if not fragment.strip("."):
            continue
        findings.append(
            Finding(
                text=fragment,
                category=labels.category,
                priority=labels.priority,
                effort=labels.effort,
                impact=labels.impact,
                recommendation=remedy,
            )
        )
    return findings


def _fallback_findings(spec: FindingField, text: str, values: Values) -> list[Finding]:
    return [
        Finding(
            text=render(fallback.text, values, text),
            category=fallback.category,
            priority=fallback.priority,
            effort=fallback.effort,
            impact=fallback.impact,
            recommendation=fallback.recommendation,
        )
        for fallback in spec.fallbacks
        if fallback.when(text, values)
    ]


def _resolve_findings(spec: FindingField, text: str, values: Values) -> tuple[Finding, ...]:
    findings = _direct_findings(spec, text)
    if len(findings) < spec.fallback_below:
        fallbacks = _fallback_findings(spec, text, values)
        logger.debug(
            "%s: %d direct findings, adding %d fallbacks", spec.name, len(findings), len(fallbacks)
        )
        findings.extend(fallbacks)
    return dedupe(findings, spec.prefix_length)[: spec.max_items]


_RESOLVERS: dict[type, Callable[[Any, str, Values], Any]] = {
    NumberField: _resolve_number,
    LabelField: _resolve_label,
    TextField: _resolve_text,
    FlagField: _resolve_flag,
    ListField: _resolve_list,
    ScoreField: _resolve_score,
    AggregateField: _resolve_aggregate,
    FindingField: _resolve_findings,
}


def resolve_field(spec: FieldSpec, text: str, values: Values) -> Any:
    """Resolve a single field against *text* given the values resolved so far."""
    return _RESOLVERS[type(spec)](spec, text, values)


def assemble(text: str, schema: ExtractionSchema) -> ExtractionRecord:
    """Extract a complete :class:`ExtractionRecord` from a narrative.

    Args:
        text: Narrative prose returned by the narrator. Any string is valid,
            including the empty string.
        schema: The domain's extraction schema.

    Returns:
        A record holding every field declared by *schema*.
    """
    text = text or ""
    values: Values = {}
    for spec in schema.fields:
        values[spec.name] = resolve_field(spec, text, values)
    logger.debug("Assembled %s record with %d fields", schema.domain, len(values))
    return ExtractionRecord(domain=schema.domain, values=values)
