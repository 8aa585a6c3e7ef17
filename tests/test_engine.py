"""Tests for the extraction engine components: matcher, normalizer, signals,
classifier and deduplicator. No external services are involved."""

from __future__ import annotations

import pytest

from seo_extract.domains.technical import IMPROVEMENTS
from seo_extract.extraction.classifier import Taxonomy, axis, classify, remedy, suggest_remedy
from seo_extract.extraction.dedupe import dedupe, is_duplicate
from seo_extract.extraction.matcher import (
    find,
    find_all,
    first_sentence,
    recognizer,
    split_fragments,
)
from seo_extract.extraction.models import Evidence, Finding
from seo_extract.extraction.normalizer import (
    LabelRule,
    ListRule,
    NumberRule,
    clamp,
    label,
    parse_number,
    round_half_up,
)
from seo_extract.extraction.signals import (
    Signal,
    Tier,
    all_of,
    any_of,
    captured_above,
    contains,
    lacks,
    negate,
    resolve_baseline,
    score,
    value_above,
    value_below,
    value_between,
    value_is,
)


def _evidence(text: str, scale: float = 1.0) -> Evidence:
    return Evidence(text=text, start=0, end=len(text), scale=scale)


# ---------------------------------------------------------------------------
# Pattern matcher
# ---------------------------------------------------------------------------


class TestFind:
    def test_declaration_order_beats_text_position(self) -> None:
        recognizers = (recognizer(r"score:?\s*(\d+)"), recognizer(r"rating (\d+)"))
        evidence = find("rating 40, later score: 80", recognizers)
        assert evidence is not None
        assert evidence.text == "80"
        assert evidence.recognizer_index == 0

    def test_falls_through_to_later_recognizer(self) -> None:
        recognizers = (recognizer(r"score:?\s*(\d+)"), recognizer(r"rating (\d+)"))
        evidence = find("a rating 40", recognizers)
        assert evidence is not None
        assert evidence.text == "40"
        assert evidence.recognizer_index == 1

    def test_no_match_returns_none(self) -> None:
        assert find("", (recognizer(r"score:?\s*(\d+)"),)) is None
        assert find("nothing relevant", (recognizer(r"score:?\s*(\d+)"),)) is None

    def test_case_insensitive(self) -> None:
        evidence = find("SEARCH VOLUME: 12", (recognizer(r"volume:?\s*(\d+)"),))
        assert evidence is not None
        assert evidence.text == "12"

    def test_short_capture_is_not_a_match(self) -> None:
        recognizers = (
            recognizer(r"title:\s*(.*)", min_length=11),
            recognizer(r"headline:\s*(.*)"),
        )
        evidence = find("title: Short\nheadline: A long enough headline", recognizers)
        assert evidence is not None
        assert evidence.text == "A long enough headline"

    def test_capture_is_stripped(self) -> None:
        evidence = find("note:   padded value   \n", (recognizer(r"note:(.*?)\n"),))
        assert evidence is not None
        assert evidence.text == "padded value"

    def test_group_zero_uses_whole_match(self) -> None:
        evidence = find("The h1 contains keyword", (recognizer(r"H1 contains keyword", group=0),))
        assert evidence is not None
        assert evidence.text == "h1 contains keyword"

    def test_span_and_scale(self) -> None:
        evidence = find("coverage 85%", (recognizer(r"coverage (\d+)%", scale=0.1),))
        assert evidence is not None
        assert (evidence.start, evidence.end) == (9, 11)
        assert evidence.scale == 0.1


class TestFindAll:
    LINE = r"(.*?)(?:\n|$)"

    def test_collects_every_match_in_order(self) -> None:
        found = find_all("fix: one\nfix: two\nfix: three", (recognizer(r"fix:\s*" + self.LINE),))
        assert [e.text for e in found] == ["one", "two", "three"]

    def test_recognizer_by_recognizer(self) -> None:
        recognizers = (recognizer(r"a:\s*" + self.LINE), recognizer(r"b:\s*" + self.LINE))
        found = find_all("b: x1\na: y1\nb: x2", recognizers)
        assert [e.text for e in found] == ["y1", "x1", "x2"]

    def test_limit_stops_scanning(self) -> None:
        found = find_all("fix: one\nfix: two\nfix: three", (recognizer(r"fix:\s*" + self.LINE),), limit=2)
        assert [e.text for e in found] == ["one", "two"]

    def test_rejected_captures_do_not_count_toward_limit(self) -> None:
        text = "fix: no\nfix: long enough\nfix: also long enough"
        found = find_all(text, (recognizer(r"fix:\s*" + self.LINE, min_length=5),), limit=2)
        assert [e.text for e in found] == ["long enough", "also long enough"]


class TestFragments:
    def test_split_on_commas_and_semicolons(self) -> None:
        assert split_fragments("alpha, beta; gamma,, ") == ["alpha", "beta", "gamma"]

    def test_first_sentence(self) -> None:
        assert first_sentence("Compress images. Then cache") == "Compress images"
        assert first_sentence("Fix a; then b") == "Fix a"
        assert first_sentence("No break here") == "No break here"

    def test_abbreviation_cuts_early(self) -> None:
        assert first_sentence("Use tools e.g. Lighthouse") == "Use tools e"


# ---------------------------------------------------------------------------
# Value normalizer
# ---------------------------------------------------------------------------


class TestParseNumber:
    def test_thousands_separators(self) -> None:
        assert parse_number("12,000") == 12000

    def test_integer_truncates(self) -> None:
        assert parse_number("7.9") == 7

    def test_float(self) -> None:
        assert parse_number("7.9", integer=False) == pytest.approx(7.9)

    @pytest.mark.parametrize("raw", ["abc", "", ".", "1.2.3", "inf", "nan"])
    def test_not_a_number(self, raw: str) -> None:
        assert parse_number(raw) is None


class TestNumberRule:
    def test_clamps_high(self) -> None:
        assert NumberRule().apply(_evidence("150")) == 100

    def test_clamps_low(self) -> None:
        assert NumberRule(minimum=1, maximum=10).apply(_evidence("0")) == 1

    def test_absent_or_non_numeric_is_none(self) -> None:
        assert NumberRule().apply(None) is None
        assert NumberRule().apply(_evidence("n/a")) is None

    def test_unbounded_maximum(self) -> None:
        assert NumberRule(maximum=None).apply(_evidence("1,250,000")) == 1250000

    def test_scale_applies_before_clamping(self) -> None:
        value = NumberRule(maximum=10, integer=False).apply(_evidence("85", scale=0.1))
        assert value == pytest.approx(8.5)

    def test_coerce_types(self) -> None:
        assert isinstance(NumberRule().coerce(65), int)
        assert NumberRule(integer=False).coerce(7) == 7.0
        assert isinstance(NumberRule(integer=False).coerce(7), float)

    def test_clamp_helper(self) -> None:
        assert clamp(150, 0, 100) == 100
        assert clamp(-5, 0, 100) == 0
        assert clamp(5000, 0, None) == 5000

    def test_round_half_up(self) -> None:
        assert round_half_up(72.5) == 73
        assert round_half_up(72.49) == 72
        assert round_half_up(0.5) == 1


class TestLabelRule:
    RULE = LabelRule(
        labels=(label(r"high|intense", "High"), label(r"low|minimal", "Low")),
        default="Medium",
    )

    def test_first_matching_group_wins(self) -> None:
        assert self.RULE.apply(_evidence("Intense rivalry")) == "High"
        assert self.RULE.apply(_evidence("high to low")) == "High"

    def test_unclassified_capture_uses_default(self) -> None:
        assert self.RULE.apply(_evidence("unclear")) == "Medium"

    def test_absent_uses_default(self) -> None:
        assert self.RULE.apply(None) == "Medium"

    def test_names(self) -> None:
        assert self.RULE.names == ("High", "Low")


class TestListRule:
    def test_excludes_sentinel_case_insensitively(self) -> None:
        rule = ListRule(exclude=frozenset({"None"}))
        assert rule.apply(_evidence("a, none, b")) == ("a", "b")

    def test_only_sentinel_gives_default(self) -> None:
        rule = ListRule(default=("x",), exclude=frozenset({"None"}))
        assert rule.apply(_evidence("None")) == ("x",)

    def test_absent_gives_default(self) -> None:
        assert ListRule(default=("x",)).apply(None) == ("x",)


# ---------------------------------------------------------------------------
# Signal scorer
# ---------------------------------------------------------------------------


class TestDetectors:
    def test_contains_and_lacks(self) -> None:
        assert contains(r"Canonical URL: Missing")("canonical url: missing", {})
        assert not lacks(r"Canonical URL: Missing")("Canonical URL: Missing", {})
        assert lacks(r"JSON-LD")("", {})

    def test_captured_above(self) -> None:
        detector = captured_above(r"length:?\s*([\d.]+)", 20, default=20)
        assert detector("Average sentence length: 25", {})
        assert not detector("Average sentence length: 18", {})
        assert not detector("", {})

    def test_captured_above_default_can_fire(self) -> None:
        assert captured_above(r"paragraph length:?\s*([\d.]+)", 70, default=100)("", {})

    def test_captured_above_without_default(self) -> None:
        assert not captured_above(r"targets:?\s*(\d+)", 5)("", {})

    def test_value_between_bounds(self) -> None:
        inclusive = value_between("d", 0.5, 2.5)
        assert inclusive("", {"d": 0.5})
        assert inclusive("", {"d": 2.5})
        assert not inclusive("", {"d": 2.6})
        exclusive_low = value_between("d", 2.5, 3.5, include_low=False)
        assert not exclusive_low("", {"d": 2.5})
        assert exclusive_low("", {"d": 3.5})

    def test_value_between_ignores_missing_and_bools(self) -> None:
        detector = value_between("d", 0, 10)
        assert not detector("", {})
        assert not detector("", {"d": True})
        assert not detector("", {"d": "5"})

    def test_strict_thresholds(self) -> None:
        assert not value_below("x", 70)("", {"x": 70})
        assert value_below("x", 70)("", {"x": 69})
        assert not value_above("x", 10000)("", {"x": 10000})
        assert value_above("x", 10000)("", {"x": 10001})

    def test_value_is(self) -> None:
        assert value_is("level", "High")("", {"level": "High"})
        assert not value_is("level", "High")("", {"level": "Low"})

    def test_combinators(self) -> None:
        both = all_of(contains("a"), contains("b"))
        either = any_of(contains("a"), contains("b"))
        assert both("ab", {}) and not both("a", {})
        assert either("b", {}) and not either("c", {})
        assert negate(contains("a"))("xyz", {})

    def test_fields_propagate_through_combinators(self) -> None:
        detector = all_of(value_is("a", 1), contains("x"), negate(value_below("b", 3)))
        assert detector.fields == ("a", "b")


class TestScore:
    def test_sums_firing_deltas(self) -> None:
        signals = (
            Signal(contains("clean"), 10),
            Signal(contains("present"), 5),
            Signal(contains("missing"), -10),
            Signal(contains("absent"), 50),
        )
        assert score("clean, present, missing", signals, 70) == 75

    def test_clamps_once_after_all_deltas(self) -> None:
        signals = (Signal(contains("up"), 10), Signal(contains("down"), -10))
        assert score("up down", signals, 95) == 95
        assert score("up down", tuple(reversed(signals)), 95) == 95

    def test_clamps_to_bounds(self) -> None:
        assert score("x", (Signal(contains("x"), -50),), 10) == 0
        assert score("x", (Signal(contains("x"), 50),), 90) == 100
        assert score("x", (Signal(contains("x"), 5),), 8, minimum=1, maximum=10) == 10

    def test_reads_resolved_values(self) -> None:
        signals = (Signal(value_above("volume", 10000), 1),)
        assert score("", signals, 6, {"volume": 12000}, 1, 10) == 7

    def test_first_tier_wins(self) -> None:
        tiers = (Tier(contains("likely eligible"), 90), Tier(contains("eligible"), 70))
        assert resolve_baseline("Likely eligible", tiers, 50) == 90
        assert resolve_baseline("Partially eligible", tiers, 50) == 70
        assert resolve_baseline("", tiers, 50) == 50


# ---------------------------------------------------------------------------
# Classifier
# ---------------------------------------------------------------------------


class TestClassifier:
    def test_improvement_taxonomy(self) -> None:
        labels = classify("This is an urgent fix for mobile tap targets", IMPROVEMENTS.taxonomy)
        assert labels.category == "Mobile"
        assert labels.priority == "High"
        assert labels.effort == "Medium"
        assert labels.impact is None

    def test_first_group_wins(self) -> None:
        category = axis("Other", (r"speed", "Performance"), (r"speed|mobile", "Mobile"))
        assert category.label("mobile speed") == "Performance"
        assert category.label("mobile") == "Mobile"
        assert category.label("nothing") == "Other"
        assert category.labels == ("Performance", "Mobile", "Other")

    def test_unused_axes_are_none(self) -> None:
        labels = classify("anything", Taxonomy(category=axis("General")))
        assert labels.category == "General"
        assert labels.priority is None and labels.effort is None


class TestRemedy:
    RULE = remedy(r"(?:should|add) (.*?)(?:\.|$)", "Default fix")

    def test_extracts_capitalizes_and_terminates(self) -> None:
        assert suggest_remedy("Pages should compress images. Later", self.RULE) == "Compress images."

    def test_default_when_absent(self) -> None:
        assert suggest_remedy("Nothing here", self.RULE) == "Default fix"


# ---------------------------------------------------------------------------
# Deduplicator
# ---------------------------------------------------------------------------


class TestDedupe:
    LAZY = Finding("Optimize images and implement lazy loading", "Performance")
    FASTER = Finding("Optimize images for faster loading", "Performance")

    def test_distinct_twenty_char_prefixes_are_kept(self) -> None:
        assert dedupe([self.LAZY, self.FASTER]) == (self.LAZY, self.FASTER)

    def test_shorter_prefix_drops_the_later_one(self) -> None:
        assert dedupe([self.LAZY, self.FASTER], prefix_length=16) == (self.LAZY,)

    def test_prefix_containment_either_direction(self) -> None:
        short = Finding("Add a single H1 heading", "Structure")
        long = Finding("Add a single H1 heading with the keyword", "Structure")
        assert is_duplicate(short, long)
        assert is_duplicate(long, short)
        assert dedupe([long, short]) == (long,)

    def test_short_fragment_does_not_swallow_longer_finding(self) -> None:
        short = Finding("Images", "Structure")
        long = Finding("Images lack alt text across the product grid", "Structure")
        assert not is_duplicate(short, long)
        assert dedupe([short, long]) == (short, long)

    def test_identical_short_texts_are_duplicates(self) -> None:
        first = Finding("Fix H1", "Structure")
        assert dedupe([first, Finding("fix h1", "Structure")]) == (first,)

    def test_different_categories_never_collide(self) -> None:
        other = Finding(self.LAZY.text, "Mobile")
        assert dedupe([self.LAZY, other]) == (self.LAZY, other)

    def test_keeps_first_occurrence_in_order(self) -> None:
        unrelated = Finding("Add canonical tags", "Structure")
        repeat = Finding("optimize images and implement caching", "Performance")
        assert dedupe([self.LAZY, unrelated, repeat]) == (self.LAZY, unrelated)

    def test_idempotent(self) -> None:
        findings = [self.LAZY, self.FASTER, Finding("Optimize images and more", "Performance")]
        once = dedupe(findings)
        assert dedupe(once) == once
