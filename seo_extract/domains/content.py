"""Extraction schema for content optimization narratives."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from seo_extract.extraction.classifier import Taxonomy, axis
from seo_extract.extraction.matcher import recognizer
from seo_extract.extraction.schema import (
    AggregateField,
    ExtractionSchema,
    FallbackFinding,
    FindingField,
    FlagField,
    ListField,
    NumberField,
    ScoreField,
    TextField,
)
from seo_extract.extraction.signals import (
    Signal,
    captured_above,
    negate,
    value_above,
    value_below,
    value_between,
    value_is,
)

_LINE = r"(.*?)(?:\n|$)"
DEFAULT_SUBTOPICS = ("Topic research needed",)

READABILITY_SCORE = NumberField(
    name="readability_score",
    recognizers=(
        recognizer(r"Flesch-Kincaid score:?\s*(\d+)"),
        recognizer(r"readability score:?\s*(\d+)"),
        recognizer(r"FK score:?\s*(\d+)"),
        recognizer(r"readability:?\s*(\d+)"),
        recognizer(r"readability rating of (\d+)"),
    ),
    default=65,
)

KEYWORD_DENSITY = NumberField(
    name="keyword_density",
    recognizers=(
        recognizer(r"keyword density:?\s*([\d.]+)%"),
        recognizer(r"density:?\s*([\d.]+)%"),
        recognizer(r"keyword frequency:?\s*([\d.]+)%"),
        recognizer(r"keyword usage:?\s*([\d.]+)%"),
        recognizer(r"keyword appears at (?:a|an) ([\d.]+)% density"),
    ),
    default=1.5,
    integer=False,
)

KEYWORD_IN_H1 = FlagField(
    name="keyword_in_h1",
    recognizers=(
        recognizer(r"H1/Title inclusion:?\s*Yes", group=0),
        recognizer(r"keyword.*?found.*?H1", group=0),
        recognizer(r"H1.*?contains.*?keyword", group=0),
        recognizer(r"keyword.*?present.*?title", group=0),
        recognizer(r"title.*?includes.*?keyword", group=0),
    ),
)

KEYWORD_IN_INTRO = FlagField(
    name="keyword_in_intro",
    recognizers=(
        recognizer(r"First 100 words:?\s*Yes", group=0),
        recognizer(r"keyword.*?found.*?introduction", group=0),
        recognizer(r"keyword.*?present.*?beginning", group=0),
        recognizer(r"introduction.*?contains.*?keyword", group=0),
        recognizer(r"keyword.*?appears.*?first.*?paragraph", group=0),
    ),
)

# Density is rewarded inside the optimal band and penalised on either side;
# placement in the H1 and the introduction adds on top.
KEYWORD_SCORE = ScoreField(
    name="keyword_score",
    baseline=60,
    signals=(
        Signal(value_between("keyword_density", 0.5, 2.5), 20),
        Signal(value_between("keyword_density", 2.5, 3.5, include_low=False), 10),
        Signal(value_above("keyword_density", 3.5), -10),
        Signal(value_below("keyword_density", 0.5), -15),
        Signal(value_is("keyword_in_h1", True), 10),
        Signal(value_is("keyword_in_intro", True), 10),
    ),
)

TOPIC_COVERAGE = NumberField(
    name="topic_coverage",
    recognizers=(
        recognizer(r"Topic coverage score:?\s*([\d.]+)/10"),
        recognizer(r"semantic relevance:?\s*([\d.]+)/10"),
        recognizer(r"semantic score:?\s*([\d.]+)/10"),
        recognizer(r"semantic depth:?\s*([\d.]+)/10"),
        recognizer(r"topical coverage:?\s*([\d.]+)/10"),
        recognizer(r"semantic coverage of (\d+)%", scale=0.1),
        recognizer(r"topic coverage:?\s*(\d+)%", scale=0.1),
    ),
    default=7,
    maximum=10,
    integer=False,
)

SEMANTIC_SCORE = AggregateField(
    name="semantic_score",
    weights=(("topic_coverage", 10),),
)

CONTENT_SCORE = AggregateField(
    name="content_score",
    weights=(
        ("readability_score", 0.3),
        ("keyword_score", 0.4),
        ("semantic_score", 0.3),
    ),
)

MISSING_SUBTOPICS = ListField(
    name="missing_subtopics",
    recognizers=(
        recognizer(r"Missing subtopics:?\s*" + _LINE),
        recognizer(r"content should cover:?\s*" + _LINE),
        recognizer(r"topics to add:?\s*" + _LINE),
        recognizer(r"recommended subtopics:?\s*" + _LINE),
        recognizer(r"consider adding sections on:?\s*" + _LINE),
        recognizer(r"important subtopics missing:?\s*" + _LINE),
    ),
    default=DEFAULT_SUBTOPICS,
    exclude=frozenset({"None"}),
)


def _subtopic_suggestion(values: Mapping[str, Any], text: str) -> str:
    topics = " and ".join(values["missing_subtopics"][:2])
    return f"Add sections on {topics} to improve topical coverage and relevance"


RECOMMENDATIONS = FindingField(
    name="recommendations",
    recognizers=(
        recognizer(r"recommendation:?\s*" + _LINE, min_length=16),
        recognizer(r"suggest(?:ion|ed):?\s*" + _LINE, min_length=16),
        recognizer(r"improve:?\s*" + _LINE, min_length=16),
        recognizer(r"priorit(?:y|ize):?\s*" + _LINE, min_length=16),
        recognizer(r"should:?\s*" + _LINE, min_length=16),
        recognizer(r"consider:?\s*" + _LINE, min_length=16),
    ),
    taxonomy=Taxonomy(
        category=axis(
            "Content Structure",
            (r"keyword|densit|placement|h1|title", "Keyword Usage"),
            (r"readab|sentence|paragraph|complex|jargon", "Readability"),
            (r"semantic|topic|subtopic|coverage|depth", "Semantic Relevance"),
            (r"structure|format|heading|subhead|layout", "Content Structure"),
            (r"meta|description|title tag|schema", "Meta Data"),
        ),
        priority=axis(
            "Medium",
            (r"urgent|critical|important|high|essential|must", "High"),
            (r"consider|might|could|option|low|minor", "Low"),
        ),
    ),
    max_items=5,
    fallback_below=3,
    fallbacks=(
        FallbackFinding(
            when=value_is("keyword_in_h1", False),
            text="Include target keyword in H1 heading",
            category="Keyword Usage",
            priority="High",
        ),
        FallbackFinding(
            when=value_below("keyword_density", 0.5),
            text="Increase keyword usage throughout the content to at least 0.5% density",
            category="Keyword Usage",
            priority="High",
        ),
        FallbackFinding(
            when=value_above("keyword_density", 3),
            text="Reduce keyword density to 1-2% to avoid keyword stuffing",
            category="Keyword Usage",
            priority="Medium",
        ),
        FallbackFinding(
            when=captured_above(r"Average sentence length:?\s*([\d.]+)", 20, default=20),
            text=(
                "Break long sentences into shorter ones for better readability "
                "(aim for 15-20 words per sentence)"
            ),
            category="Readability",
            priority="Medium",
        ),
        FallbackFinding(
            when=captured_above(r"Average paragraph length:?\s*([\d.]+)", 70, default=100),
            text=(
                "Break long paragraphs into shorter ones (3-4 sentences max) "
                "to improve readability"
            ),
            category="Readability",
            priority="Medium",
        ),
        FallbackFinding(
            when=negate(value_is("missing_subtopics", ())),
            text=_subtopic_suggestion,
            category="Semantic Relevance",
            priority="Medium",
        ),
        FallbackFinding(
            when=value_below("semantic_score", 60),
            text="Expand content to cover more aspects of the topic for better search visibility",
            category="Semantic Relevance",
            priority="High",
        ),
    ),
)

KEYWORD = TextField(
    name="keyword",
    recognizers=(
        recognizer(r'for "(.*?)"'),
        recognizer(r'keyword "(.*?)"'),
        recognizer(r'analyzing "(.*?)"'),
        recognizer(r'optimizing for "(.*?)"'),
    ),
    default="your topic",
)


def _default_title(values: Mapping[str, Any], text: str) -> str:
    keyword = values["keyword"]
    return f"{keyword[:1].upper()}{keyword[1:]}: Complete Guide & Best Practices | YourBrand"


IMPROVED_TITLE = TextField(
    name="improved_title",
    recognizers=(
        recognizer(r"improved title:?\s*" + _LINE, min_length=11),
        recognizer(r"suggested title:?\s*" + _LINE, min_length=11),
        recognizer(r"recommended title:?\s*" + _LINE, min_length=11),
        recognizer(r"title tag:?\s*" + _LINE, min_length=11),
        recognizer(r"optimal title:?\s*" + _LINE, min_length=11),
    ),
    default=_default_title,
)

IMPROVED_META_DESCRIPTION = TextField(
    name="improved_meta_description",
    recognizers=(
        recognizer(r"improved meta description:?\s*" + _LINE, min_length=21),
        recognizer(r"suggested meta description:?\s*" + _LINE, min_length=21),
        recognizer(r"recommended meta:?\s*" + _LINE, min_length=21),
        recognizer(r"meta description:?\s*" + _LINE, min_length=21),
        recognizer(r"optimal meta:?\s*" + _LINE, min_length=21),
    ),
    default=(
        "Learn everything about {keyword} in this comprehensive guide. Discover best "
        "practices, examples, and expert tips to maximize your results."
    ),
)

CONTENT_SCHEMA = ExtractionSchema(
    domain="content",
    fields=(
        READABILITY_SCORE,
        KEYWORD_DENSITY,
        KEYWORD_IN_H1,
        KEYWORD_IN_INTRO,
        KEYWORD_SCORE,
        TOPIC_COVERAGE,
        SEMANTIC_SCORE,
        CONTENT_SCORE,
        MISSING_SUBTOPICS,
        RECOMMENDATIONS,
        KEYWORD,
        IMPROVED_TITLE,
        IMPROVED_META_DESCRIPTION,
    ),
)
