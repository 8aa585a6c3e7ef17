"""Extraction schema for keyword research narratives."""

from __future__ import annotations

from seo_extract.extraction.matcher import recognizer
from seo_extract.extraction.normalizer import label
from seo_extract.extraction.schema import (
    ExtractionSchema,
    LabelField,
    ListField,
    NumberField,
    ScoreField,
    TextField,
    TextRule,
)
from seo_extract.extraction.signals import (
    Signal,
    Tier,
    all_of,
    value_above,
    value_below,
    value_is,
)

# Lines end at a newline or at the end of the narrative.
_LINE = r"(.*?)(?:\n|$)"

KEYWORD = TextField(
    name="keyword",
    recognizers=(recognizer(r'for "(.*?)"'),),
    default="Unknown keyword",
)

SEARCH_VOLUME = NumberField(
    name="search_volume",
    recognizers=(recognizer(r"volume:?\s*(\d[\d,]*)"),),
    default=1000,
    maximum=None,
)

TREND = LabelField(
    name="trend",
    recognizers=(
        recognizer(r"\btrends?:\s*" + _LINE),
        recognizer(r"search trends? (?:is|are):?\s*" + _LINE),
        recognizer(
            r"keyword (?:is|has been) ((?:increasing|decreasing|stable|trending|growing)[^\n.]*)"
        ),
        recognizer(r"trends?:?\s*" + _LINE),
    ),
    labels=(
        label(r"increas|grow|upward|rising|positive|up|higher", "Increasing"),
        label(r"decreas|down|declining|falling|negative|lower", "Decreasing"),
        label(r"stable|steady|consistent|flat|unchanged", "Stable"),
        label(r"seasonal|cyclical|periodic", "Seasonal"),
    ),
    default="Stable",
)

COMPETITION_LEVEL = LabelField(
    name="competition_level",
    recognizers=(
        recognizer(r"competition level:?\s*" + _LINE),
        recognizer(r"competition:?\s*" + _LINE),
        recognizer(r"competitive:?\s*" + _LINE),
        recognizer(
            r"competition (?:is|seems|appears to be) (high|medium|low|moderate|intense|minimal)"
        ),
    ),
    labels=(
        label(r"high|intense|strong|fierce|significant", "High"),
        label(r"medium|moderate|average|mid", "Medium"),
        label(r"low|minimal|weak|little|limited", "Low"),
    ),
    default="Medium",
)

RELEVANCE_SCORE = NumberField(
    name="relevance_score",
    recognizers=(
        recognizer(r"relevance score:?\s*(\d+)/10"),
        recognizer(r"relevance:?\s*(\d+)/10"),
        recognizer(r"relevance:?\s*(\d+) out of 10"),
        recognizer(r"relevance (?:score|rating) of (\d+)"),
    ),
    default=5,
    maximum=10,
)

COMMERCIAL_INTENT = LabelField(
    name="commercial_intent",
    recognizers=(
        recognizer(r"commercial intent:?\s*" + _LINE),
        recognizer(r"buying intent:?\s*" + _LINE),
        recognizer(r"purchase intent:?\s*" + _LINE),
        recognizer(r"intent:?\s*" + _LINE),
        recognizer(r"intent (?:is|appears to be|seems) (high|medium|low)"),
    ),
    labels=(
        label(r"high|strong|significant|excellent|good|above average", "High"),
        label(r"medium|moderate|average|mid", "Medium"),
        label(r"low|minimal|weak|little|poor|limited|below average", "Low"),
    ),
    default="Medium",
)

# Difficulty starts from the competition level and shifts with search volume.
DIFFICULTY = ScoreField(
    name="difficulty",
    baseline=4,
    tiers=(
        Tier(value_is("competition_level", "High"), 8),
        Tier(value_is("competition_level", "Medium"), 6),
    ),
    signals=(
        Signal(value_above("search_volume", 10000), 1),
        Signal(value_below("search_volume", 1000), -1),
    ),
    minimum=1,
    maximum=10,
)

RECOMMENDATION = TextField(
    name="recommendation",
    recognizers=(
        recognizer(r"recommendation:?\s*" + _LINE, min_length=21),
        recognizer(r"recommended approach:?\s*" + _LINE, min_length=21),
        recognizer(r"recommended strategy:?\s*" + _LINE, min_length=21),
        recognizer(r"suggest(?:ion|ed):?\s*" + _LINE, min_length=21),
        recognizer(r"I recommend:?\s*" + _LINE, min_length=21),
    ),
    default_rules=(
        TextRule(
            all_of(value_is("commercial_intent", "High"), value_is("competition_level", "Low")),
            'Priority target: Create commercial content for "{keyword}"',
        ),
        TextRule(
            all_of(value_is("commercial_intent", "High"), value_is("competition_level", "High")),
            'Create in-depth, unique content to compete for "{keyword}"',
        ),
        TextRule(
            value_is("commercial_intent", "Low"),
            'Create informational content for "{keyword}" to build authority',
        ),
    ),
    default="Target this keyword with comprehensive, long-form content",
)

RELATED_KEYWORDS = ListField(
    name="related_keywords",
    recognizers=(
        recognizer(r"related keywords:?\s*" + _LINE),
        recognizer(r"similar keywords:?\s*" + _LINE),
        recognizer(r"keyword variations:?\s*" + _LINE),
        recognizer(r"alternative keywords:?\s*" + _LINE),
        recognizer(r"suggested keywords:?\s*" + _LINE),
        recognizer(r"related [^:\n]*:\s*" + _LINE),
    ),
    default=("{keyword} guide", "{keyword} tutorial"),
)

KEYWORD_SCHEMA = ExtractionSchema(
    domain="keyword",
    fields=(
        KEYWORD,
        SEARCH_VOLUME,
        TREND,
        COMPETITION_LEVEL,
        RELEVANCE_SCORE,
        COMMERCIAL_INTENT,
        DIFFICULTY,
        RECOMMENDATION,
        RELATED_KEYWORDS,
    ),
)
