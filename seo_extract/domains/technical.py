"""Extraction schema for technical SEO audit narratives.

The audit narrative usually embeds the raw tool reports (``- Canonical URL:
Missing`` and so on), so most derived scores and fallback findings key off
those report lines rather than the narrator's prose.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from seo_extract.extraction.classifier import Taxonomy, axis, remedy
from seo_extract.extraction.matcher import recognizer
from seo_extract.extraction.schema import (
    AggregateField,
    ExtractionSchema,
    FallbackFinding,
    FindingField,
    NumberField,
    ScoreField,
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
    value_below,
)

_LINE = r"(.*?)(?:\n|$)"

PERFORMANCE_SCORE = NumberField(
    name="performance_score",
    recognizers=(
        recognizer(r"Performance score:?\s*(\d+)/100"),
        recognizer(r"Performance rating:?\s*(\d+)/100"),
        recognizer(r"Performance:?\s*(\d+)/100"),
        recognizer(r"Performance:?\s*(\d+) out of 100"),
        recognizer(r"Performance score of (\d+)"),
    ),
    default=65,
)

MOBILE_SCORE = NumberField(
    name="mobile_score",
    recognizers=(
        recognizer(r"Mobile-friendly score:?\s*(\d+)/100"),
        recognizer(r"Mobile score:?\s*(\d+)/100"),
        recognizer(r"Mobile:?\s*(\d+)/100"),
        recognizer(r"Mobile-friendliness:?\s*(\d+)/100"),
        recognizer(r"Mobile optimization score:?\s*(\d+)"),
    ),
    default=70,
)

STRUCTURE_SCORE = ScoreField(
    name="structure_score",
    baseline=70,
    signals=(
        Signal(contains(r"Clean, semantic URLs"), 10),
        Signal(contains(r"Breadcrumb navigation: Present"), 5),
        Signal(contains(r"H1 headings: 1 detected"), 5),
        Signal(contains(r"Canonical URL: Present"), 5),
        Signal(contains(r"Sitemap: Referenced"), 5),
        Signal(contains(r"Robots\.txt: Present"), 5),
        Signal(contains(r"Information architecture:.*?good"), 10),
        Signal(contains(r"Internal links:.*?found"), 5),
        Signal(contains(r"URL structure:.*?clean"), 10),
        Signal(contains(r"Site navigation: Present"), 5),
        Signal(contains(r"H1 headings: 0 detected"), -10),
        Signal(contains(r"H1 headings:.*?Too many"), -5),
        Signal(contains(r"Canonical URL: Missing"), -10),
        Signal(contains(r"Robots\.txt: Not found"), -5),
        Signal(contains(r"Sitemap: Not detected"), -5),
        Signal(contains(r"duplicate content issues"), -10),
        Signal(contains(r"URLs contain undesirable elements"), -10),
        Signal(contains(r"Site navigation: Not clearly defined"), -5),
    ),
)

_NO_SCHEMA = r"Schema types detected: None detected"

SCHEMA_SCORE = ScoreField(
    name="schema_score",
    recognizers=(
        recognizer(r"Schema score:?\s*(\d+)/100"),
        recognizer(r"Structured data score:?\s*(\d+)/100"),
        recognizer(r"Schema markup rating:?\s*(\d+)"),
    ),
    baseline=50,
    tiers=(
        Tier(contains(r"Likely eligible"), 90),
        Tier(contains(r"Partially eligible"), 70),
        Tier(all_of(contains(r"Schema types detected"), lacks(r"None detected")), 60),
        Tier(any_of(contains(_NO_SCHEMA), contains(r"No schema detected")), 30),
    ),
    signals=(
        Signal(
            all_of(contains(r"JSON-LD instances:"), lacks(r"JSON-LD instances: 0\b")), 10
        ),
        Signal(contains(r"Within <head> tag \(recommended\)"), 5),
        Signal(contains(r"Missing recommended properties"), -15),
    ),
)

OVERALL_SCORE = AggregateField(
    name="overall_score",
    weights=(
        ("performance_score", 0.4),
        ("mobile_score", 0.25),
        ("structure_score", 0.2),
        ("schema_score", 0.15),
    ),
)

_CATEGORY_GROUPS = (
    (r"mobile|viewport|tap target|screen size|responsive", "Mobile"),
    (r"schema|structured data|markup|json-ld|microdata|rich result", "Schema"),
    (r"structure|url|h1|canonical|sitemap|robot|navigation|internal link", "Structure"),
)

# A report lists properties even when there are none ("None detected").
_HAS_MISSING_PROPERTIES = all_of(
    lacks(_NO_SCHEMA),
    contains(r"Missing recommended properties:"),
    lacks(r"Missing recommended properties:\s*None detected"),
)

_LCP_ABOVE_TARGET = captured_above(r"Estimated Largest Contentful Paint:?\s*([\d.]+)s", 2.5)

_SLOW = value_below("performance_score", 70)
_NOT_MOBILE_FRIENDLY = value_below("mobile_score", 70)

CRITICAL_ISSUES = FindingField(
    name="critical_issues",
    recognizers=(
        recognizer(r"critical issue:?\s*" + _LINE, min_length=16),
        recognizer(r"major problem:?\s*" + _LINE, min_length=16),
        recognizer(r"significant issue:?\s*" + _LINE, min_length=16),
        recognizer(r"high priority:?\s*" + _LINE, min_length=16),
        recognizer(r"urgent fix:?\s*" + _LINE, min_length=16),
    ),
    taxonomy=Taxonomy(
        category=axis(
            "Structure",
            (r"performance|speed|load time|core web vitals|lcp|fid|cls|render|resource", "Performance"),
            *_CATEGORY_GROUPS,
        ),
        impact=axis(
            "Reduces search visibility and user experience",
            (
                r"conversion|bounce|engagement|revenue|ranking|traffic",
                "Directly impacts conversions and search rankings",
            ),
            (
                r"user experience|usability|accessibility",
                "Degrades user experience and engagement metrics",
            ),
            (r"crawl|index|bot|spider", "Hinders search engine crawling and indexation"),
        ),
    ),
    remedy=remedy(
        r"(?:should|could|recommend|fix by|implement|add|use|change|improve) (.*?)(?:\.|$)",
        "Fix the issue according to technical SEO best practices",
    ),
    max_items=3,
    scan_limit=5,
    fallback_below=3,
    first_sentence=True,
    fallbacks=(
        FallbackFinding(
            when=all_of(_SLOW, contains(r"Render-blocking resources")),
            text="Render-blocking resources detected",
            category="Performance",
            impact="Slows down page rendering and initial content display",
            recommendation="Defer non-critical JavaScript and CSS resources",
        ),
        FallbackFinding(
            when=all_of(_SLOW, contains(r"Unoptimized images")),
            text="Unoptimized images",
            category="Performance",
            impact="Increases page load time and bandwidth usage",
            recommendation="Optimize images and implement lazy loading",
        ),
        FallbackFinding(
            when=all_of(_SLOW, _LCP_ABOVE_TARGET),
            text="High Largest Contentful Paint (LCP)",
            category="Performance",
            impact="Negatively affects Core Web Vitals and user experience",
            recommendation=(
                "Optimize the largest element (usually hero image) and improve server response time"
            ),
        ),
        FallbackFinding(
            when=all_of(_NOT_MOBILE_FRIENDLY, contains(r"Viewport configured: No")),
            text="Missing viewport meta tag",
            category="Mobile",
            impact="Page won't scale properly on mobile devices",
            recommendation="Add a viewport meta tag with width=device-width, initial-scale=1",
        ),
        FallbackFinding(
            when=all_of(_NOT_MOBILE_FRIENDLY, captured_above(r"small tap targets:?\s*(\d+)", 5)),
            text="Small tap targets",
            category="Mobile",
            impact="Difficult for users to tap elements on mobile devices",
            recommendation="Increase size of buttons and interactive elements to at least 44px",
        ),
        FallbackFinding(
            when=all_of(
                _NOT_MOBILE_FRIENDLY, contains(r"Potential horizontal scrolling issues: Yes")
            ),
            text="Horizontal scrolling issues",
            category="Mobile",
            impact="Poor user experience on mobile devices",
            recommendation="Implement responsive design with relative width units and proper viewport",
        ),
        FallbackFinding(
            when=contains(r"H1 headings: 0 detected"),
            text="Missing H1 heading",
            category="Structure",
            impact="Reduces content hierarchy clarity for users and search engines",
            recommendation="Add a single H1 heading that includes the main keyword",
        ),
        FallbackFinding(
            when=contains(r"URL parameters may cause duplicate content"),
            text="Potential duplicate content",
            category="Structure",
            impact="Search engines may index multiple versions of the same page",
            recommendation="Implement canonical tags or fix URL parameters",
        ),
        FallbackFinding(
            when=contains(r"Canonical URL: Missing"),
            text="Missing canonical URL",
            category="Structure",
            impact="May cause duplicate content issues with similar pages",
            recommendation="Add canonical tags to indicate the preferred version of the page",
        ),
        FallbackFinding(
            when=contains(_NO_SCHEMA),
            text="Missing structured data",
            category="Schema",
            impact="No rich results in search engines",
            recommendation="Implement JSON-LD structured data for your content type",
        ),
        FallbackFinding(
            when=_HAS_MISSING_PROPERTIES,
            text="Incomplete schema markup",
            category="Schema",
            impact="May not qualify for rich results in search engines",
            recommendation="Add missing recommended properties to schema markup",
        ),
    ),
)

_MISSING_PROPERTIES = re.compile(r"Missing recommended properties:?\s*" + _LINE, re.IGNORECASE)


def _missing_properties_suggestion(values: Mapping[str, Any], text: str) -> str:
    match = _MISSING_PROPERTIES.search(text)
    listed = match.group(1).strip() if match else ""
    return f"Add missing schema properties: {listed[:40]}..."


_NEEDS_SPEED = value_below("performance_score", 90)
_NEEDS_MOBILE_WORK = value_below("mobile_score", 90)

IMPROVEMENTS = FindingField(
    name="improvements",
    recognizers=(
        recognizer(r"recommend(?:ation|ed):?\s*" + _LINE, min_length=21),
        recognizer(r"suggest(?:ion|ed):?\s*" + _LINE, min_length=21),
        recognizer(r"improve(?:ment)?:?\s*" + _LINE, min_length=21),
        recognizer(r"fix:?\s*" + _LINE, min_length=21),
        recognizer(r"optimization:?\s*" + _LINE, min_length=21),
    ),
    taxonomy=Taxonomy(
        category=axis(
            "Structure",
            (
                r"performance|speed|load time|core web vitals|lcp|fid|cls|render|resource"
                r"|cache|compress",
                "Performance",
            ),
            *_CATEGORY_GROUPS,
        ),
        priority=axis(
            "Medium",
            (r"urgent|critical|important|high|essential|must|significant", "High"),
            (r"consider|might|could|option|low|minor", "Low"),
        ),
        effort=axis(
            "Medium",
            (r"simple|easy|quick|straightforward|minor|fast", "Low"),
            (r"complex|difficult|major|extensive|significant|time-consuming", "High"),
        ),
    ),
    max_items=5,
    scan_limit=7,
    fallback_below=4,
    first_sentence=True,
    terminal_period=True,
    fallbacks=(
        FallbackFinding(
            when=all_of(_NEEDS_SPEED, contains(r"Render-blocking resources")),
            text="Eliminate render-blocking resources by deferring non-critical CSS/JS",
            category="Performance",
            priority="High",
            effort="Medium",
        ),
        FallbackFinding(
            when=all_of(_NEEDS_SPEED, contains(r"Unoptimized images")),
            text="Optimize images and implement lazy loading",
            category="Performance",
            priority="Medium",
            effort="Low",
        ),
        FallbackFinding(
            when=all_of(_NEEDS_SPEED, _LCP_ABOVE_TARGET),
            text=(
                "Optimize Largest Contentful Paint by improving server response time "
                "and resource loading"
            ),
            category="Performance",
            priority="High",
            effort="Medium",
        ),
        FallbackFinding(
            when=all_of(_NEEDS_SPEED, contains(r"Total resources:")),
            text=(
                "Reduce the number of resource requests by combining files and "
                "eliminating unnecessary scripts"
            ),
            category="Performance",
            priority="Medium",
            effort="Medium",
        ),
        FallbackFinding(
            when=all_of(_NEEDS_MOBILE_WORK, contains(r"small tap targets")),
            text="Increase size of tap targets for better mobile usability",
            category="Mobile",
            priority="Medium",
            effort="Low",
        ),
        FallbackFinding(
            when=all_of(_NEEDS_MOBILE_WORK, contains(r"Potential horizontal scrolling issues: Yes")),
            text="Fix horizontal scrolling issues with responsive design",
            category="Mobile",
            priority="High",
            effort="Medium",
        ),
        FallbackFinding(
            when=all_of(_NEEDS_MOBILE_WORK, contains(r"Media queries: Not detected")),
            text="Implement media queries for responsive design across all devices",
            category="Mobile",
            priority="High",
            effort="Medium",
        ),
        FallbackFinding(
            when=lacks(r"Sitemap: Referenced in robots\.txt"),
            text="Add XML sitemap and reference it in robots.txt",
            category="Structure",
            priority="Medium",
            effort="Low",
        ),
        FallbackFinding(
            when=lacks(r"Canonical URL: Present"),
            text="Add canonical tags to prevent duplicate content issues",
            category="Structure",
            priority="Medium",
            effort="Low",
        ),
        FallbackFinding(
            when=any_of(contains(r"H1 headings: 0 detected"), contains(r"H1 headings: Missing")),
            text="Add a single, descriptive H1 heading that includes the primary keyword",
            category="Structure",
            priority="High",
            effort="Low",
        ),
        FallbackFinding(
            when=contains(_NO_SCHEMA),
            text="Implement JSON-LD structured data markup relevant to your content type",
            category="Schema",
            priority="Medium",
            effort="Medium",
        ),
        FallbackFinding(
            when=_HAS_MISSING_PROPERTIES,
            text=_missing_properties_suggestion,
            category="Schema",
            priority="Medium",
            effort="Low",
        ),
        FallbackFinding(
            when=all_of(
                lacks(_NO_SCHEMA),
                negate(_HAS_MISSING_PROPERTIES),
                lacks(r"JSON-LD"),
                value_below("schema_score", 80),
            ),
            text="Convert existing schema markup to JSON-LD format for better compatibility",
            category="Schema",
            priority="Low",
            effort="Medium",
        ),
    ),
)

TECHNICAL_SCHEMA = ExtractionSchema(
    domain="technical",
    fields=(
        PERFORMANCE_SCORE,
        MOBILE_SCORE,
        STRUCTURE_SCORE,
        SCHEMA_SCORE,
        OVERALL_SCORE,
        CRITICAL_ISSUES,
        IMPROVEMENTS,
    ),
)
