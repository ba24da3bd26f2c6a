"""Lexical classifiers for task text.

All functions here are pure: the same span always yields the same
classification. Rule order inside each classifier is significant; the
first rule that fires wins.
"""
from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, Mapping

from .lexicons import (
    AUTOMATABLE_TERMS,
    BUSINESS_VALUE_TERMS,
    DEADLINE_URGENCY_PHRASES,
    DURATION_BY_COMPLEXITY,
    HIGH_COMPLEXITY_TERMS,
    HIGH_IMPACT_TERMS,
    HIGH_PRIORITY_TERMS,
    HUMAN_JUDGEMENT_TERMS,
    LEARNING_TERMS,
    LOW_COMPLEXITY_TERMS,
    LOW_IMPACT_TERMS,
    LOW_PRIORITY_TERMS,
    STAKEHOLDER_TERMS,
    TAG_KEYWORDS,
)

__all__ = [
    "estimate_complexity",
    "complexity_rule",
    "duration_for_complexity",
    "classify_priority",
    "extract_tags",
    "extract_hashtags",
    "determine_impact",
    "business_value",
    "learning_value",
    "is_ai_eligible",
    "has_external_stakeholder",
    "find_term",
]

_DAY_WEEK_PATTERN = re.compile(r"\d+(?:\.\d+)?\s*-?\s*(?:days?|weeks?)\b", re.IGNORECASE)
_HOUR_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*-?\s*(?:hours?|hrs?)\b", re.IGNORECASE)
_HASHTAG_STRIP = "#.,;:!?()[]{}\"'"
_LONG_SPAN_LENGTH = 100


@lru_cache(maxsize=None)
def _term_pattern(terms: tuple[str, ...]) -> re.Pattern[str]:
    alternation = "|".join(re.escape(term) for term in terms)
    return re.compile(rf"\b(?:{alternation})", re.IGNORECASE)


def find_term(text: str, terms: Iterable[str]) -> str | None:
    """Return the first lexicon term (in lexicon order) found at a word start."""

    terms_tuple = tuple(terms)
    if not terms_tuple or not _term_pattern(terms_tuple).search(text):
        return None
    for term in terms_tuple:
        if _term_pattern((term,)).search(text):
            return term
    return None


def _largest_hours(text: str) -> float:
    """Largest hour count mentioned in ``text``; 0 when there is none."""

    return max((float(match.group(1)) for match in _HOUR_PATTERN.finditer(text)), default=0.0)


def complexity_rule(text: str) -> str:
    """Name the complexity rule that fires for ``text``."""

    if _DAY_WEEK_PATTERN.search(text):
        return "duration_days"
    if _largest_hours(text) >= 1:
        return "duration_hours"
    if find_term(text, HIGH_COMPLEXITY_TERMS):
        return "high_lexicon"
    if find_term(text, LOW_COMPLEXITY_TERMS):
        return "low_lexicon"
    if len(text) > _LONG_SPAN_LENGTH:
        return "length"
    return "default"


def estimate_complexity(text: str) -> str:
    """Classify ``text`` as ``low``, ``medium`` or ``high`` complexity."""

    rule = complexity_rule(text)
    if rule == "duration_days":
        return "high"
    if rule == "duration_hours":
        return "high" if _largest_hours(text) >= 3 else "medium"
    if rule == "high_lexicon":
        return "high"
    if rule == "low_lexicon":
        return "low"
    return "medium"


def duration_for_complexity(complexity: str) -> int:
    try:
        return DURATION_BY_COMPLEXITY[complexity]
    except KeyError as exc:
        raise ValueError(f"Unknown complexity level: {complexity!r}") from exc


def classify_priority(text: str) -> str:
    """Classify ``text`` as ``low``, ``medium`` or ``high`` priority."""

    if find_term(text, DEADLINE_URGENCY_PHRASES):
        return "high"
    # Low-priority phrases such as "not urgent" embed high terms; mask them first.
    unmasked = _term_pattern(LOW_PRIORITY_TERMS).sub(" ", text)
    if find_term(unmasked, HIGH_PRIORITY_TERMS):
        return "high"
    if find_term(text, LOW_PRIORITY_TERMS):
        return "low"
    return "medium"


def extract_hashtags(text: str) -> set[str]:
    tags: set[str] = set()
    for token in text.split():
        if not token.startswith("#"):
            continue
        cleaned = token.strip(_HASHTAG_STRIP).lower()
        if cleaned:
            tags.add(cleaned)
    return tags


def extract_tags(
    text: str,
    *,
    keywords: Mapping[str, Iterable[str]] | None = None,
) -> tuple[str, ...]:
    """Return the sorted tag set for ``text``: hashtags plus lexicon domains."""

    lexicon = TAG_KEYWORDS if keywords is None else keywords
    tags = extract_hashtags(text)
    lowered = text.lower()
    for domain, domain_keywords in lexicon.items():
        if any(keyword in lowered for keyword in domain_keywords):
            tags.add(domain)
    return tuple(sorted(tags))


def determine_impact(text: str, complexity: str) -> str:
    if find_term(text, HIGH_IMPACT_TERMS):
        return "high"
    if find_term(text, LOW_IMPACT_TERMS):
        return "low"
    return complexity


def business_value(text: str, complexity: str) -> int:
    """Score business value on a 1-10 scale."""

    value = 5
    if find_term(text, BUSINESS_VALUE_TERMS):
        value += 3
    if complexity == "high":
        value += 1
    elif complexity == "low":
        value -= 1
    return max(1, min(10, value))


def learning_value(text: str, complexity: str) -> int:
    """Score the learning opportunity on a 1-10 scale."""

    value = 5
    if find_term(text, LEARNING_TERMS):
        value += 3
    if complexity == "high":
        value += 2
    elif complexity == "low":
        value -= 2
    return max(1, min(10, value))


def is_ai_eligible(text: str) -> bool:
    if find_term(text, HUMAN_JUDGEMENT_TERMS):
        return False
    return find_term(text, AUTOMATABLE_TERMS) is not None


def has_external_stakeholder(text: str) -> bool:
    return find_term(text, STAKEHOLDER_TERMS) is not None
