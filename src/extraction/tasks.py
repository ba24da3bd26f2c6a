"""Candidate task extraction from normalized document bodies."""
from __future__ import annotations

from typing import Any, Iterable, Mapping

from src.parsing.base import NormalizedBody

from . import TaskCandidate
from .classifiers import (
    business_value,
    classify_priority,
    complexity_rule,
    determine_impact,
    duration_for_complexity,
    estimate_complexity,
    extract_tags,
    has_external_stakeholder,
    is_ai_eligible,
    learning_value,
)

__all__ = ["extract_candidates", "candidates_from_declared", "DEFAULT_DESCRIPTION_TEMPLATE"]

DEFAULT_DESCRIPTION_TEMPLATE = "Task extracted from document: {title}"
_AUTO_SPLIT_MINUTES = 120


def _description_template(config_map: Mapping[str, object]) -> str:
    value = config_map.get("description_template")
    if isinstance(value, str) and "{title}" in value:
        return value
    return DEFAULT_DESCRIPTION_TEMPLATE


def _tag_keywords(config_map: Mapping[str, object]) -> Mapping[str, Iterable[str]] | None:
    value = config_map.get("tag_keywords")
    return value if isinstance(value, Mapping) else None


def extract_candidates(
    body: NormalizedBody,
    *,
    config: Mapping[str, object] | None = None,
) -> tuple[TaskCandidate, ...]:
    """Turn every non-empty list item of ``body`` into a ``TaskCandidate``.

    Candidates are numbered in document order starting at zero.
    """

    config_map = dict(config or {})
    template = _description_template(config_map)
    tag_keywords = _tag_keywords(config_map)

    candidates: list[TaskCandidate] = []
    section: str | None = None
    for span in body.spans:
        if span.kind == "heading":
            section = span.text
            continue
        if span.kind != "list_item":
            continue
        title = span.text.strip()
        if not title:
            continue

        complexity = estimate_complexity(title)
        duration = duration_for_complexity(complexity)
        metadata: dict[str, Any] = {
            "complexity": complexity,
            "complexity_rule": complexity_rule(title),
            "impact": determine_impact(title, complexity),
            "business_value": business_value(title, complexity),
            "learning_value": learning_value(title, complexity),
            "ai_eligible": is_ai_eligible(title),
            "external_stakeholder": has_external_stakeholder(title),
            "auto_split_eligible": duration > _AUTO_SPLIT_MINUTES,
            "ordered": span.ordered,
            "section": section,
        }
        if span.checked is not None:
            metadata["checked"] = span.checked

        candidates.append(
            TaskCandidate(
                index=len(candidates),
                title=title,
                description=template.replace("{title}", title),
                estimated_duration_minutes=duration,
                priority=classify_priority(title),
                tags=extract_tags(title, keywords=tag_keywords),
                metadata=metadata,
            )
        )
    return tuple(candidates)


def candidates_from_declared(body: NormalizedBody) -> tuple[TaskCandidate, ...]:
    """Build candidates from task entries a structured document declared itself."""

    candidates: list[TaskCandidate] = []
    for entry in body.declared_tasks:
        candidates.append(
            TaskCandidate(
                index=len(candidates),
                title=entry["title"],
                description=entry["description"],
                estimated_duration_minutes=entry["duration"],
                priority=entry["priority"],
                tags=tuple(entry["tags"]),
                metadata={"declared": True},
            )
        )
    return tuple(candidates)
