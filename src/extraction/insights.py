"""Insight and recommendation synthesis over an extraction run."""
from __future__ import annotations

import hashlib
from datetime import datetime, timezone
from typing import Iterable, Mapping, Sequence

from . import Recommendation, TaskCandidate
from .classifiers import extract_tags

__all__ = [
    "INSIGHT_RULES",
    "DEFAULT_INSIGHT",
    "LEADERSHIP_TERMS",
    "generate_insights",
    "suggest_skills",
    "build_recommendations",
]

INSIGHT_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("objective", "goal"), "Document contains clear objectives/goals"),
    (("deadline", "due date"), "Time-sensitive deliverables identified"),
    (("requirement",), "Requirements specification included"),
    (("stakeholder",), "Stakeholders identified; plan their engagement"),
    (("budget", "cost"), "Budget constraints mentioned"),
    (("depends on", "dependency", "dependencies", "blocked by", "prerequisite"), "Task dependencies referenced"),
    (("team", "collaborate", "collaboration"), "Team collaboration involved"),
)
DEFAULT_INSIGHT = "General project documentation"

LEADERSHIP_TERMS: tuple[str, ...] = ("team", "collaborate", "delegate", "assign")

_LARGE_TASK_MINUTES = 120
_HIGH_PRIORITY_THRESHOLD = 3
_TASK_COUNT_THRESHOLD = 5


def generate_insights(text: str) -> tuple[str, ...]:
    """Return one fixed insight per keyword group present in ``text``."""

    lowered = text.lower()
    insights = [insight for keywords, insight in INSIGHT_RULES if any(word in lowered for word in keywords)]
    if not insights:
        insights.append(DEFAULT_INSIGHT)
    return tuple(insights)


def suggest_skills(
    text: str,
    tasks: Iterable[TaskCandidate] = (),
    *,
    keywords: Mapping[str, Iterable[str]] | None = None,
) -> tuple[str, ...]:
    skills = set(extract_tags(text, keywords=keywords))
    for task in tasks:
        skills.update(task.tags)
    return tuple(sorted(skills))


def _recommendation(kind: str, content: str, priority: str, impact: int, now: datetime) -> Recommendation:
    digest = hashlib.md5(f"{kind}:{content}".encode("utf-8")).hexdigest()
    return Recommendation(
        id=f"rec-{kind}-{digest[:10]}",
        type=kind,
        content=content,
        priority=priority,
        impact=impact,
        timestamp=now,
    )


def _threshold(config_map: Mapping[str, object], key: str, default: int) -> int:
    value = config_map.get(key)
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    return default


def build_recommendations(
    tasks: Sequence[TaskCandidate],
    text: str,
    *,
    skills: Sequence[str] | None = None,
    now: datetime | None = None,
    config: Mapping[str, object] | None = None,
) -> tuple[Recommendation, ...]:
    """Synthesize recommendations from the candidates and the raw text.

    Rules are independent and additive. ``now`` only stamps the results.
    """

    config_map = dict(config or {})
    large_task_minutes = _threshold(config_map, "large_task_minutes", _LARGE_TASK_MINUTES)
    high_priority_threshold = _threshold(config_map, "high_priority_threshold", _HIGH_PRIORITY_THRESHOLD)
    task_count_threshold = _threshold(config_map, "task_count_threshold", _TASK_COUNT_THRESHOLD)

    stamp = now or datetime.now(timezone.utc)
    skill_list = tuple(skills) if skills is not None else suggest_skills(text, tasks)
    lowered = text.lower()

    recommendations: list[Recommendation] = []

    large_tasks = [task for task in tasks if task.estimated_duration_minutes >= large_task_minutes]
    if large_tasks:
        recommendations.append(
            _recommendation(
                "task",
                f"Consider breaking down {len(large_tasks)} complex tasks into smaller components "
                "for better tracking",
                "medium",
                70,
                stamp,
            )
        )

    if skill_list:
        recommendations.append(
            _recommendation(
                "learning",
                f"Based on upcoming tasks, developing skills in {', '.join(skill_list)} would be beneficial",
                "medium",
                60,
                stamp,
            )
        )

    high_priority = [task for task in tasks if task.priority == "high"]
    if len(high_priority) > high_priority_threshold:
        recommendations.append(
            _recommendation(
                "efficiency",
                f"{len(high_priority)} tasks are marked high priority; sequence them to avoid "
                "constant context switching",
                "high",
                80,
                stamp,
            )
        )

    if len(tasks) > task_count_threshold:
        recommendations.append(
            _recommendation(
                "time",
                f"Set up time tracking for these {len(tasks)} new tasks to optimize your productivity",
                "medium",
                65,
                stamp,
            )
        )

    if any(term in lowered for term in LEADERSHIP_TERMS):
        recommendations.append(
            _recommendation(
                "leadership",
                "This document involves other people; delegate and assign owners early",
                "medium",
                75,
                stamp,
            )
        )

    return tuple(recommendations)
