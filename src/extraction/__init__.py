"""Core data models for the task extraction engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal, Mapping

__all__ = [
    "Complexity",
    "Priority",
    "RecommendationType",
    "RECOMMENDATION_TYPES",
    "TaskCandidate",
    "DependencyEdge",
    "Recommendation",
    "ExtractionResult",
    "AnalysisResult",
]

Complexity = Literal["low", "medium", "high"]
Priority = Literal["low", "medium", "high"]
RecommendationType = Literal["task", "learning", "efficiency", "time", "leadership", "agent"]

RECOMMENDATION_TYPES: tuple[str, ...] = ("task", "learning", "efficiency", "time", "leadership", "agent")


@dataclass(frozen=True, slots=True)
class TaskCandidate:
    """An extracted, not yet persisted unit of work.

    ``index`` is the candidate's position in the extraction run and is the
    key dependency inference uses to refer to it.
    """

    index: int
    title: str
    description: str
    estimated_duration_minutes: int
    priority: str = "medium"
    tags: tuple[str, ...] = ()
    status: str = "todo"
    actual_duration_minutes: int = 0
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "estimated_duration_minutes": self.estimated_duration_minutes,
            "actual_duration_minutes": self.actual_duration_minutes,
            "priority": self.priority,
            "tags": list(self.tags),
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True, slots=True)
class DependencyEdge:
    """``from_index`` depends on (must follow) ``to_index``."""

    from_index: int
    to_index: int


@dataclass(frozen=True, slots=True)
class Recommendation:
    id: str
    type: str
    content: str
    priority: str
    impact: int
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "content": self.content,
            "priority": self.priority,
            "impact": self.impact,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Output of a single extraction run."""

    title: str
    description: str
    tasks: tuple[TaskCandidate, ...] = ()
    dependencies: Mapping[int, tuple[int, ...]] = field(default_factory=dict)
    insights: tuple[str, ...] = ()
    suggested_skills: tuple[str, ...] = ()
    metadata: Mapping[str, Any] = field(default_factory=dict)

    @property
    def estimated_effort_minutes(self) -> int:
        return sum(task.estimated_duration_minutes for task in self.tasks)

    @property
    def edges(self) -> tuple[DependencyEdge, ...]:
        return tuple(
            DependencyEdge(from_index=source, to_index=target)
            for source, targets in self.dependencies.items()
            for target in targets
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "tasks": [task.to_dict() for task in self.tasks],
            "dependencies": {str(source): list(targets) for source, targets in self.dependencies.items()},
            "insights": list(self.insights),
            "suggested_skills": list(self.suggested_skills),
            "estimated_effort_minutes": self.estimated_effort_minutes,
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Extraction output enriched with synthesized recommendations."""

    extraction: ExtractionResult
    recommendations: tuple[Recommendation, ...] = ()

    @property
    def tasks(self) -> tuple[TaskCandidate, ...]:
        return self.extraction.tasks

    @property
    def insights(self) -> tuple[str, ...]:
        return self.extraction.insights

    @property
    def suggested_skills(self) -> tuple[str, ...]:
        return self.extraction.suggested_skills

    @property
    def estimated_effort_minutes(self) -> int:
        return self.extraction.estimated_effort_minutes

    def to_dict(self) -> dict[str, Any]:
        return {
            "recommendations": [item.to_dict() for item in self.recommendations],
            "tasks": [task.to_dict() for task in self.tasks],
            "insights": list(self.insights),
            "suggested_skills": list(self.suggested_skills),
            "estimated_effort_minutes": self.estimated_effort_minutes,
        }
