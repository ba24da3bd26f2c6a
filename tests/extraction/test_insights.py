from __future__ import annotations

from datetime import datetime, timezone

from src.extraction import RECOMMENDATION_TYPES, TaskCandidate
from src.extraction.insights import DEFAULT_INSIGHT, build_recommendations, generate_insights, suggest_skills

NOW = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


def _task(index: int, *, priority: str = "medium", duration: int = 90, tags: tuple[str, ...] = ()) -> TaskCandidate:
    return TaskCandidate(
        index=index,
        title=f"Task {index}",
        description="",
        estimated_duration_minutes=duration,
        priority=priority,
        tags=tags,
    )


def test_generate_insights_follows_rule_order() -> None:
    insights = generate_insights("Our GOAL is to hit the deadline with the team.")

    assert insights == (
        "Document contains clear objectives/goals",
        "Time-sensitive deliverables identified",
        "Team collaboration involved",
    )


def test_generate_insights_falls_back_to_default() -> None:
    assert generate_insights("") == (DEFAULT_INSIGHT,)
    assert generate_insights("Paint the fence") == ("General project documentation",)


def test_dependency_wording_is_an_insight() -> None:
    assert "Task dependencies referenced" in generate_insights("Deploy depends on Build")


def test_suggest_skills_unions_text_and_task_tags() -> None:
    skills = suggest_skills("Roll out #ops changes", [_task(0, tags=("backend",)), _task(1, tags=("ops",))])

    assert skills == ("backend", "ops")


def test_efficiency_recommendation_for_many_high_priority_tasks() -> None:
    tasks = [_task(index, priority="high") for index in range(4)]

    recommendations = build_recommendations(tasks, "", skills=(), now=NOW)

    assert [item.type for item in recommendations] == ["efficiency"]
    efficiency = recommendations[0]
    assert efficiency.priority == "high"
    assert efficiency.impact == 80
    assert efficiency.timestamp == NOW


def test_three_high_priority_tasks_are_not_enough() -> None:
    tasks = [_task(index, priority="high") for index in range(3)]

    assert build_recommendations(tasks, "", skills=(), now=NOW) == ()


def test_large_tasks_are_flagged_for_splitting() -> None:
    recommendations = build_recommendations([_task(0, duration=180), _task(1, duration=45)], "", skills=(), now=NOW)

    assert len(recommendations) == 1
    assert recommendations[0].type == "task"
    assert recommendations[0].content == (
        "Consider breaking down 1 complex tasks into smaller components for better tracking"
    )
    assert (recommendations[0].priority, recommendations[0].impact) == ("medium", 70)


def test_learning_recommendation_lists_skills() -> None:
    recommendations = build_recommendations([_task(0)], "", skills=("backend", "testing"), now=NOW)

    assert [item.type for item in recommendations] == ["learning"]
    assert recommendations[0].content == (
        "Based on upcoming tasks, developing skills in backend, testing would be beneficial"
    )
    assert recommendations[0].impact == 60


def test_skills_default_to_suggested_skills() -> None:
    recommendations = build_recommendations([_task(0, tags=("bug",))], "", now=NOW)

    assert [item.type for item in recommendations] == ["learning"]
    assert "bug" in recommendations[0].content


def test_time_and_leadership_recommendations() -> None:
    tasks = [_task(index) for index in range(6)]

    recommendations = build_recommendations(tasks, "Assign owners before Monday", skills=(), now=NOW)

    assert [(item.type, item.impact) for item in recommendations] == [("time", 65), ("leadership", 75)]


def test_thresholds_are_configurable() -> None:
    tasks = [_task(0), _task(1)]

    recommendations = build_recommendations(
        tasks,
        "",
        skills=(),
        now=NOW,
        config={"task_count_threshold": 1, "large_task_minutes": 90},
    )

    assert [item.type for item in recommendations] == ["task", "time"]


def test_recommendation_ids_are_stable() -> None:
    tasks = [_task(index, priority="high") for index in range(5)]

    first = build_recommendations(tasks, "team", skills=(), now=NOW)
    second = build_recommendations(tasks, "team", skills=(), now=NOW)

    assert [item.id for item in first] == [item.id for item in second]
    assert all(item.id.startswith(f"rec-{item.type}-") for item in first)
    assert all(item.type in RECOMMENDATION_TYPES for item in first)
    assert first[0].to_dict()["timestamp"] == "2024-03-01T09:30:00+00:00"
