from __future__ import annotations

from src.extraction.tasks import DEFAULT_DESCRIPTION_TEMPLATE, candidates_from_declared, extract_candidates
from src.parsing.json_document import parse_json_document
from src.parsing.markdown import normalize_markdown

SAMPLE_TEXT = """# Backend

Work for the storage layer.

- Complex database migration
- [x] Quick readme fix

## Release

1. Ship it
"""


def test_list_items_become_numbered_candidates() -> None:
    tasks = extract_candidates(normalize_markdown(SAMPLE_TEXT))

    assert [task.index for task in tasks] == [0, 1, 2]
    assert [task.title for task in tasks] == ["Complex database migration", "Quick readme fix", "Ship it"]
    assert [task.estimated_duration_minutes for task in tasks] == [180, 45, 90]
    assert [task.priority for task in tasks] == ["medium", "medium", "medium"]
    assert tasks[0].tags == ("backend",)
    assert tasks[1].tags == ("bug", "documentation")
    assert tasks[2].tags == ()
    assert all(task.status == "todo" and task.actual_duration_minutes == 0 for task in tasks)


def test_candidate_descriptions_use_the_template() -> None:
    tasks = extract_candidates(normalize_markdown(SAMPLE_TEXT))

    assert tasks[0].description == DEFAULT_DESCRIPTION_TEMPLATE.replace("{title}", "Complex database migration")
    assert tasks[0].description == "Task extracted from document: Complex database migration"


def test_candidate_metadata_records_classification() -> None:
    first, second, third = extract_candidates(normalize_markdown(SAMPLE_TEXT))

    assert first.metadata["complexity"] == "high"
    assert first.metadata["complexity_rule"] == "high_lexicon"
    assert first.metadata["auto_split_eligible"] is True
    assert first.metadata["section"] == "Backend"
    assert "checked" not in first.metadata

    assert second.metadata["complexity"] == "low"
    assert second.metadata["checked"] is True
    assert second.metadata["auto_split_eligible"] is False

    assert third.metadata["ordered"] is True
    assert third.metadata["section"] == "Release"


def test_paragraphs_and_headings_are_not_candidates() -> None:
    body = normalize_markdown("# Plan\n\nWe should refactor logging soon.\n")

    assert extract_candidates(body) == ()


def test_custom_description_template() -> None:
    body = normalize_markdown("- Ship it\n")

    tasks = extract_candidates(body, config={"description_template": "From notes: {title}"})

    assert tasks[0].description == "From notes: Ship it"


def test_template_without_placeholder_is_ignored() -> None:
    body = normalize_markdown("- Ship it\n")

    tasks = extract_candidates(body, config={"description_template": "No placeholder"})

    assert tasks[0].description == "Task extracted from document: Ship it"


def test_configured_tag_keywords_replace_lexicon() -> None:
    body = normalize_markdown("- Provision terraform state\n")

    tasks = extract_candidates(body, config={"tag_keywords": {"infrastructure": ("terraform",)}})

    assert tasks[0].tags == ("infrastructure",)


def test_declared_entries_bypass_classifiers() -> None:
    body = parse_json_document(
        '{"tasks": [{"title": "Complex migration", "duration": 30, "priority": "low", "tags": ["db"]},'
        ' {"title": "Urgent fix"}]}'
    )

    tasks = candidates_from_declared(body)

    assert [task.index for task in tasks] == [0, 1]
    assert tasks[0].estimated_duration_minutes == 30
    assert tasks[0].priority == "low"
    assert tasks[0].tags == ("db",)
    assert tasks[1].estimated_duration_minutes == 60
    assert tasks[1].priority == "medium"
    assert tasks[1].tags == ()
    assert tasks[1].metadata == {"declared": True}
