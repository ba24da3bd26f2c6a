"""JSON document handling.

Structured task lists already declare their own duration, priority and
tags, so entries are normalized here and never passed through the
lexical classifiers.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from .base import ContentCategory, NormalizedBody, ParserError

__all__ = ["parse_json_document", "DEFAULT_DURATION_MINUTES", "DEFAULT_PRIORITY"]

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MINUTES = 60
DEFAULT_PRIORITY = "medium"
_PRIORITIES = ("low", "medium", "high")
_UNTITLED = "Untitled task"


def parse_json_document(text: str) -> NormalizedBody:
    """Parse a JSON document into a body carrying declared task entries."""

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParserError(f"Malformed JSON document: {exc}") from exc

    body = NormalizedBody(category=ContentCategory.JSON)
    if not isinstance(payload, Mapping):
        logger.warning("JSON document top level is %s, not an object", type(payload).__name__)
        return body

    title = payload.get("title")
    if isinstance(title, str):
        body.title = title.strip()
    description = payload.get("description")
    if isinstance(description, str):
        body.description = description.strip()

    entries = payload.get("tasks")
    if isinstance(entries, list):
        for position, entry in enumerate(entries):
            if not isinstance(entry, Mapping):
                logger.warning("Skipping JSON task entry %d: expected an object", position)
                continue
            body.declared_tasks.append(_normalize_entry(entry))

    body.metadata["declared_task_count"] = len(body.declared_tasks)
    return body


def _normalize_entry(entry: Mapping[str, Any]) -> dict[str, Any]:
    title = entry.get("title")
    title_text = title.strip() if isinstance(title, str) else ""
    description = entry.get("description")
    return {
        "title": title_text or _UNTITLED,
        "description": description.strip() if isinstance(description, str) else "",
        "duration": _coerce_duration(entry.get("duration")),
        "priority": _coerce_priority(entry.get("priority")),
        "tags": _coerce_tags(entry.get("tags")),
    }


def _coerce_duration(value: object) -> int:
    if isinstance(value, bool):
        return DEFAULT_DURATION_MINUTES
    try:
        coerced = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_DURATION_MINUTES
    if coerced <= 0:
        return DEFAULT_DURATION_MINUTES
    return coerced


def _coerce_priority(value: object) -> str:
    if isinstance(value, str) and value.strip().lower() in _PRIORITIES:
        return value.strip().lower()
    return DEFAULT_PRIORITY


def _coerce_tags(value: object) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return ()
    tags: list[str] = []
    for item in value:
        if not isinstance(item, str):
            continue
        token = item.strip().lstrip("#").lower()
        if token:
            tags.append(token)
    return tuple(sorted(set(tags)))
