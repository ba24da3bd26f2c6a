"""Dependency inference from ordering and blocking phrases."""
from __future__ import annotations

import logging
import re
from typing import Mapping, Sequence

from . import TaskCandidate
from .resolution import DEFAULT_MIN_TOKEN_LENGTH, DEFAULT_THRESHOLD, resolve_task

__all__ = ["RELATION_PATTERNS", "infer_dependencies", "find_cycles"]

logger = logging.getLogger(__name__)

_SENTENCE_PATTERN = re.compile(r"[^.!?]+[.!?]?")
_SPAN_STRIP = " \t,;:!?.\"'`-–—"
_LEADING_FILLER = re.compile(r"^(?:then|and then|and)\s+", re.IGNORECASE)

# Each pattern captures a ``dependent`` span and a ``prerequisite`` span.
RELATION_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    (
        "depends_on",
        re.compile(r"^(?P<dependent>.+?)\s+depends\s+on\s+(?P<prerequisite>.+)$", re.IGNORECASE),
    ),
    (
        "after",
        re.compile(r"\bafter\s+(?P<prerequisite>[^,]+?),\s*(?P<dependent>.+)$", re.IGNORECASE),
    ),
    (
        "after",
        re.compile(r"^(?P<dependent>\S.*?)\s+after\s+(?P<prerequisite>[^,]+)", re.IGNORECASE),
    ),
    (
        "requires_first",
        re.compile(r"^(?P<dependent>.+?)\s+requires\s+(?P<prerequisite>.+?)\s+first\b", re.IGNORECASE),
    ),
    (
        "blocked_by",
        re.compile(
            r"^(?P<dependent>.+?)\s+(?:is\s+|are\s+)?blocked\s+by\s+(?P<prerequisite>.+)$",
            re.IGNORECASE,
        ),
    ),
    (
        "complete_before",
        re.compile(r"\bcomplete\s+(?P<prerequisite>.+?)\s+before\s+(?P<dependent>.+)$", re.IGNORECASE),
    ),
    (
        "follows",
        re.compile(r"^(?P<dependent>.+?)\s+follows\s+(?P<prerequisite>.+)$", re.IGNORECASE),
    ),
)


def _clean_span(value: str) -> str:
    cleaned = value.strip(_SPAN_STRIP)
    cleaned = _LEADING_FILLER.sub("", cleaned)
    return cleaned.strip(_SPAN_STRIP)


def _coerce_float(value: object, default: float) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default


def _coerce_int(value: object, default: int, *, minimum: int = 1) -> int:
    try:
        coerced = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return coerced if coerced >= minimum else default


def _sentences(text: str) -> list[str]:
    sentences: list[str] = []
    for line in text.splitlines():
        for match in _SENTENCE_PATTERN.finditer(line):
            sentence = match.group(0).strip().rstrip(".!?").strip()
            if sentence:
                sentences.append(sentence)
    return sentences


def infer_dependencies(
    text: str,
    tasks: Sequence[TaskCandidate],
    *,
    config: Mapping[str, object] | None = None,
) -> dict[int, tuple[int, ...]]:
    """Infer "must follow" edges between ``tasks`` from phrasing in ``text``.

    The result maps a candidate index to the indices it depends on, in the
    order the edges were found. Unresolvable matches and self references
    are dropped, with one exception: a dependent span that does not
    resolve on its own is retried with the whole sentence before the
    match is dropped. That lets a list item such as "Deploy after QA
    sign-off" name itself. The prerequisite span gets no such retry.
    Cycles are left in place.
    """

    config_map = dict(config or {})
    threshold = _coerce_float(config_map.get("threshold"), DEFAULT_THRESHOLD)
    min_token_length = _coerce_int(config_map.get("min_token_length"), DEFAULT_MIN_TOKEN_LENGTH)

    def resolve(span: str) -> int | None:
        return resolve_task(span, tasks, threshold=threshold, min_token_length=min_token_length)

    dependencies: dict[int, list[int]] = {}
    if not tasks:
        return {}

    for sentence in _sentences(text):
        for relation, pattern in RELATION_PATTERNS:
            match = pattern.search(sentence)
            if match is None:
                continue
            dependent_span = _clean_span(match.group("dependent"))
            prerequisite_span = _clean_span(match.group("prerequisite"))
            if not dependent_span or not prerequisite_span:
                continue

            dependent = resolve(dependent_span)
            if dependent is None:
                dependent = resolve(sentence)
            prerequisite = resolve(prerequisite_span)
            if dependent is None or prerequisite is None:
                logger.debug(
                    "Dropping unresolved %s relation: %r -> %r", relation, dependent_span, prerequisite_span
                )
                continue
            if dependent == prerequisite:
                continue

            targets = dependencies.setdefault(dependent, [])
            if prerequisite not in targets:
                targets.append(prerequisite)

    return {source: tuple(targets) for source, targets in dependencies.items()}


def find_cycles(dependencies: Mapping[int, Sequence[int]]) -> list[tuple[int, ...]]:
    """Report the cycles a depth-first walk of ``dependencies`` runs into.

    Each cycle is rotated to start at its smallest index. The mapping is
    not modified.
    """

    visiting: list[int] = []
    done: set[int] = set()
    found: dict[tuple[int, ...], None] = {}

    def visit(node: int) -> None:
        visiting.append(node)
        for target in dependencies.get(node, ()):
            if target in visiting:
                cycle = visiting[visiting.index(target):]
                pivot = cycle.index(min(cycle))
                found.setdefault(tuple(cycle[pivot:] + cycle[:pivot]), None)
            elif target not in done:
                visit(target)
        visiting.pop()
        done.add(node)

    for node in sorted(dependencies):
        if node not in done:
            visit(node)
    return list(found)
