"""Best-match resolution of free-text phrases onto task candidates."""
from __future__ import annotations

from typing import Sequence

from . import TaskCandidate

__all__ = ["similarity", "resolve_task", "DEFAULT_THRESHOLD", "DEFAULT_MIN_TOKEN_LENGTH"]

DEFAULT_THRESHOLD = 0.5
DEFAULT_MIN_TOKEN_LENGTH = 4


def _long_tokens(value: str, min_length: int) -> set[str]:
    return {token for token in value.split() if len(token) >= min_length}


def similarity(first: str, second: str, *, min_token_length: int = DEFAULT_MIN_TOKEN_LENGTH) -> float:
    """Score two strings between 0 and 1.

    When one string contains the other the score is the length ratio of
    the shorter to the longer one. Otherwise it is the Jaccard overlap of
    their whitespace tokens that are at least ``min_token_length`` long.
    Comparison is case-insensitive.
    """

    a = first.strip().lower()
    b = second.strip().lower()
    if not a or not b:
        return 0.0

    if a in b or b in a:
        shorter, longer = sorted((len(a), len(b)))
        return shorter / longer

    tokens_a = _long_tokens(a, min_token_length)
    tokens_b = _long_tokens(b, min_token_length)
    intersection = len(tokens_a & tokens_b)
    union = len(tokens_a) + len(tokens_b) - intersection
    if union == 0:
        return 0.0
    return intersection / union


def resolve_task(
    span: str,
    tasks: Sequence[TaskCandidate],
    *,
    threshold: float = DEFAULT_THRESHOLD,
    min_token_length: int = DEFAULT_MIN_TOKEN_LENGTH,
) -> int | None:
    """Return the index of the candidate best matching ``span``, or ``None``.

    An exact title match always wins. Otherwise the highest similarity
    strictly above ``threshold`` is taken; ties go to the earlier candidate.
    """

    phrase = span.strip()
    if not phrase:
        return None

    for task in tasks:
        if task.title == phrase:
            return task.index

    best_index: int | None = None
    best_score = threshold
    for task in tasks:
        score = similarity(phrase, task.title, min_token_length=min_token_length)
        if score > best_score:
            best_score = score
            best_index = task.index
    return best_index
