"""Entry points of the document-to-task extraction engine."""
from __future__ import annotations

import logging
from datetime import datetime

from src.parsing.base import ContentCategory, Document, ParserError
from src.parsing.registry import ContentRouter, router as default_router
from src.parsing.utils import decode_content, md5_text, resolve_category

from . import AnalysisResult, ExtractionResult
from .config import ExtractionConfig
from .dependencies import infer_dependencies
from .insights import build_recommendations, generate_insights, suggest_skills
from .tasks import candidates_from_declared, extract_candidates

__all__ = ["extract", "analyze", "is_parsing_error", "PARSING_ERROR_TITLE"]

logger = logging.getLogger(__name__)

PARSING_ERROR_TITLE = "Parsing Error"
_PARSING_ERROR_DESCRIPTION = "There was an error parsing the document content."
_TEXT_CATEGORIES = frozenset({ContentCategory.MARKDOWN, ContentCategory.PLAIN_TEXT, ContentCategory.JSON})


def _decode(content: str | bytes, declared_type: str) -> str:
    # Placeholder formats decode leniently.
    strict = resolve_category(declared_type) in _TEXT_CATEGORIES
    return decode_content(content, strict=strict)


def _parsing_error(declared_type: str) -> ExtractionResult:
    return ExtractionResult(
        title=PARSING_ERROR_TITLE,
        description=_PARSING_ERROR_DESCRIPTION,
        metadata={"declared_type": declared_type, "status": "error"},
    )


def extract(
    content: str | bytes,
    declared_type: str,
    *,
    config: ExtractionConfig | None = None,
    router: ContentRouter | None = None,
) -> ExtractionResult:
    """Extract task candidates, dependencies and insights from a document.

    Never raises for ``str`` or ``bytes`` input: any failure to read the
    document yields a result titled "Parsing Error".
    """

    settings = config or ExtractionConfig.empty()
    active_router = router or default_router

    try:
        text = _decode(content, declared_type)
        body = active_router.route(Document(raw_content=text, declared_type=declared_type))
    except (ParserError, ValueError) as exc:
        logger.warning("Failed to parse %s document: %s", declared_type or "untyped", exc)
        return _parsing_error(declared_type)
    except Exception:
        logger.exception("Unexpected error while parsing %s document", declared_type or "untyped")
        return _parsing_error(declared_type)

    if body.category is ContentCategory.JSON:
        tasks = candidates_from_declared(body)
        dependencies: dict[int, tuple[int, ...]] = {}
    else:
        tasks = extract_candidates(body, config=settings.tasks_config())
        dependencies = infer_dependencies(body.text(), tasks, config=settings.section("resolution"))

    tag_keywords = settings.tag_keywords() if settings.section("tags") else None
    metadata = {
        "declared_type": declared_type,
        "category": body.category.value,
        "checksum": md5_text(text),
        "status": "degraded" if body.metadata.get("degraded") else "completed",
    }
    result = ExtractionResult(
        title=body.title,
        description=body.description,
        tasks=tasks,
        dependencies=dependencies,
        insights=generate_insights(text),
        suggested_skills=suggest_skills(text, tasks, keywords=tag_keywords),
        metadata=metadata,
    )
    logger.debug(
        "Extracted %d tasks and %d dependency edges from %s document",
        len(result.tasks),
        len(result.edges),
        body.category.value,
    )
    return result


def is_parsing_error(result: ExtractionResult) -> bool:
    return result.title == PARSING_ERROR_TITLE and result.metadata.get("status") == "error"


def analyze(
    content: str | bytes,
    declared_type: str,
    *,
    config: ExtractionConfig | None = None,
    router: ContentRouter | None = None,
    now: datetime | None = None,
) -> AnalysisResult:
    """Run :func:`extract` and add synthesized recommendations."""

    settings = config or ExtractionConfig.empty()
    extraction = extract(content, declared_type, config=settings, router=router)
    if is_parsing_error(extraction):
        return AnalysisResult(extraction=extraction)

    recommendations = build_recommendations(
        extraction.tasks,
        _decode(content, declared_type),
        skills=extraction.suggested_skills,
        now=now,
        config=settings.section("recommendations"),
    )
    return AnalysisResult(extraction=extraction, recommendations=recommendations)
