"""Content router dispatching documents to category-specific normalizers."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Iterable

from .base import ContentCategory, Document, NormalizedBody, ParserError
from .json_document import parse_json_document
from .markdown import normalize_markdown
from .utils import resolve_category

Handler = Callable[[Document], NormalizedBody]

_PLACEHOLDER_LABELS: dict[ContentCategory, str] = {
    ContentCategory.PDF: "PDF",
    ContentCategory.WORD: "Word",
    ContentCategory.CSV: "CSV",
}


def _markdown_handler(document: Document) -> NormalizedBody:
    return normalize_markdown(document.raw_content, category=ContentCategory.MARKDOWN)


def _plain_text_handler(document: Document) -> NormalizedBody:
    return normalize_markdown(document.raw_content, category=ContentCategory.PLAIN_TEXT)


def _json_handler(document: Document) -> NormalizedBody:
    return parse_json_document(document.raw_content)


def _received_handler(category: ContentCategory) -> Handler:
    label = _PLACEHOLDER_LABELS[category]

    def handler(document: Document) -> NormalizedBody:
        body = NormalizedBody(category=category)
        body.title = "Document Import"
        body.description = (
            f"Imported from {document.declared_type or category.value} document. "
            f"Full parsing requires {label} processing."
        )
        body.metadata["degraded"] = True
        return body

    return handler


def _unsupported_handler(document: Document) -> NormalizedBody:
    body = NormalizedBody(category=ContentCategory.UNSUPPORTED)
    body.title = "Unsupported Format"
    body.description = "The document format is not supported for detailed parsing."
    body.metadata["degraded"] = True
    return body


class ContentRouter:
    """Dispatch documents to handlers keyed on their content category."""

    def __init__(self, handlers: Mapping[ContentCategory, Handler]) -> None:
        missing = [category.value for category in ContentCategory if category not in handlers]
        if missing:
            raise ParserError(f"No handler registered for categories: {', '.join(missing)}")
        self._handlers: dict[ContentCategory, Handler] = dict(handlers)

    def register(self, category: ContentCategory, handler: Handler, *, replace: bool = False) -> None:
        if not replace and category in self._handlers:
            raise ValueError(f"Handler for '{category.value}' already registered")
        self._handlers[category] = handler

    def handler_for(self, category: ContentCategory) -> Handler:
        return self._handlers[category]

    def route(self, document: Document) -> NormalizedBody:
        category = resolve_category(document.declared_type)
        return self._handlers[category](document)

    def categories(self) -> Iterable[ContentCategory]:
        return tuple(self._handlers)


def default_handlers() -> dict[ContentCategory, Handler]:
    return {
        ContentCategory.MARKDOWN: _markdown_handler,
        ContentCategory.PLAIN_TEXT: _plain_text_handler,
        ContentCategory.JSON: _json_handler,
        ContentCategory.PDF: _received_handler(ContentCategory.PDF),
        ContentCategory.WORD: _received_handler(ContentCategory.WORD),
        ContentCategory.CSV: _received_handler(ContentCategory.CSV),
        ContentCategory.UNSUPPORTED: _unsupported_handler,
    }


router = ContentRouter(default_handlers())
"""Default content router."""
