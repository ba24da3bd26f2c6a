"""Document normalization and content routing primitives."""

from .base import ContentCategory, Document, NormalizedBody, ParserError, Span
from .json_document import parse_json_document
from .markdown import normalize_markdown, sanitize_inline
from .registry import ContentRouter, default_handlers, router
from .utils import guess_declared_type, resolve_category

__all__ = [
    "ContentCategory",
    "Document",
    "NormalizedBody",
    "ParserError",
    "Span",
    "ContentRouter",
    "default_handlers",
    "router",
    "normalize_markdown",
    "sanitize_inline",
    "parse_json_document",
    "resolve_category",
    "guess_declared_type",
]
