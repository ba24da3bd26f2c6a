"""Core parsing interfaces and data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Protocol


class ParserError(RuntimeError):
    """Raised when a document body cannot be normalized."""


class ContentCategory(str, Enum):
    """Closed set of content categories the router knows how to handle."""

    MARKDOWN = "markdown"
    PLAIN_TEXT = "plain_text"
    PDF = "pdf"
    WORD = "word"
    CSV = "csv"
    JSON = "json"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True, slots=True)
class Span:
    """A distinguishable block of a normalized document."""

    kind: str
    text: str
    level: int = 0
    ordered: bool = False
    checked: bool | None = None


@dataclass(slots=True)
class NormalizedBody:
    """Represents the tagged body produced by a normalizer."""

    category: ContentCategory
    spans: list[Span] = field(default_factory=list)
    title: str = ""
    description: str = ""
    declared_tasks: list[dict[str, Any]] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def add_span(self, span: Span) -> None:
        self.spans.append(span)

    def extend_spans(self, items: Iterable[Span]) -> None:
        self.spans.extend(items)

    def spans_of(self, kind: str) -> list[Span]:
        return [span for span in self.spans if span.kind == kind]

    def text(self) -> str:
        """Return the prose of the body, one span per line (code blocks omitted)."""
        return "\n".join(span.text for span in self.spans if span.text and span.kind != "code")

    def is_empty(self) -> bool:
        return not any(span.text.strip() for span in self.spans)


@dataclass(frozen=True)
class Document:
    """Raw document content paired with its declared type."""

    raw_content: str
    declared_type: str = "text/markdown"


class DocumentNormalizer(Protocol):
    """Contract shared by the content handlers used by the router."""

    def __call__(self, document: Document) -> NormalizedBody:
        ...
