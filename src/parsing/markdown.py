"""Markdown and plain-text normalization into tagged spans."""

from __future__ import annotations

import re
from html.parser import HTMLParser

from .base import ContentCategory, NormalizedBody, Span
from .utils import collapse_whitespace

__all__ = ["normalize_markdown", "sanitize_inline"]

_HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(?P<text>.+?)(?:\s+#+)?\s*$")
_SETEXT_PATTERN = re.compile(r"^(=+|-+)\s*$")
_RULE_PATTERN = re.compile(r"^\s*([-*_])(?:\s*\1){2,}\s*$")
_LIST_PATTERN = re.compile(r"^(?P<indent>\s*)(?:[-*+•]|(?P<number>\d+)[.)])\s+(?P<text>.*\S)\s*$")
_CHECKBOX_PATTERN = re.compile(r"^\[(?P<state>[ xX])\]\s+(?P<text>.+)$")
_QUOTE_PATTERN = re.compile(r"^\s*>\s?(?P<text>.*)$")
_FENCE_PATTERN = re.compile(r"^\s*(```|~~~)")

_AUTOLINK_PATTERN = re.compile(r"<((?:https?|mailto):[^>\s]+)>")
_INLINE_CODE_PATTERN = re.compile(r"`([^`]+)`")
_IMAGE_PATTERN = re.compile(r"!\[([^\]]*)\]\([^)]*\)")
_LINK_PATTERN = re.compile(r"\[([^\]]+)\]\([^)]*\)")
_STRONG_PATTERN = re.compile(r"(\*\*|__)(?=\S)(.+?)(?<=\S)\1")
_EMPHASIS_STAR_PATTERN = re.compile(r"\*(?=\S)(.+?)(?<=\S)\*")
_EMPHASIS_UNDERSCORE_PATTERN = re.compile(r"(?<!\w)_(?=\S)(.+?)(?<=\S)_(?!\w)")
_STRIKE_PATTERN = re.compile(r"~~(.+?)~~")

_DROPPED_ELEMENTS = {"script", "style", "iframe", "object", "embed", "noscript"}


class _HTMLTextParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self._skip_depth = 0
        self.chunks: list[str] = []

    def handle_starttag(self, tag: str, attrs) -> None:  # type: ignore[override]
        if tag.lower() in _DROPPED_ELEMENTS:
            self._skip_depth += 1

    def handle_endtag(self, tag: str) -> None:  # type: ignore[override]
        if tag.lower() in _DROPPED_ELEMENTS and self._skip_depth:
            self._skip_depth -= 1

    def handle_data(self, data: str) -> None:  # type: ignore[override]
        if not self._skip_depth:
            self.chunks.append(data)


def _strip_html(value: str) -> str:
    if "<" not in value and "&" not in value:
        return value
    parser = _HTMLTextParser()
    parser.feed(value)
    parser.close()
    return "".join(parser.chunks)


def sanitize_inline(value: str) -> str:
    """Reduce a line of markdown to plain text without markup."""

    text = _AUTOLINK_PATTERN.sub(r"\1", value)
    text = _INLINE_CODE_PATTERN.sub(r"\1", text)
    text = _IMAGE_PATTERN.sub(r"\1", text)
    text = _LINK_PATTERN.sub(r"\1", text)
    text = _strip_html(text)
    text = _STRONG_PATTERN.sub(r"\2", text)
    text = _EMPHASIS_STAR_PATTERN.sub(r"\1", text)
    text = _EMPHASIS_UNDERSCORE_PATTERN.sub(r"\1", text)
    text = _STRIKE_PATTERN.sub(r"\1", text)
    return collapse_whitespace(text)


def normalize_markdown(
    text: str,
    *,
    category: ContentCategory = ContentCategory.MARKDOWN,
) -> NormalizedBody:
    """Render markdown (or plain text) into headings, paragraphs and list items."""

    body = NormalizedBody(category=category)

    current_type: str | None = None
    current_parts: list[str] = []
    current_ordered = False
    current_checked: bool | None = None
    code_parts: list[str] | None = None

    def flush() -> None:
        nonlocal current_type, current_parts, current_ordered, current_checked
        if current_type is not None and current_parts:
            if current_type == "quote":
                raw = " ".join(part for part in current_parts if part.strip())
            else:
                raw = " ".join(part.strip() for part in current_parts)
            cleaned = sanitize_inline(raw)
            if cleaned:
                body.add_span(
                    Span(
                        kind=current_type,
                        text=cleaned,
                        ordered=current_ordered,
                        checked=current_checked,
                    )
                )
        current_type = None
        current_parts = []
        current_ordered = False
        current_checked = None

    for line in text.splitlines():
        if code_parts is not None:
            if _FENCE_PATTERN.match(line):
                body.add_span(Span(kind="code", text="\n".join(code_parts)))
                code_parts = None
            else:
                code_parts.append(line)
            continue

        stripped = line.strip()
        if not stripped:
            flush()
            continue

        if _FENCE_PATTERN.match(line):
            flush()
            code_parts = []
            continue

        setext = _SETEXT_PATTERN.match(stripped)
        if setext and current_type == "paragraph" and len(current_parts) == 1:
            heading_text = sanitize_inline(current_parts[0])
            current_type = None
            current_parts = []
            if heading_text:
                level = 1 if setext.group(1).startswith("=") else 2
                body.add_span(Span(kind="heading", text=heading_text, level=level))
            continue

        if _RULE_PATTERN.match(line):
            flush()
            continue

        heading_match = _HEADING_PATTERN.match(stripped)
        if heading_match:
            flush()
            heading_text = sanitize_inline(heading_match.group("text"))
            if heading_text:
                body.add_span(
                    Span(kind="heading", text=heading_text, level=len(heading_match.group(1)))
                )
            continue

        list_match = _LIST_PATTERN.match(line)
        if list_match:
            flush()
            content = list_match.group("text").strip()
            checkbox = _CHECKBOX_PATTERN.match(content)
            if checkbox:
                content = checkbox.group("text")
                current_checked = checkbox.group("state") != " "
            current_type = "list_item"
            current_ordered = list_match.group("number") is not None
            current_parts = [content]
            continue

        if current_type == "list_item" and line[:1].isspace():
            current_parts.append(stripped)
            continue

        quote_match = _QUOTE_PATTERN.match(line)
        if quote_match:
            if current_type != "quote":
                flush()
                current_type = "quote"
            current_parts.append(quote_match.group("text"))
            continue

        if current_type != "paragraph":
            flush()
            current_type = "paragraph"
        current_parts.append(stripped)

    if code_parts is not None:
        body.add_span(Span(kind="code", text="\n".join(code_parts)))
    flush()

    _assign_title_and_description(body)
    return body


def _assign_title_and_description(body: NormalizedBody) -> None:
    heading_position: int | None = None
    for position, span in enumerate(body.spans):
        if span.kind == "heading":
            body.title = span.text
            heading_position = position
            break

    start = 0 if heading_position is None else heading_position + 1
    for span in body.spans[start:]:
        if span.kind == "paragraph":
            body.description = span.text
            break
