"""Utility helpers shared across parsing components."""

from __future__ import annotations

import hashlib
import mimetypes
import re
from pathlib import Path

from .base import ContentCategory

_WHITESPACE_PATTERN = re.compile(r"\s+")

_CATEGORY_LOOKUP: dict[str, ContentCategory] = {
    # markdown
    "text/markdown": ContentCategory.MARKDOWN,
    "text/x-markdown": ContentCategory.MARKDOWN,
    "markdown": ContentCategory.MARKDOWN,
    "md": ContentCategory.MARKDOWN,
    "mdown": ContentCategory.MARKDOWN,
    "markdn": ContentCategory.MARKDOWN,
    # plain text
    "text/plain": ContentCategory.PLAIN_TEXT,
    "plain_text": ContentCategory.PLAIN_TEXT,
    "plaintext": ContentCategory.PLAIN_TEXT,
    "text": ContentCategory.PLAIN_TEXT,
    "txt": ContentCategory.PLAIN_TEXT,
    # pdf
    "application/pdf": ContentCategory.PDF,
    "pdf": ContentCategory.PDF,
    # word
    "application/msword": ContentCategory.WORD,
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": ContentCategory.WORD,
    "word": ContentCategory.WORD,
    "doc": ContentCategory.WORD,
    "docx": ContentCategory.WORD,
    # csv
    "text/csv": ContentCategory.CSV,
    "application/csv": ContentCategory.CSV,
    "csv": ContentCategory.CSV,
    # json
    "application/json": ContentCategory.JSON,
    "text/json": ContentCategory.JSON,
    "json": ContentCategory.JSON,
}


def normalize_declared_type(value: str | None) -> str:
    """Lowercase a MIME type or suffix, dropping parameters and leading dots."""

    if not value:
        return ""
    token = str(value).strip().lower()
    token = token.split(";", 1)[0].strip()
    return token.lstrip(".")


def resolve_category(declared_type: str | None) -> ContentCategory:
    """Map a declared MIME type, suffix or category name onto a ``ContentCategory``."""

    token = normalize_declared_type(declared_type)
    if not token:
        return ContentCategory.UNSUPPORTED
    category = _CATEGORY_LOOKUP.get(token)
    if category is not None:
        return category
    try:
        return ContentCategory(token)
    except ValueError:
        return ContentCategory.UNSUPPORTED


def guess_declared_type(path: Path) -> str:
    """Guess a declared type for ``path`` from its suffix."""

    media_type, _encoding = mimetypes.guess_type(path)
    if media_type and resolve_category(media_type) is not ContentCategory.UNSUPPORTED:
        return media_type
    suffix = path.suffix.lower().lstrip(".")
    return suffix or "text/plain"


def decode_content(content: str | bytes, *, strict: bool = True) -> str:
    """Return ``content`` as text, decoding bytes as UTF-8 (BOM tolerated).

    With ``strict`` disabled undecodable bytes are replaced instead of
    raising ``UnicodeDecodeError``.
    """

    if isinstance(content, str):
        return content
    return bytes(content).decode("utf-8-sig", errors="strict" if strict else "replace")


def md5_text(text: str) -> str:
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def collapse_whitespace(value: str) -> str:
    return _WHITESPACE_PATTERN.sub(" ", value).strip()
