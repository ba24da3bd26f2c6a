from __future__ import annotations

import pytest

from src.parsing import ContentCategory, ContentRouter, Document, NormalizedBody, ParserError, default_handlers, router
from src.parsing.utils import guess_declared_type, normalize_declared_type, resolve_category


@pytest.mark.parametrize(
    ("declared_type", "expected"),
    [
        ("text/markdown", ContentCategory.MARKDOWN),
        ("text/markdown; charset=utf-8", ContentCategory.MARKDOWN),
        (".md", ContentCategory.MARKDOWN),
        ("text/plain", ContentCategory.PLAIN_TEXT),
        ("application/json", ContentCategory.JSON),
        ("APPLICATION/PDF", ContentCategory.PDF),
        ("application/vnd.openxmlformats-officedocument.wordprocessingml.document", ContentCategory.WORD),
        ("text/csv", ContentCategory.CSV),
        ("plain_text", ContentCategory.PLAIN_TEXT),
        ("image/png", ContentCategory.UNSUPPORTED),
        ("", ContentCategory.UNSUPPORTED),
        (None, ContentCategory.UNSUPPORTED),
    ],
)
def test_resolve_category(declared_type: str | None, expected: ContentCategory) -> None:
    assert resolve_category(declared_type) is expected


def test_normalize_declared_type_strips_parameters_and_dots() -> None:
    assert normalize_declared_type(" Text/Markdown ; charset=UTF-8") == "text/markdown"
    assert normalize_declared_type(".TXT") == "txt"
    assert normalize_declared_type(None) == ""


def test_guess_declared_type_uses_suffix(tmp_path) -> None:
    assert resolve_category(guess_declared_type(tmp_path / "plan.md")) is ContentCategory.MARKDOWN
    assert resolve_category(guess_declared_type(tmp_path / "tasks.json")) is ContentCategory.JSON
    assert guess_declared_type(tmp_path / "README") == "text/plain"


def test_default_router_covers_every_category() -> None:
    assert set(router.categories()) == set(ContentCategory)


def test_router_rejects_incomplete_handler_table() -> None:
    handlers = default_handlers()
    handlers.pop(ContentCategory.CSV)

    with pytest.raises(ParserError) as excinfo:
        ContentRouter(handlers)

    assert "csv" in str(excinfo.value)


def test_register_requires_replace_for_existing_category() -> None:
    custom = ContentRouter(default_handlers())

    def csv_handler(document: Document) -> NormalizedBody:
        body = NormalizedBody(category=ContentCategory.CSV)
        body.title = "Rows"
        return body

    with pytest.raises(ValueError):
        custom.register(ContentCategory.CSV, csv_handler)

    custom.register(ContentCategory.CSV, csv_handler, replace=True)
    body = custom.route(Document(raw_content="a,b\n1,2", declared_type="text/csv"))

    assert body.title == "Rows"
    assert custom.handler_for(ContentCategory.CSV) is csv_handler


@pytest.mark.parametrize(
    ("declared_type", "label"),
    [("application/pdf", "PDF"), ("application/msword", "Word"), ("text/csv", "CSV")],
)
def test_binary_formats_receive_placeholder(declared_type: str, label: str) -> None:
    body = router.route(Document(raw_content="%PDF-1.7 ...", declared_type=declared_type))

    assert body.title == "Document Import"
    assert f"Full parsing requires {label} processing." in body.description
    assert declared_type in body.description
    assert body.spans == []
    assert body.metadata["degraded"] is True


def test_unknown_format_is_reported_as_unsupported() -> None:
    body = router.route(Document(raw_content="GIF89a", declared_type="image/gif"))

    assert body.category is ContentCategory.UNSUPPORTED
    assert body.title == "Unsupported Format"
    assert body.description == "The document format is not supported for detailed parsing."


def test_markdown_and_plain_text_share_the_normalizer() -> None:
    markdown = router.route(Document(raw_content="# Plan\n\n- Task", declared_type="text/markdown"))
    plain = router.route(Document(raw_content="# Plan\n\n- Task", declared_type="text/plain"))

    assert markdown.category is ContentCategory.MARKDOWN
    assert plain.category is ContentCategory.PLAIN_TEXT
    assert markdown.spans == plain.spans
