from __future__ import annotations

import pytest

from docmark.parser.base import Heading, MarkdownHeader, Paragraph, Strong, Text
from docmark.parser.extract import (
    dedupe_anchor,
    extract_headers_from_nodes,
    extract_text_from_nodes,
    get_intro_from_tree,
    slugify,
)
from docmark.parser.md_parser import to_tree


# ---------------------------------------------------------------------------
# slugify
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Hello, World!", "hello-world"),
        ("  Multiple   Spaces  ", "multiple-spaces"),
        ("Already-slug_ok", "already-slug_ok"),
        ("Error & 404 Handlers", "error-404-handlers"),
        ("Café au lait", "caf-au-lait"),
        ("a\u00a0b", "a-b"),
        ("Tab\tand\u2003em space", "tab-and-em-space"),
        ("", ""),
    ],
)
def test_slugify(text: str, expected: str) -> None:
    assert slugify(text) == expected


@pytest.mark.parametrize("text", ["Hello, World!", "App & Router Structure", "  a  b  ", "Logger: JSON"])
def test_slugify_is_idempotent(text: str) -> None:
    once = slugify(text)
    assert slugify(once) == once


def test_dedupe_anchor() -> None:
    used: set[str] = set()
    assert [dedupe_anchor("intro", used) for _ in range(3)] == ["intro", "intro-2", "intro-3"]


# ---------------------------------------------------------------------------
# Text extraction
# ---------------------------------------------------------------------------

def test_plain_prose_round_trip() -> None:
    line = "  The quick brown fox jumps over the lazy dog  "
    assert extract_text_from_nodes(to_tree(line)) == line.strip()


def test_text_through_inline_spans() -> None:
    nodes = to_tree("Use `ctx.json()` with **care** and [links](/docs)")[0].children
    assert extract_text_from_nodes(nodes) == "Use ctx.json() with care and links"


def test_text_collapses_whitespace() -> None:
    nodes = [Text(content="  lots   of\tspace "), Strong(children=[Text(content=" here ")])]
    assert extract_text_from_nodes(nodes) == "lots of space here"


def test_blocks_and_media_contribute_nothing() -> None:
    tree = to_tree("# Heading\n- item\n![alt](a.png)")
    assert extract_text_from_nodes(tree) == ""


# ---------------------------------------------------------------------------
# Headers
# ---------------------------------------------------------------------------

def test_headers_include_nested_in_document_order() -> None:
    md = "# Top\n> ## Quoted\n\n## After\n<RUNTIME>\n<BUN>\n### Bun setup\n</BUN>\n</RUNTIME>"
    headers = extract_headers_from_nodes(to_tree(md))
    assert headers == [
        MarkdownHeader(id="top", title="Top", level=1),
        MarkdownHeader(id="quoted", title="Quoted", level=2),
        MarkdownHeader(id="after", title="After", level=2),
        MarkdownHeader(id="bun-setup", title="Bun setup", level=3),
    ]


def test_heading_id_uses_inline_text() -> None:
    headers = extract_headers_from_nodes(to_tree("## The `App` class"))
    assert headers == [MarkdownHeader(id="the-app-class", title="The App class", level=2)]


def test_duplicate_headings_share_id_by_default() -> None:
    tree = to_tree("## Usage\n## Usage")
    assert [h.id for h in extract_headers_from_nodes(tree)] == ["usage", "usage"]
    assert [h.id for h in extract_headers_from_nodes(tree, unique=True)] == ["usage", "usage-2"]


# ---------------------------------------------------------------------------
# Intro
# ---------------------------------------------------------------------------

def test_intro_from_first_paragraph() -> None:
    assert get_intro_from_tree(to_tree("Hello **world**\n\n## Next")) == "Hello world"


def test_intro_none_when_heading_first() -> None:
    assert get_intro_from_tree(to_tree("# Title\n\nBody")) is None


def test_intro_none_for_empty_tree() -> None:
    assert get_intro_from_tree([]) is None


def test_intro_none_for_media_only_paragraph() -> None:
    assert get_intro_from_tree(to_tree("![shot](a.png)")) is None


def test_intro_only_looks_at_first_node() -> None:
    tree = [Heading(level=1, children=[Text(content="x")]), Paragraph(children=[Text(content="y")])]
    assert get_intro_from_tree(tree) is None
