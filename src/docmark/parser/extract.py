"""Queries over a parsed node tree: headings, plain text, intro, slugs."""

from __future__ import annotations

import re
from collections.abc import Iterator

from .base import Emphasis, Heading, InlineCode, Link, MarkdownHeader, MarkdownNode, Paragraph, Strong, Text

_WHITESPACE_RE = re.compile(r"\s+")
_SLUG_STRIP_RE = re.compile(r"[^A-Za-z0-9_\s-]")


def slugify(text: str) -> str:
    """Lower-case ``text`` and turn it into an anchor-safe id.

    >>> slugify("Hello, World!")
    'hello-world'
    """
    text = _SLUG_STRIP_RE.sub("", text.lower()).strip()
    return _WHITESPACE_RE.sub("-", text)


def dedupe_anchor(anchor: str, used: set[str]) -> str:
    """Return ``anchor``, or ``anchor-2``, ``anchor-3``... if already taken."""
    if anchor not in used:
        used.add(anchor)
        return anchor

    idx = 2
    while True:
        candidate = f"{anchor}-{idx}"
        if candidate not in used:
            used.add(candidate)
            return candidate
        idx += 1


def _iter_text(nodes: list[MarkdownNode]) -> Iterator[str]:
    for node in nodes:
        if isinstance(node, (Text, InlineCode)):
            yield node.content
        elif isinstance(node, (Paragraph, Link, Strong, Emphasis)):
            yield from _iter_text(node.children)


def extract_text_from_nodes(nodes: list[MarkdownNode]) -> str:
    """Concatenate the visible inline text of ``nodes`` with single spaces.

    Only text and inline code contribute, reached through paragraphs, links,
    strong and emphasis. Other blocks, images and breaks add nothing.
    """
    pieces = (_WHITESPACE_RE.sub(" ", piece).strip() for piece in _iter_text(nodes))
    return " ".join(piece for piece in pieces if piece)


def extract_headers_from_nodes(nodes: list[MarkdownNode], *, unique: bool = False) -> list[MarkdownHeader]:
    """Collect every heading in document order, including nested ones.

    With ``unique`` set, repeated ids get a numeric suffix, matching
    ``HTMLRenderer(unique_anchors=True)``.
    """
    headers: list[MarkdownHeader] = []
    used: set[str] = set()

    def walk(cursor: list[MarkdownNode]) -> None:
        for node in cursor:
            if isinstance(node, Heading):
                title = extract_text_from_nodes(node.children)
                anchor = slugify(title)
                if unique:
                    anchor = dedupe_anchor(anchor, used)
                headers.append(MarkdownHeader(id=anchor, title=title, level=node.level))
                continue

            children = getattr(node, "children", None)
            if isinstance(children, list):
                walk(children)

    walk(nodes)
    return headers


def get_intro_from_tree(tree: list[MarkdownNode]) -> str | None:
    """Plain text of the first node when it is a paragraph, else None."""
    if not tree:
        return None

    first = tree[0]
    if not isinstance(first, Paragraph):
        return None

    return extract_text_from_nodes(first.children) or None
