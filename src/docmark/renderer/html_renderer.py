"""Render a markdown node tree into HTML fragments and full pages."""

from __future__ import annotations

import html
from pathlib import Path
from typing import get_args

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from docmark import config
from docmark.parser.base import (
    BlockQuote,
    Break,
    CodeBlock,
    Document,
    Emphasis,
    Heading,
    HorizontalRule,
    Image,
    InlineCode,
    Link,
    ListBlock,
    ListItem,
    MarkdownNode,
    Paragraph,
    RuntimeBlock,
    RuntimeName,
    RuntimeWrapper,
    Separator,
    Strong,
    Text,
    Video,
)
from docmark.parser.extract import dedupe_anchor, extract_headers_from_nodes, extract_text_from_nodes, slugify

from .components import Components, TemplateComponents, highlight_css

_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "template"


class HTMLRenderer:
    """Render parsed trees through the page template and view components."""

    def __init__(
        self,
        template_path: Path | None = None,
        *,
        components: Components | None = None,
        site_host: str | None = None,
        unique_anchors: bool = False,
    ) -> None:
        if template_path is None:
            template_path = _TEMPLATE_DIR / "page.html"

        # The package template dir stays on the search path so a custom page
        # template can still use the bundled components.
        loader = FileSystemLoader([str(template_path.parent), str(_TEMPLATE_DIR)])
        self._env = Environment(loader=loader, autoescape=True, trim_blocks=True, lstrip_blocks=True)
        self._template_name = template_path.name

        if components is None:
            host = config.DOCMARK_SITE_HOST if site_host is None else site_host
            components = TemplateComponents(self._env, site_host=host)
        self.components = components
        self.unique_anchors = unique_anchors

    def render(self, document: Document, *, title_override: str | None = None, dark_mode: bool = False) -> str:
        page_title = title_override or document.title or "Untitled"
        headers = extract_headers_from_nodes(document.tree, unique=self.unique_anchors)
        leading_h1 = bool(document.tree) and isinstance(document.tree[0], Heading) and document.tree[0].level == 1

        template = self._env.get_template(self._template_name)
        return template.render(
            page_title=page_title,
            show_title=not leading_h1,
            description=document.description,
            authors=document.authors,
            date=document.date,
            headers=headers,
            body=Markup(self.render_html(document.tree)),
            dark_mode=dark_mode,
            runtime_names=get_args(RuntimeName),
            highlight_css=Markup(highlight_css(".highlight")),
        )

    def render_html(self, nodes: list[MarkdownNode]) -> str:
        return "\n".join(fragment for fragment in self.render_tree(nodes) if fragment)

    def render_tree(self, nodes: list[MarkdownNode]) -> list[str | None]:
        """Render each node to an HTML fragment; unknown nodes become None."""
        return self._render_nodes(nodes, set())

    def _render_nodes(self, nodes: list, used: set[str]) -> list[str | None]:
        return [self._render_node(node, used) for node in nodes]

    def _render_children(self, nodes: list, used: set[str]) -> str:
        return "".join(fragment for fragment in self._render_nodes(nodes, used) if fragment)

    def _render_node(self, node: MarkdownNode, used: set[str]) -> str | None:
        if isinstance(node, Text):
            return html.escape(node.content)

        if isinstance(node, Break):
            return "<br>"

        if isinstance(node, Separator):
            return '<hr class="separator">'

        if isinstance(node, HorizontalRule):
            return "<hr>"

        if isinstance(node, Heading):
            level = max(1, min(6, node.level))
            anchor = slugify(extract_text_from_nodes(node.children))
            if self.unique_anchors:
                anchor = dedupe_anchor(anchor, used)
            inner = self._render_children(node.children, used)
            return f'<h{level} id="{html.escape(anchor)}">{inner}</h{level}>'

        if isinstance(node, Paragraph):
            return f"<p>{self._render_children(node.children, used)}</p>"

        if isinstance(node, BlockQuote):
            return f"<blockquote>{self._render_children(node.children, used)}</blockquote>"

        if isinstance(node, ListBlock):
            tag = "ol" if node.ordered else "ul"
            items = "".join(self._render_node(item, used) or "" for item in node.children)
            return f"<{tag}>{items}</{tag}>"

        if isinstance(node, ListItem):
            return f"<li>{self._render_children(node.children, used)}</li>"

        if isinstance(node, CodeBlock):
            return self.components.code_block(node.language, node.code)

        if isinstance(node, InlineCode):
            return f"<code>{html.escape(node.content)}</code>"

        if isinstance(node, Strong):
            return f"<strong>{self._render_children(node.children, used)}</strong>"

        if isinstance(node, Emphasis):
            return f"<em>{self._render_children(node.children, used)}</em>"

        if isinstance(node, Link):
            return self.components.link(node.href, self._render_children(node.children, used))

        if isinstance(node, Image):
            return self.components.image(node.src, node.alt or "")

        if isinstance(node, Video):
            return self.components.video(node.src)

        if isinstance(node, RuntimeWrapper):
            blocks = [(block.runtime, self._render_children(block.children, used)) for block in node.children]
            return self.components.runtime(node.runtimes, blocks)

        if isinstance(node, RuntimeBlock):
            inner = self._render_children(node.children, used)
            return f'<div data-runtime="{html.escape(node.runtime)}">{inner}</div>'

        return None
