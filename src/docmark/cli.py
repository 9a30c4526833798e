"""docmark CLI entrypoint."""

from __future__ import annotations

import json
from pathlib import Path

import click

from docmark import config
from docmark.content.registry import DocRegistry
from docmark.parser.base import Document, node_to_dict
from docmark.parser.md_parser import MarkdownParser
from docmark.renderer.html_renderer import HTMLRenderer
from docmark.utils.logging import get_logger

logger = get_logger(__name__)

_MARKDOWN_EXTENSIONS = (".md", ".markdown")

_input_argument = click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
def main() -> None:
    """Parse and render docs-site markdown."""


@main.command()
@_input_argument
@click.option("--output", "-o", type=click.Path(path_type=Path), required=True, help="Output HTML path")
@click.option("--title", type=str, default=None, help="Override document title")
@click.option("--dark-mode", is_flag=True, help="Enable dark mode stylesheet")
@click.option("--site-host", type=str, default=None, help="Host whose links open in the same tab")
@click.option("--unique-anchors", is_flag=True, help="Suffix repeated heading ids with -2, -3, ...")
def render(
    input_path: Path,
    output: Path,
    title: str | None,
    dark_mode: bool,
    site_host: str | None,
    unique_anchors: bool,
) -> None:
    """Render a markdown file into a self-contained HTML page."""
    document = _parse(input_path, unique_anchors=unique_anchors)

    renderer = HTMLRenderer(site_host=site_host, unique_anchors=unique_anchors)
    html = renderer.render(document, title_override=title, dark_mode=dark_mode)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")

    logger.info("Rendered %s (%d headings)", input_path.name, len(document.headers))
    click.echo(f"Rendered: {output}")


@main.command()
@_input_argument
@click.option("--unique-anchors", is_flag=True, help="Suffix repeated heading ids with -2, -3, ...")
def toc(input_path: Path, unique_anchors: bool) -> None:
    """Print the headings of a markdown file as level, id and title."""
    document = _parse(input_path, unique_anchors=unique_anchors)
    for header in document.headers:
        click.echo(f"{header.level}\t{header.id}\t{header.title}")


@main.command()
@_input_argument
def tree(input_path: Path) -> None:
    """Print the parsed node tree as JSON."""
    document = _parse(input_path)
    payload = {
        "title": document.title,
        "intro": document.intro,
        "tree": [node_to_dict(node) for node in document.tree],
    }
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@main.command()
@click.argument("nav_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--site-url", type=str, default=None, help="Origin prepended to every sitemap location")
def sitemap(nav_path: Path, site_url: str | None) -> None:
    """Print a sitemap for the docs listed in a navigation JSON file."""
    try:
        registry = DocRegistry.from_file(nav_path)
    except (ValueError, KeyError, TypeError) as exc:
        raise click.ClickException(f"Invalid navigation file {nav_path.name}: {exc}") from exc

    entries = registry.site_map(site_url or config.DOCMARK_SITE_URL)
    click.echo('<?xml version="1.0" encoding="UTF-8"?>')
    click.echo('<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">' + "".join(entries) + "</urlset>")


def _parse(input_path: Path, *, unique_anchors: bool = False) -> Document:
    if not input_path.name.lower().endswith(_MARKDOWN_EXTENSIONS):
        raise click.ClickException(f"Unsupported input type: {input_path.name} (expected .md or .markdown)")
    return MarkdownParser(unique_anchors=unique_anchors).parse(input_path)


if __name__ == "__main__":  # pragma: no cover
    main()
