"""Load markdown documents from a content directory by slug."""

from __future__ import annotations

from pathlib import Path

from docmark.parser.base import Document
from docmark.parser.md_parser import MarkdownParser
from docmark.utils.logging import get_logger

logger = get_logger(__name__)


class ContentLoader:
    """Resolve ``<root>/<slug>.md`` and parse it into a Document.

    Missing, unreadable or blank documents are logged and yield None so
    callers can skip caching the miss.
    """

    def __init__(self, root: Path, parser: MarkdownParser | None = None) -> None:
        self.root = Path(root)
        self.parser = parser or MarkdownParser()

    def path_for(self, slug: str) -> Path:
        return self.root / f"{slug}.md"

    def load(self, slug: str | None) -> Document | None:
        if not slug or "/" in slug or "\\" in slug or slug.startswith("."):
            logger.error("Invalid document slug: %r", slug)
            return None

        path = self.path_for(slug)
        try:
            body = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to read document %s: %s", slug, exc)
            return None

        if not body.strip():
            logger.error("Markdown is empty: %s", slug)
            return None

        logger.debug("Loaded document %s from %s", slug, path)
        return self.parser.parse_text(body, name=slug)
