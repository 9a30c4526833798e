"""Ordered docs navigation: groups, flattened entries, previous/next, sitemap."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from markupsafe import escape


@dataclass(frozen=True, slots=True)
class DocEntry:
    title: str
    slug: str
    desc: str
    group: str
    to: str
    previous: str | None = None
    next: str | None = None


@dataclass(frozen=True, slots=True)
class DocGroup:
    title: str
    slug: str
    items: tuple[DocEntry, ...]


def site_map_entry(site_url: str, path: str, lastmod: date | None = None) -> str:
    """Build one ``<url>`` element of a sitemap."""
    parts = [f"<loc>{escape(site_url.rstrip('/') + path)}</loc>"]
    if lastmod is not None:
        parts.append(f"<lastmod>{lastmod.strftime('%Y-%m-%d')}</lastmod>")
    return "<url>" + "".join(parts) + "</url>"


class DocRegistry:
    """Immutable lookup over an ordered list of doc groups.

    Build it once with :meth:`from_groups` (or :meth:`from_file`); entries are
    flattened in group order and linked to their neighbours.
    """

    def __init__(self, groups: tuple[DocGroup, ...], entries: Mapping[str, DocEntry]) -> None:
        self._groups = groups
        self._entries = entries

    @classmethod
    def from_groups(cls, groups: list[dict[str, Any]], base_path: str = "/docs") -> "DocRegistry":
        base_path = base_path.rstrip("/")

        flat: list[tuple[str, dict[str, Any]]] = []
        seen: set[str] = set()
        for group in groups:
            for item in group.get("items", []):
                slug = item["slug"]
                if slug in seen:
                    raise ValueError(f"Duplicate doc slug: {slug}")
                seen.add(slug)
                flat.append((group["slug"], item))

        entries: dict[str, DocEntry] = {}
        for idx, (group_slug, item) in enumerate(flat):
            entries[item["slug"]] = DocEntry(
                title=item["title"],
                slug=item["slug"],
                desc=item.get("desc", ""),
                group=group_slug,
                to=f"{base_path}/{item['slug']}",
                previous=flat[idx - 1][1]["slug"] if idx > 0 else None,
                next=flat[idx + 1][1]["slug"] if idx + 1 < len(flat) else None,
            )

        built = tuple(
            DocGroup(
                title=group["title"],
                slug=group["slug"],
                items=tuple(entries[item["slug"]] for item in group.get("items", [])),
            )
            for group in groups
        )
        return cls(built, MappingProxyType(entries))

    @classmethod
    def from_file(cls, path: Path, base_path: str = "/docs") -> "DocRegistry":
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if isinstance(data, dict):
            base_path = data.get("base_path", base_path)
            data = data.get("groups", [])
        return cls.from_groups(data, base_path=base_path)

    def root(self) -> DocEntry | None:
        return next(iter(self._entries.values()), None)

    def groups(self) -> tuple[DocGroup, ...]:
        return self._groups

    def one(self, slug: str | None) -> DocEntry | None:
        if not slug:
            return None
        return self._entries.get(slug)

    def neighbours(self, slug: str) -> tuple[DocEntry | None, DocEntry | None]:
        """Return the (previous, next) entries around ``slug``."""
        entry = self.one(slug)
        if entry is None:
            return None, None
        return self.one(entry.previous), self.one(entry.next)

    def site_map(self, site_url: str) -> list[str]:
        return [site_map_entry(site_url, entry.to) for entry in self._entries.values()]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, slug: object) -> bool:
        return slug in self._entries
