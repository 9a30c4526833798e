"""Content package."""

from .loader import ContentLoader
from .registry import DocEntry, DocGroup, DocRegistry, site_map_entry

__all__ = [
    "ContentLoader",
    "DocEntry",
    "DocGroup",
    "DocRegistry",
    "site_map_entry",
]
