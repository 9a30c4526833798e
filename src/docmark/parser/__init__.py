"""Parser package."""

from .base import (
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
    MarkdownHeader,
    MarkdownNode,
    Paragraph,
    RuntimeBlock,
    RuntimeName,
    RuntimeWrapper,
    Separator,
    Strong,
    Text,
    Video,
    node_to_dict,
)
from .extract import extract_headers_from_nodes, extract_text_from_nodes, get_intro_from_tree, slugify
from .md_parser import MarkdownParser, parse_breaks, parse_inline, to_tree

__all__ = [
    "BlockQuote",
    "Break",
    "CodeBlock",
    "Document",
    "Emphasis",
    "Heading",
    "HorizontalRule",
    "Image",
    "InlineCode",
    "Link",
    "ListBlock",
    "ListItem",
    "MarkdownHeader",
    "MarkdownNode",
    "Paragraph",
    "RuntimeBlock",
    "RuntimeName",
    "RuntimeWrapper",
    "Separator",
    "Strong",
    "Text",
    "Video",
    "node_to_dict",
    "extract_headers_from_nodes",
    "extract_text_from_nodes",
    "get_intro_from_tree",
    "slugify",
    "MarkdownParser",
    "parse_breaks",
    "parse_inline",
    "to_tree",
]
