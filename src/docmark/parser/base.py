"""Node tree produced by the markdown parser."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Literal, Union

RuntimeName = Literal["bun", "node", "workerd"]


@dataclass(slots=True)
class Text:
    type: ClassVar[str] = "text"
    content: str


@dataclass(slots=True)
class Break:
    type: ClassVar[str] = "break"


@dataclass(slots=True)
class Separator:
    type: ClassVar[str] = "separator"


@dataclass(slots=True)
class HorizontalRule:
    type: ClassVar[str] = "horizontalRule"


@dataclass(slots=True)
class InlineCode:
    type: ClassVar[str] = "inlineCode"
    content: str


@dataclass(slots=True)
class Strong:
    type: ClassVar[str] = "strong"
    children: list[MarkdownNode] = field(default_factory=list)


@dataclass(slots=True)
class Emphasis:
    type: ClassVar[str] = "emphasis"
    children: list[MarkdownNode] = field(default_factory=list)


@dataclass(slots=True)
class Link:
    type: ClassVar[str] = "link"
    href: str
    children: list[MarkdownNode] = field(default_factory=list)


@dataclass(slots=True)
class Image:
    type: ClassVar[str] = "image"
    src: str
    alt: str | None = None


@dataclass(slots=True)
class Video:
    type: ClassVar[str] = "video"
    src: str
    alt: str | None = None


@dataclass(slots=True)
class Paragraph:
    type: ClassVar[str] = "paragraph"
    children: list[MarkdownNode] = field(default_factory=list)


@dataclass(slots=True)
class Heading:
    type: ClassVar[str] = "heading"
    level: int
    children: list[MarkdownNode] = field(default_factory=list)


@dataclass(slots=True)
class ListItem:
    type: ClassVar[str] = "listItem"
    children: list[MarkdownNode] = field(default_factory=list)


@dataclass(slots=True)
class ListBlock:
    type: ClassVar[str] = "list"
    ordered: bool = False
    children: list[ListItem] = field(default_factory=list)


@dataclass(slots=True)
class BlockQuote:
    type: ClassVar[str] = "blockquote"
    children: list[MarkdownNode] = field(default_factory=list)


@dataclass(slots=True)
class CodeBlock:
    type: ClassVar[str] = "codeBlock"
    language: str
    code: str


@dataclass(slots=True)
class RuntimeBlock:
    type: ClassVar[str] = "runtimeBlock"
    runtime: RuntimeName
    children: list[MarkdownNode] = field(default_factory=list)


@dataclass(slots=True)
class RuntimeWrapper:
    type: ClassVar[str] = "runtimeWrapper"
    runtimes: list[RuntimeName] = field(default_factory=list)
    children: list[RuntimeBlock] = field(default_factory=list)


MarkdownNode = Union[
    Text,
    Break,
    Separator,
    HorizontalRule,
    InlineCode,
    Strong,
    Emphasis,
    Link,
    Image,
    Video,
    Paragraph,
    Heading,
    ListBlock,
    ListItem,
    BlockQuote,
    CodeBlock,
    RuntimeWrapper,
    RuntimeBlock,
]


@dataclass(slots=True)
class MarkdownHeader:
    id: str
    title: str
    level: int


@dataclass(slots=True)
class Document:
    """A parsed markdown document plus the metadata derived from its tree."""

    title: str
    tree: list[MarkdownNode] = field(default_factory=list)
    headers: list[MarkdownHeader] = field(default_factory=list)
    intro: str | None = None
    description: str = ""
    date: str | None = None
    authors: list[str] = field(default_factory=list)


def node_to_dict(node: MarkdownNode) -> dict[str, Any]:
    """Serialise a node (and its children) to plain JSON-friendly data."""
    data: dict[str, Any] = {"type": node.type}
    for f in fields(node):
        value = getattr(node, f.name)
        if f.name == "children":
            data["children"] = [node_to_dict(child) for child in value]
        elif isinstance(value, list):
            data[f.name] = list(value)
        elif value is not None:
            data[f.name] = value
    return data
