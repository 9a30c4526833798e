"""Markdown dialect parser producing a typed node tree."""

from __future__ import annotations

import re
from pathlib import Path

from docmark import config
from docmark.utils.logging import get_logger

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
from .extract import extract_headers_from_nodes, get_intro_from_tree

logger = get_logger(__name__)


class MarkdownParser:
    """Parse a markdown file (with optional front matter) into a Document."""

    def __init__(self, max_depth: int | None = None, unique_anchors: bool = False) -> None:
        self.max_depth = max_depth
        self.unique_anchors = unique_anchors

    def parse(self, input_path: Path) -> Document:
        input_path = Path(input_path)
        raw = input_path.read_text(encoding="utf-8", errors="ignore")
        return self.parse_text(raw, name=input_path.stem)

    def parse_text(self, text: str, name: str = "untitled") -> Document:
        frontmatter, body = _split_frontmatter(text)
        meta = _parse_frontmatter(frontmatter)

        tree = to_tree(body, max_depth=self.max_depth)
        headers = extract_headers_from_nodes(tree, unique=self.unique_anchors)
        intro = get_intro_from_tree(tree)

        title = meta.get("title") or (headers[0].title if headers else "") or name

        return Document(
            title=title,
            tree=tree,
            headers=headers,
            intro=intro,
            description=meta.get("description") or intro or "",
            date=meta.get("date"),
            authors=meta.get("authors", []),
        )


# ---------------------------------------------------------------------------
# Front matter
# ---------------------------------------------------------------------------

_FRONTMATTER_DELIM = "---"
_FRONTMATTER_KEY_RE = re.compile(r"^([a-zA-Z_]\w*)\s*:\s*(.*)")


def _split_frontmatter(text: str) -> tuple[str, str]:
    """Split a leading ``---`` delimited block from the body text."""
    lines = re.split(r"\r?\n", text)
    if not lines or lines[0].strip() != _FRONTMATTER_DELIM:
        return "", text

    for idx in range(1, len(lines)):
        if lines[idx].strip() == _FRONTMATTER_DELIM:
            return "\n".join(lines[1:idx]).strip(), "\n".join(lines[idx + 1:])

    return "", text


def _parse_frontmatter(raw: str) -> dict:
    """Read flat ``key: value`` pairs; only the keys docmark knows are kept."""
    if not raw:
        return {}

    result: dict = {}
    for line in raw.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        m = _FRONTMATTER_KEY_RE.match(line)
        if not m:
            continue

        key = m.group(1).lower()
        value = m.group(2).strip()

        if len(value) >= 2 and value[0] in ('"', "'") and value[-1] == value[0]:
            value = value[1:-1]

        if key in ("title", "description"):
            result[key] = value
        elif key == "date":
            result["date"] = value or None
        elif key in ("author", "authors"):
            result["authors"] = _parse_author_value(value)

    return result


def _parse_author_value(value: str) -> list[str]:
    if value.startswith("[") and value.endswith("]"):
        value = value[1:-1]
    parts = re.split(r",\s*|\s+and\s+", value)
    return [p.strip().strip("\"'") for p in parts if p.strip()]


# ---------------------------------------------------------------------------
# Inline spans
# ---------------------------------------------------------------------------

_INLINE_RE = re.compile(
    r"(\*\*([^*]+)\*\*)"
    r"|(\*([^*]+)\*)"
    r"|(`([^`]+)`)"
    r"|!\[([^\]]*)\]\(([^)]+)\)"
    r"|\[([^\]]+)\]\(([^)]+)\)"
)

# A manual line break is written as the two characters backslash + n.
_BREAK_TOKEN = "\\n"
_VIDEO_SUFFIX = "mp4"


def parse_breaks(text: str) -> list[MarkdownNode]:
    """Split literal ``\\n`` escapes into text segments separated by Break nodes."""
    parts = text.split(_BREAK_TOKEN)
    if len(parts) == 1:
        return [Text(content=text)]

    nodes: list[MarkdownNode] = []
    for idx, part in enumerate(parts):
        if idx:
            nodes.append(Break())
        nodes.append(Text(content=part))
    return nodes


def parse_inline(text: str) -> list[MarkdownNode]:
    """Parse one line of text into inline nodes.

    Spans are not nested: the body of ``**...**`` or ``*...*`` is kept as a
    single literal Text child. Unclosed markers stay in the surrounding text.
    """
    nodes: list[MarkdownNode] = []
    last = 0

    for m in _INLINE_RE.finditer(text):
        if m.start() > last:
            nodes.extend(parse_breaks(text[last:m.start()]))

        if m.group(1) is not None:
            nodes.append(Strong(children=[Text(content=m.group(2))]))
        elif m.group(3) is not None:
            nodes.append(Emphasis(children=[Text(content=m.group(4))]))
        elif m.group(5) is not None:
            nodes.append(InlineCode(content=m.group(6)))
        elif m.group(8) is not None:
            src = m.group(8)
            alt = m.group(7) or None
            if src.endswith(_VIDEO_SUFFIX):
                nodes.append(Video(src=src, alt=alt))
            else:
                nodes.append(Image(src=src, alt=alt))
        else:
            nodes.append(Link(href=m.group(10), children=[Text(content=m.group(9))]))

        last = m.end()

    if last < len(text):
        nodes.extend(parse_breaks(text[last:]))

    return nodes


# ---------------------------------------------------------------------------
# Block structure
# ---------------------------------------------------------------------------

_NEWLINE_RE = re.compile(r"\r?\n")
_HEADING_RE = re.compile(r"^(#{1,6}) ")
_LIST_RE = re.compile(r"^- ")
_BLOCKQUOTE_RE = re.compile(r"^> ")
_QUOTE_PREFIX_RE = re.compile(r"^>(?: |$)")
_QUOTE_MARKER = ">"
_HORIZONTAL_RULE_RE = re.compile(r"^---")
_FENCE = "```"
_DEFAULT_CODE_LANGUAGE = "plaintext"

_SEPARATOR_TOKEN = "-----"
_RUNTIME_OPEN = "<RUNTIME>"
_RUNTIME_CLOSE = "</RUNTIME>"
_RUNTIME_TABS: dict[str, RuntimeName] = {"<BUN>": "bun", "<NODE>": "node", "<WORKERD>": "workerd"}
_RUNTIME_TAB_CLOSERS = frozenset({"</BUN>", "</NODE>", "</WORKERD>"})


def to_tree(markdown: str, *, max_depth: int | None = None) -> list[MarkdownNode]:
    """Parse markdown text into an ordered list of block nodes.

    Never raises: unterminated fences and blockquotes are flushed at the end
    of input. Blockquote bodies and runtime tab bodies are parsed by
    recursion, up to ``max_depth`` levels (``DOCMARK_MAX_DEPTH`` by default).
    """
    if max_depth is None:
        max_depth = config.DOCMARK_MAX_DEPTH
    return _TreeBuilder(depth=0, max_depth=max_depth).build(markdown)


class _TreeBuilder:
    """Line classifier for a single ``to_tree`` call; nested bodies get their own."""

    def __init__(self, depth: int, max_depth: int) -> None:
        self.depth = depth
        self.max_depth = max_depth
        self.tree: list[MarkdownNode] = []

        self.open_list: ListBlock | None = None

        self.in_code = False
        self.code_language = ""
        self.code_lines: list[str] = []

        self.quote_lines: list[str] = []

        self.runtime_blocks: list[RuntimeBlock] = []
        self.runtime_names: list[RuntimeName] = []
        self.runtime_name: RuntimeName | None = None
        self.runtime_lines: list[str] = []
        self.in_runtime_tab = False

    def build(self, markdown: str) -> list[MarkdownNode]:
        for line in _NEWLINE_RE.split(markdown.strip()):
            self._feed(line)

        if self.in_code:
            self._emit_code_block()
        self._flush_quote()
        # An open <RUNTIME> without its closing tag emits nothing.
        return self.tree

    def _feed(self, line: str) -> None:
        stripped = line.strip()

        if self.in_runtime_tab:
            if not self._runtime_token(stripped):
                self.runtime_lines.append(line)
            return

        # Separators and runtime tags apply inside code fences as well.
        if self._fixed_token(stripped):
            return

        if self.in_code:
            if line.startswith(_FENCE):
                self._emit_code_block()
            else:
                self.code_lines.append(line)
            return

        if line.startswith(_FENCE):
            self.open_list = None
            self._flush_quote()
            self.in_code = True
            self.code_language = line[len(_FENCE):].strip() or _DEFAULT_CODE_LANGUAGE
            return

        heading = _HEADING_RE.match(line)
        if heading:
            self.open_list = None
            level = len(heading.group(1))
            self._emit(Heading(level=level, children=parse_inline(line[level:].strip())))
            return

        if _LIST_RE.match(line):
            self._add_list_item(line[2:].strip())
            return

        if _BLOCKQUOTE_RE.match(line):
            self.open_list = None
            self.quote_lines.append(line)
            return

        # A bare ">" inside a quote is a blank line of the quote body.
        if self.quote_lines and stripped == _QUOTE_MARKER:
            self.quote_lines.append(_QUOTE_MARKER)
            return

        if not stripped:
            self.open_list = None
            self._flush_quote()
            return

        if _HORIZONTAL_RULE_RE.match(line):
            self.open_list = None
            self._emit(HorizontalRule())
            return

        self.open_list = None
        self._emit(Paragraph(children=parse_inline(stripped)))

    # -- fixed tokens -------------------------------------------------------

    def _fixed_token(self, stripped: str) -> bool:
        if stripped == _SEPARATOR_TOKEN:
            self._emit(Separator())
            return True
        if stripped == _RUNTIME_OPEN:
            return True
        return self._runtime_token(stripped)

    def _runtime_token(self, stripped: str) -> bool:
        if stripped == _RUNTIME_CLOSE:
            self._push_runtime_block()
            self._emit(RuntimeWrapper(runtimes=self.runtime_names, children=self.runtime_blocks))
            self.in_runtime_tab = False
            self.runtime_names = []
            self.runtime_blocks = []
            return True

        runtime = _RUNTIME_TABS.get(stripped)
        if runtime is not None:
            self._push_runtime_block()
            self.in_runtime_tab = True
            self.runtime_name = runtime
            return True

        if stripped in _RUNTIME_TAB_CLOSERS:
            self._push_runtime_block()
            self.in_runtime_tab = False
            return True

        return False

    def _push_runtime_block(self) -> None:
        if self.runtime_lines and self.runtime_name:
            children = self._subtree("\n".join(self.runtime_lines))
            self.runtime_blocks.append(RuntimeBlock(runtime=self.runtime_name, children=children))
            self.runtime_names.append(self.runtime_name)
        self.runtime_name = None
        self.runtime_lines = []

    # -- block emission -----------------------------------------------------

    def _emit(self, node: MarkdownNode) -> None:
        self._flush_quote()
        self.tree.append(node)

    def _emit_code_block(self) -> None:
        self._emit(CodeBlock(language=self.code_language, code="\n".join(self.code_lines)))
        self.in_code = False
        self.code_language = ""
        self.code_lines = []

    def _add_list_item(self, content: str) -> None:
        self._flush_quote()
        if self.open_list is None or not self.tree or self.tree[-1] is not self.open_list:
            self.open_list = ListBlock(ordered=False)
            self.tree.append(self.open_list)
        self.open_list.children.append(ListItem(children=parse_inline(content)))

    def _flush_quote(self) -> None:
        if not self.quote_lines:
            return
        body = "\n".join(_QUOTE_PREFIX_RE.sub("", line, count=1) for line in self.quote_lines)
        self.quote_lines = []
        self.tree.append(BlockQuote(children=self._subtree(body)))

    def _subtree(self, body: str) -> list[MarkdownNode]:
        if self.depth >= self.max_depth:
            logger.warning("Nesting deeper than %d levels, keeping body as literal text", self.max_depth)
            return [
                Paragraph(children=[Text(content=line.strip())])
                for line in _NEWLINE_RE.split(body)
                if line.strip()
            ]
        return _TreeBuilder(depth=self.depth + 1, max_depth=self.max_depth).build(body)
