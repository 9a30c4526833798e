"""View components the tree renderer delegates to (code, media, links, runtime tabs)."""

from __future__ import annotations

from typing import Protocol

from jinja2 import Environment
from markupsafe import Markup
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from docmark.parser.base import RuntimeName

SAME_TAB = "_self"
NEW_TAB = "_blank"

_CODE_FORMATTER = HtmlFormatter(nowrap=True)


class Components(Protocol):
    def code_block(self, language: str, code: str) -> str: ...

    def image(self, src: str, alt: str) -> str: ...

    def video(self, src: str) -> str: ...

    def link(self, href: str, children: str) -> str: ...

    def runtime(self, runtimes: list[RuntimeName], blocks: list[tuple[RuntimeName, str]]) -> str: ...


def link_target(href: str, site_host: str) -> str:
    """Relative links and links to ``site_host`` stay in the same tab."""
    if not href.startswith("http"):
        return SAME_TAB
    if site_host and site_host in href:
        return SAME_TAB
    return NEW_TAB


def highlight_code(language: str, code: str) -> Markup | str:
    """Token-highlighted HTML for ``code``, or the plain text when no lexer knows ``language``."""
    code = code.strip()
    try:
        lexer = get_lexer_by_name(language)
    except ClassNotFound:
        return code
    return Markup(highlight(code, lexer, _CODE_FORMATTER).rstrip("\n"))


def highlight_css(selector: str = ".highlight") -> str:
    return _CODE_FORMATTER.get_style_defs(selector)


class TemplateComponents:
    """Components backed by the macros in ``components.html``."""

    def __init__(self, env: Environment, *, site_host: str = "", template_name: str = "components.html") -> None:
        self.site_host = site_host
        self._macros = env.get_template(template_name).module

    def code_block(self, language: str, code: str) -> str:
        return str(self._macros.code_block(language, highlight_code(language, code)))

    def image(self, src: str, alt: str) -> str:
        return str(self._macros.image(src, alt))

    def video(self, src: str) -> str:
        return str(self._macros.video(src))

    def link(self, href: str, children: str) -> str:
        target = link_target(href, self.site_host)
        return str(self._macros.link(href, target, Markup(children)))

    def runtime(self, runtimes: list[RuntimeName], blocks: list[tuple[RuntimeName, str]]) -> str:
        return str(self._macros.runtime(runtimes, [(name, Markup(body)) for name, body in blocks]))
