from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from docmark.cli import main

DOC = """\
---
title: Routing Basics
---

Routes map paths to handlers.

## Dynamic params

## Dynamic params

- one
"""


def _write_doc(tmp_path: Path) -> Path:
    p = tmp_path / "routing.md"
    p.write_text(DOC)
    return p


def test_render_writes_html(tmp_path: Path) -> None:
    src = _write_doc(tmp_path)
    out = tmp_path / "out" / "routing.html"

    result = CliRunner().invoke(main, ["render", str(src), "-o", str(out), "--unique-anchors"])

    assert result.exit_code == 0, result.output
    assert f"Rendered: {out}" in result.output
    html = out.read_text(encoding="utf-8")
    assert "<title>Routing Basics</title>" in html
    assert 'id="dynamic-params-2"' in html


def test_toc_lists_headers(tmp_path: Path) -> None:
    src = _write_doc(tmp_path)

    result = CliRunner().invoke(main, ["toc", str(src)])

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [
        "2\tdynamic-params\tDynamic params",
        "2\tdynamic-params\tDynamic params",
    ]


def test_tree_prints_json(tmp_path: Path) -> None:
    src = _write_doc(tmp_path)

    result = CliRunner().invoke(main, ["tree", str(src)])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["title"] == "Routing Basics"
    assert payload["intro"] == "Routes map paths to handlers."
    assert [node["type"] for node in payload["tree"]] == ["paragraph", "heading", "heading", "list"]
    assert payload["tree"][1] == {
        "type": "heading",
        "level": 2,
        "children": [{"type": "text", "content": "Dynamic params"}],
    }
    assert payload["tree"][3]["ordered"] is False


def test_sitemap(tmp_path: Path) -> None:
    nav = tmp_path / "nav.json"
    nav.write_text(json.dumps([{"title": "Intro", "slug": "intro", "items": [{"title": "A", "slug": "a"}]}]))

    result = CliRunner().invoke(main, ["sitemap", str(nav), "--site-url", "https://docs.example.com"])

    assert result.exit_code == 0, result.output
    assert "<url><loc>https://docs.example.com/docs/a</loc></url>" in result.output


def test_sitemap_invalid_file(tmp_path: Path) -> None:
    nav = tmp_path / "nav.json"
    nav.write_text("{not json")

    result = CliRunner().invoke(main, ["sitemap", str(nav)])

    assert result.exit_code != 0
    assert "Invalid navigation file" in result.output


def test_unsupported_extension(tmp_path: Path) -> None:
    src = tmp_path / "paper.pdf"
    src.write_text("x")

    result = CliRunner().invoke(main, ["toc", str(src)])

    assert result.exit_code != 0
    assert "Unsupported input type" in result.output
