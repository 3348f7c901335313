"""Semantic rendering: markup replaced by styled, clickable rich-text runs."""

from __future__ import annotations

import html
from collections.abc import Callable
from dataclasses import dataclass

from ..core.model import Block, Document, Inline
from ..core.ports import Renderer

Resolve = Callable[[str], str | None]

STYLES = {"bold": "strong", "italic": "em", "code": "code"}
BLOCK_TAGS = {"heading": "h1", "quote": "blockquote", "list": "li", "text": "p"}


@dataclass(frozen=True)
class RichRun:
    text: str
    style: str | None = None  # "bold" | "italic" | "code"
    link: str | None = None


@dataclass(frozen=True)
class RichParagraph:
    kind: str
    runs: tuple[RichRun, ...] = ()

    @property
    def text(self) -> str:
        return "".join(r.text for r in self.runs)


def _run_html(run: RichRun) -> str:
    out = html.escape(run.text)
    if run.style in STYLES:
        tag = STYLES[run.style]
        out = f"<{tag}>{out}</{tag}>"
    if run.link is not None:
        out = f'<a href="{html.escape(run.link, quote=True)}">{out}</a>'
    return out


@dataclass(frozen=True)
class RichText:
    paragraphs: tuple[RichParagraph, ...] = ()

    def to_html(self) -> str:
        """HTML fragment; consecutive list items share one ``<ul>``."""
        lines: list[str] = []
        in_list = False
        for p in self.paragraphs:
            if p.kind != "list" and in_list:
                lines.append("</ul>")
                in_list = False
            if p.kind == "blank":
                continue
            if p.kind == "list" and not in_list:
                lines.append("<ul>")
                in_list = True
            tag = BLOCK_TAGS[p.kind]
            body = "".join(_run_html(r) for r in p.runs)
            lines.append(f"<{tag}>{body}</{tag}>")
        if in_list:
            lines.append("</ul>")
        return "\n".join(lines)


def _render_inline(inline: Inline, source: str, resolve: Resolve) -> RichRun:
    if inline.kind in ("wikilink", "slashlink"):
        url = resolve(inline.text)
        if url is None:
            return RichRun(inline.span.slice(source))
        return RichRun(inline.text, link=url)
    if inline.kind in ("bareurl", "bracketlink"):
        return RichRun(inline.text, link=inline.text)
    if inline.kind in STYLES:
        return RichRun(inline.text, style=inline.kind)
    return RichRun(inline.text)


def render_block_semantic(block: Block, source: str, resolve: Resolve) -> RichParagraph:
    if block.kind == "blank":
        return RichParagraph("blank")
    if block.kind == "heading":
        return RichParagraph("heading", (RichRun(block.body()),))
    runs = tuple(_render_inline(i, source, resolve) for i in block.inline)
    return RichParagraph(block.kind, runs)


def render_semantic(doc: Document, resolve: Resolve) -> RichText:
    """
    Render ``doc`` as rich text.

    Wikilinks and slashlinks are passed to ``resolve``; a URL turns the
    display text into a link, None leaves the markup as plain text.
    """
    return RichText(
        tuple(render_block_semantic(b, doc.source, resolve) for b in doc.blocks)
    )


class SemanticRenderer(Renderer):
    def __init__(self, resolve: Resolve):
        self.resolve = resolve

    def render(self, doc: Document) -> RichText:
        return render_semantic(doc, self.resolve)
