"""Verbatim rendering: the source text plus highlight attribute ranges."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..core.model import Document, Inline, Span
from ..core.ports import Renderer


@dataclass(frozen=True)
class Attribute:
    name: str  # block kind, inline kind, or "link"
    span: Span
    value: str | None = None


@dataclass(frozen=True)
class AttributedText:
    text: str
    attributes: tuple[Attribute, ...] = ()

    def ranges(self, name: str) -> list[Attribute]:
        return [a for a in self.attributes if a.name == name]

    def attributes_at(self, index: int) -> list[Attribute]:
        """Attributes covering ``index``, for mapping a cursor to markup."""
        return [a for a in self.attributes if a.span.start <= index < a.span.end]


def _inline_attributes(
    inline: Inline, resolve: Callable[[str], str | None] | None
) -> list[Attribute]:
    if inline.kind == "text":
        return []
    out = [Attribute(inline.kind, inline.span)]
    if inline.kind in ("bareurl", "bracketlink"):
        out.append(Attribute("link", inline.inner, inline.text))
    elif inline.kind in ("wikilink", "slashlink") and resolve is not None:
        url = resolve(inline.text)
        if url is not None:
            out.append(Attribute("link", inline.inner, url))
    return out


def render_verbatim(
    doc: Document, resolve: Callable[[str], str | None] | None = None
) -> AttributedText:
    """
    Annotate the unmodified source with one attribute per markup span.

    Ranges come straight from the parsed spans; the text is never rescanned.
    When ``resolve`` is given, resolved wikilinks and slashlinks also get a
    ``link`` attribute.
    """
    attributes: list[Attribute] = []
    for block in doc.blocks:
        if block.kind in ("heading", "quote", "list"):
            attributes.append(Attribute(block.kind, block.span))
        for inline in block.inline:
            attributes.extend(_inline_attributes(inline, resolve))
    return AttributedText(text=doc.source, attributes=tuple(attributes))


def render_markup(doc: Document) -> str:
    """Markup rebuilt from the blocks. Always equal to ``doc.source``."""
    return "\n".join(block.line for block in doc.blocks)


class VerbatimRenderer(Renderer):
    def __init__(self, resolve: Callable[[str], str | None] | None = None):
        self.resolve = resolve

    def render(self, doc: Document) -> AttributedText:
        return render_verbatim(doc, self.resolve)
