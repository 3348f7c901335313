"""Read-only projections of a parsed Subtext document."""

from .plain import PlainRenderer, render_block_plain, render_plain
from .semantic import RichParagraph, RichRun, RichText, SemanticRenderer, render_semantic
from .verbatim import (
    AttributedText,
    Attribute,
    VerbatimRenderer,
    render_markup,
    render_verbatim,
)

__all__ = [
    "render_plain",
    "render_block_plain",
    "render_semantic",
    "render_verbatim",
    "render_markup",
    "Attribute",
    "AttributedText",
    "RichRun",
    "RichParagraph",
    "RichText",
    "PlainRenderer",
    "SemanticRenderer",
    "VerbatimRenderer",
]
