"""Subtext: a line-oriented markup dialect for notes."""

__version__ = "0.3.0"

from .core.model import Block, Document, Inline, Span  # noqa: E402
from .parser.blocks import parse  # noqa: E402

__all__ = ["__version__", "parse", "Document", "Block", "Inline", "Span"]
