"""Subtext parsers: blocks, inline forms and the optional header block."""

from .blocks import SubtextParser, parse, parse_block, parse_lines
from .headers import Header, Headers, HeadersEnvelope, parse_envelope, parse_note
from .inline import parse_inline

__all__ = [
    "parse",
    "parse_block",
    "parse_lines",
    "parse_inline",
    "parse_envelope",
    "parse_note",
    "Header",
    "Headers",
    "HeadersEnvelope",
    "SubtextParser",
]
