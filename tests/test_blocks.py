"""Tests for block parsing and the document-level parse laws."""

import pytest

from subtext import parse
from subtext.core.model import Span
from subtext.parser.blocks import SubtextParser, parse_lines
from subtext.render.verbatim import render_markup

SAMPLES = [
    "",
    "\n",
    "   ",
    "plain",
    "a\n",
    "\n\n\n",
    "# Heading\n\nFirst content line\nSecond line",
    "> quote [[Link]]\n- item /slash\n-   spaced *b*",
    "[[unterminated\n<unterminated\n*\n_\n`",
    "windows\r\nline\r\n",
    "tabs\tand ünïcödé [[Ærø]] 🙂 /emoji-ok",
    "#\n>\n-\n#no-space",
    "see http://example.com/path and /path, and [[a.b]]",
]


def test_parse_lines_keeps_empty_lines():
    """Test that empty lines and a trailing newline become lines."""
    assert parse_lines("") == [Span(0, 0)]
    assert parse_lines("a\n") == [Span(0, 1), Span(2, 2)]
    assert parse_lines("a\n\nb") == [Span(0, 1), Span(2, 2), Span(3, 4)]


def test_block_kinds():
    """Test classification by leading character."""
    doc = parse("# Title\n> quote\n- item\ntext\n\n   ")
    assert [b.kind for b in doc.blocks] == [
        "heading", "quote", "list", "text", "blank", "blank",
    ]


def test_sigil_and_spaces_stripped_from_body():
    """Test body extraction for each sigil."""
    doc = parse("#   Title\n>quote\n-\titem\n  indented text")
    assert [b.body() for b in doc.blocks] == [
        "Title", "quote", "item", "  indented text",
    ]
    assert [b.sigil() for b in doc.blocks] == ["#", ">", "-", ""]


def test_to_markup_normalizes_sigil_spacing():
    """Test rebuilding a line as sigil + single space + body."""
    doc = parse("-    item\n>quote\n# Title\ntext\n   ")
    assert [b.to_markup() for b in doc.blocks] == [
        "- item", "> quote", "# Title", "text", "",
    ]


def test_heading_is_not_inline_parsed():
    """Test that headings carry no inline spans."""
    block = parse("# See [[Link]]").blocks[0]
    assert block.kind == "heading"
    assert block.inline == ()
    assert block.body() == "See [[Link]]"


def test_quote_and_list_inline():
    """Test inline parsing inside quote and list bodies."""
    doc = parse("> quote [[Link]]\n- /slash")
    quote, item = doc.blocks
    assert [(i.kind, i.text) for i in quote.inline] == [
        ("text", "quote "), ("wikilink", "Link"),
    ]
    assert [(i.kind, i.text) for i in item.inline] == [("slashlink", "/slash")]


def test_block_spans_are_ordered_and_disjoint():
    """Test that block spans follow source order without overlapping."""
    doc = parse("one\ntwo\n\nthree")
    spans = [b.span for b in doc.blocks]
    assert spans == [Span(0, 3), Span(4, 7), Span(8, 8), Span(9, 14)]
    for a, b in zip(spans, spans[1:]):
        assert a.end < b.start


@pytest.mark.parametrize("markup", SAMPLES)
def test_round_trip(markup):
    """Test that verbatim rendering reproduces the source exactly."""
    doc = parse(markup)
    assert render_markup(doc) == markup
    assert len(doc.blocks) == markup.count("\n") + 1


@pytest.mark.parametrize("markup", SAMPLES)
def test_idempotent(markup):
    """Test that reparsing rendered output gives the same document."""
    doc = parse(markup)
    assert parse(render_markup(doc)) == doc


@pytest.mark.parametrize("markup", SAMPLES)
def test_span_coverage(markup):
    """Test that inline spans exactly cover each parsed block body."""
    doc = parse(markup)
    for block in doc.blocks:
        if block.kind in ("blank", "heading"):
            continue
        body = block.body_span.slice(doc.source)
        assert "".join(i.span.slice(doc.source) for i in block.inline) == body
        assert body == block.body()


@pytest.mark.parametrize("markup", SAMPLES)
def test_deterministic(markup):
    """Test that parsing the same string twice gives equal documents."""
    assert parse(markup) == parse(markup)


def test_parser_strategy():
    """Test the strategy object delegates to parse."""
    assert SubtextParser().parse("- a") == parse("- a")
