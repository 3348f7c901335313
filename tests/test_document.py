"""Tests for document queries: excerpts, links, titles and truncation."""

from subtext import parse
from subtext.core.utils import derive_title, truncate_at_word_boundary, truncate_by_word


def test_excerpt_skips_heading_and_blank():
    """Test that the excerpt is the first content block."""
    doc = parse("# Heading\n\nFirst content line\nSecond line")
    assert doc.excerpt() == "First content line"


def test_excerpt_strips_markup():
    """Test that the excerpt is plain text."""
    doc = parse("\n- see [[Orphalese]] and *bold*  ")
    assert doc.excerpt() == "see Orphalese and bold"


def test_excerpt_empty_document():
    """Test that documents without content have an empty excerpt."""
    assert parse("").excerpt() == ""
    assert parse("# Only a heading\n\n").excerpt() == ""


def test_excerpt_truncates():
    """Test excerpt truncation at a word boundary."""
    doc = parse("alpha beta gamma")
    assert doc.excerpt(max_chars=11) == "alpha beta…"
    assert doc.excerpt(max_chars=11, ellipsis="...") == "alpha beta..."


def test_link_extraction_end_to_end():
    """Test that link spans come out in source order with their payloads."""
    doc = parse("Check [[Orphalese]] and /wanderer-path and http://example.com")
    links = doc.link_spans()
    assert [(i.kind, i.text) for i in links] == [
        ("wikilink", "Orphalese"),
        ("slashlink", "/wanderer-path"),
        ("bareurl", "http://example.com"),
    ]


def test_link_spans_across_blocks():
    """Test link collection over several block kinds, headings excluded."""
    doc = parse("# [[Not indexed]]\n> <http://a.b>\n- [[One]]\n[[Two]] [[One]]")
    assert [i.text for i in doc.link_spans()] == ["http://a.b", "One", "Two", "One"]
    assert [i.text for i in doc.wikilinks()] == ["One", "Two", "One"]
    assert doc.slashlinks() == []


def test_slugs():
    """Test the de-duplicated slug set for wikilinks and slashlinks."""
    doc = parse("[[Hello World]] /hello-world [[Other Note]] http://x.y")
    assert doc.slugs() == {"hello-world", "other-note"}


def test_title():
    """Test title derivation from the first non-blank line."""
    assert parse("\n# My Note. More\nbody").title() == "My Note"
    assert parse("\"Quoted\" idea; rest").title() == "Quoted idea"
    assert parse("").title() == ""


def test_block_at():
    """Test mapping a cursor offset to its block."""
    doc = parse("one\ntwo")
    assert doc.block_at(0).body() == "one"
    assert doc.block_at(3).body() == "one"
    assert doc.block_at(5).body() == "two"
    assert doc.block_at(99) is None


def test_shortlink_at():
    """Test finding the link being typed at a cursor offset."""
    doc = parse("a [[Foo]] b /bar")
    wikilink = doc.shortlink_at(7)
    assert wikilink is not None and wikilink.text == "Foo"
    slashlink = doc.shortlink_at(16)
    assert slashlink is not None and slashlink.text == "/bar"
    assert doc.shortlink_at(3) is None


def test_appending():
    """Test joining two documents."""
    doc = parse("one").appending(parse("- two"))
    assert doc.source == "one\n- two"
    assert [b.kind for b in doc.blocks] == ["text", "list"]


def test_truncate_at_word_boundary():
    """Test the word-boundary truncation rules."""
    assert truncate_at_word_boundary("alpha beta gamma", 11) == "alpha beta…"
    assert truncate_at_word_boundary("short", 10) == "short"
    assert truncate_at_word_boundary("exactly10!", 10) == "exactly10!"
    assert truncate_at_word_boundary("alpha beta gamma", 10) == "alpha beta…"


def test_truncate_strips_trailing_punctuation():
    """Test that punctuation before the cut is dropped."""
    assert truncate_at_word_boundary("alpha, beta gamma", 9) == "alpha…"


def test_truncate_without_space_is_hard():
    """Test hard truncation when there is no space to back off to."""
    result = truncate_at_word_boundary("supercalifragilistic", 5)
    assert result == "super…"
    assert len(result) <= 5 + len("…")


def test_truncate_by_word_and_derive_title():
    """Test the helpers used for derived titles."""
    assert truncate_by_word("one two three", 9) == "one two"
    assert derive_title("First. Second") == "First"


def test_block_links():
    """Test per-block link collection that document link spans are built from."""
    doc = parse("- *b* [[One]] <http://a.b>\n`code` /two\n# [[Skipped]]")
    item, text, heading = doc.blocks
    assert [i.kind for i in item.links()] == ["wikilink", "bracketlink"]
    assert [i.text for i in text.links()] == ["/two"]
    assert heading.links() == []
    assert doc.link_spans() == item.links() + text.links()
