"""Tests for the header block that may precede a note body."""

from subtext.parser.headers import Header, Headers, parse_envelope, parse_note


def test_parse_headers_and_body():
    """Test headers up to the first empty line."""
    envelope = parse_envelope("Title: Hello\nTags:  a b\n\nBody [[x]]")
    assert [(h.name, h.value) for h in envelope.headers] == [
        ("Title", "Hello"),
        ("Tags", "a b"),
    ]
    assert envelope.body == "Body [[x]]"


def test_no_headers():
    """Test that an invalid first line means no headers at all."""
    envelope = parse_envelope("Just text\nmore")
    assert len(envelope.headers) == 0
    assert envelope.body == "Just text\nmore"


def test_empty_first_line_ends_headers():
    """Test that a leading empty line is consumed and yields no headers."""
    envelope = parse_envelope("\nTitle: x")
    assert len(envelope.headers) == 0
    assert envelope.body == "Title: x"


def test_invalid_lines_are_skipped():
    """Test that malformed lines inside the block are dropped."""
    envelope = parse_envelope("A: 1\nnot a header\nB: 2\n\nbody")
    assert [h.name for h in envelope.headers] == ["A", "B"]
    assert envelope.body == "body"


def test_header_names_must_be_ascii_without_spaces():
    """Test the header name rules."""
    assert len(parse_envelope("Tïtle: x\nbody").headers) == 0
    assert len(parse_envelope(": x\nbody").headers) == 0


def test_headers_without_body():
    """Test a header block that runs to the end of input."""
    envelope = parse_envelope("A: 1")
    assert envelope.headers.first("a").value == "1"
    assert envelope.body == ""


def test_normalized_names_and_lookup():
    """Test case-insensitive lookup and first-wins dictionaries."""
    headers = parse_envelope("tag: a\nTAG: b\ncontent-type: text\n\n").headers
    assert headers.first("TAG").value == "a"
    assert headers.first("missing") is None
    assert headers.to_dict() == {"Tag": "a", "Content-Type": "text"}
    assert Header("content-type", "x").normalized_name == "Content-Type"


def test_headers_to_string():
    """Test header serialization."""
    headers = Headers((Header("content-type", "text"), Header("title", "Hi")))
    assert str(headers) == "Content-Type: text\nTitle: Hi\n\n"
    assert str(Headers()) == ""
    envelope = parse_envelope("Title: Hi\n\nbody")
    assert str(envelope) == "Title: Hi\n\nbody"


def test_parse_note():
    """Test parsing the body after the headers as Subtext."""
    headers, doc = parse_note("Title: Note\n\n# Heading\n- [[Link]]")
    assert headers.to_dict() == {"Title": "Note"}
    assert doc.source == "# Heading\n- [[Link]]"
    assert [i.text for i in doc.wikilinks()] == ["Link"]
