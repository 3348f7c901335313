"""Inline forms within a single block body."""

from ..core.model import Inline, Span
from ..core.tape import Tape

WIKILINK_FORBIDDEN = frozenset("[].!")
URL_PREFIXES = ("https://", "http://")
DELIMITED = (("*", "bold"), ("_", "italic"), ("`", "code"))

# URL-valid punctuation that is dropped when it ends an address
TRAILING_PUNCTUATION = frozenset(".?!,;|'\"(){}[]<>")


def _is_space(c: str | None) -> bool:
    return c is not None and c.isspace()


def _is_slashlink_char(c: str | None) -> bool:
    return c is not None and (c.isalnum() or c in "_-/")


def _consume_wikilink(tape: Tape) -> Inline | None:
    """Consume ``[[text]]`` or rewind."""
    tape.checkpoint()
    tape.mark_start()
    if not tape.consume_match("[["):
        return None
    inner_start = tape.position
    while not tape.is_exhausted():
        if tape.peek_slice(2) == "]]":
            inner = Span(inner_start, tape.position)
            if not len(inner):
                break
            tape.consume_match("]]")
            span = tape.cut_span()
            return Inline("wikilink", span, inner, inner.slice(tape.base))
        if tape.peek() in WIKILINK_FORBIDDEN:
            break
        tape.consume()
    tape.rewind()
    return None


def _find_bracket_stop(tape: Tape) -> int:
    """Index of the first ``>`` or whitespace after the cursor, or the end."""
    i = tape.position + 1
    while i < tape.end and tape.base[i] != ">" and not tape.base[i].isspace():
        i += 1
    return i


def _consume_bracketlink(tape: Tape, stop: int) -> Inline | None:
    """
    Consume ``<url>`` or leave the cursor alone. URLs contain no spaces.

    ``stop`` comes from ``_find_bracket_stop``. It holds for every ``<``
    before it, so a run of unclosed brackets is scanned once.
    """
    if tape.peek() != "<" or stop >= tape.end or tape.base[stop] != ">":
        return None
    inner = Span(tape.position + 1, stop)
    if not len(inner):
        return None
    tape.mark_start()
    tape.consume()
    tape.consume_until(">")
    tape.consume()
    span = tape.cut_span()
    return Inline("bracketlink", span, inner, inner.slice(tape.base))


def _consume_address_body(tape: Tape) -> None:
    """Advance over non-space characters, stopping before trailing punctuation."""
    while not tape.is_exhausted():
        c0 = tape.peek(0)
        c1 = tape.peek(1)
        if c0 in TRAILING_PUNCTUATION and (c1 is None or _is_space(c1)):
            return
        if _is_space(c0):
            return
        tape.consume()


def _consume_bareurl(tape: Tape) -> Inline | None:
    """Consume ``http(s)://address`` or rewind."""
    tape.checkpoint()
    tape.mark_start()
    for prefix in URL_PREFIXES:
        if tape.consume_match(prefix):
            break
    else:
        return None
    body_start = tape.position
    _consume_address_body(tape)
    if tape.position == body_start:
        tape.rewind()
        return None
    span = tape.cut_span()
    return Inline("bareurl", span, span, span.slice(tape.base))


def _consume_delimited(tape: Tape, delimiter: str, kind: str) -> Inline | None:
    """Consume a non-empty run between two ``delimiter`` characters or rewind."""
    tape.checkpoint()
    tape.mark_start()
    if not tape.consume_match(delimiter):
        return None
    inner_start = tape.position
    while not tape.is_exhausted():
        if tape.peek() == delimiter:
            inner = Span(inner_start, tape.position)
            if not len(inner):
                break
            tape.consume()
            span = tape.cut_span()
            return Inline(kind, span, inner, inner.slice(tape.base))
        tape.consume()
    tape.rewind()
    return None


def _consume_slashlink(tape: Tape) -> Inline | None:
    """
    Consume ``/path`` at a word boundary or rewind.

    Valid only at the start of the body or right after whitespace, so the
    slashes inside URLs and paths like ``and/or`` are left alone.
    """
    if not (tape.is_at_start() or _is_space(tape.peek(-1))):
        return None
    if tape.peek() != "/" or not _is_slashlink_char(tape.peek(1)):
        return None
    tape.checkpoint()
    tape.mark_start()
    tape.consume()
    while _is_slashlink_char(tape.peek()):
        tape.consume()
    span = tape.cut_span()
    return Inline("slashlink", span, span, span.slice(tape.base))


def _consume_special(tape: Tape, bracket_stop: int) -> Inline | None:
    """Try each matcher in priority order; first success wins."""
    c = tape.peek()
    if c == "[":
        return _consume_wikilink(tape)
    if c == "<":
        return _consume_bracketlink(tape, bracket_stop)
    if c == "h":
        return _consume_bareurl(tape)
    for delimiter, kind in DELIMITED:
        if c == delimiter:
            return _consume_delimited(tape, delimiter, kind)
    if c == "/":
        return _consume_slashlink(tape)
    return None


def parse_inline(base: str, start: int = 0, end: int | None = None) -> tuple[Inline, ...]:
    """
    Parse the inline forms of ``base[start:end]``.

    Returns spans that exactly cover the range, in order. Plain characters
    between recognized forms are merged into a single text run.
    """
    tape = Tape(base, start, end)
    out: list[Inline] = []
    run_start = tape.position
    bracket_stop = -1

    def flush(until: int) -> None:
        if until > run_start:
            run = Span(run_start, until)
            out.append(Inline("text", run, run, run.slice(base)))

    while not tape.is_exhausted():
        at = tape.position
        if tape.peek() == "<" and at >= bracket_stop:
            bracket_stop = _find_bracket_stop(tape)
        special = _consume_special(tape, bracket_stop)
        if special is None:
            tape.consume()
            continue
        flush(at)
        out.append(special)
        run_start = tape.position

    flush(tape.position)
    return tuple(out)
