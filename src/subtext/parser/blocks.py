"""Line splitting and block classification for Subtext."""

import logging

from ..core.model import Block, Document, Span
from ..core.ports import ParserStrategy
from ..core.tape import Tape
from .inline import parse_inline

logger = logging.getLogger(__name__)

SIGILS = {
    "#": "heading",
    ">": "quote",
    "-": "list",
}


def _skip_spaces(tape: Tape) -> None:
    while tape.peek() in (" ", "\t"):
        tape.consume()


def parse_lines(markup: str) -> list[Span]:
    """
    Split ``markup`` on newlines, keeping empty lines.

    ``"a\\nb"`` gives two lines and ``"a\\n"`` gives ``"a"`` plus an empty
    trailing line, so that joining the lines with ``"\\n"`` is lossless.
    """
    tape = Tape(markup)
    lines: list[Span] = []
    while True:
        tape.mark_start()
        line = tape.consume_until("\n")
        lines.append(line)
        if not tape.consume_match("\n"):
            return lines


def parse_block(markup: str, line: Span) -> Block:
    """Classify one line by its leading character and parse its body."""
    text = line.slice(markup)
    if not text.strip():
        return Block("blank", line, Span(line.end, line.end), text)

    kind = SIGILS.get(text[0])
    if kind is None:
        return Block("text", line, line, text, parse_inline(markup, line.start, line.end))

    tape = Tape(markup, line.start, line.end)
    tape.consume()
    _skip_spaces(tape)
    body = Span(tape.position, line.end)
    if kind == "heading":
        # Headings are atomic display text
        return Block("heading", line, body, text)
    return Block(kind, line, body, text, parse_inline(markup, body.start, body.end))


def parse(markup: str) -> Document:
    """Parse Subtext markup into a Document. Never raises."""
    blocks = tuple(parse_block(markup, line) for line in parse_lines(markup))
    logger.debug("Parsed %d chars into %d blocks", len(markup), len(blocks))
    return Document(source=markup, blocks=blocks)


class SubtextParser(ParserStrategy):
    def parse(self, text: str) -> Document:
        return parse(text)
