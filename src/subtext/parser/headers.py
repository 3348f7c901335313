"""HTTP-style ``Name: Value`` headers that may precede a Subtext body."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..core.model import Document
from ..core.tape import Tape
from .blocks import parse


@dataclass(frozen=True)
class Header:
    name: str
    value: str

    @property
    def normalized_name(self) -> str:
        """
        Dash-separated words capitalized, e.g. ``content-type`` becomes
        ``Content-Type`` and ``TITLE`` becomes ``Title``.
        """
        return "-".join(part.capitalize() for part in self.name.split("-"))

    def __str__(self) -> str:
        return f"{self.normalized_name}: {self.value}\n"


@dataclass(frozen=True)
class Headers:
    headers: tuple[Header, ...] = ()

    def __str__(self) -> str:
        if not self.headers:
            return ""
        return "".join(str(h) for h in self.headers) + "\n"

    def __iter__(self):
        return iter(self.headers)

    def __len__(self) -> int:
        return len(self.headers)

    def first(self, name: str) -> Header | None:
        """First header with ``name``, compared case-insensitively."""
        wanted = Header(name, "").normalized_name
        for header in self.headers:
            if header.normalized_name == wanted:
                return header
        return None

    def to_dict(self) -> dict[str, str]:
        """Headers keyed by normalized name. The first duplicate wins."""
        out: dict[str, str] = {}
        for header in self.headers:
            out.setdefault(header.normalized_name, header.value)
        return out


@dataclass(frozen=True)
class HeadersEnvelope:
    headers: Headers = field(default_factory=Headers)
    body: str = ""

    def __str__(self) -> str:
        return f"{self.headers}{self.body}"


def _parse_name(tape: Tape) -> str | None:
    tape.mark_start()
    while (c := tape.consume()) is not None:
        if c == ":":
            name = tape.cut_span()
            return tape.base[name.start : name.end - 1] or None
        if c.isspace() or not c.isascii():
            return None
    return None


def _parse_value(tape: Tape) -> str:
    while tape.peek() == " ":
        tape.consume()
    tape.mark_start()
    value = tape.consume_until("\n")
    tape.consume_match("\n")
    return value.slice(tape.base)


def _parse_header(tape: Tape) -> Header | None:
    tape.checkpoint()
    name = _parse_name(tape)
    if name is None:
        tape.rewind()
        return None
    return Header(name, _parse_value(tape))


def _discard_line(tape: Tape) -> None:
    tape.consume_until("\n")
    tape.consume_match("\n")


def parse_headers(tape: Tape) -> Headers:
    """
    Parse the header block at the tape's cursor.

    An empty or invalid first line means there are no headers. Otherwise
    headers run until the first empty line, which is consumed; invalid lines
    inside the block are skipped.
    """
    if tape.consume_match("\n"):
        return Headers()
    first = _parse_header(tape)
    if first is None:
        return Headers()
    headers = [first]
    while not tape.is_exhausted():
        if tape.consume_match("\n"):
            break
        header = _parse_header(tape)
        if header is None:
            _discard_line(tape)
        else:
            headers.append(header)
    return Headers(tuple(headers))


def parse_envelope(markup: str) -> HeadersEnvelope:
    tape = Tape(markup)
    headers = parse_headers(tape)
    return HeadersEnvelope(headers=headers, body=tape.rest())


def parse_note(markup: str) -> tuple[Headers, Document]:
    """Split off headers and parse the remaining body as Subtext."""
    envelope = parse_envelope(markup)
    return envelope.headers, parse(envelope.body)
