"""Cursor over an immutable string with lookahead and backtracking."""

from .model import Span


class Tape:
    """
    Position-tracking view over a string, bounded to ``[start, end)``.

    Offsets are always absolute indices into ``base``, so spans cut from a
    tape over one line are valid for the whole document.

    None of the operations raise: running off the end yields ``None`` or an
    empty string.
    """

    def __init__(self, base: str, start: int = 0, end: int | None = None):
        self.base = base
        self.end = len(base) if end is None else end
        self.origin = start
        self.position = start
        self.start = start
        self.saved = start

    def is_exhausted(self) -> bool:
        return self.position >= self.end

    def is_at_start(self) -> bool:
        """True when nothing has been consumed from the bounded range."""
        return self.position == self.origin

    def peek(self, offset: int = 0) -> str | None:
        """Single character at ``offset`` from the cursor, or None past end."""
        i = self.position + offset
        if i < self.origin or i >= self.end:
            return None
        return self.base[i]

    def peek_slice(self, count: int) -> str:
        """Up to ``count`` characters from the cursor; shorter at the end."""
        return self.base[self.position : min(self.position + count, self.end)]

    def consume(self) -> str | None:
        """Return the current character and advance by one."""
        if self.is_exhausted():
            return None
        c = self.base[self.position]
        self.position += 1
        return c

    def consume_match(self, literal: str) -> bool:
        """Advance past ``literal`` if it comes next; otherwise stay put."""
        if not literal:
            return False
        if self.peek_slice(len(literal)) == literal:
            self.position += len(literal)
            return True
        return False

    def consume_until(self, delimiter: str) -> Span:
        """Advance up to, but not including, ``delimiter`` (or to the end)."""
        while not self.is_exhausted():
            if self.peek_slice(len(delimiter)) == delimiter:
                break
            self.position += 1
        return Span(self.start, self.position)

    def mark_start(self) -> None:
        self.start = self.position

    def cut_span(self) -> Span:
        """
        Span from the last mark to the cursor.

        The mark moves to the cursor, like snipping a piece off a tape, so
        repeated cuts never overlap.
        """
        span = Span(self.start, self.position)
        self.start = self.position
        return span

    def checkpoint(self) -> None:
        self.saved = self.position

    def rewind(self) -> None:
        """Restore the cursor and the pending mark to the last checkpoint."""
        self.position = self.saved
        self.start = self.saved

    def rest(self) -> str:
        return self.base[self.position : self.end]
