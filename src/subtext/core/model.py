from __future__ import annotations

from dataclasses import dataclass, field

LINK_KINDS: frozenset[str] = frozenset(
    {"wikilink", "slashlink", "bareurl", "bracketlink"}
)
SHORTLINK_KINDS: frozenset[str] = frozenset({"wikilink", "slashlink"})


@dataclass(frozen=True)
class Span:
    start: int  # code point offsets into Document.source, half-open
    end: int

    def __len__(self) -> int:
        return self.end - self.start

    def slice(self, source: str) -> str:
        return source[self.start : self.end]

    def contains(self, index: int) -> bool:
        return self.start <= index <= self.end


@dataclass(frozen=True)
class Inline:
    kind: str  # "text" | "wikilink" | "bracketlink" | "bareurl" | "bold" | "italic" | "code" | "slashlink"
    span: Span  # whole construct, sigils included
    inner: Span  # content without delimiters; equals span for text runs
    text: str  # payload: run text, display text, url, inner text or path

    def is_link(self) -> bool:
        return self.kind in LINK_KINDS


@dataclass(frozen=True)
class Block:
    kind: str  # "heading" | "quote" | "list" | "text" | "blank"
    span: Span  # the whole line, newline excluded
    body_span: Span  # line minus sigil and the whitespace after it
    line: str
    inline: tuple[Inline, ...] = ()

    def body(self) -> str:
        """Text of the block without its leading sigil."""
        return self.line[self.body_span.start - self.span.start :]

    def sigil(self) -> str:
        """Leading sigil character, or "" for text and blank lines."""
        if self.kind in ("heading", "quote", "list"):
            return self.line[0]
        return ""

    def to_markup(self) -> str:
        """Line rebuilt as ``sigil + " " + body`` with whitespace normalized."""
        if self.kind == "blank":
            return ""
        if self.kind == "text":
            return self.body()
        return f"{self.sigil()} {self.body()}"

    def is_content(self) -> bool:
        """Blocks eligible for excerpts: non-empty quote, list or text lines."""
        if self.kind in ("blank", "heading"):
            return False
        return bool(self.body().strip())

    def links(self) -> list[Inline]:
        return [i for i in self.inline if i.is_link()]


@dataclass(frozen=True)
class Document:
    """
    Parsed Subtext.

    Immutable: edits produce a new Document from the new source. Since
    parsing is deterministic, two documents are equal iff their sources are.
    """

    source: str
    blocks: tuple[Block, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        return self.source

    def inline(self) -> list[Inline]:
        return [i for block in self.blocks for i in block.inline]

    def link_spans(self) -> list[Inline]:
        """All link-like inline spans in source order (not de-duplicated)."""
        return [i for block in self.blocks for i in block.links()]

    def shortlinks(self) -> list[Inline]:
        return [i for i in self.inline() if i.kind in SHORTLINK_KINDS]

    def wikilinks(self) -> list[Inline]:
        return [i for i in self.inline() if i.kind == "wikilink"]

    def slashlinks(self) -> list[Inline]:
        return [i for i in self.inline() if i.kind == "slashlink"]

    def slugs(self) -> set[str]:
        """Slugs of every wikilink and slashlink target."""
        from .utils import slugify

        out = set()
        for link in self.shortlinks():
            slug = slugify(link.text)
            if slug:
                out.add(slug)
        return out

    def excerpt(self, max_chars: int | None = None, ellipsis: str = "…") -> str:
        """
        Plain text of the first content block, trimmed.

        Headings and blank lines are skipped. Returns "" when the document
        has no content block.
        """
        from ..render.plain import render_block_plain
        from .utils import truncate_at_word_boundary

        for block in self.blocks:
            if block.is_content():
                text = render_block_plain(block).strip()
                if max_chars is not None:
                    text = truncate_at_word_boundary(text, max_chars, ellipsis)
                return text
        return ""

    def title(self) -> str:
        """Title derived from the first non-blank line."""
        from .utils import derive_title

        for block in self.blocks:
            if block.kind != "blank":
                return derive_title(block.body().strip())
        return ""

    def block_at(self, index: int) -> Block | None:
        """Block whose line contains the cursor offset ``index``."""
        for block in self.blocks:
            if block.span.contains(index):
                return block
        return None

    def shortlink_at(self, index: int) -> Inline | None:
        """
        Wikilink or slashlink being typed at cursor offset ``index``.

        A wikilink matches when its text ends at ``index`` (just before
        ``]]``); a slashlink matches when the link itself ends there.
        """
        for link in self.shortlinks():
            end = link.inner.end if link.kind == "wikilink" else link.span.end
            if end == index:
                return link
        return None

    def appending(self, other: Document) -> Document:
        from ..parser.blocks import parse

        return parse(f"{self.source}\n{other.source}")
