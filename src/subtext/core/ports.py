from typing import Any, Protocol

from .model import Document


class ParserStrategy(Protocol):
    """
    Parse Subtext markup into a Document. MUST be total: every string
    parses, malformed markup degrades to plain text.
    """

    def parse(self, text: str) -> Document:
        pass


class LinkResolver(Protocol):
    """
    Map wikilink text or a slashlink path to a URL. Returning None means the
    link is unresolved; it is rendered as plain text.
    """

    def resolve(self, text: str) -> str | None:
        pass


class Renderer(Protocol):
    """Read-only projection of a Document."""

    def render(self, doc: Document) -> Any:
        pass
