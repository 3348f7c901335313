"""Lossy plain-text projection, used for excerpts and search indexing."""

from ..core.model import Block, Document
from ..core.ports import Renderer


def render_block_plain(block: Block) -> str:
    """Visible text of a block: sigils, brackets and delimiters removed."""
    if block.kind == "blank":
        return ""
    if block.kind == "heading":
        return block.body()
    return "".join(i.text for i in block.inline)


def render_plain(doc: Document, separator: str = "\n") -> str:
    return separator.join(render_block_plain(b) for b in doc.blocks)


class PlainRenderer(Renderer):
    def __init__(self, separator: str = "\n"):
        self.separator = separator

    def render(self, doc: Document) -> str:
        return render_plain(doc, self.separator)
