from ..core.ports import LinkResolver
from ..core.utils import slugify


class SlugLinkResolver(LinkResolver):
    """
    Resolve link text to ``base + slug``. Resolution is purely textual:
    whether a note with that slug exists is the index's concern.
    """

    def __init__(self, base: str = "subtext://"):
        self.base = base

    def resolve(self, text: str) -> str | None:
        slug = slugify(text)
        if not slug:
            return None
        return f"{self.base}{slug}"

    def __call__(self, text: str) -> str | None:
        return self.resolve(text)


class KnownSlugResolver(SlugLinkResolver):
    """Only resolve links whose slug is in ``known``; the rest stay plain text."""

    def __init__(self, known: set[str], base: str = "subtext://"):
        super().__init__(base)
        self.known = known

    def resolve(self, text: str) -> str | None:
        slug = slugify(text)
        if slug not in self.known:
            return None
        return f"{self.base}{slug}"
