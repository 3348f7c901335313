"""Utility functions for subtext."""

import re
import unicodedata

TRAILING_PUNCTUATION = ".,;:!?-–—"
PSEUDO_SENTENCE_BREAK = re.compile(r"[\n.!?;]")
TITLE_MAX_CHARS = 120


def slugify(text: str) -> str:
    """
    Convert text to a URL-safe slug.

    - Lowercase
    - Unicode normalize (NFKD), drop combining marks
    - Remove punctuation except spaces, hyphens and slashes
    - Convert whitespace to single `-`
    - Collapse multiple `-` to single, strip leading/trailing `-` and `/`

    Examples:
        >>> slugify("Parallel transport")
        'parallel-transport'
        >>> slugify("/wanderer-path")
        'wanderer-path'
        >>> slugify("/notes/Sub Path")
        'notes/sub-path'
    """
    text = text.lower()

    text = text.replace('–', '-').replace('—', '-').replace('−', '-')

    text = unicodedata.normalize('NFKD', text)
    text = ''.join(c for c in text if not unicodedata.combining(c))

    # Slashes survive so that nested slashlink paths keep their shape
    text = re.sub(r'[^\w\s/-]', '', text)
    text = re.sub(r'\s+', '-', text)
    text = re.sub(r'-+', '-', text)
    text = re.sub(r'/+', '/', text)

    return text.strip('-/')


def truncate_at_word_boundary(text: str, max_chars: int, ellipsis: str = "…") -> str:
    """
    Shorten ``text`` to at most ``max_chars`` characters plus ``ellipsis``.

    The cut backs off to the last space so a word (or a markup token) is not
    split, then trailing punctuation is dropped. Text without a space before
    the limit is cut hard.

        >>> truncate_at_word_boundary("alpha beta gamma", 11)
        'alpha beta…'
    """
    max_chars = max(max_chars, 0)
    if len(text) <= max_chars:
        return text
    cut = text[:max_chars]
    if not text[max_chars].isspace():
        space = cut.rfind(" ")
        if space > 0:
            cut = cut[:space]
    cut = cut.rstrip().rstrip(TRAILING_PUNCTUATION).rstrip()
    return cut + ellipsis


def truncate_by_word(text: str, max_chars: int) -> str:
    """Drop whole words from the end until ``text`` fits in ``max_chars``."""
    if len(text) <= max_chars:
        return text
    words = text[:max_chars].split(" ")
    return " ".join(words[:-1])


def first_pseudo_sentence(text: str) -> str:
    """Text up to the first newline, period, bang, question mark or semicolon."""
    m = PSEUDO_SENTENCE_BREAK.search(text)
    if m is None:
        return text
    return text[: m.start()]


def unquote(text: str) -> str:
    return re.sub(r"[\"']", "", text)


def derive_title(text: str) -> str:
    """Derive a short title from free-form text."""
    return truncate_by_word(unquote(first_pseudo_sentence(text)), TITLE_MAX_CHARS)
