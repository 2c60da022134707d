"""Artist/title separator detection.

A '-' separates artist from title unless it belongs to a protected literal
like 'ac-dc' or 'jay-z'. Words are space-delimited runs of characters.
"""
from __future__ import annotations

from ..core.catalog import ExclusionCatalog


def word_around(text: str, index: int) -> str:
    """The maximal space-free substring of ``text`` containing ``index``.

    Empty when ``text[index]`` is itself a space.
    """
    start = text.rfind(" ", 0, index + 1) + 1
    end = text.find(" ", index)
    if end == -1:
        end = len(text)
    return text[start:end]


def is_protected_dash(text: str, index: int, exclusions: ExclusionCatalog) -> bool:
    if exclusions.covers(text, index):
        return True
    word = word_around(text, index)
    return word != "-" and exclusions.has_exclusion(word, substring=True)


def split_on_dash(name: str, exclusions: ExclusionCatalog) -> list[str]:
    """Split at the first separator dash.

    Returns ``[artist, title]`` (halves unstripped) or ``[name]`` when no
    dash qualifies.
    """
    for index, ch in enumerate(name):
        if ch == "-" and not is_protected_dash(name, index, exclusions):
            return [name[:index], name[index + 1:]]
    return [name]


def strip_dashes(text: str, exclusions: ExclusionCatalog) -> str:
    """Remove every unprotected dash from ``text``."""
    return "".join(
        ch for index, ch in enumerate(text)
        if ch != "-" or is_protected_dash(text, index, exclusions)
    )
