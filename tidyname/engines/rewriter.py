"""Token rewriter - the core name normalization.

Three steps, in order:

1. Punctuation fold: '+' becomes a space.
2. Noise removal: every noise literal is cut out wherever it occurs.
3. Leading-noise strip: track numbers, release tags and other symbols are
   dropped from the front of the name until it starts with a letter, unless
   the name starts with a protected (excluded) literal such as '2pac'.
"""
from __future__ import annotations

from ..core.catalog import ExclusionCatalog, NoiseCatalog


def is_word_start(ch: str) -> bool:
    """A lowercase letter, or a letter from a caseless script."""
    return ch.isalpha() and not ch.isupper()


class TokenRewriter:
    """Normalizes a base filename (extension already removed)."""

    def __init__(self, exclusions: ExclusionCatalog, noise: NoiseCatalog):
        self._exclusions = exclusions
        self._noise = noise

    @property
    def exclusions(self) -> ExclusionCatalog:
        return self._exclusions

    def rewrite(self, name: str) -> str:
        """Run all three steps on a lowercased base name."""
        name = self.clean(name)
        return self.strip_leading_noise(name)

    def clean(self, text: str) -> str:
        """Steps 1 and 2 only."""
        text = self.fold_punctuation(text.strip().lower())
        return self.remove_noise(text.strip())

    @staticmethod
    def fold_punctuation(name: str) -> str:
        return name.replace("+", " ")

    def remove_noise(self, name: str) -> str:
        for literal in self._noise.ordered():
            if literal in name:
                name = name.replace(literal, " ")
            name = name.strip()
        return name

    def strip_leading_noise(self, name: str) -> str:
        """Drop leading characters until the name starts with a letter.

        Each pass removes at least one character, so ``len(name) + 1`` passes
        always suffice. An input with no letters at all ends up empty.
        """
        name = name.strip()
        for _ in range(len(name) + 1):
            if not name or is_word_start(name[0]):
                break
            if self._exclusions.starts_with_exclusion(name):
                break
            index = 0
            while index < len(name) and name[index] != " " and not is_word_start(name[index]):
                index += 1
            name = name[index:].strip()
        return name
