"""Exclusion and noise catalogs.

Both catalogs are plain immutable values, built once at startup from every
matching XML source and then passed into the engine. A catalog document is a
root element holding zero or more entry elements::

    <exclusions>
        <exclusion><value>ac-dc</value></exclusion>
        <exclusion>2pac</exclusion>
    </exclusions>

An entry's literal is the text of its ``<value>`` child, or its own text.
"""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional

from pydantic import BaseModel, ValidationError, field_validator

from .errors import CatalogLoadError


logger = logging.getLogger(__name__)

EXCLUSIONS_FILENAME = "exclusions.xml"
NOISE_BASENAME = "noise"
DEFAULT_LOCALE = "pt_BR"

RESOURCES_DIR = Path(__file__).resolve().parent.parent / "resources"


class CatalogDocument(BaseModel):
    """Validated content of one catalog source."""
    root: str
    entries: list[str]

    @field_validator("entries")
    @classmethod
    def reject_blank(cls, value: list[str]) -> list[str]:
        for index, entry in enumerate(value):
            if not entry.strip():
                raise ValueError(f"entry {index} is blank")
        return [entry.strip() for entry in value]


def parse_catalog(source: Path) -> CatalogDocument:
    """Parse a catalog file.

    Raises:
        CatalogLoadError: if the file is not well-formed or holds blank entries.
    """
    try:
        tree = ET.parse(source)
    except ET.ParseError as e:
        raise CatalogLoadError(source, str(e)) from e
    except OSError as e:
        raise CatalogLoadError(source, f"unreadable: {e}") from e

    root = tree.getroot()
    entries = []
    for element in root:
        value = element.find("value")
        text = value.text if value is not None else element.text
        entries.append(text or "")

    try:
        return CatalogDocument(root=root.tag, entries=entries)
    except ValidationError as e:
        raise CatalogLoadError(source, str(e)) from e


def load_entries(sources: Iterable[Path]) -> frozenset[str]:
    """Union of the entries of every existing source; missing ones are skipped."""
    merged: set[str] = set()
    for source in sources:
        if not source.is_file():
            logger.debug("Catalog source not found, skipping: %s", source)
            continue
        document = parse_catalog(source)
        logger.debug("Loaded %d entries from %s", len(document.entries), source)
        merged.update(document.entries)
    return frozenset(merged)


def locale_chain(locale: Optional[str]) -> list[str]:
    """Suffixes from least to most specific: ['', '_pt', '_pt_BR']."""
    chain = [""]
    if not locale:
        return chain
    parts = locale.replace("-", "_").split("_")
    for i in range(1, len(parts) + 1):
        chain.append("_" + "_".join(parts[:i]))
    return chain


def search_dirs(extra_dirs: Iterable[Path] = (), include_defaults: bool = True) -> list[Path]:
    dirs = [RESOURCES_DIR] if include_defaults else []
    dirs.extend(Path(d) for d in extra_dirs)
    return dirs


@dataclass(frozen=True, slots=True)
class ExclusionCatalog:
    """Literals that rewriting and splitting must leave intact."""
    entries: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", frozenset(entry.lower() for entry in self.entries))

    @classmethod
    def of(cls, *entries: str) -> "ExclusionCatalog":
        return cls(frozenset(entries))

    @classmethod
    def load(cls, dirs: Iterable[Path] = (), include_defaults: bool = True) -> "ExclusionCatalog":
        """Merge ``exclusions.xml`` from every search directory."""
        sources = [d / EXCLUSIONS_FILENAME for d in search_dirs(dirs, include_defaults)]
        return cls(load_entries(sources))

    def has_exclusion(self, token: str, substring: bool = False) -> bool:
        """Case-insensitive match of ``token`` against the catalog.

        With ``substring`` set, also true when an entry occurs inside ``token``.
        """
        token = token.lower()
        for entry in self.entries:
            if token == entry or (substring and entry in token):
                return True
        return False

    def starts_with_exclusion(self, text: str) -> bool:
        text = text.lower()
        return any(text.startswith(entry) for entry in self.entries)

    def covers(self, text: str, index: int) -> bool:
        """Whether position ``index`` of ``text`` lies inside an entry occurrence."""
        text = text.lower()
        for entry in self.entries:
            start = text.find(entry, max(0, index - len(entry) + 1))
            while start != -1 and start <= index:
                if index < start + len(entry):
                    return True
                start = text.find(entry, start + 1)
        return False

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.entries))

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True, slots=True)
class NoiseCatalog:
    """Literals removed unconditionally during normalization."""
    entries: frozenset[str] = frozenset()
    locale: Optional[str] = DEFAULT_LOCALE

    def __post_init__(self) -> None:
        # Names are lowercased before noise removal.
        object.__setattr__(self, "entries", frozenset(entry.lower() for entry in self.entries))

    @classmethod
    def of(cls, *entries: str) -> "NoiseCatalog":
        return cls(frozenset(entries))

    @classmethod
    def load(
        cls,
        dirs: Iterable[Path] = (),
        locale: Optional[str] = DEFAULT_LOCALE,
        include_defaults: bool = True,
    ) -> "NoiseCatalog":
        """Merge ``noise.xml`` and its locale variants from every search directory."""
        sources = [
            d / f"{NOISE_BASENAME}{suffix}.xml"
            for d in search_dirs(dirs, include_defaults)
            for suffix in locale_chain(locale)
        ]
        return cls(load_entries(sources), locale)

    def ordered(self) -> list[str]:
        """Longest first, so an entry is never pre-empted by one of its substrings."""
        return sorted(self.entries, key=lambda entry: (-len(entry), entry))

    def __iter__(self) -> Iterator[str]:
        return iter(self.ordered())

    def __len__(self) -> int:
        return len(self.entries)
