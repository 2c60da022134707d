"""Shared fixtures: catalogs, engines and small audio files."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import pytest
from mutagen.easyid3 import EasyID3

from tidyname.core.catalog import ExclusionCatalog, NoiseCatalog
from tidyname.engines.rewriter import TokenRewriter
from tidyname.engines.tags import MutagenTagEditor
from tidyname.processors import default_postprocessors
from tidyname.services.renamer import RenamingEngine


# Not a real MPEG stream; ID3 tags can still be attached to it.
DUMMY_AUDIO = b"\x00" * 256


def write_mp3(path: Path, artist: Optional[str] = None, title: Optional[str] = None) -> Path:
    """Create a dummy .mp3, tagged when artist or title is given."""
    path.write_bytes(DUMMY_AUDIO)
    if artist or title:
        tags = EasyID3()
        if artist:
            tags["artist"] = artist
        if title:
            tags["title"] = title
        tags.save(str(path))
    return path


def read_mp3(path: Path) -> EasyID3:
    return EasyID3(str(path))


@pytest.fixture
def exclusions() -> ExclusionCatalog:
    return ExclusionCatalog.of("ac-dc", "a-ha", "jay-z", "2pac", "blink-182")


@pytest.fixture
def noise() -> NoiseCatalog:
    return NoiseCatalog.of("(official video)", "(lyrics)", "[hd]", "www.", "_")


@pytest.fixture
def rewriter(exclusions, noise) -> TokenRewriter:
    return TokenRewriter(exclusions, noise)


@pytest.fixture
def fixed_clock():
    """Millisecond clock frozen at 1000."""
    return lambda: 1000


@pytest.fixture
def make_engine(fixed_clock):
    """Build an engine from explicit catalogs with the default postprocessors."""
    def _make(exclusions: ExclusionCatalog = ExclusionCatalog(), noise: NoiseCatalog = NoiseCatalog()) -> RenamingEngine:
        rewriter = TokenRewriter(exclusions, noise)
        postprocessors = default_postprocessors(rewriter, MutagenTagEditor(), fixed_clock)
        return RenamingEngine(rewriter, postprocessors, clock=fixed_clock)
    return _make


@pytest.fixture
def engine(make_engine, exclusions, noise) -> RenamingEngine:
    return make_engine(exclusions, noise)


@pytest.fixture
def mp3_file():
    """Factory fixture: ``mp3_file(path, artist=None, title=None)``."""
    return write_mp3


@pytest.fixture
def mp3_tags():
    """Factory fixture: ``mp3_tags(path)`` -> EasyID3 of a file."""
    return read_mp3
