"""Embedded audio tag access backed by mutagen.

MP3 files go through EasyID3 so an untagged file can still receive a fresh
ID3 header. FLAC, Ogg Vorbis and MP4/M4A use mutagen's easy interfaces.
Containers without a key/value tag model (WMA, WAV) are reported as
TagAccessError.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional

from mutagen import File as MutagenFile
from mutagen import MutagenError
from mutagen.easyid3 import EasyID3
from mutagen.easymp4 import EasyMP4Tags
from mutagen.flac import VCFLACDict
from mutagen.id3 import ID3NoHeaderError
from mutagen.oggvorbis import OggVCommentDict

from ..core.errors import TagAccessError
from ..core.models import AudioTags


logger = logging.getLogger(__name__)

# AudioTags field -> easy tag key
FIELD_KEYS = {
    "artist": "artist",
    "title": "title",
    "album_artist": "albumartist",
    "album": "album",
    "genre": "genre",
    "year": "date",
    "track": "tracknumber",
}

EASY_TAG_TYPES = (EasyID3, EasyMP4Tags, VCFLACDict, OggVCommentDict)


class MutagenTagEditor:
    """TagEditor implementation using mutagen."""

    def read(self, path: Path) -> AudioTags:
        tags = self._open(path)
        values = {}
        for field_name, key in FIELD_KEYS.items():
            found = tags.get(key)
            values[field_name] = str(found[0]) if found else None
        return AudioTags(**values)

    def write(self, path: Path, fields: Mapping[str, Optional[str]]) -> None:
        tags = self._open(path)
        for field_name, value in fields.items():
            key = FIELD_KEYS.get(field_name)
            if key is None:
                raise ValueError(f"Unknown tag field: {field_name}")
            if value is None:
                if key in tags:
                    del tags[key]
            else:
                tags[key] = [value]

        try:
            tags.save(str(path))
        except (MutagenError, OSError) as e:
            raise TagAccessError(path, f"cannot save tags: {e}") from e
        logger.debug("Wrote tags %s to %s", sorted(fields), path.name)

    def _open(self, path: Path):
        """Load an easy-keyed, savable tag handle for ``path``."""
        if path.suffix.lower() == ".mp3":
            try:
                return EasyID3(str(path))
            except ID3NoHeaderError:
                return EasyID3()
            except (MutagenError, OSError) as e:
                raise TagAccessError(path, f"cannot read tags: {e}") from e

        try:
            audio = MutagenFile(str(path), easy=True)
        except (MutagenError, OSError) as e:
            raise TagAccessError(path, f"cannot read tags: {e}") from e
        if audio is None:
            raise TagAccessError(path, "unrecognized audio container")

        if audio.tags is None:
            try:
                audio.add_tags()
            except (MutagenError, NotImplementedError) as e:
                raise TagAccessError(path, f"cannot add tags: {e}") from e
        if not isinstance(audio.tags, EASY_TAG_TYPES):
            raise TagAccessError(path, f"unsupported tag format {type(audio.tags).__name__}")
        return audio
