"""Audio postprocessor.

Keeps 'Artist - Title.ext' filenames and embedded tags in step with each
other. Works in two steps:

1. ``process_file_name`` (pure): find the artist/title separator dash,
   drop any other dashes from both halves and rejoin as 'artist - title'.
2. ``process_file`` (after the engine's rename):
   - tags carry artist and title: the file is renamed once more to
     'Artist - Title.ext' built from the cleaned tags, and the result
     entry is moved to the new path;
   - otherwise: artist, album artist and title are written from the
     filename and album, genre, year and track are cleared.

A failure in step 2 raises PostprocessingError naming the phase; the
engine's own rename stays in effect.
"""
from __future__ import annotations

import logging
from typing import Callable, MutableSet

from ..core.catalog import ExclusionCatalog
from ..core.errors import PostprocessingError, TagAccessError
from ..core.models import AudioTags, RenamedFile, RenameResult, split_extension
from ..core.protocols import TagEditor
from ..engines.naming import (
    capitalize_fully,
    collapse_spaces,
    current_millis,
    resolve_collision,
    sanitize_filename,
)
from ..engines.rewriter import TokenRewriter
from ..engines.splitting import split_on_dash, strip_dashes


logger = logging.getLogger(__name__)

SEPARATOR = " - "

# Fields that do not survive a filename-derived retag
CLEARED_FIELDS = ("album", "genre", "year", "track")


class AudioPostprocessor:
    """Artist/title separator cleanup and tag synchronization."""

    def __init__(
        self,
        rewriter: TokenRewriter,
        tag_editor: TagEditor,
        clock: Callable[[], int] = current_millis,
    ):
        """Initialize processor.

        Args:
            rewriter: Supplies the catalogs; its ``clean`` step is applied
                to tag values before they become a filename.
            tag_editor: Reads and writes embedded tags.
            clock: Millisecond clock for collision prefixes of tag-derived names.
        """
        self._rewriter = rewriter
        self._tags = tag_editor
        self._clock = clock

    @property
    def exclusions(self) -> ExclusionCatalog:
        return self._rewriter.exclusions

    def process_file_name(self, name: str) -> str:
        parts = split_on_dash(name, self.exclusions)
        if len(parts) != 2:
            return name

        artist, title = (collapse_spaces(strip_dashes(part, self.exclusions)) for part in parts)
        if not artist or not title:
            return artist or title
        return f"{artist}{SEPARATOR}{title}"

    def process_file(
        self,
        renamed: RenamedFile,
        result: RenameResult,
        taken_names: MutableSet[str],
    ) -> None:
        try:
            tags = self._tags.read(renamed.path)
        except TagAccessError as e:
            raise PostprocessingError(renamed.path, "tag read", e) from e

        if tags.has_artist_and_title and self._rename_from_tags(renamed, tags, result, taken_names):
            return
        self._tag_from_name(renamed)

    def name_from_tags(self, tags: AudioTags, extension: str) -> str:
        """Filename built from cleaned tag values, or '' if nothing is left."""
        artist = self._rewriter.clean(tags.artist or "")
        title = self._rewriter.clean(tags.title or "")
        if not artist or not title:
            return ""
        base = sanitize_filename(f"{artist}{SEPARATOR}{title}")
        return capitalize_fully(f"{base}.{extension}")

    def _rename_from_tags(
        self,
        renamed: RenamedFile,
        tags: AudioTags,
        result: RenameResult,
        taken_names: MutableSet[str],
    ) -> bool:
        """Returns False when the tags do not yield a usable name."""
        new_name = self.name_from_tags(tags, renamed.extension)
        if not new_name:
            logger.debug("Tags of %s are empty after cleaning", renamed.path.name)
            return False

        current = renamed.path
        if new_name == current.name:
            return True

        new_name = resolve_collision(current.parent, new_name, taken_names, source=current, clock=self._clock)
        target = current.parent / new_name
        try:
            current.rename(target)
        except OSError as e:
            raise PostprocessingError(current, "tag-derived rename", e) from e

        taken_names.add(new_name)
        result.replace(current, target)
        logger.info("Renamed from tags: %s -> %s", current.name, new_name)
        return True

    def _tag_from_name(self, renamed: RenamedFile) -> None:
        base, _ = split_extension(renamed.path.name)
        parts = split_on_dash(base, self.exclusions)
        artist = parts[0].strip() or None

        fields = {"artist": artist, "album_artist": artist}
        if len(parts) > 1:
            fields["title"] = parts[1].strip() or None
        fields.update(dict.fromkeys(CLEARED_FIELDS))

        try:
            self._tags.write(renamed.path, fields)
        except TagAccessError as e:
            raise PostprocessingError(renamed.path, "tag write", e) from e
        logger.debug("Tagged %s from its name", renamed.path.name)
