"""Renaming engine - traversal, name rewriting and postprocessor dispatch."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Mapping, MutableSet, Optional, Union

from ..core.catalog import ExclusionCatalog, NoiseCatalog
from ..core.config import RenamerSettings
from ..core.errors import ConfigurationError, PerFileError
from ..core.models import (
    Classification,
    ExtensionFilter,
    RenamedFile,
    RenameResult,
    split_extension,
)
from ..core.protocols import Postprocessor, TagEditor
from ..engines.naming import (
    capitalize_fully,
    current_millis,
    resolve_collision,
    sanitize_filename,
    unescape_markup,
)
from ..engines.rewriter import TokenRewriter
from ..engines.tags import MutagenTagEditor
from ..processors import IdentityPostprocessor, default_postprocessors
from .directory import DirectoryView, is_renameable


logger = logging.getLogger(__name__)


class RenamingEngine:
    """Normalizes the filenames of a directory tree.

    Per directory scope:
    1. Snapshot the current names (never reloaded within the scope).
    2. For each accepted entry, recurse into directories (when asked) or
       rename files whose normalized name differs.
    3. Hand every renamed file to the postprocessor of its classification.

    Catalogs and postprocessors are fixed at construction, so one engine can
    serve several concurrent ``execute`` calls on disjoint trees.
    """

    def __init__(
        self,
        rewriter: TokenRewriter,
        postprocessors: Optional[Mapping[Classification, Postprocessor]] = None,
        clock: Callable[[], int] = current_millis,
    ):
        """Initialize the engine.

        Args:
            rewriter: Token rewriter holding the exclusion and noise catalogs.
            postprocessors: Classification -> postprocessor. Anything not
                listed uses the identity postprocessor.
            clock: Millisecond clock used for collision prefixes.
        """
        self._rewriter = rewriter
        self._postprocessors = dict(postprocessors or {})
        self._identity = IdentityPostprocessor()
        self._clock = clock

    @property
    def rewriter(self) -> TokenRewriter:
        return self._rewriter

    def postprocessor_for(self, classification: Classification) -> Postprocessor:
        return self._postprocessors.get(classification, self._identity)

    def execute(
        self,
        target: Union[str, Path],
        file_filter: Optional[ExtensionFilter] = None,
        include_subdirectories: bool = False,
    ) -> RenameResult:
        """Rename every accepted file under ``target``.

        Args:
            target: Directory to process.
            file_filter: Files to consider; every known extension when None.
            include_subdirectories: Also process subdirectories, depth-first.

        Returns:
            new path -> original path for every file renamed.

        Raises:
            ConfigurationError: ``target`` is not an existing directory.
        """
        view = DirectoryView(target)
        file_filter = file_filter or ExtensionFilter.all_accepted()
        if include_subdirectories:
            file_filter = file_filter.with_directories()

        logger.info("Renaming in %s (%s)", view.path, file_filter)
        result = self._rename_directory(view, file_filter, include_subdirectories)
        logger.info("Renamed %d file(s) under %s", result.count, view.path)
        return result

    def propose_name(self, filename: str) -> Optional[str]:
        """The name ``filename`` would be renamed to.

        Pure: touches no file. None when the name has no extension or
        nothing is left of it after normalization.
        """
        proposal = self._propose(filename)
        return proposal[0] if proposal else None

    def _propose(self, filename: str) -> Optional[tuple[str, str, Classification]]:
        base, extension = split_extension(filename.strip().lower())
        if not extension:
            return None

        classification = Classification.from_extension(extension)
        postprocessor = self.postprocessor_for(classification)

        name = self._rewriter.rewrite(base)
        name = postprocessor.process_file_name(name).strip()
        if not name:
            return None

        new_name = unescape_markup(f"{name}.{extension}")
        new_name = capitalize_fully(sanitize_filename(new_name))
        return new_name, extension, classification

    def _rename_directory(
        self,
        view: DirectoryView,
        file_filter: ExtensionFilter,
        include_subdirectories: bool,
    ) -> RenameResult:
        result = RenameResult(directory=view.path)
        taken_names = view.snapshot_names()

        for entry in view.listing(file_filter):
            if entry.is_dir():
                if include_subdirectories and not entry.is_symlink():
                    result.merge(self._rename_subdirectory(entry, file_filter))
                continue

            if not is_renameable(entry):
                logger.debug("Skipping hidden or inaccessible file %s", entry)
                continue

            try:
                self._rename_file(entry, result, taken_names)
            except (PerFileError, OSError) as e:
                logger.error("Failed to process %s: %s", entry, e)
            except Exception:
                logger.exception("Unexpected error processing %s", entry)

        return result

    def _rename_subdirectory(self, directory: Path, file_filter: ExtensionFilter) -> RenameResult:
        try:
            view = DirectoryView(directory)
        except ConfigurationError as e:
            logger.error("Skipping directory %s: %s", directory, e)
            return RenameResult(directory=directory)
        return self._rename_directory(view, file_filter, include_subdirectories=True)

    def _rename_file(self, path: Path, result: RenameResult, taken_names: MutableSet[str]) -> None:
        proposal = self._propose(path.name)
        if proposal is None:
            logger.warning("Nothing left of %s after normalization, skipped", path.name)
            return

        new_name, extension, classification = proposal
        if new_name == path.name:
            return

        new_name = resolve_collision(path.parent, new_name, taken_names, source=path, clock=self._clock)
        target = path.parent / new_name
        path.rename(target)
        taken_names.add(new_name)
        result.record(target, path)
        logger.info("Renamed %s -> %s", path.name, new_name)

        renamed = RenamedFile(
            path=target,
            original_path=path,
            extension=extension,
            classification=classification,
        )
        self.postprocessor_for(classification).process_file(renamed, result, taken_names)


def create_engine(
    settings: Optional[RenamerSettings] = None,
    tag_editor: Optional[TagEditor] = None,
    clock: Callable[[], int] = current_millis,
) -> RenamingEngine:
    """Load the catalogs and build an engine with the default postprocessors.

    Raises:
        CatalogLoadError: a catalog source is malformed.
    """
    settings = settings or RenamerSettings()
    exclusions = ExclusionCatalog.load(settings.catalog_dirs, settings.include_default_catalogs)
    noise = NoiseCatalog.load(settings.catalog_dirs, settings.locale, settings.include_default_catalogs)
    logger.debug("Loaded %d exclusions and %d noise entries", len(exclusions), len(noise))

    rewriter = TokenRewriter(exclusions, noise)
    postprocessors = default_postprocessors(rewriter, tag_editor or MutagenTagEditor(), clock)
    return RenamingEngine(rewriter, postprocessors, clock)
