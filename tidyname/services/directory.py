"""Directory listing service."""
from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Iterable, Optional, Union

from ..core.errors import ConfigurationError
from ..core.models import ExtensionFilter


logger = logging.getLogger(__name__)


def sort_by_name(paths: Iterable[Path]) -> list[Path]:
    """Case-insensitive name order, ties broken by exact name."""
    return sorted(paths, key=lambda p: (p.name.lower(), p.name))


def is_hidden(path: Path) -> bool:
    """Dot-files, plus the hidden attribute where the platform has one."""
    if path.name.startswith("."):
        return True
    try:
        attributes = getattr(path.lstat(), "st_file_attributes", 0)
    except OSError:
        return False
    return bool(attributes & getattr(stat, "FILE_ATTRIBUTE_HIDDEN", 0))


def is_renameable(path: Path) -> bool:
    """A visible file the process may read and write."""
    if is_hidden(path):
        return False
    return os.access(path, os.R_OK | os.W_OK)


class DirectoryView:
    """An existing directory, with its children captured at construction.

    ``snapshot`` never changes; ``listing`` and ``names`` read the directory
    again on every call.
    """

    def __init__(self, path: Union[str, Path]):
        path = Path(path).expanduser()
        if not path.is_dir():
            raise ConfigurationError(f"Not an existing directory: {path}")
        self._path = path.absolute()
        try:
            self._snapshot = tuple(sort_by_name(self._path.iterdir()))
        except OSError as e:
            raise ConfigurationError(f"Cannot read directory {self._path}: {e}") from e

    @property
    def path(self) -> Path:
        return self._path

    @property
    def snapshot(self) -> tuple[Path, ...]:
        return self._snapshot

    def snapshot_names(self) -> set[str]:
        return {child.name for child in self._snapshot}

    def names(self, file_filter: Optional[ExtensionFilter] = None) -> list[str]:
        return [child.name for child in self.listing(file_filter)]

    def listing(self, file_filter: Optional[ExtensionFilter] = None) -> list[Path]:
        """Current children accepted by ``file_filter`` (all when None)."""
        children = self._children(self._path)
        if file_filter is not None:
            children = [child for child in children if file_filter.accepts(child)]
        return sort_by_name(children)

    def listing_recursive(self, file_filter: Optional[ExtensionFilter] = None) -> list[Path]:
        """Accepted entries of the whole tree, flattened.

        Every subdirectory is descended whether or not the filter accepts
        directories; directories only appear in the output if it does.
        """
        found: list[Path] = []
        pending = [self._path]
        while pending:
            directory = pending.pop()
            for child in self._children(directory):
                if child.is_dir() and not child.is_symlink():
                    pending.append(child)
                if file_filter is None or file_filter.accepts(child):
                    found.append(child)
        return sort_by_name(found)

    @staticmethod
    def _children(directory: Path) -> list[Path]:
        try:
            return list(directory.iterdir())
        except PermissionError:
            logger.warning("Permission denied listing %s", directory)
            return []

    def __repr__(self) -> str:
        return f"DirectoryView({str(self._path)!r})"
