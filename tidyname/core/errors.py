"""Exception hierarchy.

Configuration and catalog errors are fatal and raised before any file is
touched. Per-file errors are caught by the renaming loop, logged and skipped.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class TidyNameError(Exception):
    """Base class for all tidyname errors."""


class ConfigurationError(TidyNameError):
    """Invalid target directory or settings."""


class CatalogLoadError(TidyNameError):
    """A catalog source exists but could not be parsed."""

    def __init__(self, source: Path, reason: str):
        super().__init__(f"Malformed catalog {source}: {reason}")
        self.source = source
        self.reason = reason


class PerFileError(TidyNameError):
    """Failure confined to a single file."""

    def __init__(self, path: Path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


class TagAccessError(PerFileError):
    """Embedded tags could not be read or written."""


class PostprocessingError(PerFileError):
    """A postprocessor failed after the file was renamed.

    ``phase`` names the step that failed, so the caller can tell which half
    of a name/tag synchronization took effect.
    """

    def __init__(self, path: Path, phase: str, cause: Optional[BaseException] = None):
        message = f"postprocessing failed during {phase}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(path, message)
        self.phase = phase
        self.cause = cause
