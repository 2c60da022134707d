"""Protocol definitions (interfaces) for dependency injection."""
from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import Mapping, MutableSet, Optional, Protocol

from .models import AudioTags, RenamedFile, RenameResult


class Postprocessor(Protocol):
    """Per-classification hook run by the renaming engine.

    Implementations:
    - IdentityPostprocessor: leaves names and files alone
    - AudioPostprocessor: artist/title separator cleanup and tag sync
    """

    def process_file_name(self, name: str) -> str:
        """Rewrite a normalized base name (no extension). Must be pure."""
        ...

    def process_file(
        self,
        renamed: RenamedFile,
        result: RenameResult,
        taken_names: MutableSet[str],
    ) -> None:
        """Work on the file after its rename.

        Args:
            renamed: The file as it is now on disk.
            result: Accumulator of the current directory scope; may be updated.
            taken_names: Names that a further rename must not use. Holds the
                pre-operation snapshot plus names claimed since.

        Raises:
            PerFileError: Processing of this file failed.
        """
        ...


class TagEditor(Protocol):
    """Interface for reading/writing embedded audio tags."""

    @abstractmethod
    def read(self, path: Path) -> AudioTags:
        """Read tags; an untagged file yields empty AudioTags."""
        ...

    @abstractmethod
    def write(self, path: Path, fields: Mapping[str, Optional[str]]) -> None:
        """Set fields; a None value removes that field."""
        ...


class ProgressReporter(Protocol):
    """Interface for progress reporting."""

    @abstractmethod
    def start_phase(self, name: str, total: int) -> None:
        """Start a new processing phase."""
        ...

    @abstractmethod
    def advance_phase(self, amount: int = 1) -> None:
        """Advance the current phase by an amount."""
        ...

    @abstractmethod
    def end_phase(self) -> None:
        """Complete current phase."""
        ...

    @abstractmethod
    def info(self, message: str) -> None:
        ...

    @abstractmethod
    def warning(self, message: str) -> None:
        ...

    @abstractmethod
    def error(self, message: str) -> None:
        ...

    @abstractmethod
    def output(self, message: str) -> None:
        """Write a command result line to stdout."""
        ...
