"""Domain models - classification, filters and results."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional


class Classification(Enum):
    """Coarse media type used to pick a postprocessor."""
    AUDIO = "audio"
    VIDEO = "video"
    IMAGE = "image"
    TEXT = "text"
    OTHER = "other"

    @classmethod
    def from_extension(cls, extension: str) -> "Classification":
        """Classify an extension (with or without leading dot, any case)."""
        return EXTENSION_TYPES.get(normalize_extension(extension), cls.OTHER)


EXTENSION_TYPES: dict[str, Classification] = {
    # Audio
    "mp3": Classification.AUDIO,
    "wma": Classification.AUDIO,
    "wav": Classification.AUDIO,
    "flac": Classification.AUDIO,
    "ogg": Classification.AUDIO,
    "m4a": Classification.AUDIO,
    # Video
    "wmv": Classification.VIDEO,
    "mpeg": Classification.VIDEO,
    "mpg": Classification.VIDEO,
    "mov": Classification.VIDEO,
    "avi": Classification.VIDEO,
    "mp4": Classification.VIDEO,
    "mkv": Classification.VIDEO,
    # Images
    "jpg": Classification.IMAGE,
    "jpeg": Classification.IMAGE,
    "bmp": Classification.IMAGE,
    "png": Classification.IMAGE,
    "gif": Classification.IMAGE,
    # Text
    "txt": Classification.TEXT,
}


def normalize_extension(extension: str) -> str:
    """Lowercase and drop the leading dot: '.MP3' -> 'mp3'."""
    return extension.strip().lower().lstrip(".")


def split_extension(filename: str) -> tuple[str, str]:
    """Split at the last dot. Returns (base, extension), extension without dot.

    A name without a dot yields an empty extension.
    """
    index = filename.rfind(".")
    if index == -1:
        return filename, ""
    return filename[:index], filename[index + 1:]


@dataclass(frozen=True, slots=True)
class ExtensionFilter:
    """Accepts files by extension and, optionally, directories."""
    extensions: frozenset[str]
    accept_directories: bool = False
    description: Optional[str] = None

    def __post_init__(self) -> None:
        normalized = frozenset(normalize_extension(e) for e in self.extensions if e.strip())
        if not normalized and not self.accept_directories:
            raise ValueError("An extension filter needs at least one extension")
        object.__setattr__(self, "extensions", normalized)

    @classmethod
    def of(cls, extensions: Iterable[str], description: Optional[str] = None) -> "ExtensionFilter":
        return cls(extensions=frozenset(extensions), description=description)

    @classmethod
    def all_accepted(cls) -> "ExtensionFilter":
        """Filter accepting every known extension."""
        return cls(extensions=frozenset(EXTENSION_TYPES), description="All supported files")

    @classmethod
    def for_classification(cls, classification: Classification) -> "ExtensionFilter":
        extensions = [ext for ext, kind in EXTENSION_TYPES.items() if kind == classification]
        return cls(extensions=frozenset(extensions), description=classification.value)

    @classmethod
    def directories_only(cls) -> "ExtensionFilter":
        return cls(extensions=frozenset(), accept_directories=True, description="Directories")

    def with_directories(self, accept: bool = True) -> "ExtensionFilter":
        """Copy of this filter with a different directory flag."""
        return ExtensionFilter(
            extensions=self.extensions,
            accept_directories=accept,
            description=self.description,
        )

    def accepts_name(self, name: str) -> bool:
        lowered = name.lower()
        return any(lowered.endswith(f".{ext}") for ext in self.extensions)

    def accepts(self, path: Path) -> bool:
        if path.is_dir():
            return self.accept_directories
        return self.accepts_name(path.name)

    def __str__(self) -> str:
        return f"Filter: {sorted(self.extensions)}"


@dataclass(frozen=True, slots=True)
class RenamedFile:
    """A file the engine has just renamed, handed to postprocessors."""
    path: Path
    original_path: Path
    extension: str
    classification: Classification

    @property
    def directory(self) -> Path:
        return self.path.parent


@dataclass(frozen=True, slots=True)
class AudioTags:
    """Tag fields relevant to name synchronization."""
    artist: Optional[str] = None
    title: Optional[str] = None
    album_artist: Optional[str] = None
    album: Optional[str] = None
    genre: Optional[str] = None
    year: Optional[str] = None
    track: Optional[str] = None

    @property
    def has_artist_and_title(self) -> bool:
        return bool(self.artist and self.artist.strip()) and bool(self.title and self.title.strip())


@dataclass(slots=True)
class RenameResult:
    """Outcome of one top-level rename invocation.

    ``renamed`` maps new absolute path -> original absolute path.
    ``duplicated`` is reserved and never populated.
    """
    directory: Path
    renamed: dict[Path, Path] = field(default_factory=dict)
    duplicated: dict[Path, Path] = field(default_factory=dict)

    def record(self, new_path: Path, original_path: Path) -> None:
        self.renamed[new_path] = original_path

    def replace(self, old_path: Path, new_path: Path) -> None:
        """Move the entry recorded under ``old_path`` to ``new_path``.

        The original path is kept, so chained renames still map back to the
        name the file had before the invocation.
        """
        original = self.renamed.pop(old_path, old_path)
        self.renamed[new_path] = original

    def merge(self, other: "RenameResult") -> None:
        """Fold a sub-directory result into this one."""
        self.renamed.update(other.renamed)
        self.duplicated.update(other.duplicated)

    @property
    def count(self) -> int:
        return len(self.renamed)

    def sorted_items(self) -> list[tuple[Path, Path]]:
        """(original, new) pairs ordered by original path."""
        return sorted(
            ((original, new) for new, original in self.renamed.items()),
            key=lambda pair: str(pair[0]).lower(),
        )
