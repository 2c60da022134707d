"""Settings and per-invocation configuration."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .catalog import DEFAULT_LOCALE
from .errors import ConfigurationError
from .models import ExtensionFilter, normalize_extension


class RenamerSettings(BaseModel):
    """Options for building an engine and running rename jobs.

    All options can also be supplied via CLI flags.
    """
    catalog_dirs: List[Path] = Field(
        default_factory=list,
        description="Extra directories searched for exclusions.xml / noise*.xml",
    )
    include_default_catalogs: bool = Field(
        default=True,
        description="Also load the catalogs shipped with the package",
    )
    locale: Optional[str] = Field(
        default=DEFAULT_LOCALE,
        description="Locale used to pick noise catalog variants (e.g. pt_BR)",
    )
    include_subdirectories: bool = Field(
        default=False,
        description="Descend into subdirectories",
    )
    extensions: List[str] = Field(
        default_factory=list,
        description="Extensions to rename (empty = every supported extension)",
    )
    workers: int = Field(
        default=1,
        ge=1,
        description="Number of directories renamed concurrently",
    )

    @field_validator("catalog_dirs")
    @classmethod
    def expand_dirs(cls, value: List[Path]) -> List[Path]:
        return [path.expanduser().resolve() for path in value]

    @field_validator("extensions")
    @classmethod
    def normalize_extensions(cls, value: List[str]) -> List[str]:
        normalized = [normalize_extension(ext) for ext in value]
        return [ext for ext in normalized if ext]

    def build_filter(self) -> ExtensionFilter:
        if not self.extensions:
            return ExtensionFilter.all_accepted()
        return ExtensionFilter.of(self.extensions, description="Selected extensions")


@dataclass(frozen=True, slots=True)
class RenameJob:
    """One top-level rename invocation."""
    target: Path
    file_filter: ExtensionFilter = field(default_factory=ExtensionFilter.all_accepted)
    include_subdirectories: bool = False

    def __post_init__(self) -> None:
        if not self.target.is_dir():
            raise ConfigurationError(f"Target directory does not exist: {self.target}")

    @classmethod
    def from_settings(cls, target: Path, settings: RenamerSettings) -> "RenameJob":
        return cls(
            target=target.expanduser().resolve(),
            file_filter=settings.build_filter(),
            include_subdirectories=settings.include_subdirectories,
        )
