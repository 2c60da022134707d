"""Core domain models, catalogs and protocols."""
from .protocols import Postprocessor, TagEditor, ProgressReporter
from .models import (
    Classification,
    ExtensionFilter,
    RenamedFile,
    RenameResult,
    AudioTags,
)
from .catalog import ExclusionCatalog, NoiseCatalog
from .config import RenamerSettings, RenameJob
from .errors import (
    TidyNameError,
    ConfigurationError,
    CatalogLoadError,
    PerFileError,
    PostprocessingError,
    TagAccessError,
)

__all__ = [
    # Protocols
    "Postprocessor",
    "TagEditor",
    "ProgressReporter",
    # Models
    "Classification",
    "ExtensionFilter",
    "RenamedFile",
    "RenameResult",
    "AudioTags",
    # Catalogs
    "ExclusionCatalog",
    "NoiseCatalog",
    # Config
    "RenamerSettings",
    "RenameJob",
    # Errors
    "TidyNameError",
    "ConfigurationError",
    "CatalogLoadError",
    "PerFileError",
    "PostprocessingError",
    "TagAccessError",
]
