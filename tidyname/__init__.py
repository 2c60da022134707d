"""Media filename normalization package.

Cleans up downloaded media names ('01+-+the+beatles+-+let+it+be.mp3'
becomes 'The Beatles - Let It Be.mp3') and keeps audio tags in sync.
"""

__version__ = "1.0.0"

# Core exports
from .core.config import RenamerSettings, RenameJob
from .core.catalog import ExclusionCatalog, NoiseCatalog
from .core.models import Classification, ExtensionFilter, RenamedFile, RenameResult, AudioTags
from .core.protocols import Postprocessor, TagEditor, ProgressReporter
from .core.errors import (
    TidyNameError,
    ConfigurationError,
    CatalogLoadError,
    PerFileError,
    PostprocessingError,
    TagAccessError,
)

# Engine exports
from .engines.rewriter import TokenRewriter
from .engines.tags import MutagenTagEditor

# Processor exports
from .processors import IdentityPostprocessor, AudioPostprocessor

# Service exports
from .services.directory import DirectoryView
from .services.renamer import RenamingEngine, create_engine
from .services.runner import BatchRunner

# Logging exports
from .logging.rich_logger import RichProgressReporter

__all__ = [
    # Core
    "RenamerSettings",
    "RenameJob",
    "ExclusionCatalog",
    "NoiseCatalog",
    "Classification",
    "ExtensionFilter",
    "RenamedFile",
    "RenameResult",
    "AudioTags",
    "Postprocessor",
    "TagEditor",
    "ProgressReporter",
    "TidyNameError",
    "ConfigurationError",
    "CatalogLoadError",
    "PerFileError",
    "PostprocessingError",
    "TagAccessError",
    # Engines
    "TokenRewriter",
    "MutagenTagEditor",
    # Processors
    "IdentityPostprocessor",
    "AudioPostprocessor",
    # Services
    "DirectoryView",
    "RenamingEngine",
    "create_engine",
    "BatchRunner",
    # Logging
    "RichProgressReporter",
]
