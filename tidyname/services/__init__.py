"""Service layer - directory access, renaming and batch execution."""
from .directory import DirectoryView, is_hidden, is_renameable
from .renamer import RenamingEngine, create_engine
from .runner import BatchRunner

__all__ = [
    "DirectoryView",
    "is_hidden",
    "is_renameable",
    "RenamingEngine",
    "create_engine",
    "BatchRunner",
]
