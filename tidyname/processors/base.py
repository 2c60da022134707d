"""Identity postprocessor, used for every classification without a specific one."""
from __future__ import annotations

from typing import MutableSet

from ..core.models import RenamedFile, RenameResult


class IdentityPostprocessor:
    """Leaves names and files untouched."""

    def process_file_name(self, name: str) -> str:
        return name

    def process_file(
        self,
        renamed: RenamedFile,
        result: RenameResult,
        taken_names: MutableSet[str],
    ) -> None:
        pass
