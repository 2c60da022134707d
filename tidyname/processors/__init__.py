"""Postprocessors, selected per file classification.

- IdentityPostprocessor: default, leaves everything alone
- AudioPostprocessor: artist/title cleanup and embedded tag sync
"""
from __future__ import annotations

from typing import Callable

from ..core.models import Classification
from ..core.protocols import Postprocessor, TagEditor
from ..engines.naming import current_millis
from ..engines.rewriter import TokenRewriter
from .audio import AudioPostprocessor
from .base import IdentityPostprocessor


def default_postprocessors(
    rewriter: TokenRewriter,
    tag_editor: TagEditor,
    clock: Callable[[], int] = current_millis,
) -> dict[Classification, Postprocessor]:
    """Registry used by the engine; unlisted classifications get the identity."""
    return {Classification.AUDIO: AudioPostprocessor(rewriter, tag_editor, clock)}


__all__ = [
    'IdentityPostprocessor',
    'AudioPostprocessor',
    'default_postprocessors',
]
