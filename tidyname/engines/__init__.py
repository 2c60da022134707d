"""Name rewriting, separator detection and tag access."""
from .rewriter import TokenRewriter
from .splitting import word_around, split_on_dash, strip_dashes
from .naming import capitalize_fully, sanitize_filename, resolve_collision
from .tags import MutagenTagEditor

__all__ = [
    "TokenRewriter",
    "word_around",
    "split_on_dash",
    "strip_dashes",
    "capitalize_fully",
    "sanitize_filename",
    "resolve_collision",
    "MutagenTagEditor",
]
