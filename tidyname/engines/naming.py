"""Filename helpers shared by the engine and the postprocessors."""
from __future__ import annotations

import logging
import re
import time
from pathlib import Path
from typing import AbstractSet, Callable, Optional


logger = logging.getLogger(__name__)

_SLASHES = re.compile(r"[/\\]")
_INVALID_CHARS = re.compile(r'[<>:"|?*\x00-\x1f]')
_SPACES = re.compile(r"\s+")
_WORD = re.compile(r"\S+")
_ENTITY = re.compile(r"&(#[0-9]+|#[xX][0-9a-fA-F]+|amp|lt|gt|quot|apos);")
_XML_ENTITIES = {"amp": "&", "lt": "<", "gt": ">", "quot": "\"", "apos": "'"}


def current_millis() -> int:
    return int(time.time() * 1000)


def collapse_spaces(text: str) -> str:
    return _SPACES.sub(" ", text).strip()


def capitalize_fully(text: str) -> str:
    """Title-case on whitespace boundaries only.

    Unlike ``str.title`` this leaves 'ac-dc' as 'Ac-dc' and "it's" as "It's".
    """
    return _WORD.sub(lambda m: m.group(0)[:1].upper() + m.group(0)[1:].lower(), text)


def unescape_markup(text: str) -> str:
    """Resolve the XML entities and numeric character references.

    Only '&amp;', '&lt;', '&gt;', '&quot;', '&apos;' and '&#...;' forms are
    touched; HTML names such as '&copy;' are left as they are.
    """
    return _ENTITY.sub(_resolve_entity, text)


def _resolve_entity(match: re.Match) -> str:
    ref = match.group(1)
    if not ref.startswith("#"):
        return _XML_ENTITIES[ref]
    try:
        code = int(ref[2:], 16) if ref[1:2] in ("x", "X") else int(ref[1:])
        return chr(code)
    except (ValueError, OverflowError):
        return match.group(0)


def sanitize_filename(name: str) -> str:
    """Drop characters that cannot appear in a filename."""
    name = _SLASHES.sub("-", name)
    name = _INVALID_CHARS.sub("", name)
    return collapse_spaces(name)


def is_occupied(
    directory: Path,
    name: str,
    taken: AbstractSet[str],
    source: Optional[Path] = None,
) -> bool:
    """Whether ``name`` would clash in ``directory``.

    A name is occupied when it is in ``taken`` or an entry other than
    ``source`` already exists under it.
    """
    if name in taken:
        return True
    target = directory / name
    if not target.exists() and not target.is_symlink():
        return False
    if source is None:
        return True
    try:
        return not target.samefile(source)
    except OSError:
        return True


def resolve_collision(
    directory: Path,
    name: str,
    taken: AbstractSet[str],
    source: Optional[Path] = None,
    clock: Callable[[], int] = current_millis,
) -> str:
    """Return ``name`` or, if it clashes, '(<millis>) name'.

    The timestamp is bumped until the prefixed name is free too.
    """
    if not is_occupied(directory, name, taken, source):
        return name

    stamp = clock()
    candidate = f"({stamp}) {name}"
    while is_occupied(directory, candidate, taken, source):
        stamp += 1
        candidate = f"({stamp}) {name}"

    logger.debug("Name collision on %s, using %s", name, candidate)
    return candidate
