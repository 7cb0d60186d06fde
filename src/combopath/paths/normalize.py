"""Slash normalization and sanitizing for mod file paths.

All functions are pure.  ``None`` is accepted wherever the host may
hand over a missing attribute and is returned unchanged.
"""
from __future__ import annotations

import re
from typing import Final

from combopath.grammar.tokens import is_well_formed

_SLASH_RUN: Final[re.Pattern[str]] = re.compile(r"/{2,}")
_LEADING_SEPARATORS: Final[re.Pattern[str]] = re.compile(r"^[\\/]+")
_LAST_SEGMENT: Final[re.Pattern[str]] = re.compile(r"[^/]+\Z")


def normalize(path: str | None) -> str | None:
    """Convert backslashes to ``/`` and collapse runs of slashes.

    Parameters
    ----------
    path:
        Any path string, or ``None``.

    Returns
    -------
    str | None
        The normalized path.  ``normalize(normalize(p)) == normalize(p)``.
    """
    if path is None:
        return None
    return _SLASH_RUN.sub("/", path.replace("\\", "/"))


def sanitize(path: str | None) -> str | None:
    """Normalize a store path for comparison.

    Paths that do not start with ``$data/``, ``$moddir$/`` or
    ``$moddir<Name>$/`` lose every literal ``$`` before slash
    normalization, so that half-written tokens such as
    ``ModName$/file.xml`` compare as plain paths.
    """
    if path is None:
        return None
    if not is_well_formed(path):
        path = path.replace("$", "")
    return normalize(path)


def basename(path: str | None) -> str | None:
    """Return the final path segment, or ``None`` when there is none."""
    if not path:
        return None
    match = _LAST_SEGMENT.search(path.replace("\\", "/"))
    return match.group(0) if match else None


def safe_join(base: str | None, tail: str | None) -> str | None:
    """Join *tail* onto the directory *base*.

    Leading separators on *tail* are dropped first, so an absolute-looking
    remainder can never escape *base* by replacing it.

    Parameters
    ----------
    base:
        Directory path.  A separator is inserted when it lacks a trailing one.
    tail:
        Path relative to *base*.

    Returns
    -------
    str | None
        The normalized joined path, or ``None`` if either side is ``None``.
    """
    if base is None or tail is None:
        return None
    tail = _LEADING_SEPARATORS.sub("", tail)
    if base and not base.endswith(("/", "\\")):
        base += "/"
    return normalize(base + tail)


def has_parent_segment(path: str) -> bool:
    """Return True when any segment of *path* is ``..``."""
    return ".." in normalize(path).split("/")
