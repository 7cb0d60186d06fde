"""Path normalizer module.

Exports the pure path helpers every other component builds on.
"""
from __future__ import annotations

from combopath.paths.normalize import (
    basename,
    has_parent_segment,
    normalize,
    safe_join,
    sanitize,
)

__all__ = ["normalize", "sanitize", "basename", "safe_join", "has_parent_segment"]
