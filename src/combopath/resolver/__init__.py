"""Token resolver module.

Exports the ``TokenResolver`` class and the functional wrappers.
"""
from __future__ import annotations

from combopath.resolver.resolver import (
    TokenResolver,
    resolve_combination_path,
    resolve_loose,
    resolve_strict,
)

__all__ = [
    "TokenResolver",
    "resolve_strict",
    "resolve_loose",
    "resolve_combination_path",
]
