"""Path token grammar.

Exports the ``PathForm`` enum, the ``ModToken`` record and the
classification helpers shared by the normalizer and the resolvers.
"""
from __future__ import annotations

from combopath.grammar.tokens import (
    LOOSE_TOKEN,
    STRICT_TOKEN,
    ModToken,
    PathForm,
    classify,
    is_data_path,
    is_local_mod_path,
    is_well_formed,
    parse_mod_token,
)

__all__ = [
    "LOOSE_TOKEN",
    "STRICT_TOKEN",
    "ModToken",
    "PathForm",
    "classify",
    "is_data_path",
    "is_local_mod_path",
    "is_well_formed",
    "parse_mod_token",
]
