"""Path token grammar for combination file references.

Every path string found in a ``<combination xmlFilename="..."/>``
attribute falls into exactly one ``PathForm``.  Matching is always
anchored at the start of the string:

- ``$data/<rest>``: a path inside the game's built-in data directory
- ``$moddir$/<rest>``: a path inside the mod that owns the XML file
- ``$moddir<ModName>$/<rest>``: a path inside another installed mod
- ``moddir<ModName>$/<rest>``: the same, with the leading ``$`` missing
  (accepted only by the loose resolver)

``ModName`` is one or more of ``[A-Za-z0-9_-]``; ``rest`` is any
non-empty remainder and may itself contain slashes.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Final


class PathForm(Enum):
    """Exhaustive enumeration of recognised path forms."""

    DATA = auto()
    LOCAL_MOD = auto()
    FOREIGN_MOD = auto()
    FOREIGN_MOD_LOOSE = auto()
    PLAIN = auto()


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

STRICT_TOKEN: Final[re.Pattern[str]] = re.compile(
    r"\$moddir([\w-]+)\$/(.+)", re.ASCII | re.DOTALL
)
LOOSE_TOKEN: Final[re.Pattern[str]] = re.compile(
    r"\$?moddir([\w-]+)\$/(.+)", re.ASCII | re.DOTALL
)

_DATA_PATH: Final[re.Pattern[str]] = re.compile(r"\$data/.+", re.DOTALL)
_LOCAL_MOD_PATH: Final[re.Pattern[str]] = re.compile(r"\$moddir\$/")

# Prefix-only forms used to decide whether a path is already well-formed.
_DATA_PREFIX: Final[re.Pattern[str]] = re.compile(r"\$data/")
_FOREIGN_PREFIX: Final[re.Pattern[str]] = re.compile(r"\$moddir[\w-]+\$/", re.ASCII)


@dataclass(frozen=True)
class ModToken:
    """A parsed foreign-mod reference.

    Parameters
    ----------
    mod_name:
        The name captured between ``moddir`` and ``$/``.
    rest:
        The remainder after ``$/``, as written by the author.
    strict:
        ``True`` when the token carried its leading ``$``.
    """

    mod_name: str
    rest: str
    strict: bool

    def __str__(self) -> str:
        prefix = "$" if self.strict else ""
        return f"{prefix}moddir{self.mod_name}$/{self.rest}"


def parse_mod_token(text: str | None, *, loose: bool = False) -> ModToken | None:
    """Parse *text* as a foreign-mod token.

    Parameters
    ----------
    text:
        The raw path string.  ``None`` and non-strings yield ``None``.
    loose:
        When ``True``, the leading ``$`` is optional.

    Returns
    -------
    ModToken | None
        The parsed token, or ``None`` when *text* is not a token of the
        requested strictness.
    """
    if not isinstance(text, str):
        return None
    pattern = LOOSE_TOKEN if loose else STRICT_TOKEN
    match = pattern.fullmatch(text)
    if match is None:
        return None
    return ModToken(
        mod_name=match.group(1),
        rest=match.group(2),
        strict=text.startswith("$"),
    )


def is_data_path(text: str) -> bool:
    """Return True for ``$data/<rest>`` paths."""
    return _DATA_PATH.match(text) is not None


def is_local_mod_path(text: str) -> bool:
    """Return True for ``$moddir$/<rest>`` paths."""
    return _LOCAL_MOD_PATH.match(text) is not None


def is_well_formed(text: str) -> bool:
    """Return True when *text* starts with one of the three documented prefixes."""
    return (
        _DATA_PREFIX.match(text) is not None
        or _LOCAL_MOD_PATH.match(text) is not None
        or _FOREIGN_PREFIX.match(text) is not None
    )


def classify(text: str) -> PathForm:
    """Return the single ``PathForm`` that *text* belongs to."""
    if is_data_path(text):
        return PathForm.DATA
    if is_local_mod_path(text):
        return PathForm.LOCAL_MOD
    if STRICT_TOKEN.fullmatch(text):
        return PathForm.FOREIGN_MOD
    if LOOSE_TOKEN.fullmatch(text):
        return PathForm.FOREIGN_MOD_LOOSE
    return PathForm.PLAIN
