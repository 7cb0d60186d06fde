"""Runtime settings and YAML loaders.

``Settings`` is an immutable record shared by every component.  The
defaults reproduce the behaviour of the in-game script; a YAML file
can override any field::

    combopath:
      debug: true
      poll_timeout: 60000
      reject_parent_segments: false

The mod registry used by the CLI is read from the same kind of file::

    mods:
      FS25_tony10900TTRX: /mods/FS25_tony10900TTRX/
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from combopath.host.models import InMemoryModRegistry

DEFAULT_RAW_PATH_FIELDS: tuple[str, ...] = ("xmlFilename", "filename", "xml")


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigError(ValueError):
    """Raised when a settings or registry file cannot be used."""

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source
        prefix = f"{source}: " if source else ""
        super().__init__(f"{prefix}{message}")


@dataclass(frozen=True)
class Settings:
    """Settings for resolution, hook installation and the readiness poll.

    Parameters
    ----------
    debug:
        Log every individual rewrite at INFO instead of DEBUG.
    specialization_name:
        Vehicle specialization injected into every vehicle type.
    poll_interval:
        Minimum accumulated frame time (ms) between two readiness checks.
        ``0`` checks on every frame.
    poll_timeout:
        Accumulated frame time (ms) after which the readiness poll gives
        up.  ``None`` polls for ever.
    reject_parent_segments:
        Treat a token whose remainder contains a ``..`` segment as
        unresolvable, keeping resolved paths inside the target mod.
    raw_path_fields:
        Ordered names of the equivalent raw-path fields a host
        combination record may carry.
    """

    debug: bool = False
    specialization_name: str = "comboPathFix"
    poll_interval: float = 0.0
    poll_timeout: float | None = None
    reject_parent_segments: bool = True
    raw_path_fields: tuple[str, ...] = DEFAULT_RAW_PATH_FIELDS

    def __post_init__(self) -> None:
        for name in ("debug", "reject_parent_segments"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"{name} must be true or false, got {getattr(self, name)!r}")
        if not isinstance(self.specialization_name, str) or not self.specialization_name:
            raise ConfigError(
                f"specialization_name must be a non-empty string, got {self.specialization_name!r}"
            )
        if not _is_number(self.poll_interval):
            raise ConfigError(f"poll_interval must be a number, got {self.poll_interval!r}")
        if self.poll_timeout is not None and not _is_number(self.poll_timeout):
            raise ConfigError(f"poll_timeout must be a number, got {self.poll_timeout!r}")
        if isinstance(self.raw_path_fields, str) or not isinstance(self.raw_path_fields, (list, tuple)):
            raise ConfigError(
                f"raw_path_fields must be a list of field names, got {self.raw_path_fields!r}"
            )
        if not all(isinstance(name, str) and name for name in self.raw_path_fields):
            raise ConfigError(f"raw_path_fields must hold non-empty strings, got {self.raw_path_fields!r}")
        object.__setattr__(self, "raw_path_fields", tuple(self.raw_path_fields))
        if self.poll_interval < 0:
            raise ConfigError(f"poll_interval must be >= 0, got {self.poll_interval!r}")
        if self.poll_timeout is not None and self.poll_timeout <= 0:
            raise ConfigError(f"poll_timeout must be > 0, got {self.poll_timeout!r}")
        if not self.raw_path_fields:
            raise ConfigError("raw_path_fields must name at least one field")

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str | None = None) -> "Settings":
        """Build ``Settings`` from a plain mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(str(key) for key in set(data) - known)
        if unknown:
            raise ConfigError(f"unknown setting(s): {', '.join(unknown)}", source)
        try:
            return cls(**data)
        except ConfigError as exc:
            raise ConfigError(str(exc), source) from None


def _read_yaml(path: str | Path) -> dict[str, Any]:
    source = str(path)
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read file: {exc}", source) from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML: {exc}", source) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("top-level YAML value must be a mapping", source)
    return data


def load_settings(path: str | Path) -> Settings:
    """Load ``Settings`` from a YAML file.

    The file may hold the settings at the top level or under a
    ``combopath:`` section.

    Raises
    ------
    ConfigError
        If the file is unreadable, is not a mapping, names unknown keys
        or gives a value of the wrong type.
    """
    data = _read_yaml(path)
    section = data.get("combopath", data)
    if not isinstance(section, dict):
        raise ConfigError("'combopath' section must be a mapping", str(path))
    return Settings.from_dict(section, source=str(path))


def load_mod_registry(path: str | Path) -> "InMemoryModRegistry":
    """Load a mod-name to directory mapping from a YAML file.

    The mapping may be given at the top level or under a ``mods:`` key.
    """
    from combopath.host.models import InMemoryModRegistry

    data = _read_yaml(path)
    mods = data.get("mods", data)
    if not isinstance(mods, dict):
        raise ConfigError("'mods' must be a mapping of name to directory", str(path))
    for name, directory in mods.items():
        if directory is not None and not isinstance(directory, str):
            raise ConfigError(f"directory for mod {name!r} must be a string", str(path))
    return InMemoryModRegistry({str(name): directory for name, directory in mods.items()})
