"""Host collaborator interfaces and reference implementations.

The resolver, the rewrite and the reconciliation pass only talk to the
game through the protocols defined here.  The in-memory classes are
complete implementations of those protocols, used by the CLI and by
tests in place of the running game.

Host records often spell the same raw path field several ways; that
variance is absorbed once, in :meth:`Combination.from_mapping`, so the
rest of the package sees a single ``xml_filename`` field.
"""
from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Final, Protocol, runtime_checkable

from combopath.config import DEFAULT_RAW_PATH_FIELDS
from combopath.paths.normalize import normalize, safe_join

_ABSOLUTE_PATH: Final[re.Pattern[str]] = re.compile(r"(/|\\|[A-Za-z]:[\\/])")


# ---------------------------------------------------------------------------
# Mod registry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ModRecord:
    """An installed mod as reported by the host's mod manager."""

    name: str
    mod_dir: str | None = None


@runtime_checkable
class ModRegistry(Protocol):
    """Read-only lookup of installed mods by name."""

    def get_mod_by_name(self, name: str) -> ModRecord | None:
        """Return the mod called *name*, or ``None`` if it is not installed."""
        ...  # pragma: no cover


class InMemoryModRegistry:
    """``ModRegistry`` backed by a plain mapping.

    Parameters
    ----------
    mods:
        Mapping of mod name to install directory.  A ``None`` or empty
        directory models a mod the host knows about but cannot locate.
    """

    def __init__(self, mods: Mapping[str, str | None] | None = None) -> None:
        self._mods: dict[str, ModRecord] = {
            name: ModRecord(name, directory) for name, directory in (mods or {}).items()
        }

    def get_mod_by_name(self, name: str) -> ModRecord | None:
        return self._mods.get(name)

    def add(self, name: str, mod_dir: str | None) -> ModRecord:
        """Register (or replace) a mod and return its record."""
        record = ModRecord(name, mod_dir)
        self._mods[name] = record
        return record

    def names(self) -> list[str]:
        """Return the registered mod names in alphabetical order."""
        return sorted(self._mods)

    def __contains__(self, name: object) -> bool:
        return name in self._mods

    def __len__(self) -> int:
        return len(self._mods)

    def __repr__(self) -> str:
        return f"InMemoryModRegistry(mods={self.names()})"


# ---------------------------------------------------------------------------
# Filename utility
# ---------------------------------------------------------------------------


class PathUtils:
    """The host's filename resolver.

    ``get_filename`` resolves *filename* against *base_dir*: absolute
    paths are returned as they are, ``$data/`` paths are placed under
    the game data directory, everything else under *base_dir*.

    Parameters
    ----------
    data_dir:
        The game's built-in data directory.
    """

    def __init__(self, data_dir: str = "") -> None:
        self.data_dir = data_dir

    def get_filename(self, filename: str | None, base_dir: str | None = None) -> str | None:
        if filename is None:
            return None
        if _ABSOLUTE_PATH.match(filename):
            return normalize(filename)
        if filename.startswith("$data/"):
            return safe_join(self.data_dir, filename[len("$data/"):])
        return safe_join(base_dir or "", filename)


# ---------------------------------------------------------------------------
# XML attribute store
# ---------------------------------------------------------------------------


@runtime_checkable
class XmlAttributeStore(Protocol):
    """Indexed-key access to string attributes of a loaded XML file.

    Keys use the host's dotted notation, e.g.
    ``vehicle.combinations.combination(0)#xmlFilename``.
    """

    def has_property(self, key: str) -> bool: ...  # pragma: no cover

    def get_string(self, key: str, default: str | None = None) -> str | None: ...  # pragma: no cover

    def set_string(self, key: str, value: str) -> None: ...  # pragma: no cover


# ---------------------------------------------------------------------------
# Store catalog
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class Combination:
    """A combination offered by a store item.

    Parameters
    ----------
    xml_filename:
        Path of the combined item's XML, as raw text until reconciled.
    store_item:
        The catalog item this combination was linked to.
    resolved_xml:
        Canonical path of ``store_item`` at link time.
    done:
        Set once the reconciliation pass has processed this entry.
    """

    xml_filename: str | None = None
    store_item: StoreItem | None = field(default=None, repr=False)
    resolved_xml: str | None = None
    done: bool = False

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        raw_path_fields: Sequence[str] = DEFAULT_RAW_PATH_FIELDS,
    ) -> "Combination":
        """Adapt a host combination record.

        The first field of *raw_path_fields* that is present with a
        non-empty value becomes ``xml_filename``.
        """
        raw = next((data[name] for name in raw_path_fields if data.get(name)), None)
        return cls(xml_filename=raw)


@dataclass(eq=False)
class StoreItem:
    """A purchasable catalog entry.

    Parameters
    ----------
    xml_filename:
        Canonical path of the item's XML file.
    combinations:
        Combinations offered alongside this item.
    name:
        Display name, informational only.
    """

    xml_filename: str | None
    combinations: list[Combination] = field(default_factory=list)
    name: str = ""

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        raw_path_fields: Sequence[str] = DEFAULT_RAW_PATH_FIELDS,
    ) -> "StoreItem":
        """Adapt a host store item record, including its combinations."""
        combinations = [
            Combination.from_mapping(entry, raw_path_fields)
            for entry in data.get("combinations") or ()
        ]
        return cls(
            xml_filename=data.get("xmlFilename"),
            combinations=combinations,
            name=str(data.get("name", "")),
        )


class StoreCatalog:
    """The host's store catalog.

    Items may be added one by one while the host loads its store.  The
    host calls :meth:`notify_populated` once that bulk load is over;
    every ``on_populated`` callback then runs exactly once, seeing the
    complete catalog.

    Parameters
    ----------
    items:
        Initial items.  A catalog created with items counts as already
        populated.
    """

    def __init__(self, items: Iterable[StoreItem] | None = None) -> None:
        self.items: list[StoreItem] = list(items or ())
        self._populated_callbacks: list[Callable[[], None]] = []
        self._populated_fired = bool(self.items)

    @property
    def is_populated(self) -> bool:
        """Return True once the catalog holds at least one item."""
        return len(self.items) > 0

    def add_item(self, item: StoreItem) -> None:
        """Append *item*.  Does not fire the populated notification."""
        self.items.append(item)

    def on_populated(self, callback: Callable[[], None]) -> None:
        """Register a one-time callback for the catalog finishing its load.

        Registering on a catalog that is already populated does not call
        *callback*; the caller is expected to check ``is_populated``.
        """
        self._populated_callbacks.append(callback)

    def notify_populated(self) -> None:
        """Mark the bulk load as finished and fire the populated callbacks.

        Fires at most once, and only when the catalog has items.
        """
        if self._populated_fired or not self.is_populated:
            return
        self._populated_fired = True
        callbacks, self._populated_callbacks = self._populated_callbacks, []
        for callback in callbacks:
            callback()

    def resolve_combinations(self) -> int:
        """Link combinations to items whose path matches exactly.

        Mirrors the host's own linking: only combinations without a
        ``store_item`` are considered, and only a verbatim path match
        counts.

        Returns
        -------
        int
            Number of combinations linked by this call.
        """
        by_path = {item.xml_filename: item for item in self.items if item.xml_filename}
        linked = 0
        for item in self.items:
            for combination in item.combinations:
                if combination.store_item is not None:
                    continue
                target = by_path.get(combination.xml_filename)
                if target is not None:
                    combination.store_item = target
                    linked += 1
        return linked

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return f"StoreCatalog(items={len(self.items)})"


# ---------------------------------------------------------------------------
# Vehicle types and specializations
# ---------------------------------------------------------------------------


@dataclass
class Vehicle:
    """A vehicle being loaded.

    Parameters
    ----------
    xml_file:
        The vehicle's configuration.  ``None`` before it is opened.
    type_name:
        Name of the vehicle type.
    mod_dir:
        Directory of the mod that ships the vehicle.
    """

    xml_file: XmlAttributeStore | None
    type_name: str = ""
    mod_dir: str | None = None


@dataclass
class VehicleType:
    """A registered vehicle type and the specializations attached to it."""

    name: str
    specializations_by_name: dict[str, Any] = field(default_factory=dict)
    event_listeners: dict[str, list[Callable[..., Any]]] = field(default_factory=dict)

    def register_event_listener(self, event: str, listener: Callable[..., Any]) -> None:
        self.event_listeners.setdefault(event, []).append(listener)

    def dispatch(self, event: str, *args: Any) -> list[Any]:
        """Call every listener registered for *event* and return their results."""
        return [listener(*args) for listener in self.event_listeners.get(event, ())]


class SpecializationManager:
    """Lookup of specializations declared by installed mods."""

    def __init__(self, specializations: Mapping[str, Any] | None = None) -> None:
        self._specializations: dict[str, Any] = dict(specializations or {})

    def add_specialization(self, name: str, specialization: Any) -> None:
        self._specializations[name] = specialization

    def get_specialization_by_name(self, name: str) -> Any | None:
        return self._specializations.get(name)


class VehicleTypeManager:
    """Registry of vehicle types.

    Parameters
    ----------
    specialization_manager:
        Source of the specialization objects attached by
        :meth:`add_specialization`.
    """

    def __init__(self, specialization_manager: SpecializationManager) -> None:
        self._specialization_manager = specialization_manager
        self.types: dict[str, VehicleType] = {}

    def add_type(self, name: str) -> VehicleType:
        vehicle_type = VehicleType(name)
        self.types[name] = vehicle_type
        return vehicle_type

    def add_specialization(self, type_name: str, specialization_name: str) -> None:
        """Attach the named specialization to the named vehicle type.

        The specialization's ``register_event_listeners`` is called with
        the vehicle type when it defines one.

        Raises
        ------
        KeyError
            If either the type or the specialization is unknown.
        """
        specialization = self._specialization_manager.get_specialization_by_name(
            specialization_name
        )
        if specialization is None:
            raise KeyError(f"Unknown specialization {specialization_name!r}")
        vehicle_type = self.types[type_name]
        vehicle_type.specializations_by_name[specialization_name] = specialization
        register = getattr(specialization, "register_event_listeners", None)
        if callable(register):
            register(vehicle_type)

    def load_vehicle(self, vehicle: Vehicle) -> list[Any]:
        """Fire ``onPreLoad`` for *vehicle* on its vehicle type.

        Raises
        ------
        KeyError
            If the vehicle's type is unknown.
        """
        return self.types[vehicle.type_name].dispatch("onPreLoad", vehicle)
