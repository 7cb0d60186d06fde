"""combopath: cross-mod combination path resolution for vehicle configs.

Resolves the extended ``$moddir<ModName>$/path/to/file.xml`` token that
lets a mod's ``<combination xmlFilename="..."/>`` point at an XML file
shipped by another mod.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import combopath
    from combopath.host import InMemoryModRegistry

    mods = InMemoryModRegistry({"FS25_tony10900TTRX": "/mods/FS25_tony10900TTRX/"})

    combopath.normalize("a//b\\\\c.xml")
    'a/b/c.xml'

    combopath.resolve_strict("$moddirFS25_tony10900TTRX$/tony10900TTR.xml", mods)
    '/mods/FS25_tony10900TTRX/tony10900TTR.xml'

    combopath.__version__
    '0.1.0'
"""
from __future__ import annotations

from typing import TYPE_CHECKING

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from combopath.config import Settings
    from combopath.host.models import ModRegistry, StoreCatalog, XmlAttributeStore
    from combopath.vehicle.preload import RewriteResult


def normalize(path: str | None) -> str | None:
    """Convert backslashes to ``/`` and collapse runs of slashes."""
    from combopath.paths.normalize import normalize as _normalize

    return _normalize(path)


def sanitize(path: str | None) -> str | None:
    """Strip stray ``$`` from malformed paths, then normalize."""
    from combopath.paths.normalize import sanitize as _sanitize

    return _sanitize(path)


def resolve_strict(
    token: str | None, registry: "ModRegistry", settings: "Settings | None" = None
) -> str | None:
    """Resolve ``$moddir<Name>$/<rest>`` to an absolute path.

    Parameters
    ----------
    token:
        The raw path string.
    registry:
        Installed mods by name.
    settings:
        Optional resolution settings.

    Returns
    -------
    str | None
        The resolved path, or ``None`` when *token* is not a strict token
        or its mod cannot be located.
    """
    from combopath.resolver.resolver import resolve_strict as _resolve_strict

    return _resolve_strict(token, registry, settings)


def resolve_loose(
    token: str | None, registry: "ModRegistry", settings: "Settings | None" = None
) -> str | None:
    """Like :func:`resolve_strict` but the leading ``$`` is optional."""
    from combopath.resolver.resolver import resolve_loose as _resolve_loose

    return _resolve_loose(token, registry, settings)


def resolve_combination_path(
    raw: str | None, registry: "ModRegistry", settings: "Settings | None" = None
) -> str | None:
    """Resolve strictly, then loosely, else return *raw* sanitized."""
    from combopath.resolver.resolver import (
        resolve_combination_path as _resolve_combination_path,
    )

    return _resolve_combination_path(raw, registry, settings)


def rewrite_vehicle(
    xml_file: "XmlAttributeStore",
    registry: "ModRegistry",
    current_mod_dir: str | None = None,
    settings: "Settings | None" = None,
) -> "RewriteResult":
    """Rewrite strict tokens in a vehicle's combination attributes in place.

    Returns
    -------
    RewriteResult
        Rewritten keys and diagnostics.
    """
    from combopath.resolver.resolver import TokenResolver
    from combopath.vehicle.preload import rewrite_vehicle_combinations

    return rewrite_vehicle_combinations(
        xml_file, TokenResolver(registry, settings), current_mod_dir
    )


def reconcile_store(
    catalog: "StoreCatalog", registry: "ModRegistry", settings: "Settings | None" = None
) -> int:
    """Resolve and link every unprocessed store combination.

    Returns
    -------
    int
        Number of combinations processed.
    """
    from combopath.resolver.resolver import TokenResolver
    from combopath.store.reconcile import reconcile_store as _reconcile_store

    return _reconcile_store(catalog, TokenResolver(registry, settings))


__all__ = [
    "__version__",
    "normalize",
    "sanitize",
    "resolve_strict",
    "resolve_loose",
    "resolve_combination_path",
    "rewrite_vehicle",
    "reconcile_store",
]
