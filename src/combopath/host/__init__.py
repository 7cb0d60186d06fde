"""Host collaborator interfaces.

The game owns the mod registry, the store catalog, the XML attribute
store and the vehicle type registry.  This package defines the narrow
interfaces the rest of ``combopath`` consumes, plus in-memory
implementations of each.
"""
from __future__ import annotations

from combopath.host.models import (
    Combination,
    InMemoryModRegistry,
    ModRecord,
    ModRegistry,
    PathUtils,
    SpecializationManager,
    StoreCatalog,
    StoreItem,
    Vehicle,
    VehicleType,
    VehicleTypeManager,
    XmlAttributeStore,
)
from combopath.host.xmlfile import ElementTreeXmlFile, InMemoryXmlFile, XmlKeyError

__all__ = [
    "Combination",
    "ElementTreeXmlFile",
    "InMemoryModRegistry",
    "InMemoryXmlFile",
    "ModRecord",
    "ModRegistry",
    "PathUtils",
    "SpecializationManager",
    "StoreCatalog",
    "StoreItem",
    "Vehicle",
    "VehicleType",
    "VehicleTypeManager",
    "XmlAttributeStore",
    "XmlKeyError",
]
