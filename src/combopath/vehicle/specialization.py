"""Vehicle specialization and its injection into every vehicle type.

The specialization has no state of its own; its only job is to run
:func:`~combopath.vehicle.preload.rewrite_vehicle_combinations` when a
vehicle of any type is pre-loaded.
"""
from __future__ import annotations

import logging
from typing import Any

from combopath.host.models import SpecializationManager, Vehicle, VehicleType, VehicleTypeManager
from combopath.resolver.resolver import TokenResolver
from combopath.vehicle.preload import RewriteResult, rewrite_vehicle_combinations

logger = logging.getLogger(__name__)


class ComboPathSpecialization:
    """Specialization that rewrites combination paths on ``onPreLoad``.

    Parameters
    ----------
    resolver:
        Resolver whose registry and settings drive the rewrite.
    """

    def __init__(self, resolver: TokenResolver) -> None:
        self._resolver = resolver

    def prerequisites_present(self, specializations: Any = None) -> bool:
        return True

    def register_event_listeners(self, vehicle_type: VehicleType) -> None:
        vehicle_type.register_event_listener("onPreLoad", self.on_pre_load)

    def on_pre_load(self, vehicle: Vehicle, savegame: Any = None) -> RewriteResult | None:
        """Rewrite the vehicle's combinations; ``None`` when it has no XML yet."""
        if vehicle.xml_file is None:
            return None
        return rewrite_vehicle_combinations(vehicle.xml_file, self._resolver, vehicle.mod_dir)


def add_to_all_vehicle_types(
    type_manager: VehicleTypeManager,
    specialization_manager: SpecializationManager,
    specialization_name: str,
) -> int:
    """Attach *specialization_name* to every vehicle type lacking it.

    Returns
    -------
    int
        Number of vehicle types patched; ``0`` when the specialization
        is not registered (a warning is logged).
    """
    if specialization_manager.get_specialization_by_name(specialization_name) is None:
        logger.warning(
            "Specialization %r not found; combination paths will not be "
            "rewritten at vehicle load",
            specialization_name,
        )
        return 0

    patched = 0
    for type_name, vehicle_type in type_manager.types.items():
        if specialization_name in vehicle_type.specializations_by_name:
            continue
        type_manager.add_specialization(type_name, specialization_name)
        patched += 1
        logger.debug("Added specialization %r to vehicle type %r", specialization_name, type_name)

    logger.info("Initialized on %d vehicle types", patched)
    return patched
