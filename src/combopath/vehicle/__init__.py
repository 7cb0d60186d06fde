"""Vehicle load-time rewrite.

Exports the rewrite function, its result and diagnostic types, and the
specialization that triggers it for every vehicle type.
"""
from __future__ import annotations

from combopath.vehicle.diagnostics import Diagnostic, DiagnosticCode, DiagnosticSeverity
from combopath.vehicle.preload import RewriteResult, rewrite_vehicle_combinations
from combopath.vehicle.specialization import ComboPathSpecialization, add_to_all_vehicle_types

__all__ = [
    "ComboPathSpecialization",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticSeverity",
    "RewriteResult",
    "add_to_all_vehicle_types",
    "rewrite_vehicle_combinations",
]
