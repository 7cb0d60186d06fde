"""Diagnostic records for combination rewrites.

Every finding the vehicle rewrite logs is also returned to the caller
as a ``Diagnostic``, so tooling can report problems without scraping
log output.  Diagnostics are advisory: the host reports the real
failure when it later loads a still-unresolved path.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class DiagnosticSeverity(Enum):
    """Severity levels for rewrite diagnostics."""

    WARNING = auto()
    INFORMATION = auto()


class DiagnosticCode:
    """Machine-readable identifiers for rewrite diagnostics."""

    MOD_NOT_FOUND = "CPF001"
    MOD_DIR_FALLBACK = "CPF002"
    UNRESOLVED = "CPF003"
    PATH_ESCAPES_MOD = "CPF004"


@dataclass(frozen=True)
class Diagnostic:
    """A single finding for one combination attribute.

    Parameters
    ----------
    severity:
        How serious this finding is.
    code:
        One of the ``DiagnosticCode`` values.
    message:
        Human-readable description.
    key:
        The XML key of the attribute concerned.
    value:
        The attribute value at the time of the finding.
    """

    severity: DiagnosticSeverity
    code: str
    message: str
    key: str
    value: str | None = field(default=None)

    def __str__(self) -> str:
        return f"[{self.code}] {self.severity.name} at {self.key}: {self.message}"

    @property
    def is_warning(self) -> bool:
        return self.severity == DiagnosticSeverity.WARNING
