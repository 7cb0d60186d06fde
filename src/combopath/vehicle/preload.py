"""Load-time rewrite of vehicle combination attributes.

When a vehicle configuration is loaded, every
``vehicle.combinations.combination(<i>)#xmlFilename`` that uses the
strict foreign-mod token is replaced in place with the absolute path
inside the referenced mod.  The walk starts at index 0 and stops at the
first index the XML file does not have, so combinations must be
numbered without gaps.

Outcomes per attribute:

- ``$data/...`` and ``$moddir$/...``: left alone.
- Unknown mod: warning, left alone; the host reports the dangling
  reference when it tries to load it.
- Known mod without a directory: joined onto the current mod's
  directory as a last resort, reported as information.
- Known mod with a directory: rewritten.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from combopath.grammar.tokens import is_data_path, is_local_mod_path, parse_mod_token
from combopath.host.models import XmlAttributeStore
from combopath.paths.normalize import has_parent_segment, safe_join
from combopath.resolver.resolver import TokenResolver
from combopath.vehicle.diagnostics import Diagnostic, DiagnosticCode, DiagnosticSeverity

logger = logging.getLogger(__name__)

COMBINATION_KEY = "vehicle.combinations.combination({index})"
XML_FILENAME_ATTRIBUTE = "#xmlFilename"


@dataclass
class RewriteResult:
    """Outcome of one vehicle rewrite.

    Parameters
    ----------
    visited:
        Number of combination entries walked.
    rewritten:
        Mapping of attribute key to ``(old, new)`` values.
    diagnostics:
        Findings reported during the walk, in order.
    """

    visited: int = 0
    rewritten: dict[str, tuple[str, str]] = field(default_factory=dict)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.rewritten)


def _report(
    result: RewriteResult,
    code: str,
    key: str,
    value: str,
    message: str,
    severity: DiagnosticSeverity = DiagnosticSeverity.WARNING,
) -> None:
    level = logging.WARNING if severity is DiagnosticSeverity.WARNING else logging.INFO
    logger.log(level, "%s (%s)", message, key)
    result.diagnostics.append(Diagnostic(severity, code, message, key, value))


def rewrite_vehicle_combinations(
    xml_file: XmlAttributeStore,
    resolver: TokenResolver,
    current_mod_dir: str | None = None,
) -> RewriteResult:
    """Rewrite strict foreign-mod tokens in a vehicle's combinations.

    Parameters
    ----------
    xml_file:
        The vehicle's XML attribute store; modified in place.
    resolver:
        Supplies the mod registry and settings.
    current_mod_dir:
        Directory of the mod that owns *xml_file*, used only as the
        fallback base for a referenced mod that has no directory.

    Returns
    -------
    RewriteResult
        The rewritten keys and any diagnostics.
    """
    result = RewriteResult()
    index = 0
    while True:
        combination_key = COMBINATION_KEY.format(index=index)
        if not xml_file.has_property(combination_key):
            break
        index += 1
        result.visited += 1

        key = combination_key + XML_FILENAME_ATTRIBUTE
        value = xml_file.get_string(key)
        if value is None or is_data_path(value) or is_local_mod_path(value):
            continue

        token = parse_mod_token(value)
        if token is None:
            continue

        record = resolver.registry.get_mod_by_name(token.mod_name)
        if record is None:
            _report(
                result,
                DiagnosticCode.MOD_NOT_FOUND,
                key,
                value,
                f"mod {token.mod_name!r} not found for combination {value!r}",
            )
            continue

        if resolver.settings.reject_parent_segments and has_parent_segment(token.rest):
            _report(
                result,
                DiagnosticCode.PATH_ESCAPES_MOD,
                key,
                value,
                f"combination {value!r} points outside mod {token.mod_name!r}",
            )
            continue

        if record.mod_dir:
            new_path = safe_join(record.mod_dir, token.rest)
        else:
            new_path = safe_join(current_mod_dir or "", token.rest)
            _report(
                result,
                DiagnosticCode.MOD_DIR_FALLBACK,
                key,
                value,
                f"mod {token.mod_name!r} has no directory; "
                f"fallback base {current_mod_dir!r} -> {new_path!r}",
                DiagnosticSeverity.INFORMATION,
            )

        if not new_path:
            _report(
                result,
                DiagnosticCode.UNRESOLVED,
                key,
                value,
                f"cannot resolve combination {value!r}",
            )
            continue

        xml_file.set_string(key, new_path)
        result.rewritten[key] = (value, new_path)
        level = logging.INFO if resolver.settings.debug else logging.DEBUG
        logger.log(level, "vehicle combination %r -> %r", value, new_path)

    return result
