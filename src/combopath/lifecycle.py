"""Integration with the host's event schedule.

``ComboPathFix`` holds every piece of process-wide state: the resolver,
the hook registry, and the flags of the one-shot store fallback pass.
One instance lives from startup to process exit.

Host schedule::

    fix = ComboPathFix(HostEnvironment(...))
    fix.declare_specialization()   # what the mod description declares
    fix.load_map()                 # map loaded: install hooks, arm fallback pass
    fix.update(dt)                 # every frame: readiness poll

The store catalog may still be empty when the map loads, so the
fallback reconciliation pass waits for it.  It runs exactly once, either
when the catalog reports that its bulk load is over (the populated
notification, sent by ``load_store_records``) or on the first frame
that finds the catalog non-empty.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from combopath.config import Settings
from combopath.hooks.interceptors import (
    filename_interceptor,
    store_resolve_interceptor,
    xml_string_interceptor,
)
from combopath.hooks.registry import HookRegistry
from combopath.host.models import (
    ModRegistry,
    SpecializationManager,
    StoreItem,
    VehicleTypeManager,
)
from combopath.resolver.resolver import TokenResolver
from combopath.store.reconcile import reconcile_store
from combopath.vehicle.specialization import ComboPathSpecialization, add_to_all_vehicle_types

logger = logging.getLogger(__name__)

HOOK_GET_FILENAME = "utils.get_filename"
HOOK_XML_GET_STRING = "xml_file.get_string"
HOOK_STORE_RESOLVE = "store.resolve_combinations"


@dataclass
class HostEnvironment:
    """The host subsystems this package reads or patches.

    Any subsystem may be ``None`` when the host does not provide it;
    the corresponding step is then skipped.

    Parameters
    ----------
    mod_registry:
        Installed mods by name.
    utils:
        Object whose ``get_filename`` attribute is the filename resolver.
    xml_file_class:
        Class whose ``get_string`` method reads XML string attributes.
    store:
        The store catalog.
    vehicle_type_manager:
        Registry of vehicle types.
    specialization_manager:
        Registry of declared specializations.
    """

    mod_registry: ModRegistry
    utils: Any = None
    xml_file_class: Any = None
    store: Any = None
    vehicle_type_manager: VehicleTypeManager | None = None
    specialization_manager: SpecializationManager | None = None


class ComboPathFix:
    """Installs the interception layer and drives the store fallback pass.

    Parameters
    ----------
    host:
        The host subsystems.
    settings:
        Defaults to ``Settings()``.
    hooks:
        Hook registry to install into; a private one is created when
        omitted.  A capability already wrapped through any registry in
        this process is never wrapped again.
    """

    def __init__(
        self,
        host: HostEnvironment,
        settings: Settings | None = None,
        hooks: HookRegistry | None = None,
    ) -> None:
        self.host = host
        self.settings = settings or Settings()
        self.resolver = TokenResolver(host.mod_registry, self.settings)
        self.hooks = hooks if hooks is not None else HookRegistry("combopath")
        self.specialization = ComboPathSpecialization(self.resolver)
        self.post_store_fix_pending = False
        self.post_store_fix_done = False
        self._poll_elapsed = 0.0
        self._since_last_check = 0.0
        self._subscribed = False

    # ------------------------------------------------------------------
    # Host events
    # ------------------------------------------------------------------

    def declare_specialization(self) -> None:
        """Register the specialization with the host's specialization manager."""
        manager = self.host.specialization_manager
        if manager is None:
            return
        if manager.get_specialization_by_name(self.settings.specialization_name) is None:
            manager.add_specialization(self.settings.specialization_name, self.specialization)

    def load_map(self, name: str | None = None) -> None:
        """Install hooks, inject the specialization and arm the fallback pass."""
        self.install_hooks()
        if self.host.vehicle_type_manager is not None and self.host.specialization_manager is not None:
            add_to_all_vehicle_types(
                self.host.vehicle_type_manager,
                self.host.specialization_manager,
                self.settings.specialization_name,
            )

        if not self.post_store_fix_done:
            self.post_store_fix_pending = True
        on_populated = getattr(self.host.store, "on_populated", None)
        if callable(on_populated) and not self._subscribed:
            on_populated(self._on_store_populated)
            self._subscribed = True

    def update(self, dt: float) -> bool:
        """Per-frame readiness poll.

        Parameters
        ----------
        dt:
            Frame time in milliseconds.

        Returns
        -------
        bool
            ``True`` on the frame the fallback pass ran.
        """
        if not self.post_store_fix_pending or self.post_store_fix_done:
            return False

        self._poll_elapsed += dt
        self._since_last_check += dt
        if self._since_last_check >= self.settings.poll_interval:
            self._since_last_check = 0.0
            if self.store_ready():
                self.run_fallback_pass()
                return True

        timeout = self.settings.poll_timeout
        if timeout is not None and self._poll_elapsed >= timeout:
            self.post_store_fix_pending = False
            logger.warning(
                "Store catalog still empty after %.0f ms; fallback pass abandoned",
                self._poll_elapsed,
            )
        return False

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def install_hooks(self) -> None:
        """Install the three hooks; already installed ones are left alone."""
        self.hooks.install(
            HOOK_GET_FILENAME,
            self.host.utils,
            "get_filename",
            filename_interceptor(self.resolver),
        )
        self.hooks.install(
            HOOK_XML_GET_STRING,
            self.host.xml_file_class,
            "get_string",
            xml_string_interceptor(self.resolver),
        )
        self.hooks.install(
            HOOK_STORE_RESOLVE,
            self.host.store,
            "resolve_combinations",
            store_resolve_interceptor(self.reconcile),
        )

    def reconcile(self) -> int:
        """Run the store reconciliation pass now."""
        return reconcile_store(self.host.store, self.resolver)

    def load_store_records(self, records: Iterable[Mapping[str, Any]]) -> int:
        """Add host store item records to the catalog and finish its load.

        Each record is adapted with ``Settings.raw_path_fields``.  Once
        every item is in, the catalog's populated notification fires,
        which runs the fallback pass when it is armed.

        Returns
        -------
        int
            Number of items added; ``0`` when there is no store.
        """
        store = self.host.store
        if store is None:
            return 0
        added = 0
        for record in records:
            store.add_item(StoreItem.from_mapping(record, self.settings.raw_path_fields))
            added += 1
        notify = getattr(store, "notify_populated", None)
        if callable(notify):
            notify()
        return added

    def store_ready(self) -> bool:
        """Return True once the store catalog holds at least one item."""
        items = getattr(self.host.store, "items", None)
        return isinstance(items, list) and len(items) > 0

    def run_fallback_pass(self) -> int:
        """Run the one-shot fallback pass and disarm the poll."""
        processed = self.reconcile()
        self.post_store_fix_done = True
        self.post_store_fix_pending = False
        logger.info("Fallback post-pass on store completed (%d combinations)", processed)
        return processed

    def _on_store_populated(self) -> None:
        if self.post_store_fix_pending and not self.post_store_fix_done:
            self.run_fallback_pass()
