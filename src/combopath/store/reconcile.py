"""Store reconciliation pass.

Walks every catalog item's combinations and, for each one not yet
processed:

1. resolves the raw path with ``resolve_combination_path``;
2. looks for the catalog item whose sanitized path equals the result,
   falling back to the first item with the same file name;
3. stores the resolved path on the combination when it changed;
4. links the combination to the matched item;
5. marks the combination done, matched or not.

A processed combination is never looked at again, so running the pass
any number of times leaves the catalog as a single run would.
"""
from __future__ import annotations

import logging

from combopath.host.models import StoreCatalog, StoreItem
from combopath.paths.normalize import basename, sanitize
from combopath.resolver.resolver import TokenResolver

logger = logging.getLogger(__name__)


def find_item_by_xml(catalog: StoreCatalog, target_xml: str | None) -> StoreItem | None:
    """Return the first item whose sanitized path equals sanitized *target_xml*."""
    target = sanitize(target_xml or "")
    if not target:
        return None
    for item in catalog.items:
        if item.xml_filename and sanitize(item.xml_filename) == target:
            return item
    return None


def find_item_by_basename(catalog: StoreCatalog, name: str | None) -> StoreItem | None:
    """Return the first item whose file name equals *name*."""
    if not name:
        return None
    for item in catalog.items:
        if basename(item.xml_filename or "") == name:
            return item
    return None


def reconcile_store(catalog: StoreCatalog | None, resolver: TokenResolver) -> int:
    """Resolve and link every unprocessed combination in *catalog*.

    Parameters
    ----------
    catalog:
        The store catalog, or ``None`` when the store is not loaded.
    resolver:
        Resolver used for the raw combination paths.

    Returns
    -------
    int
        Number of combinations processed by this call.
    """
    if catalog is None:
        return 0

    processed = 0
    for item in catalog.items:
        for combination in item.combinations:
            raw = combination.xml_filename
            if not raw or combination.done:
                continue

            fixed = resolver.resolve_combination_path(raw)
            target = find_item_by_xml(catalog, fixed)
            if target is None:
                target = find_item_by_basename(catalog, basename(fixed or raw))

            if fixed and fixed != raw:
                combination.xml_filename = fixed
                level = logging.INFO if resolver.settings.debug else logging.DEBUG
                logger.log(level, "store combination %r -> %r", raw, fixed)
            if target is not None:
                combination.store_item = target
                combination.resolved_xml = target.xml_filename

            combination.done = True
            processed += 1

    logger.debug("Reconciled %d store combinations", processed)
    return processed
