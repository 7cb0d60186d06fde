"""Store reconciliation module."""
from __future__ import annotations

from combopath.store.reconcile import find_item_by_basename, find_item_by_xml, reconcile_store

__all__ = ["reconcile_store", "find_item_by_xml", "find_item_by_basename"]
