"""Integration tests.

These drive a whole host session through ``ComboPathFix``, from map load
to vehicle load, with the reference host collaborators.  Run only the
unit tests with ``pytest tests/unit/``.
"""
from __future__ import annotations
