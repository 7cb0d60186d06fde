"""Shared test fixtures for combopath.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

import pytest

from combopath.config import Settings
from combopath.host import InMemoryModRegistry, InMemoryXmlFile
from combopath.resolver import TokenResolver


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def registry() -> InMemoryModRegistry:
    """Mods used throughout the suite.

    ``NoDir`` is known to the host but has no install directory.
    """
    return InMemoryModRegistry(
        {
            "Foo": "/mods/Foo/",
            "Bar": "/mods/Bar/",
            "FS25_tony10900TTRX": "C:\\mods\\FS25_tony10900TTRX\\",
            "NoDir": "",
        }
    )


@pytest.fixture()
def resolver(registry: InMemoryModRegistry) -> TokenResolver:
    return TokenResolver(registry)


@pytest.fixture()
def debug_resolver(registry: InMemoryModRegistry) -> TokenResolver:
    return TokenResolver(registry, Settings(debug=True))


@pytest.fixture()
def xml_file_class() -> type[InMemoryXmlFile]:
    """A private subclass, so hooks installed on it never leak between tests."""

    class VehicleXmlFile(InMemoryXmlFile):
        pass

    return VehicleXmlFile
