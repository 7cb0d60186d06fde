"""Unit tests for combopath.resolver — strict, loose and combination resolution."""
from __future__ import annotations

import logging

import pytest

from combopath.config import Settings
from combopath.host import InMemoryModRegistry
from combopath.resolver import (
    TokenResolver,
    resolve_combination_path,
    resolve_loose,
    resolve_strict,
)


@pytest.fixture()
def foo_registry() -> InMemoryModRegistry:
    return InMemoryModRegistry({"Foo": "/mods/Foo/"})


# ---------------------------------------------------------------------------
# Strict
# ---------------------------------------------------------------------------


class TestResolveStrict:
    def test_resolves_known_mod(self, foo_registry: InMemoryModRegistry) -> None:
        assert resolve_strict("$moddirFoo$/x.xml", foo_registry) == "/mods/Foo/x.xml"

    def test_requires_leading_dollar(self, foo_registry: InMemoryModRegistry) -> None:
        assert resolve_strict("moddirFoo$/x.xml", foo_registry) is None

    def test_unknown_mod(self, foo_registry: InMemoryModRegistry) -> None:
        assert resolve_strict("$moddirMissing$/x.xml", foo_registry) is None

    def test_mod_without_directory(self, resolver: TokenResolver) -> None:
        assert resolver.resolve_strict("$moddirNoDir$/x.xml") is None

    def test_none_token(self, resolver: TokenResolver) -> None:
        assert resolver.resolve_strict(None) is None

    def test_windows_directory_is_normalized(self, resolver: TokenResolver) -> None:
        result = resolver.resolve_strict("$moddirFS25_tony10900TTRX$/tony10900TTR.xml")
        assert result == "C:/mods/FS25_tony10900TTRX/tony10900TTR.xml"

    def test_remainder_leading_slashes_stripped(self, resolver: TokenResolver) -> None:
        assert resolver.resolve_strict("$moddirFoo$//sub\\x.xml") == "/mods/Foo/sub/x.xml"


# ---------------------------------------------------------------------------
# Loose
# ---------------------------------------------------------------------------


class TestResolveLoose:
    def test_missing_dollar_accepted(self, foo_registry: InMemoryModRegistry) -> None:
        assert resolve_loose("moddirFoo$/x.xml", foo_registry) == "/mods/Foo/x.xml"

    def test_strict_form_accepted(self, foo_registry: InMemoryModRegistry) -> None:
        assert resolve_loose("$moddirFoo$/x.xml", foo_registry) == "/mods/Foo/x.xml"

    def test_data_path_is_not_foreign(self, foo_registry: InMemoryModRegistry) -> None:
        assert resolve_loose("$data/x.xml", foo_registry) is None

    def test_local_mod_path_is_not_foreign(self, foo_registry: InMemoryModRegistry) -> None:
        assert resolve_loose("$moddir$/x.xml", foo_registry) is None

    def test_unknown_mod(self, foo_registry: InMemoryModRegistry) -> None:
        assert resolve_loose("$moddirMissing$/x.xml", foo_registry) is None

    def test_plain_path(self, foo_registry: InMemoryModRegistry) -> None:
        assert resolve_loose("vehicles/foo.xml", foo_registry) is None


# ---------------------------------------------------------------------------
# Parent segments
# ---------------------------------------------------------------------------


class TestParentSegments:
    def test_rejected_by_default(
        self, resolver: TokenResolver, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="combopath"):
            assert resolver.resolve_strict("$moddirFoo$/../Bar/x.xml") is None
        assert "outside" in caplog.text or "leaves" in caplog.text

    def test_allowed_when_disabled(self, registry: InMemoryModRegistry) -> None:
        resolver = TokenResolver(registry, Settings(reject_parent_segments=False))
        assert resolver.resolve_strict("$moddirFoo$/../Bar/x.xml") == "/mods/Foo/../Bar/x.xml"

    def test_dotted_file_names_are_fine(self, resolver: TokenResolver) -> None:
        assert resolver.resolve_strict("$moddirFoo$/a..b.xml") == "/mods/Foo/a..b.xml"


# ---------------------------------------------------------------------------
# Combination
# ---------------------------------------------------------------------------


class TestResolveCombinationPath:
    def test_plain_path_passes_through(self, foo_registry: InMemoryModRegistry) -> None:
        assert resolve_combination_path("vehicles/foo.xml", foo_registry) == "vehicles/foo.xml"

    def test_strict_token(self, foo_registry: InMemoryModRegistry) -> None:
        assert resolve_combination_path("$moddirFoo$/x.xml", foo_registry) == "/mods/Foo/x.xml"

    def test_loose_token(self, foo_registry: InMemoryModRegistry) -> None:
        assert resolve_combination_path("moddirFoo$/x.xml", foo_registry) == "/mods/Foo/x.xml"

    def test_data_path_kept(self, foo_registry: InMemoryModRegistry) -> None:
        assert resolve_combination_path("$data/x.xml", foo_registry) == "$data/x.xml"

    def test_unresolved_strict_token_kept_intact(self, foo_registry: InMemoryModRegistry) -> None:
        raw = "$moddirMissing$/x.xml"
        assert resolve_combination_path(raw, foo_registry) == raw

    def test_unresolved_loose_token_sanitized(self, foo_registry: InMemoryModRegistry) -> None:
        assert resolve_combination_path("moddirMissing$/x.xml", foo_registry) == "moddirMissing/x.xml"

    def test_none(self, foo_registry: InMemoryModRegistry) -> None:
        assert resolve_combination_path(None, foo_registry) is None


class TestTokenResolver:
    def test_mod_directory_empty_is_none(self, resolver: TokenResolver) -> None:
        assert resolver.mod_directory("NoDir") is None

    def test_mod_directory_known(self, resolver: TokenResolver) -> None:
        assert resolver.mod_directory("Foo") == "/mods/Foo/"

    def test_default_settings(self, resolver: TokenResolver) -> None:
        assert resolver.settings == Settings()

    def test_repr(self, resolver: TokenResolver) -> None:
        assert "TokenResolver" in repr(resolver)
