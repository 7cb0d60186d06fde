"""Unit tests for combopath.paths — normalize, sanitize and join helpers."""
from __future__ import annotations

import pytest

from combopath.paths import basename, has_parent_segment, normalize, safe_join, sanitize


# ---------------------------------------------------------------------------
# normalize
# ---------------------------------------------------------------------------


class TestNormalize:
    def test_none_stays_none(self) -> None:
        assert normalize(None) is None

    @pytest.mark.parametrize("path", [
        "",
        "vehicles/foo.xml",
        "/mods/Foo/x.xml",
        "$moddirFoo$/x.xml",
        "C:/games/mods/a.xml",
    ])
    def test_clean_paths_are_unchanged(self, path: str) -> None:
        assert normalize(path) == path

    def test_mixed_separator_run_collapses(self) -> None:
        assert normalize("a//\\b") == "a/b"

    def test_backslashes_become_slashes(self) -> None:
        assert normalize("C:\\mods\\Foo\\x.xml") == "C:/mods/Foo/x.xml"

    def test_leading_double_slash_collapses(self) -> None:
        assert normalize("//server/share") == "/server/share"

    @pytest.mark.parametrize("path", ["a//b", "a\\\\b\\", "x/\\/y//z", "///"])
    def test_idempotent(self, path: str) -> None:
        once = normalize(path)
        assert normalize(once) == once


# ---------------------------------------------------------------------------
# sanitize
# ---------------------------------------------------------------------------


class TestSanitize:
    def test_none_stays_none(self) -> None:
        assert sanitize(None) is None

    def test_stray_dollar_removed_from_malformed_token(self) -> None:
        assert sanitize("ModName$/file.xml") == "ModName/file.xml"

    def test_loose_token_loses_its_dollar(self) -> None:
        assert sanitize("moddirFoo$/x.xml") == "moddirFoo/x.xml"

    @pytest.mark.parametrize("path", [
        "$data/vehicles/tractor.xml",
        "$moddir$/vehicles/trailer.xml",
        "$moddirFoo$/x.xml",
    ])
    def test_well_formed_tokens_keep_dollars(self, path: str) -> None:
        assert sanitize(path) == path

    def test_well_formed_token_still_gets_slash_normalization(self) -> None:
        assert sanitize("$moddirFoo$/sub\\\\x.xml") == "$moddirFoo$/sub/x.xml"

    def test_plain_path_unchanged(self) -> None:
        assert sanitize("vehicles/foo.xml") == "vehicles/foo.xml"


# ---------------------------------------------------------------------------
# basename / safe_join / has_parent_segment
# ---------------------------------------------------------------------------


class TestBasename:
    @pytest.mark.parametrize("path, expected", [
        ("/mods/Bar/combo.xml", "combo.xml"),
        ("C:\\mods\\Bar\\combo.xml", "combo.xml"),
        ("combo.xml", "combo.xml"),
        ("$moddirBar$/combo.xml", "combo.xml"),
    ])
    def test_last_segment(self, path: str, expected: str) -> None:
        assert basename(path) == expected

    @pytest.mark.parametrize("path", [None, "", "/mods/Bar/"])
    def test_no_segment_is_none(self, path: str | None) -> None:
        assert basename(path) is None


class TestSafeJoin:
    def test_joins_with_trailing_slash_base(self) -> None:
        assert safe_join("/mods/Foo/", "x.xml") == "/mods/Foo/x.xml"

    def test_inserts_separator_when_missing(self) -> None:
        assert safe_join("/mods/Foo", "x.xml") == "/mods/Foo/x.xml"

    def test_strips_leading_separators_from_tail(self) -> None:
        assert safe_join("/mods/Foo/", "\\//sub/x.xml") == "/mods/Foo/sub/x.xml"

    def test_empty_base_returns_tail(self) -> None:
        assert safe_join("", "sub/x.xml") == "sub/x.xml"

    def test_empty_result_when_tail_is_only_separators(self) -> None:
        assert safe_join("", "//") == ""

    @pytest.mark.parametrize("base, tail", [(None, "x"), ("/a/", None)])
    def test_none_side_yields_none(self, base: str | None, tail: str | None) -> None:
        assert safe_join(base, tail) is None


class TestHasParentSegment:
    @pytest.mark.parametrize("path", ["../x.xml", "a/../b", "a\\..\\b", ".."])
    def test_detects_parent(self, path: str) -> None:
        assert has_parent_segment(path) is True

    @pytest.mark.parametrize("path", ["a/b.xml", "..x/b", "a/b..", "./a"])
    def test_ignores_lookalikes(self, path: str) -> None:
        assert has_parent_segment(path) is False
