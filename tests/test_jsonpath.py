"""Tests for the JSON path parser and resolver."""

from __future__ import annotations

import pytest

from src.health.errors import PathResolutionError
from src.health.jsonpath import PathStep, evaluate_steps, parse_path, resolve_path

DOC = {"data": {"items": [{"ozone": 310}, {"ozone": None}], "status": "ok"}}


# ── Parsing ──────────────────────────────────────────────────────────────────


class TestParsePath:
    def test_keys_and_index(self) -> None:
        assert parse_path("$.data.items[0].ozone") == [
            PathStep("data"),
            PathStep("items", 0),
            PathStep("ozone"),
        ]

    def test_dollar_is_optional(self) -> None:
        assert parse_path("data.status") == parse_path("$.data.status")

    def test_empty_segments_skipped(self) -> None:
        assert parse_path("$..data...status.") == [PathStep("data"), PathStep("status")]

    def test_root_only(self) -> None:
        assert parse_path("$") == []

    def test_bare_index_segment(self) -> None:
        assert parse_path("$[2].name") == [PathStep(None, 2), PathStep("name")]

    @pytest.mark.parametrize("path", ["$.items[x]", "$.items[1", "$.items[0]x", "$.a]b", "$.items[-1]"])
    def test_malformed(self, path: str) -> None:
        with pytest.raises(PathResolutionError, match="Invalid path"):
            parse_path(path)


# ── Resolution ───────────────────────────────────────────────────────────────


class TestResolvePath:
    def test_nested_value(self) -> None:
        assert resolve_path(DOC, "$.data.items[0].ozone") == 310

    def test_structured_value(self) -> None:
        assert resolve_path(DOC, "$.data.items[0]") == {"ozone": 310}

    def test_root(self) -> None:
        assert resolve_path(DOC, "$") is DOC

    def test_null_leaf_is_a_value(self) -> None:
        assert resolve_path(DOC, "$.data.items[1].ozone") is None

    def test_array_root(self) -> None:
        assert resolve_path([{"name": "a"}, {"name": "b"}], "$[1].name") == "b"

    def test_missing_key(self) -> None:
        with pytest.raises(PathResolutionError, match="'missing' not found at '\\$.data'"):
            resolve_path(DOC, "$.data.missing")

    def test_property_of_null(self) -> None:
        with pytest.raises(PathResolutionError, match="of null"):
            resolve_path(DOC, "$.data.items[1].ozone.value")

    def test_index_out_of_range(self) -> None:
        with pytest.raises(PathResolutionError, match="out of range"):
            resolve_path(DOC, "$.data.items[5]")

    def test_index_on_non_list(self) -> None:
        with pytest.raises(PathResolutionError, match="Cannot index dict"):
            resolve_path(DOC, "$.data[0]")

    def test_key_on_list(self) -> None:
        with pytest.raises(PathResolutionError, match="of list"):
            resolve_path(DOC, "$.data.items.ozone")

    def test_evaluate_steps_is_pure(self) -> None:
        steps = parse_path("$.data.status")
        assert evaluate_steps(DOC, steps) == "ok"
        assert evaluate_steps({"data": {"status": "down"}}, steps) == "down"
