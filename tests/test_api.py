"""Tests for the stateless public API functions in jsonpath_prune.api."""

from __future__ import annotations

from typing import Any

from jsonpath_prune.api import find_paths, matches, prune, prune_jsonl
from jsonpath_prune.config import PruneConfig
from jsonpath_prune.query.compiler import compile_query


class TestFindPaths:
    def test_query_string(self) -> None:
        assert find_paths("$.a[*]", {"a": [1, 2]}) == [("a", 0), ("a", 1)]

    def test_compiled_plan(self) -> None:
        assert find_paths(compile_query("$.a"), {"a": 1}) == [("a",)]

    def test_bad_query(self) -> None:
        assert find_paths("$..", {"a": 1}) == []

    def test_none(self) -> None:
        assert find_paths(None, {"a": 1}) == []


class TestMatches:
    def test_true(self) -> None:
        assert matches("$..ad", {"x": {"ad": 0}})

    def test_false(self) -> None:
        assert not matches("$..ad", {"x": {"ads": 0}})


class TestPrune:
    def test_in_place(self) -> None:
        doc: dict[str, Any] = {"x": {"ad": 0}, "y": 1}
        assert prune("$..ad", doc) == 1
        assert doc == {"x": {}, "y": 1}

    def test_bad_query_leaves_document(self) -> None:
        doc = {"a": 1}
        assert prune("$[", doc) == 0
        assert doc == {"a": 1}


class TestPruneJsonl:
    def test_default_config(self) -> None:
        result = prune_jsonl("$.ad", '{"u":"/","ad":1}')
        assert result.text == '{"u":"\\/"}'

    def test_custom_config(self) -> None:
        result = prune_jsonl("$.ad", '{"u":"/","ad":1}', PruneConfig(escape_slashes=False))
        assert result.text == '{"u":"/"}'
