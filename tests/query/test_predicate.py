"""Tests for comparison predicates.

Covers strict equality, kind-restricted ordering, textual operators with
their coercion rules, existence checks, negation, and the rule that a
missing key never satisfies a comparison.
"""

from __future__ import annotations

from typing import Any

import pytest

from jsonpath_prune.query.plan import Comparison, Movement, Step
from jsonpath_prune.query.predicate import check_predicate, compare, to_text
from jsonpath_prune.query.resolve import resolve_path

# ---------------------------------------------------------------------------
# compare()
# ---------------------------------------------------------------------------


class TestEquality:
    @pytest.mark.parametrize(
        ("value", "operand", "expected"),
        [
            (1, 1, True),
            (1, 1.0, True),
            ("ad", "ad", True),
            (None, None, True),
            (True, True, True),
            (True, 1, False),
            (0, False, False),
            ("1", 1, False),
            (None, 0, False),
            ({"a": 1}, {"a": 1}, False),
            ([1], [1], False),
        ],
    )
    def test_strict_equal(self, value: Any, operand: Any, expected: bool) -> None:
        assert compare("==", value, operand) is expected
        assert compare("!=", value, operand) is not expected

    def test_same_container_is_equal(self) -> None:
        shared = {"a": 1}
        assert compare("==", shared, shared)


class TestOrdering:
    @pytest.mark.parametrize(
        ("op", "value", "operand", "expected"),
        [
            (">=", 2, 2, True),
            (">", 2, 2, False),
            ("<", 1, 1.5, True),
            ("<=", 3, 2, False),
            (">", "b", "a", True),
            ("<", "2", 10, False),
            ("<", None, 1, False),
            (">", True, 0, False),
            ("<=", [1], [2], False),
        ],
    )
    def test_ordering(self, op: str, value: Any, operand: Any, expected: bool) -> None:
        assert compare(op, value, operand) is expected


class TestTextOperators:
    @pytest.mark.parametrize(
        ("op", "value", "operand", "expected"),
        [
            ("^=", "foobar", "foo", True),
            ("^=", "foobar", "bar", False),
            ("$=", "script.js", ".js", True),
            ("*=", "https://ads.example", "ads.", True),
            ("$=", 12.0, "2", True),
            ("*=", True, "ru", True),
            ("*=", None, "ul", True),
            ("^=", [1, 2], "[1", True),
            ("^=", 123, 1, True),
            ("*=", "abc", "", True),
        ],
    )
    def test_text_tests(self, op: str, value: Any, operand: Any, expected: bool) -> None:
        assert compare(op, value, operand) is expected

    def test_unknown_operator(self) -> None:
        with pytest.raises(ValueError, match="unknown comparison operator"):
            compare("=~", "a", "a")


class TestToText:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("x", "x"),
            (None, "null"),
            (True, "true"),
            (False, "false"),
            (3, "3"),
            (3.0, "3"),
            (1.5, "1.5"),
            (-2.5, "-2.5"),
            (-0.0, "0"),
            (100.0, "100"),
            (1e21, "1e+21"),
            (1.5e300, "1.5e+300"),
            (1.2345678901234568e20, "123456789012345680000"),
            (1e-6, "0.000001"),
            (1e-7, "1e-7"),
            (-2.5e-8, "-2.5e-8"),
            (float("nan"), "NaN"),
            (float("inf"), "Infinity"),
            (float("-inf"), "-Infinity"),
            ({"a": "é"}, '{"a":"é"}'),
            ([1, None], "[1,null]"),
        ],
    )
    def test_rendering(self, value: Any, expected: str) -> None:
        assert to_text(value) == expected


# ---------------------------------------------------------------------------
# check_predicate()
# ---------------------------------------------------------------------------


def _step(comparison: Comparison | None = None, negate: bool = False) -> Step:
    return Step(Movement.CHILDREN, key="v", comparison=comparison, negate=negate)


class TestCheckPredicate:
    def test_existence_owned(self) -> None:
        assert check_predicate(_step(), resolve_path({"v": 0}, ("v",)))

    def test_existence_missing(self) -> None:
        assert not check_predicate(_step(), resolve_path({}, ("v",)))

    def test_existence_negated(self) -> None:
        assert check_predicate(_step(negate=True), resolve_path({}, ("v",)))
        assert not check_predicate(_step(negate=True), resolve_path({"v": 1}, ("v",)))

    def test_comparison_match(self) -> None:
        step = _step(Comparison(">=", 2))
        assert check_predicate(step, resolve_path({"v": 3}, ("v",)))
        assert not check_predicate(step, resolve_path({"v": 1}, ("v",)))

    def test_comparison_negated(self) -> None:
        step = _step(Comparison(">=", 2), negate=True)
        assert check_predicate(step, resolve_path({"v": 1}, ("v",)))
        assert not check_predicate(step, resolve_path({"v": 3}, ("v",)))

    def test_comparison_on_missing_key_never_matches(self) -> None:
        assert not check_predicate(_step(Comparison("!=", 1)), resolve_path({}, ("v",)))
        assert not check_predicate(
            _step(Comparison("==", 1), negate=True), resolve_path({}, ("v",))
        )

    def test_null_value_compares(self) -> None:
        step = _step(Comparison("==", None))
        assert check_predicate(step, resolve_path({"v": None}, ("v",)))
