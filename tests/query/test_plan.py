"""Tests for the immutable Plan / Step / Comparison types.

Covers invariant validation in __post_init__, immutability, the WILDCARD
marker, Movement helpers and the stable debug serialization.
"""

from __future__ import annotations

import json
from dataclasses import FrozenInstanceError

import pytest

from jsonpath_prune.query.compiler import compile_query
from jsonpath_prune.query.plan import (
    OPERATORS,
    WILDCARD,
    Comparison,
    Movement,
    Plan,
    Step,
)

# ---------------------------------------------------------------------------
# Movement
# ---------------------------------------------------------------------------


class TestMovement:
    def test_has_exactly_four_members(self) -> None:
        assert {m.name for m in Movement} == {"ROOT", "CURRENT", "CHILDREN", "DESCENDANTS"}

    def test_anchors(self) -> None:
        assert Movement.ROOT.is_anchor
        assert Movement.CURRENT.is_anchor
        assert not Movement.CHILDREN.is_anchor
        assert not Movement.DESCENDANTS.is_anchor


# ---------------------------------------------------------------------------
# WILDCARD
# ---------------------------------------------------------------------------


class TestWildcard:
    def test_distinct_from_literal_star(self) -> None:
        assert WILDCARD != "*"

    def test_repr(self) -> None:
        assert repr(WILDCARD) == "WILDCARD"


# ---------------------------------------------------------------------------
# Comparison / Step / Plan validation
# ---------------------------------------------------------------------------


class TestComparison:
    @pytest.mark.parametrize("op", OPERATORS)
    def test_known_operators_accepted(self, op: str) -> None:
        assert Comparison(op, 1).op == op

    def test_unknown_operator_rejected(self) -> None:
        with pytest.raises(ValueError, match="op must be one of"):
            Comparison("=~", "x")


class TestStep:
    def test_defaults(self) -> None:
        step = Step(Movement.CHILDREN)
        assert step.key is None
        assert step.plan is None
        assert step.comparison is None
        assert step.negate is False

    def test_key_and_plan_are_exclusive(self) -> None:
        nested = Plan((Step(Movement.CURRENT), Step(Movement.CHILDREN, key="a")))
        with pytest.raises(ValueError, match="not both"):
            Step(Movement.CHILDREN, key="a", plan=nested)

    def test_plan_and_comparison_are_exclusive(self) -> None:
        nested = Plan((Step(Movement.CURRENT), Step(Movement.CHILDREN, key="a")))
        with pytest.raises(ValueError, match="cannot carry a comparison"):
            Step(Movement.CHILDREN, plan=nested, comparison=Comparison("==", 1))

    def test_bool_key_rejected(self) -> None:
        with pytest.raises(ValueError, match="key must be"):
            Step(Movement.CHILDREN, key=True)

    def test_frozen(self) -> None:
        step = Step(Movement.CHILDREN, key="a")
        with pytest.raises(FrozenInstanceError):
            step.key = "b"  # type: ignore[misc]


class TestPlan:
    def test_single_step_rejected(self) -> None:
        with pytest.raises(ValueError, match="at least one accessor"):
            Plan((Step(Movement.ROOT),))

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError):
            Plan(())

    def test_first_step_must_be_anchor(self) -> None:
        with pytest.raises(ValueError, match="first step"):
            Plan((Step(Movement.CHILDREN, key="a"), Step(Movement.CHILDREN, key="b")))

    def test_equal_plans_compare_equal(self) -> None:
        a = Plan((Step(Movement.ROOT), Step(Movement.CHILDREN, key="a")), end=3)
        b = Plan((Step(Movement.ROOT), Step(Movement.CHILDREN, key="a")), end=3)
        assert a == b


# ---------------------------------------------------------------------------
# Debug serialization
# ---------------------------------------------------------------------------


class TestSerialization:
    def test_simple_plan(self) -> None:
        plan = compile_query("$.a[0]")
        assert plan is not None
        assert plan.to_json() == (
            '{"steps":[{"mv":"ROOT"},{"mv":"CHILDREN","k":"a"},'
            '{"mv":"CHILDREN","k":0}],"end":6}'
        )

    def test_str_is_json(self) -> None:
        plan = compile_query("$..ads[*]")
        assert plan is not None
        assert str(plan) == plan.to_json()
        decoded = json.loads(str(plan))
        assert decoded["steps"][1] == {"mv": "DESCENDANTS", "k": "ads"}
        assert decoded["steps"][2] == {"mv": "CHILDREN", "k": "*"}

    def test_nested_plan_and_predicate(self) -> None:
        plan = compile_query('$.items[?(!@.kind=="ad")]')
        assert plan is not None
        decoded = json.loads(plan.to_json())
        nested = decoded["steps"][2]["steps"]
        assert nested[0] == {"mv": "CURRENT"}
        assert nested[1] == {"mv": "CHILDREN", "k": "kind", "op": "==", "rval": "ad", "not": True}

    def test_alternation_serialized_as_list(self) -> None:
        plan = Plan((Step(Movement.ROOT), Step(Movement.CHILDREN, key=("a", "b"))))
        assert json.loads(plan.to_json())["steps"][1]["k"] == ["a", "b"]

    def test_serialization_is_stable(self) -> None:
        query = "$..[?(@.a[-1]>=2)]"
        first = compile_query(query)
        second = compile_query(query)
        assert first is not None and second is not None
        assert first.to_json() == second.to_json()
