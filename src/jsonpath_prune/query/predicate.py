"""Comparison predicates attached to query steps.

A step's predicate decides whether a candidate path survives:

- no comparison: the path survives iff its container owns the key
  (existence check);
- with a comparison: the container must own the key, then the value is
  compared against the decoded literal.

The outcome is finally inverted when the step is negated.  A missing key
under a comparison never matches, negated or not.
"""

from __future__ import annotations

import json
import math
import operator
from collections.abc import Callable
from decimal import Decimal
from typing import Any

from jsonpath_prune.query.plan import Step
from jsonpath_prune.query.resolve import Resolution
from jsonpath_prune.query.values import ValueKind, try_kind_of

__all__ = ["check_predicate", "compare", "to_text"]

_ORDERING: dict[str, Callable[[Any, Any], bool]] = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}

_TEXT_TESTS: dict[str, Callable[[str, str], bool]] = {
    "^=": str.startswith,
    "$=": str.endswith,
    "*=": operator.contains,
}


def check_predicate(step: Step, resolution: Resolution) -> bool:
    """Return True if the resolved path satisfies ``step``'s predicate."""
    owned = resolution.owned
    if step.comparison is None:
        outcome = owned
    elif not owned:
        return False
    else:
        outcome = compare(step.comparison.op, resolution.value, step.comparison.operand)
    return outcome != step.negate


def compare(op: str, value: Any, operand: Any) -> bool:
    """Apply comparison operator ``op`` to ``value`` and ``operand``.

    ``==``/``!=`` are strict: kinds must agree, and objects or arrays are
    only equal to themselves.  Ordering is defined between two numbers or
    two strings and is False otherwise.  ``^=``, ``$=`` and ``*=`` compare
    the textual forms of both sides (see ``to_text``).

    Raises:
        ValueError: If ``op`` is not a known operator.
    """
    if op == "==":
        return _strict_equal(value, operand)
    if op == "!=":
        return not _strict_equal(value, operand)
    if op in _ORDERING:
        kind = try_kind_of(value)
        if kind not in (ValueKind.NUMBER, ValueKind.STRING) or kind != try_kind_of(operand):
            return False
        return _ORDERING[op](value, operand)
    if op in _TEXT_TESTS:
        return _TEXT_TESTS[op](to_text(value), to_text(operand))
    msg = f"unknown comparison operator {op!r}"
    raise ValueError(msg)


def to_text(value: Any) -> str:
    """Render ``value`` the way a JSON-native runtime stringifies it.

    ``None`` -> "null", booleans -> "true"/"false", floats use the shortest
    round-trip digits (integral floats drop their fractional part, very
    large or small magnitudes use exponent form such as ``1e+21``), objects
    and arrays render as compact JSON.
    """
    kind = try_kind_of(value)
    if kind == ValueKind.STRING:
        return value
    if kind == ValueKind.NULL:
        return "null"
    if kind == ValueKind.BOOLEAN:
        return "true" if value else "false"
    if kind == ValueKind.NUMBER:
        if isinstance(value, int):
            return str(value)
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return _float_text(value)
    if kind in (ValueKind.OBJECT, ValueKind.ARRAY):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
    return str(value)


def _float_text(value: float) -> str:
    # Shortest round-trip digits, laid out as ECMAScript Number::toString
    # does: plain notation for 1e-6 <= |x| < 1e21, exponent form otherwise.
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(map(str, digit_tuple))
    k = len(digits)
    n = int(exponent) + k
    if k <= n <= 21:
        body = digits + "0" * (n - k)
    elif 0 < n <= 21:
        body = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        body = "0." + "0" * -n + digits
    else:
        mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
        body = f"{mantissa}e{n - 1:+d}"
    return sign + body


def _strict_equal(a: Any, b: Any) -> bool:
    kind = try_kind_of(a)
    if kind is None or kind != try_kind_of(b):
        return False
    if kind in (ValueKind.OBJECT, ValueKind.ARRAY):
        return a is b
    return bool(a == b)
