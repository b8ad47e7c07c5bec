"""Plan, Step, and Comparison: the immutable output of the query compiler.

A plan is an ordered tuple of steps.  The first step is always an anchor
(``ROOT`` or ``CURRENT``); every following step moves the candidate set to
children or descendants, selecting by key, by wildcard, by index, or by a
nested plan used as an existence test.

Plans are frozen: once compiled they are safe to share between threads
and to evaluate against any number of documents.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum, StrEnum, auto
from typing import Any

__all__ = [
    "OPERATORS",
    "WILDCARD",
    "Comparison",
    "Movement",
    "Plan",
    "Step",
    "StepKey",
]

# Longest operators first so a prefix scan never stops at "<" for "<=".
OPERATORS: tuple[str, ...] = ("==", "!=", "^=", "$=", "*=", "<=", ">=", "<", ">")


class Movement(StrEnum):
    """How a step transforms the candidate set.

    - ROOT:        reset to the document root path ``()``
    - CURRENT:     reset to the path supplied at evaluation entry
    - CHILDREN:    expand each candidate to matching immediate children
    - DESCENDANTS: expand each candidate to matching descendants, any depth
    """

    ROOT = auto()
    CURRENT = auto()
    CHILDREN = auto()
    DESCENDANTS = auto()

    @property
    def is_anchor(self) -> bool:
        return self in (Movement.ROOT, Movement.CURRENT)


class _Wildcard(Enum):
    TOKEN = "*"

    def __repr__(self) -> str:
        return "WILDCARD"


# Distinct from the literal key "*" produced by ``['*']``.
WILDCARD = _Wildcard.TOKEN

StepKey = str | int | _Wildcard | tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Comparison:
    """Operator plus decoded right-hand JSON literal.

    Attributes:
        op:      One of ``OPERATORS``.
        operand: The literal, already decoded from its JSON text.
    """

    op: str
    operand: Any

    def __post_init__(self) -> None:
        if self.op not in OPERATORS:
            msg = f"op must be one of {OPERATORS}, got {self.op!r}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Step:
    """One unit of a compiled plan.

    Attributes:
        movement:   Anchor or expansion kind (see Movement).
        key:        Literal key, ``WILDCARD``, integer index (negative counts
                    from the end), or a tuple of literal keys (alternation).
        plan:       Nested plan used as an existence test.  Mutually
                    exclusive with ``key``.
        comparison: Optional operator/literal pair tested against the
                    value each produced path resolves to.
        negate:     Invert the outcome of the step's predicate.
    """

    movement: Movement
    key: StepKey | None = None
    plan: Plan | None = None
    comparison: Comparison | None = None
    negate: bool = False

    def __post_init__(self) -> None:
        if self.key is not None and self.plan is not None:
            msg = "a step selects by key or by nested plan, not both"
            raise ValueError(msg)
        if self.plan is not None and self.comparison is not None:
            msg = "a nested-plan step cannot carry a comparison"
            raise ValueError(msg)
        if isinstance(self.key, bool):
            msg = f"key must be str, int, WILDCARD or tuple, got {self.key!r}"
            raise ValueError(msg)

    def as_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"mv": self.movement.name}
        if self.key is WILDCARD:
            out["k"] = "*"
        elif isinstance(self.key, tuple):
            out["k"] = list(self.key)
        elif self.key is not None:
            out["k"] = self.key
        if self.plan is not None:
            out["steps"] = [step.as_dict() for step in self.plan.steps]
        if self.comparison is not None:
            out["op"] = self.comparison.op
            out["rval"] = self.comparison.operand
        if self.negate:
            out["not"] = True
        return out


@dataclass(frozen=True, slots=True)
class Plan:
    """An immutable compiled query.

    Attributes:
        steps: Anchor step followed by at least one accessor step.
        end:   Offset in the source query where parsing stopped.  A nested
               plan reports it back to the enclosing parse.
    """

    steps: tuple[Step, ...]
    end: int = 0

    def __post_init__(self) -> None:
        if len(self.steps) < 2:
            msg = f"a plan needs an anchor and at least one accessor, got {len(self.steps)} step(s)"
            raise ValueError(msg)
        if not self.steps[0].movement.is_anchor:
            msg = f"first step must be ROOT or CURRENT, got {self.steps[0].movement.name}"
            raise ValueError(msg)

    def as_dict(self) -> dict[str, Any]:
        return {"steps": [step.as_dict() for step in self.steps], "end": self.end}

    def to_json(self) -> str:
        """Stable compact JSON rendering, for logging and diffing only."""
        return json.dumps(self.as_dict(), separators=(",", ":"), default=repr)

    def __str__(self) -> str:
        return self.to_json()
