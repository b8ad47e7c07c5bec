"""Recursive-descent compiler for the JSONPath-like query dialect.

Grammar (informal)::

    query      := anchor step*
    anchor     := '$' | '@'                      (omitted -> implicit '@')
    step       := '.' ident | '..' ident | bracket
    bracket    := '[*]' | "['" name "']" | '[' ['-'] digits ']'
                | '[?(' ['!'] query ')]'
    trailing   := op json-literal ')]'           (ends the current query)
    op         := '==' | '!=' | '^=' | '$=' | '*=' | '<=' | '>=' | '<' | '>'
    ident      := [A-Za-z_][A-Za-z0-9_]* | '*'

The cursor is a plain integer offset.  Every parse helper takes the
offset it starts at and returns ``(result, next_offset)``; failure is
signalled by raising ``QuerySyntaxError``.  ``compile_query`` turns any
failure into ``None`` so that a bad query degrades to "match nothing".
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import replace

from jsonpath_prune.query.plan import WILDCARD, Comparison, Movement, Plan, Step, StepKey

__all__ = ["QuerySyntaxError", "compile_or_raise", "compile_query"]

logger = logging.getLogger(__name__)

_UNQUOTED_IDENTIFIER = re.compile(r"[A-Za-z_]\w*|\*", re.ASCII)
_TRAILING_COMPARISON = re.compile(r"([!=^$*]=|[<>]=?)(.+?)\)\]")
_INDEX = re.compile(r"\[(-?\d+)\]", re.ASCII)


class QuerySyntaxError(ValueError):
    """Raised when a query string does not parse.

    Attributes:
        query:    The full query string.
        position: Offset at which parsing failed.
        reason:   Short human-readable description.
    """

    def __init__(self, query: str, position: int, reason: str) -> None:
        self.query = query
        self.position = position
        self.reason = reason
        super().__init__(f"{reason} at offset {position} in {query!r}")


def compile_query(query: str) -> Plan | None:
    """Compile ``query`` into a Plan, or return None if it does not parse.

    Deterministic and side-effect free: the result can be cached keyed by
    the literal query string.
    """
    try:
        return compile_or_raise(query)
    except QuerySyntaxError as exc:
        logger.debug("Query failed to compile: %s", exc)
        return None


def compile_or_raise(query: str) -> Plan:
    """Compile ``query`` into a Plan.

    The whole string must be consumed; only trailing whitespace may remain.
    A trailing comparison at top level also consumes its ``)]`` terminator.

    Raises:
        QuerySyntaxError: If any part of the query fails to parse.
    """
    plan, compared = _parse_plan(query, 0)
    end = plan.end
    if compared and query.startswith(")]", end):
        end += 2
    if query[end:].strip():
        raise QuerySyntaxError(query, end, "unexpected trailing text")
    return replace(plan, end=end)


# ---------------------------------------------------------------------------
# Parse helpers
# ---------------------------------------------------------------------------


def _parse_plan(query: str, pos: int) -> tuple[Plan, bool]:
    """Parse a (sub)query starting at ``pos``.

    Returns the plan, whose ``end`` is the first unconsumed offset, and
    whether parsing stopped on a trailing comparison.
    """
    n = len(query)
    if pos >= n:
        raise QuerySyntaxError(query, pos, "empty query")

    anchor = query[pos]
    steps: list[Step] = [
        Step(Movement.ROOT if anchor == "$" else Movement.CURRENT)
    ]
    if anchor in "$@":
        pos += 1

    pending: Movement | None = None
    compared = False
    while pos < n:
        ch = query[pos]
        if ch.isspace():
            pos += 1
            continue

        if ch == ".":
            if pending is not None:
                raise QuerySyntaxError(query, pos, "unexpected '.'")
            if query.startswith("..", pos):
                pending = Movement.DESCENDANTS
                pos += 2
            else:
                pending = Movement.CHILDREN
                pos += 1
            continue

        if ch != "[":
            if pending is None:
                # No accessor here: a trailing comparison, or the end of
                # this query as far as the enclosing parse is concerned.
                steps[-1], pos, compared = _parse_comparison(query, pos, steps[-1])
                break
            key, pos = _parse_unquoted_identifier(query, pos)
            steps.append(Step(pending, key=key))
            pending = None
            continue

        step, pos = _parse_bracket(query, pos, pending or Movement.CHILDREN)
        steps.append(step)
        pending = None

    if pending is not None:
        raise QuerySyntaxError(query, pos, "dangling accessor")
    if len(steps) < 2:
        raise QuerySyntaxError(query, pos, "query selects nothing")
    return Plan(tuple(steps), end=pos), compared


def _parse_bracket(query: str, pos: int, movement: Movement) -> tuple[Step, int]:
    if query.startswith("[*]", pos):
        return Step(movement, key=WILDCARD), pos + 3

    if query.startswith("['", pos):
        name, pos = _parse_quoted_identifier(query, pos + 2)
        return Step(movement, key=name), pos

    if query.startswith("[?(", pos):
        pos += 3
        negate = query.startswith("!", pos)
        if negate:
            pos += 1
        nested, _ = _parse_plan(query, pos)
        if not query.startswith(")]", nested.end):
            raise QuerySyntaxError(query, nested.end, "expected ')]'")
        if negate:
            last = replace(nested.steps[-1], negate=True)
            nested = replace(nested, steps=(*nested.steps[:-1], last))
        return Step(movement, plan=nested), nested.end + 2

    match = _INDEX.match(query, pos)
    if match is not None:
        return Step(movement, key=int(match.group(1))), match.end()

    raise QuerySyntaxError(query, pos, "unrecognized bracket accessor")


def _parse_unquoted_identifier(query: str, pos: int) -> tuple[StepKey, int]:
    match = _UNQUOTED_IDENTIFIER.match(query, pos)
    if match is None:
        raise QuerySyntaxError(query, pos, "expected identifier")
    name = match.group(0)
    return (WILDCARD if name == "*" else name), match.end()


def _parse_quoted_identifier(query: str, pos: int) -> tuple[str, int]:
    r"""Decode a single-quoted key body starting just after ``['``.

    ``\'`` and ``\\`` decode to ``'`` and ``\``; a backslash before any
    other character is kept verbatim.  The closing quote must be followed
    by ``]``.
    """
    n = len(query)
    parts: list[str] = []
    start = pos
    while pos < n:
        ch = query[pos]
        if ch == "'":
            if not query.startswith("']", pos):
                raise QuerySyntaxError(query, pos, "expected ']' after quoted key")
            parts.append(query[start:pos])
            return "".join(parts), pos + 2
        if ch == "\\" and pos + 1 < n and query[pos + 1] in "'\\":
            parts.append(query[start:pos])
            start = pos + 1
            pos += 2
            continue
        pos += 1
    raise QuerySyntaxError(query, pos, "unterminated quoted key")


def _parse_comparison(query: str, pos: int, step: Step) -> tuple[Step, int, bool]:
    """Attach a trailing ``op literal)]`` comparison to ``step``.

    The returned offset points at the ``)]`` terminator, which belongs to
    the enclosing bracket.  A literal that is not valid JSON leaves the
    step without a comparison (existence check) but is still consumed.
    A bracket predicate has no value to compare, so an operator after one
    is a syntax error.
    """
    match = _TRAILING_COMPARISON.match(query, pos)
    if match is None:
        return step, pos, False
    if step.plan is not None:
        raise QuerySyntaxError(query, pos, "comparison after bracket predicate")
    op, literal = match.group(1), match.group(2)
    end = match.end(2)
    try:
        operand = json.loads(literal)
    except ValueError:
        logger.debug("Comparison literal %r is not JSON; using existence check", literal)
        return step, end, True
    return replace(step, comparison=Comparison(op, operand)), end, True
