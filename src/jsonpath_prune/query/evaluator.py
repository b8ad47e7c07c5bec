"""Path evaluator: runs a compiled Plan against a document.

Evaluation keeps a *candidate set* of paths.  Anchor steps reset it;
``CHILDREN`` and ``DESCENDANTS`` steps replace it with the matching
extensions of every candidate.  The document is only ever read: shape
mismatches (indexing a scalar, a missing key, a null node) prune the
offending branch and nothing else.

Results keep discovery order and are not deduplicated.
"""

from __future__ import annotations

from typing import Any

from jsonpath_prune.query.descendants import iter_descendants
from jsonpath_prune.query.plan import WILDCARD, Movement, Plan, Step
from jsonpath_prune.query.predicate import check_predicate
from jsonpath_prune.query.resolve import owns_key, resolve_path
from jsonpath_prune.query.values import Path, ValueKind, try_kind_of

__all__ = ["evaluate"]


def evaluate(plan: Plan | None, root: Any, current: Path = ()) -> list[Path]:
    """Return every path in ``root`` selected by ``plan``.

    Args:
        plan:    A compiled plan, or None for a query that failed to compile.
        root:    The document.  Never mutated.
        current: Path the ``@`` anchor binds to.  Defaults to the root.

    Returns:
        Matching paths as tuples, in discovery order.  Empty when ``plan``
        is None or nothing matches.
    """
    if plan is None:
        return []
    return _Evaluator(root).run(plan, current)


class _Evaluator:
    """Holds the document for the duration of one ``evaluate`` call."""

    def __init__(self, root: Any) -> None:
        self._root = root

    def run(self, plan: Plan, current: Path) -> list[Path]:
        candidates: list[Path] = []
        for step in plan.steps:
            if step.movement == Movement.ROOT:
                candidates = [()]
            elif step.movement == Movement.CURRENT:
                candidates = [current]
            else:
                candidates = self._expand(candidates, step)
        return candidates

    # ------------------------------------------------------------------
    # Step expansion
    # ------------------------------------------------------------------

    def _expand(self, candidates: list[Path], step: Step) -> list[Path]:
        out: list[Path] = []
        recursive = step.movement == Movement.DESCENDANTS
        for path in candidates:
            value = resolve_path(self._root, path).value
            if value is None:
                continue
            if step.plan is not None:
                self._expand_nested(step.plan, step.negate, path, value, recursive, out)
            elif step.key is WILDCARD:
                for desc in iter_descendants(value, recursive):
                    self._emit(step, (*path, *desc.path), out)
            elif isinstance(step.key, int):
                self._expand_index(step, path, value, step.key, recursive, out)
            elif step.key is not None:
                names = step.key if isinstance(step.key, tuple) else (step.key,)
                self._expand_names(step, path, value, names, recursive, out)
        return out

    def _expand_names(
        self,
        step: Step,
        path: Path,
        value: Any,
        names: tuple[str, ...],
        recursive: bool,
        out: list[Path],
    ) -> None:
        for name in names:
            self._emit(step, (*path, name), out)
        if not recursive:
            return
        for desc in iter_descendants(value, True):
            node = desc.container[desc.key]
            for name in names:
                if owns_key(node, name):
                    self._emit(step, (*path, *desc.path, name), out)

    def _expand_index(
        self,
        step: Step,
        path: Path,
        value: Any,
        index: int,
        recursive: bool,
        out: list[Path],
    ) -> None:
        resolved = _resolve_index(value, index)
        if resolved is not None:
            self._emit(step, (*path, resolved), out)
        if not recursive:
            return
        for desc in iter_descendants(value, True):
            resolved = _resolve_index(desc.container[desc.key], index)
            if resolved is not None:
                self._emit(step, (*path, *desc.path, resolved), out)

    def _expand_nested(
        self,
        nested: Plan,
        negate: bool,
        path: Path,
        value: Any,
        recursive: bool,
        out: list[Path],
    ) -> None:
        # The nested plan is an existence test: a candidate survives
        # (unextended) when the sub-query anchored at it matches anything,
        # or matches nothing when the step is negated.
        # Arrays are never tested themselves; their elements are.
        if try_kind_of(value) != ValueKind.ARRAY:
            if bool(self.run(nested, path)) != negate:
                out.append(path)
            if not recursive:
                return
        for desc in iter_descendants(value, recursive):
            if try_kind_of(desc.container[desc.key]) == ValueKind.ARRAY:
                continue
            candidate = (*path, *desc.path)
            if bool(self.run(nested, candidate)) != negate:
                out.append(candidate)

    def _emit(self, step: Step, path: Path, out: list[Path]) -> None:
        if check_predicate(step, resolve_path(self._root, path)):
            out.append(path)


def _resolve_index(value: Any, index: int) -> int | None:
    """Map a possibly negative index onto ``value`` if it is an array."""
    if try_kind_of(value) != ValueKind.ARRAY:
        return None
    resolved = index if index >= 0 else len(value) + index
    if 0 <= resolved < len(value):
        return resolved
    return None
