"""Lazy pre-order enumeration of the children or descendants of a value.

The walk is driven by an explicit stack of ``(container, key-iterator)``
frames instead of recursion, so deeply nested documents do not hit the
interpreter's recursion limit.  Each call to ``iter_descendants`` owns its
own stack: generators are never shared between evaluations.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, NamedTuple

from jsonpath_prune.query.values import Key, Path, ValueKind, try_kind_of

__all__ = ["Descendant", "iter_descendants"]

_EXHAUSTED: Any = object()


class Descendant(NamedTuple):
    """One enumerated node.

    Attributes:
        container: The object or array holding the node.
        key:       Key or index of the node inside ``container``.
        path:      Path of the node relative to the enumeration start.
    """

    container: Any
    key: Key
    path: Path


def _child_keys(value: Any) -> Iterator[Key] | None:
    kind = try_kind_of(value)
    if kind == ValueKind.OBJECT:
        return iter(value.keys())
    if kind == ValueKind.ARRAY:
        return iter(range(len(value)))
    return None


def iter_descendants(value: Any, recursive: bool) -> Iterator[Descendant]:
    """Yield the children of ``value``, or all its descendants if ``recursive``.

    Order is pre-order: a node is yielded before any of its own
    descendants.  Object keys follow the mapping's own iteration order;
    array elements follow index order.  Scalars have no children.

    Args:
        value:     The node to enumerate below.  It is not itself yielded.
        recursive: False for immediate children only; True for every
                   descendant at any depth.

    Yields:
        ``Descendant`` triples.
    """
    keys = _child_keys(value)
    if keys is None:
        return

    stack: list[tuple[Any, Iterator[Key]]] = [(value, keys)]
    prefix: list[Key] = []
    while stack:
        container, cursor = stack[-1]
        key = next(cursor, _EXHAUSTED)
        if key is _EXHAUSTED:
            stack.pop()
            if prefix:
                prefix.pop()
            continue

        path = (*prefix, key)
        yield Descendant(container, key, path)

        if recursive:
            child_keys = _child_keys(container[key])
            if child_keys is not None:
                stack.append((container[key], child_keys))
                prefix.append(key)

