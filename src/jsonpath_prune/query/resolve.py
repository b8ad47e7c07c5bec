"""Resolution of a path back to ``(container, key, value)``.

This is the single operation both the evaluator and external mutation
logic depend on: after the engine has located a path, callers resolve it
and remove ``key`` from ``container``.  Resolution itself never mutates
and never raises on a shape mismatch.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from jsonpath_prune.query.values import Key, Path, ValueKind, try_kind_of

__all__ = ["Resolution", "owns_key", "resolve_path"]


@dataclass(frozen=True, slots=True)
class Resolution:
    """Where a path lands inside a document.

    Attributes:
        container: Object or array holding the final key.  None for the
                   root path, or when an intermediate step is unreachable.
        key:       Final key of the path.  None for the root path.
        value:     Value stored at ``container[key]``, the root itself for
                   the root path, or None when absent.
    """

    container: Any
    key: Key | None
    value: Any

    @property
    def owned(self) -> bool:
        """True if ``container`` actually holds ``key``."""
        if self.key is None:
            return False
        return owns_key(self.container, self.key)


def owns_key(container: Any, key: Key) -> bool:
    """True for an object holding string ``key`` or an array covering index ``key``.

    Negative indices are not owned: resolve them against the length first.
    """
    kind = try_kind_of(container)
    if kind == ValueKind.OBJECT:
        return key in container
    if kind == ValueKind.ARRAY:
        return isinstance(key, int) and not isinstance(key, bool) and 0 <= key < len(container)
    return False


def _child(container: Any, key: Key) -> Any:
    return container[key] if owns_key(container, key) else None


def resolve_path(root: Any, path: Path) -> Resolution:
    """Walk ``root`` along ``path`` and report the final container/key/value.

    Args:
        root: The document the path was produced against.
        path: Sequence of keys and indices; ``()`` denotes the root.

    Returns:
        A ``Resolution``.  The root path yields ``Resolution(None, None, root)``.
    """
    if len(path) == 0:
        return Resolution(container=None, key=None, value=root)

    container = root
    for key in path[:-1]:
        container = _child(container, key)
        if container is None:
            break

    key = path[-1]
    return Resolution(container=container, key=key, value=_child(container, key))
