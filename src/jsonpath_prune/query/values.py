"""ValueKind StrEnum and shape dispatch for structured JSON values.

Every traversal point in the query engine asks the same question of a
node: is it an object, an array, or a scalar?  ``kind_of`` answers it in
one place so the evaluator, the descendant enumerator, and path
resolution all share a single, exhaustive dispatch.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import StrEnum, auto
from typing import Any

__all__ = [
    "JsonValue",
    "Key",
    "Path",
    "ValueKind",
    "is_container",
    "kind_of",
    "try_kind_of",
]

# Type alias for valid JSON values
JsonValue = dict[str, Any] | list[Any] | str | int | float | bool | None

# A path element: string object key or integer array index
Key = str | int

# Ordered route from the document root; () is the root itself
Path = tuple[Key, ...]


class ValueKind(StrEnum):
    """Enumeration of the six shapes a structured value can take.

    - OBJECT  -> "object"  : mapping with string keys
    - ARRAY   -> "array"   : integer-indexed sequence
    - STRING  -> "string"
    - NUMBER  -> "number"  : int or float (never bool)
    - BOOLEAN -> "boolean"
    - NULL    -> "null"
    """

    OBJECT = auto()
    ARRAY = auto()
    STRING = auto()
    NUMBER = auto()
    BOOLEAN = auto()
    NULL = auto()


def kind_of(value: Any) -> ValueKind:
    """Return the ValueKind of ``value``.

    bool MUST be checked before int: bool subclasses int in Python.
    Strings are checked before the generic Sequence test because ``str``
    is itself a Sequence.

    Raises:
        TypeError: If value is not a JSON-compatible type.
    """
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if value is None:
        return ValueKind.NULL
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, Mapping):
        return ValueKind.OBJECT
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return ValueKind.ARRAY
    msg = f"Unsupported JSON value type: {type(value)!r}"
    raise TypeError(msg)


def try_kind_of(value: Any) -> ValueKind | None:
    """Like kind_of, but None for values that are not JSON-compatible."""
    try:
        return kind_of(value)
    except TypeError:
        return None


def is_container(value: Any) -> bool:
    """True for objects and arrays, False for scalars and foreign types."""
    return try_kind_of(value) in (ValueKind.OBJECT, ValueKind.ARRAY)
