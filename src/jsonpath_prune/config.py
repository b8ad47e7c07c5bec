"""PruneConfig: settings for pruning JSON documents and JSONL payloads.

PruneConfig is a frozen (immutable) dataclass.  It governs how pruned
documents are re-serialized and how many compiled plans an engine keeps.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["PruneConfig"]


@dataclass(frozen=True, slots=True)
class PruneConfig:
    """Immutable configuration for JSONL pruning.

    Attributes:
        escape_slashes: When True, every ``/`` in a re-serialized line is
            written as ``\\/``.  Default True.
        ensure_ascii: When True, non-ASCII characters in re-serialized
            lines are written as ``\\uXXXX`` escapes.  Default False.
        max_plan_cache_size: Number of compiled plans a ``JSONPathEngine``
            keeps in its LRU cache (> 0).  Default 256.
    """

    escape_slashes: bool = True
    ensure_ascii: bool = False
    max_plan_cache_size: int = 256

    def __post_init__(self) -> None:
        if self.max_plan_cache_size <= 0:
            msg = f"max_plan_cache_size must be > 0, got {self.max_plan_cache_size}"
            raise ValueError(msg)
