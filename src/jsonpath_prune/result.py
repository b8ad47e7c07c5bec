"""PruneResult dataclass for JSONL pruning output."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["PruneResult"]


@dataclass(frozen=True, slots=True)
class PruneResult:
    """Result of a prune_jsonl() call.

    Attributes:
        text: The payload after pruning, lines joined with ``\\n``.
        lines_total: Number of lines read from the input.
        lines_pruned: Lines that had at least one key removed.
        keys_removed: Total number of keys removed across all lines.
    """

    text: str
    lines_total: int
    lines_pruned: int
    keys_removed: int

    @property
    def changed(self) -> bool:
        """True if any line was rewritten."""
        return self.lines_pruned > 0
