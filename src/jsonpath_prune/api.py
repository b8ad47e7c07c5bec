"""Public API functions for jsonpath-prune.

Stateless helpers that accept either a query string or an already
compiled Plan.  A query string is compiled afresh on every call, so
nothing is cached between calls; hold a ``JSONPathEngine`` to reuse
compiled plans.
"""

from __future__ import annotations

from typing import Any

from jsonpath_prune.config import PruneConfig
from jsonpath_prune.pruner import prune_jsonl as _prune_jsonl
from jsonpath_prune.pruner import prune_value
from jsonpath_prune.query.compiler import compile_query
from jsonpath_prune.query.evaluator import evaluate
from jsonpath_prune.query.plan import Plan
from jsonpath_prune.query.values import Path
from jsonpath_prune.result import PruneResult

__all__ = ["find_paths", "matches", "prune", "prune_jsonl"]


def _as_plan(query: str | Plan | None) -> Plan | None:
    return compile_query(query) if isinstance(query, str) else query


def find_paths(query: str | Plan | None, document: Any) -> list[Path]:
    """Return every path in ``document`` selected by ``query``.

    Args:
        query:    Query string or compiled Plan.  A query that does not
                  compile matches nothing.
        document: Any structured value (dict, list, str, int, float, bool,
                  None).  Never mutated.

    Returns:
        Matching paths as tuples of keys and indices, in discovery order.
    """
    return evaluate(_as_plan(query), document)


def matches(query: str | Plan | None, document: Any) -> bool:
    """Return True if ``query`` selects at least one path in ``document``."""
    return bool(find_paths(query, document))


def prune(query: str | Plan | None, document: Any) -> int:
    """Remove every key ``query`` selects in ``document``, in place.

    Returns:
        The number of keys removed.
    """
    return prune_value(_as_plan(query), document)


def prune_jsonl(
    query: str | Plan | None,
    text: str,
    config: PruneConfig | None = None,
) -> PruneResult:
    """Prune each JSON line of ``text`` and return the rewritten payload.

    Args:
        query:  Query string or compiled Plan.
        text:   The JSONL payload.
        config: Serialization settings.  Defaults to ``PruneConfig()``.

    Returns:
        A ``PruneResult``; ``result.text`` equals ``text`` line for line
        when nothing matched.
    """
    return _prune_jsonl(_as_plan(query), text, config)
