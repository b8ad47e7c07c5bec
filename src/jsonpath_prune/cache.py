"""PlanCache: LRU cache of compiled plans keyed by the literal query string.

Compiling is a pure function of the query text, so a compiled plan (or
the knowledge that the query does not compile) can be reused for every
document the query is run against.  Failures are cached too: a bad query
is parsed once, then served as ``None`` from memory.

Each ``PlanCache`` instance maintains its own ``LRUCache``; there is no
class-level shared state, so two separate instances never interfere with
each other.

Example::

    from jsonpath_prune.cache import PlanCache

    cache = PlanCache(max_size=128)
    plan = cache.get("$..ads")        # compiled
    plan_again = cache.get("$..ads")  # served from memory
"""

from __future__ import annotations

import logging

from cachetools import LRUCache

from jsonpath_prune.query.compiler import compile_query
from jsonpath_prune.query.plan import Plan

__all__ = ["PlanCache"]

logger = logging.getLogger(__name__)


class PlanCache:
    """LRU-backed memo of ``compile_query`` results.

    Args:
        max_size: Maximum number of query strings to hold.  Defaults to 256.
            When exceeded, the least-recently-used entry is silently evicted.
    """

    def __init__(self, max_size: int = 256) -> None:
        if max_size <= 0:
            msg = f"max_size must be > 0, got {max_size}"
            raise ValueError(msg)
        self._cache: LRUCache[str, Plan | None] = LRUCache(maxsize=max_size)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, query: str) -> Plan | None:
        """Return the compiled plan for ``query``, compiling on first use.

        Returns None, from cache as well, when ``query`` does not compile.
        """
        if query in self._cache:
            return self._cache[query]
        logger.debug("Plan cache miss for %r", query)
        plan = compile_query(query)
        self._cache[query] = plan
        return plan

    def __contains__(self, query: object) -> bool:
        return query in self._cache

    def clear(self) -> None:
        """Drop every cached plan."""
        self._cache.clear()
