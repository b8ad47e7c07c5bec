"""JSONPathEngine: orchestrator that wires PlanCache + evaluator + pruner.

This is the layer long-lived callers hold on to.  Queries are compiled
once per distinct string and served from an LRU cache afterwards;
documents are passed per call and never retained.

Architecture:
- compile() looks the query up in the engine's own ``PlanCache``.
- find() evaluates a (cached) plan against a document.
- prune() / prune_jsonl() hand the matched paths to the pruner, which is
  the only component that mutates documents.
"""

from __future__ import annotations

from typing import Any

from jsonpath_prune.cache import PlanCache
from jsonpath_prune.config import PruneConfig
from jsonpath_prune.pruner import prune_jsonl, prune_value
from jsonpath_prune.query.evaluator import evaluate
from jsonpath_prune.query.plan import Plan
from jsonpath_prune.query.resolve import Resolution, resolve_path
from jsonpath_prune.query.values import Path
from jsonpath_prune.result import PruneResult

__all__ = ["JSONPathEngine"]


class JSONPathEngine:
    """Compile-once, evaluate-many front end for the query engine.

    Two separate ``JSONPathEngine`` instances never share cache state.

    Example::

        from jsonpath_prune.engine import JSONPathEngine

        engine = JSONPathEngine()
        engine.find("$..ad", {"feed": [{"ad": 1}, {"post": 2}]})
        # [("feed", 0, "ad")]
    """

    def __init__(self, config: PruneConfig | None = None) -> None:
        """Initialise the engine.

        Args:
            config: Serialization and cache settings.  Defaults to
                ``PruneConfig()``.
        """
        self._config: PruneConfig = config if config is not None else PruneConfig()
        self._plans = PlanCache(max_size=self._config.max_plan_cache_size)

    @property
    def config(self) -> PruneConfig:
        return self._config

    @property
    def plans(self) -> PlanCache:
        return self._plans

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compile(self, query: str) -> Plan | None:
        """Return the cached plan for ``query`` (None if it does not compile)."""
        return self._plans.get(query)

    def find(self, query: str | Plan | None, document: Any) -> list[Path]:
        """Return every path in ``document`` matched by ``query``."""
        return evaluate(self._plan_for(query), document)

    def resolve(self, document: Any, path: Path) -> Resolution:
        """Resolve ``path`` inside ``document`` to its container, key and value."""
        return resolve_path(document, path)

    def prune(self, query: str | Plan | None, document: Any) -> int:
        """Remove every key ``query`` matches in ``document``; return the count."""
        return prune_value(self._plan_for(query), document)

    def prune_jsonl(self, query: str | Plan | None, text: str) -> PruneResult:
        """Prune each line of a JSONL payload using the engine's config."""
        return prune_jsonl(self._plan_for(query), text, self._config)

    def _plan_for(self, query: str | Plan | None) -> Plan | None:
        if isinstance(query, str):
            return self._plans.get(query)
        return query
