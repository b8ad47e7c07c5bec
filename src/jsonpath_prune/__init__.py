"""jsonpath-prune - locate and prune keys in JSON documents with JSONPath-like queries."""

from __future__ import annotations

from jsonpath_prune.api import find_paths, matches, prune, prune_jsonl
from jsonpath_prune.cache import PlanCache
from jsonpath_prune.config import PruneConfig
from jsonpath_prune.engine import JSONPathEngine
from jsonpath_prune.query import (
    Plan,
    QuerySyntaxError,
    Resolution,
    compile_or_raise,
    compile_query,
    evaluate,
    resolve_path,
)
from jsonpath_prune.result import PruneResult

__version__: str = "0.1.0"
__all__: list[str] = [
    "JSONPathEngine",
    "Plan",
    "PlanCache",
    "PruneConfig",
    "PruneResult",
    "QuerySyntaxError",
    "Resolution",
    "compile_or_raise",
    "compile_query",
    "evaluate",
    "find_paths",
    "matches",
    "prune",
    "prune_jsonl",
    "resolve_path",
]
