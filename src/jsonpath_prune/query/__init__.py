"""Query subpackage: compile JSONPath-like queries and evaluate them.

Re-exports the public API for the query engine:
- compile_query / compile_or_raise: query string -> immutable Plan
- evaluate: Plan + document -> list of matching paths
- resolve_path: path -> (container, key, value)
- iter_descendants: lazy pre-order walk used by the evaluator
- Plan, Step, Comparison, Movement, WILDCARD: compiled plan types
- ValueKind, kind_of: shape dispatch over structured values
"""

from jsonpath_prune.query.compiler import QuerySyntaxError, compile_or_raise, compile_query
from jsonpath_prune.query.descendants import Descendant, iter_descendants
from jsonpath_prune.query.evaluator import evaluate
from jsonpath_prune.query.plan import WILDCARD, Comparison, Movement, Plan, Step
from jsonpath_prune.query.predicate import check_predicate
from jsonpath_prune.query.resolve import Resolution, resolve_path
from jsonpath_prune.query.values import Key, Path, ValueKind, kind_of

__all__ = [
    "WILDCARD",
    "Comparison",
    "Descendant",
    "Key",
    "Movement",
    "Path",
    "Plan",
    "QuerySyntaxError",
    "Resolution",
    "Step",
    "ValueKind",
    "check_predicate",
    "compile_or_raise",
    "compile_query",
    "evaluate",
    "iter_descendants",
    "kind_of",
    "resolve_path",
]
