"""Pruning: delete every key a query matches, in documents or JSONL payloads.

The query engine only locates paths.  This module is its caller: it
resolves each matched path and removes the key from its container.

Removal rules:
- object member: the key is deleted;
- array element: the slot is set to ``None`` so that positions of later
  elements, and therefore the remaining matched paths, stay valid (the
  element serializes as ``null``, like a hole in a JavaScript array);
- the root path, and paths made unreachable by an earlier removal, are
  skipped.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from jsonpath_prune.config import PruneConfig
from jsonpath_prune.query.evaluator import evaluate
from jsonpath_prune.query.plan import Plan
from jsonpath_prune.query.resolve import resolve_path
from jsonpath_prune.query.values import Path, ValueKind, is_container, try_kind_of
from jsonpath_prune.result import PruneResult

__all__ = ["prune_jsonl", "prune_value", "remove_paths"]

logger = logging.getLogger(__name__)

_LINE_BREAKS = re.compile(r"\n+")


def prune_value(plan: Plan | None, document: Any) -> int:
    """Remove every key ``plan`` matches in ``document``, in place.

    Returns:
        The number of keys removed.  0 when ``plan`` is None.
    """
    return remove_paths(document, evaluate(plan, document))


def remove_paths(document: Any, paths: list[Path]) -> int:
    """Remove the key each path points at from its container, in place.

    A path listed more than once is removed once.

    Returns:
        The number of removals performed.
    """
    removed = 0
    seen: set[Path] = set()
    for path in paths:
        if not path or path in seen:
            continue
        seen.add(path)
        resolution = resolve_path(document, path)
        if not resolution.owned:
            continue
        if try_kind_of(resolution.container) == ValueKind.OBJECT:
            del resolution.container[resolution.key]
        else:
            resolution.container[resolution.key] = None
        removed += 1
    return removed


def prune_jsonl(
    plan: Plan | None,
    text: str,
    config: PruneConfig | None = None,
) -> PruneResult:
    """Prune each JSON line of a JSONL payload.

    The payload is split on runs of newlines.  A line that is not JSON, or
    whose JSON is a scalar, is kept verbatim; so is a line the query does
    not match.  Matched lines are pruned and re-serialized compactly.

    Args:
        plan:   Compiled query.  None leaves the payload untouched.
        text:   The JSONL payload.
        config: Serialization settings.  Defaults to ``PruneConfig()``.

    Returns:
        A ``PruneResult`` with the rewritten text and counters.
    """
    cfg = config if config is not None else PruneConfig()
    lines_before = _LINE_BREAKS.split(text)
    lines_after: list[str] = []
    lines_pruned = 0
    keys_removed = 0

    for line in lines_before:
        try:
            document = json.loads(line)
        except ValueError:
            lines_after.append(line)
            continue
        if not is_container(document):
            lines_after.append(line)
            continue
        paths = evaluate(plan, document)
        if not paths:
            lines_after.append(line)
            continue
        keys_removed += remove_paths(document, paths)
        lines_pruned += 1
        lines_after.append(_serialize(document, cfg))

    if lines_pruned:
        logger.info(
            "Pruned %d of %d lines (%d keys removed)",
            lines_pruned,
            len(lines_before),
            keys_removed,
        )
    return PruneResult(
        text="\n".join(lines_after),
        lines_total=len(lines_before),
        lines_pruned=lines_pruned,
        keys_removed=keys_removed,
    )


def _serialize(document: Any, config: PruneConfig) -> str:
    out = json.dumps(document, separators=(",", ":"), ensure_ascii=config.ensure_ascii)
    if config.escape_slashes:
        out = out.replace("/", "\\/")
    return out
