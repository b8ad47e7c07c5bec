"""pytest plugin for jsonpath-prune.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

import pytest

from jsonpath_prune import compile_query, evaluate
from jsonpath_prune.query.values import Key


@pytest.fixture(scope="session")
def assert_jsonpath_matches() -> Any:
    """Fixture that returns a callable query-result asserter.

    The fixture is session-scoped because the returned callable is stateless
    (it compiles the query afresh on every call).

    Usage in tests::

        def test_ads_found(assert_jsonpath_matches):
            assert_jsonpath_matches("$..ad", {"feed": [{"ad": 1}]}, [("feed", 0, "ad")])

        def test_bad_query(assert_jsonpath_matches):
            with pytest.raises(AssertionError, match=r"does not compile"):
                assert_jsonpath_matches("$[", {}, [])

    Returns:
        A callable ``_assert(query, document, expected, ordered=True) -> None``
        that raises ``AssertionError`` when the matched paths differ from
        ``expected``.
    """

    def _assert(
        query: str,
        document: Any,
        expected: Iterable[Sequence[Key]],
        ordered: bool = True,
    ) -> None:
        """Assert that ``query`` selects exactly ``expected`` in ``document``.

        Args:
            query:    The query string under test.
            document: The structured value to evaluate against.
            expected: Expected paths, as any sequences of keys and indices.
            ordered:  When False, compare as multisets instead of sequences.

        Raises:
            AssertionError: When the query does not compile, or when the
                matched paths differ.
        """
        want = [tuple(path) for path in expected]
        plan = compile_query(query)
        if plan is None:
            raise AssertionError(f"query does not compile: {query!r}")
        got = evaluate(plan, document)
        same = got == want if ordered else sorted(map(repr, got)) == sorted(map(repr, want))
        if not same:
            raise AssertionError(
                f"JSONPath matches differ for {query!r}\n"
                f"  plan:     {plan}\n"
                f"  expected: {want}\n"
                f"  actual:   {got}"
            )

    return _assert
