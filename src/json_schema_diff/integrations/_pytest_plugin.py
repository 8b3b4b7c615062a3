"""pytest plugin for json-schema-diff.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from json_schema_diff import Change, DiffConfig, breaking_changes


def _describe(change: Change) -> str:
    payload = change.to_dict()
    del payload["path"], payload["change"]
    return f"  {change.path or '<root>'}: {change.change.kind} {payload}"


@pytest.fixture(scope="session")
def assert_schema_compatible() -> Any:
    """Fixture that returns a callable backward-compatibility asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to breaking_changes() which creates a fresh SchemaDiffer per call).

    Usage in tests::

        def test_widening(assert_schema_compatible):
            assert_schema_compatible({"type": "integer"}, {"type": "number"})

        def test_narrowing(assert_schema_compatible):
            with pytest.raises(AssertionError, match="TypeRemove"):
                assert_schema_compatible({"type": "number"}, {"type": "integer"})

    Returns:
        A callable ``_assert(old, new, config=None) -> None`` that raises
        ``AssertionError`` when moving from ``old`` to ``new`` is breaking.
    """

    def _assert(
        old: Any,
        new: Any,
        config: DiffConfig | None = None,
    ) -> None:
        """Assert that ``new`` accepts every document ``old`` accepts.

        Args:
            old:    The previously published schema.
            new:    The candidate schema.
            config: Optional DiffConfig for custom walker parameters.

        Raises:
            AssertionError: When at least one breaking change is found, with
                one line per breaking change (path, kind and payload).
        """
        breaking = breaking_changes(old, new, config=config)
        if breaking:
            lines = "\n".join(_describe(change) for change in breaking)
            raise AssertionError(
                f"Schema change is not backward compatible: "
                f"{len(breaking)} breaking change(s)\n{lines}"
            )

    return _assert
