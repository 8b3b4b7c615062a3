"""Public API functions for json-schema-diff.

This module provides the three user-facing functions: diff, breaking_changes,
and is_compatible.  Each call creates a fresh SchemaDiffer to guarantee zero
global state mutation between calls.
"""

from __future__ import annotations

from typing import Any

from json_schema_diff.algorithm.config import DiffConfig
from json_schema_diff.changes import Change
from json_schema_diff.differ import SchemaDiffer

__all__ = ["breaking_changes", "diff", "is_compatible"]


def diff(
    lhs: Any,
    rhs: Any,
    config: DiffConfig | None = None,
) -> list[Change]:
    """Return the changes going from the ``lhs`` schema to the ``rhs`` schema.

    Args:
        lhs:    The old schema as a parsed JSON value (dict or bool).
        rhs:    The new schema as a parsed JSON value (dict or bool).
        config: Walker parameters.  Defaults to ``DiffConfig()`` when None.

    Returns:
        Changes in emission order.  Equal schemas yield an empty list.

    Raises:
        SchemaParseError: If either value is not a valid schema.
    """
    return SchemaDiffer(config=config).diff(lhs, rhs)


def breaking_changes(
    lhs: Any,
    rhs: Any,
    config: DiffConfig | None = None,
) -> list[Change]:
    """Return only the changes that may reject documents ``lhs`` accepted.

    Args:
        lhs:    The old schema.
        rhs:    The new schema.
        config: Walker parameters.  Defaults to ``DiffConfig()`` when None.

    Returns:
        The subsequence of ``diff(lhs, rhs)`` whose ``is_breaking()`` is True.
    """
    changes = diff(lhs, rhs, config=config)
    return [change for change in changes if change.is_breaking()]


def is_compatible(
    lhs: Any,
    rhs: Any,
    config: DiffConfig | None = None,
) -> bool:
    """Return True if moving from ``lhs`` to ``rhs`` has no breaking change.

    Args:
        lhs:    The old schema.
        rhs:    The new schema.
        config: Walker parameters.  Defaults to ``DiffConfig()`` when None.

    Returns:
        True when ``breaking_changes(lhs, rhs, config)`` is empty.
    """
    return not breaking_changes(lhs, rhs, config=config)
