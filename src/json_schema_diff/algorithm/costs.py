"""Cost model for anyOf branch alignment.

The cost of pairing LHS branch ``i`` with RHS branch ``j`` is the number of
change records a diff of the two branches would emit.  ``CountingSink``
receives those records during a trial diff and keeps only the count.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import numpy as np

from json_schema_diff.schema.nodes import SchemaNode

if TYPE_CHECKING:
    from json_schema_diff.changes import Change

__all__ = ["CountingSink", "build_cost_matrix", "pad_branches"]


class CountingSink:
    """A ChangeSink that discards changes and counts them."""

    __slots__ = ("count",)

    def __init__(self) -> None:
        self.count = 0

    def __call__(self, change: Change) -> None:
        self.count += 1


def pad_branches(
    lhs: Sequence[SchemaNode], rhs: Sequence[SchemaNode]
) -> tuple[list[SchemaNode], list[SchemaNode]]:
    """Pad the shorter branch list with ``false`` schemas to a common length."""
    size = max(len(lhs), len(rhs))
    padded_lhs = list(lhs) + [SchemaNode.false()] * (size - len(lhs))
    padded_rhs = list(rhs) + [SchemaNode.false()] * (size - len(rhs))
    return padded_lhs, padded_rhs


def build_cost_matrix(
    lhs: Sequence[SchemaNode],
    rhs: Sequence[SchemaNode],
    cost: Callable[[SchemaNode, SchemaNode], int],
) -> np.ndarray:
    """Build the ``(len(lhs), len(rhs))`` integer matrix of pairing costs.

    Args:
        lhs: LHS branches (already padded).
        rhs: RHS branches (already padded).
        cost: Returns the trial-diff change count for one pair.

    Returns:
        An ``int64`` matrix where cell ``(i, j)`` is ``cost(lhs[i], rhs[j])``.
    """
    matrix = np.zeros((len(lhs), len(rhs)), dtype=np.int64)
    for i, left in enumerate(lhs):
        for j, right in enumerate(rhs):
            matrix[i, j] = cost(left, right)
    return matrix
