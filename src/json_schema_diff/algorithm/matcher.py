"""Minimum-cost alignment of anyOf branches.

Wraps scipy's ``linear_sum_assignment`` (Kuhn-Munkres).  The walker pads both
branch lists to a common length, so the matrix is always square and every row
receives exactly one column.
"""

from __future__ import annotations

import numpy as np
from scipy.optimize import linear_sum_assignment  # type: ignore[import-untyped]

__all__ = ["hungarian_match"]


def hungarian_match(cost_matrix: np.ndarray) -> list[int]:
    """Compute the optimal assignment of rows to columns.

    Args:
        cost_matrix: Square 2-D matrix of shape ``(n, n)`` with finite,
            non-negative costs.  ``cost_matrix[i, j]`` is the cost of pairing
            LHS branch ``i`` with RHS branch ``j``.

    Returns:
        A permutation ``pi`` as a list: row ``i`` is assigned column
        ``pi[i]``.  The sum of ``cost_matrix[i, pi[i]]`` is minimal; when
        several assignments tie, any one of them may be returned.

    Raises:
        ValueError: If the matrix is not square or contains non-finite
            values.
    """
    cost = np.asarray(cost_matrix)
    if cost.size == 0:
        return []

    if cost.ndim != 2 or cost.shape[0] != cost.shape[1]:
        msg = f"cost matrix must be square, got shape {cost.shape}"
        raise ValueError(msg)
    if not np.isfinite(cost).all():
        msg = "cost matrix must contain only finite values"
        raise ValueError(msg)

    row_ind, col_ind = linear_sum_assignment(cost)

    # row_ind is 0..n-1 in order for a square matrix
    permutation = [0] * cost.shape[0]
    for r, c in zip(row_ind.tolist(), col_ind.tolist(), strict=True):
        permutation[r] = c
    return permutation
