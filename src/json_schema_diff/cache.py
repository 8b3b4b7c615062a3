"""CostCache: LRU memo of anyOf trial-diff costs.

Aligning two anyOf lists costs one trial diff per branch pair, and nested
anyOf lists repeat the same pairs many times over.  ``CostCache`` remembers
the change count of each ``(lhs_branch, rhs_branch)`` pair.  Entries are keyed
by the branches' structural ``repr`` so equal subtrees share an entry.

A cache is only valid for the pair of root documents it was filled against
(references resolve differently elsewhere), so ``SchemaDiffer`` creates a
fresh one for every diff call.  LRU eviction is silent.

Example::

    cache = CostCache(max_size=256)
    cost = cache.get_or_compute(lhs_branch, rhs_branch, trial_diff)
    cost = cache.get_or_compute(lhs_branch, rhs_branch, trial_diff)  # no trial
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from cachetools import LRUCache

if TYPE_CHECKING:
    from json_schema_diff.schema.nodes import SchemaNode


class CostCache:
    """LRU-backed memo of trial-diff change counts.

    Args:
        max_size: Maximum number of branch pairs to remember.  Defaults to
            1024.  When exceeded, the least-recently-used entry is dropped.
    """

    def __init__(self, max_size: int = 1024) -> None:
        self._cache: LRUCache[tuple[str, str], int] = LRUCache(maxsize=max_size)
        self.hits = 0
        self.misses = 0

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

    def get_or_compute(
        self,
        lhs: SchemaNode,
        rhs: SchemaNode,
        compute: Callable[[SchemaNode, SchemaNode], int],
    ) -> int:
        """Return the cached cost of ``(lhs, rhs)``, computing it on a miss.

        Args:
            lhs: LHS anyOf branch.
            rhs: RHS anyOf branch.
            compute: Trial diff returning the number of changes for the pair.

        Returns:
            The change count for the pair.
        """
        key = (repr(lhs), repr(rhs))
        cached = self._cache.get(key)
        if cached is not None:
            self.hits += 1
            return cached

        self.misses += 1
        cost = compute(lhs, rhs)
        self._cache[key] = cost
        return cost
