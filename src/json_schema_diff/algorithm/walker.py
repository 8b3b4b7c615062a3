"""DiffWalker: recursive structural diff of two schema trees.

At each pair of nodes the walker runs a fixed sequence of facet comparisons
and emits ``Change`` records to its sink in that order:

1. resolve ``$ref`` on both sides against their own roots;
2. split multi-typed nodes into ``anyOf`` (``split_types``);
3. anyOf: align branches by minimum total change count, then recurse;
4. type: TypeRemove for LHS-only kinds, then TypeAdd for RHS-only kinds;
5. const (after ``normalize_const``);
6. unless a side was split: properties, range, additionalProperties, items,
   required, string facets.

Branch alignment costs come from trial diffs: a second walker sharing the
resolvers, config and cost cache, emitting into a ``CountingSink``.

Example::

    changes = []
    walker = DiffWalker.for_roots(changes.append, lhs_root, rhs_root)
    walker.diff("", lhs_root, rhs_root)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from json_schema_diff.algorithm.config import DiffConfig
from json_schema_diff.algorithm.costs import (
    CountingSink,
    build_cost_matrix,
    pad_branches,
)
from json_schema_diff.algorithm.matcher import hungarian_match
from json_schema_diff.cache import CostCache
from json_schema_diff.changes import (
    ArrayToTuple,
    Change,
    ChangeKind,
    ConstAdd,
    ConstRemove,
    FormatAdd,
    FormatChange,
    FormatRemove,
    MaxLengthAdd,
    MaxLengthChange,
    MaxLengthRemove,
    MinLengthAdd,
    MinLengthChange,
    MinLengthRemove,
    PatternAdd,
    PatternChange,
    PatternRemove,
    PropertyAdd,
    PropertyRemove,
    Range,
    RangeAdd,
    RangeBound,
    RangeChange,
    RangeRemove,
    RequiredAdd,
    RequiredRemove,
    TupleChange,
    TupleToArray,
    TypeAdd,
    TypeRemove,
)
from json_schema_diff.errors import DiffDepthError
from json_schema_diff.schema.nodes import JsonSchemaType, NumberFacet, SchemaNode
from json_schema_diff.schema.normalizer import normalize_const, split_types
from json_schema_diff.schema.resolver import Resolver
from json_schema_diff.schema.types import effective_type, json_equal

if TYPE_CHECKING:
    from json_schema_diff.protocols import ChangeSink

__all__ = ["DiffWalker"]

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

_BOUNDS: tuple[tuple[RangeBound, str], ...] = (
    (RangeBound.MINIMUM, "minimum"),
    (RangeBound.MAXIMUM, "maximum"),
    (RangeBound.EXCLUSIVE_MINIMUM, "exclusive_minimum"),
    (RangeBound.EXCLUSIVE_MAXIMUM, "exclusive_maximum"),
)


class DiffWalker:
    """Walks two schema trees in lockstep and emits changes to a sink.

    A walker is bound to one pair of root documents (through its resolvers)
    and holds no state between ``diff`` calls other than the trial-cost
    cache, whose entries are only valid for those roots.

    Args:
        sink: Receives each change, synchronously, in emission order.
        lhs_resolver: Resolves ``$ref`` in the old schema.
        rhs_resolver: Resolves ``$ref`` in the new schema.
        config: Walker parameters.  Defaults to ``DiffConfig()``.
        cost_cache: Memo of anyOf trial costs.  A fresh cache is created
            when None.
        base_depth: Depth of the ``diff`` entry point.  Trial walkers start
            at the depth of the anyOf they are pricing, so the depth guard
            covers trial diffs too.
    """

    def __init__(
        self,
        sink: ChangeSink,
        lhs_resolver: Resolver,
        rhs_resolver: Resolver,
        config: DiffConfig | None = None,
        cost_cache: CostCache | None = None,
        base_depth: int = 0,
    ) -> None:
        self._sink = sink
        self._lhs_resolver = lhs_resolver
        self._rhs_resolver = rhs_resolver
        self._config = config if config is not None else DiffConfig()
        self._cost_cache = cost_cache if cost_cache is not None else CostCache()
        self._base_depth = base_depth

    @classmethod
    def for_roots(
        cls,
        sink: ChangeSink,
        lhs_root: SchemaNode,
        rhs_root: SchemaNode,
        config: DiffConfig | None = None,
        cost_cache: CostCache | None = None,
    ) -> DiffWalker:
        """Create a walker resolving references against the two roots."""
        return cls(
            sink,
            Resolver.for_schema(lhs_root),
            Resolver.for_schema(rhs_root),
            config=config,
            cost_cache=cost_cache,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def diff(
        self,
        path: str,
        lhs: SchemaNode,
        rhs: SchemaNode,
        comparing_any_of: bool = False,
    ) -> None:
        """Diff ``lhs`` against ``rhs`` at ``path``, emitting to the sink.

        Args:
            path: Locator of the node pair; ``""`` for the roots.
            lhs: Node from the old schema.
            rhs: Node from the new schema.
            comparing_any_of: True when the pair are aligned anyOf branches;
                suppresses the type comparison at this level.

        Raises:
            DiffDepthError: If recursion exceeds ``config.max_depth``.
        """
        self._diff(path, lhs, rhs, comparing_any_of, self._base_depth)

    # ------------------------------------------------------------------
    # Node dispatch
    # ------------------------------------------------------------------

    def _diff(
        self,
        path: str,
        lhs: SchemaNode,
        rhs: SchemaNode,
        comparing_any_of: bool,
        depth: int,
    ) -> None:
        if depth > self._config.max_depth:
            raise DiffDepthError(path, self._config.max_depth)

        lhs = self._lhs_resolver.resolve_node(lhs)
        rhs = self._rhs_resolver.resolve_node(rhs)

        lhs, is_lhs_split = split_types(lhs)
        rhs, is_rhs_split = split_types(rhs)
        if is_lhs_split or is_rhs_split:
            logger.debug(
                "Split multi-typed schema at %r (lhs=%s, rhs=%s)",
                path,
                is_lhs_split,
                is_rhs_split,
            )

        self._diff_any_of(path, lhs, rhs, is_rhs_split, depth)
        if not comparing_any_of:
            self._diff_instance_types(path, lhs, rhs)

        lhs = normalize_const(lhs)
        rhs = normalize_const(rhs)
        self._diff_const(path, lhs, rhs)

        if is_lhs_split or is_rhs_split:
            return

        self._diff_properties(path, lhs, rhs, depth)
        self._diff_range(path, lhs, rhs)
        self._diff_additional_properties(path, lhs, rhs, depth)
        self._diff_items(path, lhs, rhs, depth)
        self._diff_required(path, lhs, rhs)
        self._diff_string(path, lhs, rhs)

    def _emit(self, path: str, change: ChangeKind) -> None:
        self._sink(Change(path=path, change=change))

    # ------------------------------------------------------------------
    # anyOf
    # ------------------------------------------------------------------

    def _diff_any_of(
        self,
        path: str,
        lhs: SchemaNode,
        rhs: SchemaNode,
        is_rhs_split: bool,
        depth: int,
    ) -> None:
        if lhs.any_of is None or rhs.any_of is None:
            return

        lhs_branches, rhs_branches = pad_branches(lhs.any_of, rhs.any_of)
        trial_depth = depth + 1

        def trial_cost(left: SchemaNode, right: SchemaNode) -> int:
            return self._trial_cost(left, right, trial_depth)

        matrix = build_cost_matrix(
            lhs_branches,
            rhs_branches,
            lambda left, right: self._cost_cache.get_or_compute(
                left, right, trial_cost
            ),
        )
        assignment = hungarian_match(matrix)
        logger.debug("Aligned anyOf branches at %r: %s", path, assignment)

        for i, j in enumerate(assignment):
            # Split nodes are synthetic anyOf lists; their indices are not
            # part of the user's schema.
            branch_path = path if is_rhs_split else f"{path}.<anyOf:{j}>"
            self._diff(
                branch_path, lhs_branches[i], rhs_branches[j], True, depth + 1
            )

    def _trial_cost(self, lhs: SchemaNode, rhs: SchemaNode, depth: int) -> int:
        counter = CountingSink()
        trial = DiffWalker(
            counter,
            self._lhs_resolver,
            self._rhs_resolver,
            config=self._config,
            cost_cache=self._cost_cache,
            base_depth=depth,
        )
        trial.diff("", lhs, rhs)
        return counter.count

    # ------------------------------------------------------------------
    # Type and const
    # ------------------------------------------------------------------

    def _diff_instance_types(
        self, path: str, lhs: SchemaNode, rhs: SchemaNode
    ) -> None:
        lhs_kinds = effective_type(lhs).into_set()
        rhs_kinds = effective_type(rhs).into_set()

        for kind in JsonSchemaType:
            if kind in lhs_kinds and kind not in rhs_kinds:
                self._emit(path, TypeRemove(removed=kind))
        for kind in JsonSchemaType:
            if kind in rhs_kinds and kind not in lhs_kinds:
                self._emit(path, TypeAdd(added=kind))

    def _diff_const(self, path: str, lhs: SchemaNode, rhs: SchemaNode) -> None:
        if lhs.has_const and rhs.has_const:
            if not json_equal(lhs.const, rhs.const):
                self._emit(path, ConstRemove(removed=lhs.const))
                self._emit(path, ConstAdd(added=rhs.const))
        elif lhs.has_const:
            self._emit(path, ConstRemove(removed=lhs.const))
        elif rhs.has_const:
            self._emit(path, ConstAdd(added=rhs.const))

    # ------------------------------------------------------------------
    # Object facets
    # ------------------------------------------------------------------

    def _diff_properties(
        self, path: str, lhs: SchemaNode, rhs: SchemaNode, depth: int
    ) -> None:
        lhs_props = lhs.object.properties
        rhs_props = rhs.object.properties
        additional = lhs.object.additional_properties
        lhs_additional_properties = additional is None or additional.is_true()

        for name in sorted(lhs_props.keys() - rhs_props.keys()):
            self._emit(
                path,
                PropertyRemove(
                    lhs_additional_properties=lhs_additional_properties,
                    removed=name,
                ),
            )
        for name in sorted(rhs_props.keys() - lhs_props.keys()):
            self._emit(
                path,
                PropertyAdd(
                    lhs_additional_properties=lhs_additional_properties,
                    added=name,
                ),
            )
        for name in sorted(lhs_props.keys() & rhs_props.keys()):
            self._diff(
                f"{path}.{name}", lhs_props[name], rhs_props[name], False, depth + 1
            )

    def _diff_additional_properties(
        self, path: str, lhs: SchemaNode, rhs: SchemaNode, depth: int
    ) -> None:
        lhs_additional = lhs.object.additional_properties
        rhs_additional = rhs.object.additional_properties
        if lhs_additional is None or rhs_additional is None:
            return
        if lhs_additional != rhs_additional:
            self._diff(
                f"{path}.<additionalProperties>",
                lhs_additional,
                rhs_additional,
                False,
                depth + 1,
            )

    def _diff_required(self, path: str, lhs: SchemaNode, rhs: SchemaNode) -> None:
        lhs_required = lhs.object.required
        rhs_required = rhs.object.required
        for name in sorted(lhs_required - rhs_required):
            self._emit(path, RequiredRemove(property=name))
        for name in sorted(rhs_required - lhs_required):
            self._emit(path, RequiredAdd(property=name))

    # ------------------------------------------------------------------
    # Number facet
    # ------------------------------------------------------------------

    @staticmethod
    def _number_facet(node: SchemaNode) -> NumberFacet:
        # A lone anyOf branch stands in for the node's own bounds.
        if node.number.is_empty() and node.any_of is not None and len(node.any_of) == 1:
            return node.any_of[0].number
        return node.number

    def _diff_range(self, path: str, lhs: SchemaNode, rhs: SchemaNode) -> None:
        lhs_number = self._number_facet(lhs)
        rhs_number = self._number_facet(rhs)

        for bound, attr in _BOUNDS:
            lhs_value: float | None = getattr(lhs_number, attr)
            rhs_value: float | None = getattr(rhs_number, attr)
            if lhs_value is None:
                if rhs_value is not None:
                    self._emit(path, RangeAdd(added=Range(bound, rhs_value)))
            elif rhs_value is None:
                self._emit(path, RangeRemove(removed=Range(bound, lhs_value)))
            elif lhs_value != rhs_value:
                self._emit(
                    path,
                    RangeChange(
                        old_value=Range(bound, lhs_value),
                        new_value=Range(bound, rhs_value),
                    ),
                )

    # ------------------------------------------------------------------
    # Array facet
    # ------------------------------------------------------------------

    def _diff_items(
        self, path: str, lhs: SchemaNode, rhs: SchemaNode, depth: int
    ) -> None:
        lhs_items = lhs.array.items
        rhs_items = rhs.array.items
        if lhs_items is None or rhs_items is None:
            return

        if isinstance(lhs_items, tuple):
            if isinstance(rhs_items, tuple):
                if len(lhs_items) != len(rhs_items):
                    self._emit(path, TupleChange(new_length=len(rhs_items)))
                for i, (left, right) in enumerate(zip(lhs_items, rhs_items)):
                    self._diff(f"{path}.{i}", left, right, False, depth + 1)
            else:
                self._emit(path, TupleToArray(old_length=len(lhs_items)))
                for i, left in enumerate(lhs_items):
                    self._diff(f"{path}.{i}", left, rhs_items, False, depth + 1)
        elif isinstance(rhs_items, tuple):
            self._emit(path, ArrayToTuple(new_length=len(rhs_items)))
            for i, right in enumerate(rhs_items):
                self._diff(f"{path}.{i}", lhs_items, right, False, depth + 1)
        else:
            self._diff(f"{path}.?", lhs_items, rhs_items, False, depth + 1)

    # ------------------------------------------------------------------
    # String facets
    # ------------------------------------------------------------------

    def _diff_string(self, path: str, lhs: SchemaNode, rhs: SchemaNode) -> None:
        lhs_string = lhs.string
        rhs_string = rhs.string
        self._diff_scalar(
            path,
            lhs_string.format,
            rhs_string.format,
            added=lambda v: FormatAdd(added=v),
            removed=lambda v: FormatRemove(removed=v),
            changed=lambda old, new: FormatChange(old_format=old, new_format=new),
        )
        self._diff_scalar(
            path,
            lhs_string.pattern,
            rhs_string.pattern,
            added=lambda v: PatternAdd(added=v),
            removed=lambda v: PatternRemove(removed=v),
            changed=lambda old, new: PatternChange(old_pattern=old, new_pattern=new),
        )
        self._diff_scalar(
            path,
            lhs_string.min_length,
            rhs_string.min_length,
            added=lambda v: MinLengthAdd(added=v),
            removed=lambda v: MinLengthRemove(removed=v),
            changed=lambda old, new: MinLengthChange(old_value=old, new_value=new),
        )
        self._diff_scalar(
            path,
            lhs_string.max_length,
            rhs_string.max_length,
            added=lambda v: MaxLengthAdd(added=v),
            removed=lambda v: MaxLengthRemove(removed=v),
            changed=lambda old, new: MaxLengthChange(old_value=old, new_value=new),
        )

    def _diff_scalar(
        self,
        path: str,
        lhs_value: _T | None,
        rhs_value: _T | None,
        *,
        added: Callable[[_T], ChangeKind],
        removed: Callable[[_T], ChangeKind],
        changed: Callable[[_T, _T], ChangeKind],
    ) -> None:
        if lhs_value is None:
            if rhs_value is not None:
                self._emit(path, added(rhs_value))
        elif rhs_value is None:
            self._emit(path, removed(lhs_value))
        elif lhs_value != rhs_value:
            self._emit(path, changed(lhs_value, rhs_value))
