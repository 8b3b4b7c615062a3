"""Tests for the anyOf cost model: CountingSink, padding and cost matrices."""

from __future__ import annotations

import numpy as np

from json_schema_diff.algorithm.costs import (
    CountingSink,
    build_cost_matrix,
    pad_branches,
)
from json_schema_diff.changes import Change, TypeAdd
from json_schema_diff.protocols import ChangeSink
from json_schema_diff.schema.nodes import JsonSchemaType, SchemaNode


class TestCountingSink:
    def test_counts_changes(self) -> None:
        sink = CountingSink()
        change = Change("", TypeAdd(added=JsonSchemaType.NULL))
        sink(change)
        sink(change)
        assert sink.count == 2

    def test_satisfies_change_sink_protocol(self) -> None:
        assert isinstance(CountingSink(), ChangeSink)


class TestPadBranches:
    def test_shorter_side_padded_with_false(self) -> None:
        a = SchemaNode(instance_type=(JsonSchemaType.STRING,))
        lhs, rhs = pad_branches([a], [a, a, a])
        assert len(lhs) == len(rhs) == 3
        assert lhs[0] is a
        assert lhs[1] == lhs[2] == SchemaNode.false()

    def test_equal_lengths_unchanged(self) -> None:
        a = SchemaNode()
        lhs, rhs = pad_branches((a,), (a,))
        assert lhs == [a]
        assert rhs == [a]


class TestBuildCostMatrix:
    def test_cells_come_from_cost_function(self) -> None:
        nodes = [SchemaNode(), SchemaNode.false()]
        calls: list[tuple[int, int]] = []

        def cost(left: SchemaNode, right: SchemaNode) -> int:
            i, j = nodes.index(left), nodes.index(right)
            calls.append((i, j))
            return 10 * i + j

        matrix = build_cost_matrix(nodes, nodes, cost)
        assert matrix.dtype == np.int64
        assert matrix.tolist() == [[0, 1], [10, 11]]
        assert len(calls) == 4
