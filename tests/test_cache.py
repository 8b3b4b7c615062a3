"""Unit tests for CostCache.

Tests cover:
- Cache hits (a repeated pair does not re-run the trial diff)
- Structural keys (equal nodes built separately share an entry)
- LRU eviction (silent eviction at max_size)
- Instance isolation (separate CostCache instances do not share state)
- Properties (max_size and curr_size return correct values)
"""

from __future__ import annotations

from json_schema_diff.cache import CostCache
from json_schema_diff.schema.builder import SchemaBuilder
from json_schema_diff.schema.nodes import JsonSchemaType, SchemaNode

# ---------------------------------------------------------------------------
# Spy helper
# ---------------------------------------------------------------------------


class _SpyCost:
    """Trial-cost stand-in that records each pair it is asked to price."""

    def __init__(self, cost: int = 3) -> None:
        self.cost = cost
        self.calls: list[tuple[SchemaNode, SchemaNode]] = []

    def __call__(self, lhs: SchemaNode, rhs: SchemaNode) -> int:
        self.calls.append((lhs, rhs))
        return self.cost


def _node(kind: JsonSchemaType) -> SchemaNode:
    return SchemaNode(instance_type=(kind,))


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestCostCache:
    def test_miss_then_hit(self) -> None:
        cache = CostCache()
        spy = _SpyCost(cost=5)
        a, b = _node(JsonSchemaType.STRING), _node(JsonSchemaType.NULL)

        assert cache.get_or_compute(a, b, spy) == 5
        assert cache.get_or_compute(a, b, spy) == 5
        assert len(spy.calls) == 1
        assert (cache.hits, cache.misses) == (1, 1)

    def test_pair_order_matters(self) -> None:
        cache = CostCache()
        spy = _SpyCost()
        a, b = _node(JsonSchemaType.STRING), _node(JsonSchemaType.NULL)

        cache.get_or_compute(a, b, spy)
        cache.get_or_compute(b, a, spy)
        assert len(spy.calls) == 2

    def test_zero_cost_is_cached(self) -> None:
        cache = CostCache()
        spy = _SpyCost(cost=0)
        a = _node(JsonSchemaType.ARRAY)

        assert cache.get_or_compute(a, a, spy) == 0
        assert cache.get_or_compute(a, a, spy) == 0
        assert len(spy.calls) == 1

    def test_structurally_equal_nodes_share_entry(self) -> None:
        cache = CostCache()
        spy = _SpyCost()
        builder = SchemaBuilder()
        first = builder.build({"type": "object", "properties": {"a": {"minimum": 1}}})
        second = builder.build({"type": "object", "properties": {"a": {"minimum": 1}}})
        assert first is not second

        cache.get_or_compute(first, first, spy)
        cache.get_or_compute(second, second, spy)
        assert len(spy.calls) == 1

    def test_lru_eviction(self) -> None:
        cache = CostCache(max_size=2)
        spy = _SpyCost()
        a, b, c = (
            _node(JsonSchemaType.STRING),
            _node(JsonSchemaType.NULL),
            _node(JsonSchemaType.BOOLEAN),
        )

        cache.get_or_compute(a, a, spy)
        cache.get_or_compute(b, b, spy)
        cache.get_or_compute(c, c, spy)  # evicts (a, a)
        assert cache.curr_size == 2

        cache.get_or_compute(a, a, spy)
        assert len(spy.calls) == 4

    def test_instances_are_isolated(self) -> None:
        first, second = CostCache(), CostCache()
        spy = _SpyCost()
        a = _node(JsonSchemaType.INTEGER)

        first.get_or_compute(a, a, spy)
        second.get_or_compute(a, a, spy)
        assert len(spy.calls) == 2
        assert first.curr_size == second.curr_size == 1

    def test_properties(self) -> None:
        cache = CostCache(max_size=7)
        assert cache.max_size == 7
        assert cache.curr_size == 0
