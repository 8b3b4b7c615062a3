"""Property tests over a corpus of schemas.

Checks reflexivity, determinism, the type-set contract, path well-formedness
and agreement between is_breaking and the public compatibility helpers.
"""

from __future__ import annotations

import itertools
import re
from typing import Any

import pytest

from json_schema_diff import Change, JsonSchemaType, diff, is_compatible
from json_schema_diff.changes import TypeAdd, TypeRemove
from json_schema_diff.schema.builder import SchemaBuilder
from json_schema_diff.schema.types import effective_type

CORPUS: list[Any] = [
    True,
    False,
    {},
    {"type": "string", "format": "email", "maxLength": 64},
    {"type": ["string", "null"], "minLength": 1},
    {"type": "number", "minimum": 0, "exclusiveMaximum": 100},
    {"type": "integer", "maximum": 10},
    {"const": {"kind": "event", "version": 2}},
    {"const": [1, 2, 3]},
    {
        "type": "object",
        "properties": {
            "id": {"type": "string", "pattern": "^[a-z]+$"},
            "tags": {"type": "array", "items": {"type": "string"}},
            "point": {"items": [{"type": "number"}, {"type": "number"}]},
        },
        "required": ["id"],
        "additionalProperties": False,
    },
    {
        "anyOf": [
            {"type": "string"},
            {"type": "integer", "minimum": 1},
            {"$ref": "#/definitions/Obj"},
        ],
        "definitions": {
            "Obj": {"type": "object", "properties": {"x": {"type": "boolean"}}}
        },
    },
    {
        "$ref": "#/$defs/Root",
        "$defs": {
            "Root": {
                "type": "object",
                "properties": {"child": {"$ref": "#/$defs/Leaf"}},
                "additionalProperties": {"type": "string"},
            },
            "Leaf": {"type": ["integer", "array"], "items": {"const": "x"}},
        },
    },
]

_PATH = re.compile(r"(\.(<anyOf:\d+>|<additionalProperties>|\?|\d+|[^.]+))*")


def _ids(value: Any) -> str:
    return repr(value)[:40]


@pytest.mark.parametrize("schema", CORPUS, ids=_ids)
def test_reflexive(schema: Any) -> None:
    assert diff(schema, schema) == []


@pytest.mark.parametrize(("lhs", "rhs"), list(itertools.permutations(CORPUS, 2)))
def test_pairwise_properties(lhs: Any, rhs: Any) -> None:
    changes = diff(lhs, rhs)

    # deterministic
    assert diff(lhs, rhs) == changes

    # well-formed paths
    for change in changes:
        assert isinstance(change, Change)
        assert _PATH.fullmatch(change.path), change.path

    # compatibility helpers agree with is_breaking
    assert is_compatible(lhs, rhs) == (not any(c.is_breaking() for c in changes))


@pytest.mark.parametrize(
    ("lhs", "rhs"),
    [
        ({"type": "string"}, {"type": ["boolean", "null"]}),
        ({"type": ["number", "string"]}, {"type": "integer"}),
        ({"const": 3}, {"const": "x"}),
        ({"properties": {"a": {}}}, {"type": "array"}),
        (False, {"anyOf": [{"type": "null"}, {"type": "object"}]}),
    ],
)
def test_root_type_changes_are_symmetric_difference(lhs: Any, rhs: Any) -> None:
    builder = SchemaBuilder()
    lhs_kinds = effective_type(builder.build(lhs)).into_set()
    rhs_kinds = effective_type(builder.build(rhs)).into_set()

    root = [c.change for c in diff(lhs, rhs) if c.path == ""]
    removed = [k.removed for k in root if isinstance(k, TypeRemove)]
    added = [k.added for k in root if isinstance(k, TypeAdd)]

    assert set(removed) == lhs_kinds - rhs_kinds
    assert set(added) == rhs_kinds - lhs_kinds
    order = list(JsonSchemaType)
    assert removed == sorted(removed, key=order.index)
    assert added == sorted(added, key=order.index)
