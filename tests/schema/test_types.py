"""Tests for the effective-type lattice.

Covers InternalType expansion (number admits integer, Any/Never), json_kind
bool/int dispatch, JSON-value equality, and effective_type priority order.
"""

from __future__ import annotations

import pytest

from json_schema_diff.schema.builder import SchemaBuilder
from json_schema_diff.schema.nodes import JsonSchemaType
from json_schema_diff.schema.types import (
    InternalType,
    TypeVariant,
    effective_type,
    json_equal,
    json_kind,
)

S = JsonSchemaType


def _type_of(value: object) -> InternalType:
    return effective_type(SchemaBuilder().build(value))


class TestInternalType:
    def test_simple_number_expands_to_number_and_integer(self) -> None:
        assert InternalType.simple(S.NUMBER).into_set() == {S.NUMBER, S.INTEGER}

    def test_simple_integer_stays_integer(self) -> None:
        assert InternalType.simple(S.INTEGER).into_set() == {S.INTEGER}

    def test_any_expands_to_all_seven_kinds(self) -> None:
        assert InternalType.any().into_set() == set(JsonSchemaType)
        assert len(InternalType.any().into_set()) == 7

    def test_never_expands_to_empty_set(self) -> None:
        assert InternalType.never().into_set() == frozenset()

    def test_multiple_expands_each_member(self) -> None:
        ty = InternalType.multiple((S.STRING, S.NUMBER))
        assert ty.into_set() == {S.STRING, S.NUMBER, S.INTEGER}

    def test_structural_equality(self) -> None:
        assert InternalType.multiple((S.STRING,)) != InternalType.simple(S.STRING)
        assert InternalType.simple(S.NULL) == InternalType.simple(S.NULL)


class TestJsonKind:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (True, S.BOOLEAN),
            (False, S.BOOLEAN),
            (None, S.NULL),
            (1, S.NUMBER),
            (1.5, S.NUMBER),
            ("x", S.STRING),
            ([1], S.ARRAY),
            ({"a": 1}, S.OBJECT),
        ],
    )
    def test_kind_of_value(self, value: object, expected: JsonSchemaType) -> None:
        assert json_kind(value) is expected

    def test_unsupported_value_raises_type_error(self) -> None:
        with pytest.raises(TypeError):
            json_kind(object())


class TestJsonEqual:
    def test_int_equals_float(self) -> None:
        assert json_equal(1, 1.0)

    def test_bool_never_equals_number(self) -> None:
        assert not json_equal(True, 1)
        assert not json_equal(0, False)

    def test_nested_structures(self) -> None:
        assert json_equal({"a": [1, {"b": None}]}, {"a": [1.0, {"b": None}]})
        assert not json_equal({"a": [1]}, {"a": [1, 2]})
        assert not json_equal({"a": 1}, {"b": 1})

    def test_string_is_not_number(self) -> None:
        assert not json_equal("1", 1)


class TestEffectiveType:
    def test_type_keyword_wins(self) -> None:
        assert _type_of({"type": "string", "const": 1}) == InternalType.simple(
            S.STRING
        )

    def test_single_element_type_list_is_simple(self) -> None:
        assert _type_of({"type": ["integer"]}) == InternalType.simple(S.INTEGER)

    def test_type_list_is_multiple(self) -> None:
        ty = _type_of({"type": ["string", "null"]})
        assert ty.variant is TypeVariant.MULTIPLE
        assert ty.into_set() == {S.STRING, S.NULL}

    def test_const_kind(self) -> None:
        assert _type_of({"const": "hello"}) == InternalType.simple(S.STRING)
        assert _type_of({"const": None}) == InternalType.simple(S.NULL)
        assert _type_of({"const": False}) == InternalType.simple(S.BOOLEAN)

    def test_properties_imply_object(self) -> None:
        assert _type_of({"properties": {"a": {}}}) == InternalType.simple(S.OBJECT)

    def test_empty_properties_do_not_imply_object(self) -> None:
        assert _type_of({"properties": {}}) == InternalType.any()

    def test_any_of_union(self) -> None:
        ty = _type_of({"anyOf": [{"type": "null"}, {"type": "number"}]})
        assert ty.variant is TypeVariant.MULTIPLE
        assert ty.kinds == (S.NUMBER, S.INTEGER, S.NULL)

    def test_not_true_is_never(self) -> None:
        assert _type_of(False) == InternalType.never()
        assert _type_of({"not": {}}) == InternalType.never()

    def test_not_with_constraints_is_any(self) -> None:
        assert _type_of({"not": {"type": "string"}}) == InternalType.any()

    def test_empty_schema_is_any(self) -> None:
        assert _type_of({}) == InternalType.any()
        assert _type_of(True) == InternalType.any()

    def test_ref_is_not_followed(self) -> None:
        schema = {
            "definitions": {"A": {"type": "string"}},
            "$ref": "#/definitions/A",
        }
        assert _type_of(schema) == InternalType.any()
