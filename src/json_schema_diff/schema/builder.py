"""SchemaBuilder: converts a parsed JSON value into a typed SchemaNode tree.

Uses recursive dispatch over the recognised keywords.  Unknown keywords are
ignored (permissive parsing); recognised keywords with the wrong shape raise
``SchemaParseError`` naming the JSON Pointer (RFC 6901) of the offender:

- Root is "" (empty string)
- Each level appends "/{keyword_or_index}"
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any

from json_schema_diff.errors import SchemaParseError
from json_schema_diff.schema.nodes import (
    UNSET,
    ArrayFacet,
    JsonSchemaType,
    NumberFacet,
    ObjectFacet,
    SchemaNode,
    StringFacet,
)

_TYPE_NAMES = {t.value: t for t in JsonSchemaType}


def _escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


@dataclass
class SchemaBuilder:
    """Converts a JSON Schema document (dict or bool) into a SchemaNode tree.

    Boolean schemas map onto objects: ``true`` becomes the empty node and
    ``false`` becomes ``{"not": {}}``.  Only the root's ``definitions`` and
    ``$defs`` tables are kept; both are merged into ``SchemaNode.definitions``
    with ``definitions`` winning on a name clash.

    Example::
        builder = SchemaBuilder()
        root = builder.build({"type": "object", "properties": {"a": True}})
        # root.object.properties["a"].is_true() -> True
    """

    def build(self, value: Any) -> SchemaNode:
        """Build the root node of a schema document.

        Args:
            value: A parsed JSON value.  Must be a dict or a bool.

        Returns:
            The root SchemaNode, with its definitions table populated.

        Raises:
            SchemaParseError: If the value is not a valid schema.
        """
        node = self._build(value, "")
        if not isinstance(value, dict):
            return node

        definitions: dict[str, SchemaNode] = {}
        for keyword in ("$defs", "definitions"):
            table = value.get(keyword)
            if table is None:
                continue
            pointer = f"/{_escape(keyword)}"
            if not isinstance(table, dict):
                raise SchemaParseError(f"'{keyword}' must be an object", pointer)
            for name, sub in table.items():
                definitions[name] = self._build(sub, f"{pointer}/{_escape(name)}")

        if not definitions:
            return node
        return replace(node, definitions=definitions)

    # ------------------------------------------------------------------
    # Node dispatch
    # ------------------------------------------------------------------

    def _build(self, value: Any, pointer: str) -> SchemaNode:
        # bool is a schema in its own right, never an int here
        if isinstance(value, bool):
            return SchemaNode.true() if value else SchemaNode.false()
        if not isinstance(value, dict):
            raise SchemaParseError(
                f"schema must be an object or a boolean, got {type(value).__name__}",
                pointer,
            )

        return SchemaNode(
            instance_type=self._build_type(value, pointer),
            const=value.get("const", UNSET),
            number=self._build_number(value, pointer),
            string=self._build_string(value, pointer),
            object=self._build_object(value, pointer),
            array=self._build_array(value, pointer),
            any_of=self._build_any_of(value, pointer),
            not_=self._build_optional(value, "not", pointer),
            ref=self._string(value, "$ref", pointer),
            schema_id=self._string(value, "$id", pointer),
        )

    def _build_optional(
        self, value: dict[str, Any], keyword: str, pointer: str
    ) -> SchemaNode | None:
        if keyword not in value:
            return None
        return self._build(value[keyword], f"{pointer}/{_escape(keyword)}")

    def _build_type(
        self, value: dict[str, Any], pointer: str
    ) -> tuple[JsonSchemaType, ...] | None:
        if "type" not in value:
            return None
        raw = value["type"]
        names = raw if isinstance(raw, list) else [raw]
        kinds: list[JsonSchemaType] = []
        for name in names:
            if not isinstance(name, str) or name not in _TYPE_NAMES:
                raise SchemaParseError(f"unknown type {name!r}", f"{pointer}/type")
            kinds.append(_TYPE_NAMES[name])
        return tuple(kinds)

    # ------------------------------------------------------------------
    # Facet blocks
    # ------------------------------------------------------------------

    def _build_number(self, value: dict[str, Any], pointer: str) -> NumberFacet:
        return NumberFacet(
            minimum=self._number(value, "minimum", pointer),
            maximum=self._number(value, "maximum", pointer),
            exclusive_minimum=self._number(value, "exclusiveMinimum", pointer),
            exclusive_maximum=self._number(value, "exclusiveMaximum", pointer),
        )

    def _build_string(self, value: dict[str, Any], pointer: str) -> StringFacet:
        return StringFacet(
            format=self._string(value, "format", pointer),
            pattern=self._string(value, "pattern", pointer),
            min_length=self._length(value, "minLength", pointer),
            max_length=self._length(value, "maxLength", pointer),
        )

    def _build_object(self, value: dict[str, Any], pointer: str) -> ObjectFacet:
        properties: dict[str, SchemaNode] = {}
        raw_properties = value.get("properties", {})
        if not isinstance(raw_properties, dict):
            raise SchemaParseError(
                "'properties' must be an object", f"{pointer}/properties"
            )
        for name, sub in raw_properties.items():
            properties[name] = self._build(
                sub, f"{pointer}/properties/{_escape(name)}"
            )

        raw_required = value.get("required", [])
        if not isinstance(raw_required, list) or not all(
            isinstance(name, str) for name in raw_required
        ):
            raise SchemaParseError(
                "'required' must be an array of strings", f"{pointer}/required"
            )

        return ObjectFacet(
            properties=properties,
            required=frozenset(raw_required),
            additional_properties=self._build_optional(
                value, "additionalProperties", pointer
            ),
        )

    def _build_array(self, value: dict[str, Any], pointer: str) -> ArrayFacet:
        if "items" not in value:
            return ArrayFacet()
        raw = value["items"]
        items_pointer = f"{pointer}/items"
        if isinstance(raw, list):
            return ArrayFacet(
                items=tuple(
                    self._build(sub, f"{items_pointer}/{idx}")
                    for idx, sub in enumerate(raw)
                )
            )
        return ArrayFacet(items=self._build(raw, items_pointer))

    def _build_any_of(
        self, value: dict[str, Any], pointer: str
    ) -> tuple[SchemaNode, ...] | None:
        if "anyOf" not in value:
            return None
        raw = value["anyOf"]
        if not isinstance(raw, list):
            raise SchemaParseError("'anyOf' must be an array", f"{pointer}/anyOf")
        return tuple(
            self._build(sub, f"{pointer}/anyOf/{idx}") for idx, sub in enumerate(raw)
        )

    # ------------------------------------------------------------------
    # Scalar keyword readers
    # ------------------------------------------------------------------

    @staticmethod
    def _number(value: dict[str, Any], keyword: str, pointer: str) -> float | None:
        if keyword not in value:
            return None
        raw = value[keyword]
        # CRITICAL: bool MUST be rejected explicitly, bool subclasses int
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise SchemaParseError(
                f"'{keyword}' must be a number", f"{pointer}/{keyword}"
            )
        if not math.isfinite(raw):
            raise SchemaParseError(
                f"'{keyword}' must be finite", f"{pointer}/{keyword}"
            )
        return float(raw)

    @staticmethod
    def _length(value: dict[str, Any], keyword: str, pointer: str) -> int | None:
        if keyword not in value:
            return None
        raw = value[keyword]
        if isinstance(raw, float) and raw.is_integer():
            raw = int(raw)
        if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
            raise SchemaParseError(
                f"'{keyword}' must be a non-negative integer", f"{pointer}/{keyword}"
            )
        return raw

    @staticmethod
    def _string(value: dict[str, Any], keyword: str, pointer: str) -> str | None:
        if keyword not in value:
            return None
        raw = value[keyword]
        if not isinstance(raw, str):
            raise SchemaParseError(
                f"'{keyword}' must be a string", f"{pointer}/{_escape(keyword)}"
            )
        return raw
