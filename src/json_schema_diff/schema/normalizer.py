"""Schema rewrites applied by the walker before comparing facets.

Two normalizations, both pure (they return new nodes) and idempotent:

- ``split_types`` turns ``{"type": [T1, ..., Tn], ...}`` into an ``anyOf`` of
  single-type schemas, each keeping only the keyword block that applies to its
  type.  Keywords of the other blocks are dropped because they were ambiguous
  across types.
- ``normalize_const`` turns an object-valued ``const`` into a ``properties``
  map of per-key consts, so object constants diff key by key.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from json_schema_diff.schema.nodes import (
    UNSET,
    JsonSchemaType,
    ObjectFacet,
    SchemaNode,
)
from json_schema_diff.schema.types import TypeVariant, effective_type

__all__ = ["normalize_const", "project_type", "split_types"]


def project_type(node: SchemaNode, kind: JsonSchemaType) -> SchemaNode:
    """Project ``node`` onto a single-type schema for ``kind``.

    Number and Integer keep the number block, String the string block, Object
    the object block and Array the array block.  Boolean and Null keep
    nothing but the type.
    """
    if kind in (JsonSchemaType.NUMBER, JsonSchemaType.INTEGER):
        return SchemaNode(instance_type=(kind,), number=node.number)
    if kind is JsonSchemaType.STRING:
        return SchemaNode(instance_type=(kind,), string=node.string)
    if kind is JsonSchemaType.OBJECT:
        return SchemaNode(instance_type=(kind,), object=node.object)
    if kind is JsonSchemaType.ARRAY:
        return SchemaNode(instance_type=(kind,), array=node.array)
    return SchemaNode(instance_type=(kind,))


def split_types(node: SchemaNode) -> tuple[SchemaNode, bool]:
    """Rewrite a multi-typed node into an equivalent ``anyOf``.

    A node is split only when its effective type is Multiple and it carries
    no ``anyOf`` of its own.

    Returns:
        ``(node, was_split)``: the rewritten node (or the input unchanged)
        and whether a split happened.
    """
    ty = effective_type(node)
    if ty.variant is not TypeVariant.MULTIPLE or node.any_of is not None:
        return node, False
    return SchemaNode(any_of=tuple(project_type(node, k) for k in ty.kinds)), True


def _const_schema(value: Any) -> SchemaNode:
    if isinstance(value, dict):
        return SchemaNode(
            object=ObjectFacet(
                properties={key: _const_schema(sub) for key, sub in value.items()}
            )
        )
    return SchemaNode(const=value)


def normalize_const(node: SchemaNode) -> SchemaNode:
    """Rewrite an object-valued ``const`` into per-property consts.

    ``{"const": {"a": 1, "b": {"c": true}}}`` becomes::

        {"properties": {"a": {"const": 1},
                        "b": {"properties": {"c": {"const": true}}}}}

    Other keywords of the node are kept; a const key overrides a declared
    property of the same name.  Nodes without a const, or with a primitive
    or array const, are returned unchanged.
    """
    if not node.has_const or not isinstance(node.const, dict):
        return node
    properties = dict(node.object.properties)
    properties.update({key: _const_schema(sub) for key, sub in node.const.items()})
    return replace(
        node, const=UNSET, object=replace(node.object, properties=properties)
    )
