"""Effective-type lattice over JSON Schema's primitive types.

``effective_type`` derives the set of instance kinds a node admits, looking
only at the node itself (``$ref`` is never followed here; resolving references
is the walker's job).  ``InternalType.into_set`` expands the result into
concrete kinds, encoding two facts of the type system:

- ``number`` admits every ``integer``, so Number expands to {Number, Integer};
- Any expands to all seven kinds and Never to the empty set.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any

from json_schema_diff.schema.nodes import JsonSchemaType, SchemaNode

__all__ = [
    "InternalType",
    "TypeVariant",
    "effective_type",
    "json_equal",
    "json_kind",
]


class TypeVariant(StrEnum):
    SIMPLE = auto()
    MULTIPLE = auto()
    ANY = auto()
    NEVER = auto()


@dataclass(frozen=True, slots=True)
class InternalType:
    """Sum type ``Simple(kind) | Multiple(kinds) | Any | Never``.

    Equality is structural: ``Multiple((STRING,))`` is not equal to
    ``Simple(STRING)`` even though both expand to the same set.
    """

    variant: TypeVariant
    kinds: tuple[JsonSchemaType, ...] = ()

    @classmethod
    def simple(cls, kind: JsonSchemaType) -> InternalType:
        return cls(TypeVariant.SIMPLE, (kind,))

    @classmethod
    def multiple(cls, kinds: tuple[JsonSchemaType, ...]) -> InternalType:
        return cls(TypeVariant.MULTIPLE, kinds)

    @classmethod
    def any(cls) -> InternalType:
        return cls(TypeVariant.ANY)

    @classmethod
    def never(cls) -> InternalType:
        return cls(TypeVariant.NEVER)

    def explode(self) -> list[JsonSchemaType]:
        """Expand into primitive kinds (may contain duplicates)."""
        if self.variant is TypeVariant.ANY:
            return list(JsonSchemaType)
        if self.variant is TypeVariant.NEVER:
            return []
        if self.variant is TypeVariant.SIMPLE:
            (kind,) = self.kinds
            if kind is JsonSchemaType.NUMBER:
                return [JsonSchemaType.NUMBER, JsonSchemaType.INTEGER]
            return [kind]
        exploded: list[JsonSchemaType] = []
        for kind in self.kinds:
            exploded.extend(InternalType.simple(kind).explode())
        return exploded

    def into_set(self) -> frozenset[JsonSchemaType]:
        return frozenset(self.explode())


def json_kind(value: Any) -> JsonSchemaType:
    """Return the JSON kind of a parsed JSON value.

    bool is checked before int because bool subclasses int in Python.  All
    numbers map to NUMBER, matching how a constant is typed in a schema.
    """
    if isinstance(value, bool):
        return JsonSchemaType.BOOLEAN
    if value is None:
        return JsonSchemaType.NULL
    if isinstance(value, (int, float)):
        return JsonSchemaType.NUMBER
    if isinstance(value, str):
        return JsonSchemaType.STRING
    if isinstance(value, (list, tuple)):
        return JsonSchemaType.ARRAY
    if isinstance(value, dict):
        return JsonSchemaType.OBJECT
    raise TypeError(f"Unsupported JSON value type: {type(value)!r}")


def json_equal(left: Any, right: Any) -> bool:
    """Compare two JSON values the way JSON does.

    ``1 == 1.0`` holds, but booleans never equal numbers (``True != 1``),
    unlike plain Python equality.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, dict) and isinstance(right, dict):
        return left.keys() == right.keys() and all(
            json_equal(left[k], right[k]) for k in left
        )
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        return len(left) == len(right) and all(
            json_equal(a, b) for a, b in zip(left, right, strict=True)
        )
    if json_kind(left) is not json_kind(right):
        return False
    return bool(left == right)


def effective_type(node: SchemaNode) -> InternalType:
    """Derive the effective type of ``node``.

    Priority order:
    1. ``type`` keyword (a one-element list counts as a single type);
    2. the kind of ``const``;
    3. {object} when ``properties`` is non-empty;
    4. the union of the ``anyOf`` branches' effective types;
    5. Never for ``not: true``;
    6. Any.
    """
    if node.instance_type is not None:
        if len(node.instance_type) == 1:
            return InternalType.simple(node.instance_type[0])
        return InternalType.multiple(node.instance_type)

    if node.has_const:
        return InternalType.simple(json_kind(node.const))

    if node.object.properties:
        return InternalType.simple(JsonSchemaType.OBJECT)

    if node.any_of is not None:
        union: set[JsonSchemaType] = set()
        for branch in node.any_of:
            union.update(effective_type(branch).explode())
        return InternalType.multiple(tuple(k for k in JsonSchemaType if k in union))

    if node.not_ is not None and node.not_.is_true():
        return InternalType.never()

    return InternalType.any()
