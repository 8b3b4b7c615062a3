"""SchemaNode dataclass and JsonSchemaType StrEnum for the parsed schema tree.

Provides the foundational data types produced by SchemaBuilder and consumed by
the diff walker.  Keywords are grouped into facet blocks (number, string,
object, array) so that type-splitting can project a node onto a single type
by keeping exactly one block.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, StrEnum, auto
from typing import Any


class JsonSchemaType(StrEnum):
    """The seven primitive instance types of JSON Schema.

    Member order is significant: it is the fixed order in which type changes
    are reported.  StrEnum values are the lowercased member names:
    "string", "number", "integer", "object", "array", "boolean", "null".
    """

    STRING = auto()
    NUMBER = auto()
    INTEGER = auto()
    OBJECT = auto()
    ARRAY = auto()
    BOOLEAN = auto()
    NULL = auto()


class _Unset(Enum):
    TOKEN = auto()

    def __repr__(self) -> str:
        return "UNSET"


# Marks an absent ``const``; ``None`` is a legitimate const value (JSON null).
UNSET = _Unset.TOKEN


@dataclass(frozen=True, slots=True)
class NumberFacet:
    """Numeric bounds: minimum, maximum, exclusiveMinimum, exclusiveMaximum."""

    minimum: float | None = None
    maximum: float | None = None
    exclusive_minimum: float | None = None
    exclusive_maximum: float | None = None

    def is_empty(self) -> bool:
        return self == _EMPTY_NUMBER


@dataclass(frozen=True, slots=True)
class StringFacet:
    """String constraints: format, pattern, minLength, maxLength."""

    format: str | None = None
    pattern: str | None = None
    min_length: int | None = None
    max_length: int | None = None


@dataclass(frozen=True, slots=True)
class ObjectFacet:
    """Object constraints.

    Attributes:
        properties: Property name -> subschema.
        required: Names of required properties.
        additional_properties: Explicit additionalProperties subschema, or
            None when the keyword is absent (which JSON Schema treats as true).
    """

    properties: dict[str, SchemaNode] = field(default_factory=dict)
    required: frozenset[str] = frozenset()
    additional_properties: SchemaNode | None = None


@dataclass(frozen=True, slots=True)
class ArrayFacet:
    """Array constraints.

    ``items`` is a single SchemaNode for the "array" form, a tuple of
    SchemaNodes for the "tuple" form, or None when absent.
    """

    items: SchemaNode | tuple[SchemaNode, ...] | None = None


@dataclass(frozen=True, slots=True)
class SchemaNode:
    """A node in the parsed JSON Schema tree.

    Nodes are immutable values: normalizations build new nodes with
    ``dataclasses.replace`` instead of editing existing ones, so the walker
    can share subtrees freely between levels.

    Attributes:
        instance_type: Declared ``type`` keyword as a tuple of kinds, or None.
        const:         Value of ``const``, or ``UNSET`` when absent.
        number:        minimum/maximum/exclusive bounds.
        string:        format/pattern/minLength/maxLength.
        object:        properties/required/additionalProperties.
        array:         items.
        any_of:        Branches of ``anyOf``, or None when absent.
        not_:          Subschema of ``not``, or None.
        ref:           Raw ``$ref`` string, or None.
        schema_id:     Raw ``$id`` string, or None.
        definitions:   Merged ``definitions``/``$defs`` table (root only).
    """

    instance_type: tuple[JsonSchemaType, ...] | None = None
    const: Any = UNSET
    number: NumberFacet = field(default_factory=NumberFacet)
    string: StringFacet = field(default_factory=StringFacet)
    object: ObjectFacet = field(default_factory=ObjectFacet)
    array: ArrayFacet = field(default_factory=ArrayFacet)
    any_of: tuple[SchemaNode, ...] | None = None
    not_: SchemaNode | None = None
    ref: str | None = None
    schema_id: str | None = None
    definitions: dict[str, SchemaNode] = field(default_factory=dict)

    @classmethod
    def true(cls) -> SchemaNode:
        """The schema accepting every instance (``true`` / ``{}``)."""
        return cls()

    @classmethod
    def false(cls) -> SchemaNode:
        """The schema rejecting every instance, encoded as ``{"not": {}}``."""
        return cls(not_=cls())

    @property
    def has_const(self) -> bool:
        return self.const is not UNSET

    def is_true(self) -> bool:
        """Return True if the node carries no validation keywords at all.

        ``$id`` and the definitions table do not constrain instances and are
        ignored.
        """
        if self.schema_id is None and not self.definitions:
            return self == _TRUE
        return replace(self, schema_id=None, definitions={}) == _TRUE


_EMPTY_NUMBER = NumberFacet()
_TRUE = SchemaNode()
