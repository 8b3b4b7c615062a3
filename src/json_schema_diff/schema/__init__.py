"""Schema subpackage: the parsed schema tree and the operations on it.

Re-exports the public API for the schema module:
- SchemaNode: immutable node of a parsed JSON Schema, with facet blocks
- JsonSchemaType: StrEnum of the seven primitive instance types
- SchemaBuilder: converts a parsed JSON value into a SchemaNode tree
- Resolver: ``$ref`` lookup within one root schema
- InternalType / effective_type: the effective-type lattice
- split_types / normalize_const: rewrites applied before diffing
"""

from json_schema_diff.schema.builder import SchemaBuilder
from json_schema_diff.schema.nodes import (
    UNSET,
    ArrayFacet,
    JsonSchemaType,
    NumberFacet,
    ObjectFacet,
    SchemaNode,
    StringFacet,
)
from json_schema_diff.schema.normalizer import normalize_const, split_types
from json_schema_diff.schema.resolver import Resolver
from json_schema_diff.schema.types import InternalType, effective_type

__all__ = [
    "UNSET",
    "ArrayFacet",
    "InternalType",
    "JsonSchemaType",
    "NumberFacet",
    "ObjectFacet",
    "Resolver",
    "SchemaBuilder",
    "SchemaNode",
    "StringFacet",
    "effective_type",
    "normalize_const",
    "split_types",
]
