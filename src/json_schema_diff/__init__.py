"""JSON Schema diff - structural changes and breaking-change detection."""

from __future__ import annotations

from json_schema_diff.algorithm.config import DiffConfig
from json_schema_diff.api import breaking_changes, diff, is_compatible
from json_schema_diff.changes import Change, ChangeKind, Range, RangeBound
from json_schema_diff.differ import SchemaDiffer
from json_schema_diff.errors import DiffDepthError, SchemaDiffError, SchemaParseError
from json_schema_diff.schema.nodes import JsonSchemaType

__version__: str = "0.1.0"
__all__: list[str] = [
    "Change",
    "ChangeKind",
    "DiffConfig",
    "DiffDepthError",
    "JsonSchemaType",
    "Range",
    "RangeBound",
    "SchemaDiffError",
    "SchemaDiffer",
    "SchemaParseError",
    "breaking_changes",
    "diff",
    "is_compatible",
]
