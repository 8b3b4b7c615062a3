"""algorithm subpackage: public API for the schema diff walker.

Provides the recursive diff walker, its configuration, and the anyOf
branch-alignment machinery.  Import from this module (not from sub-modules
directly) to stay on the stable public interface.

Example::

    from json_schema_diff.algorithm import DiffConfig, DiffWalker
    from json_schema_diff.schema import SchemaBuilder

    builder = SchemaBuilder()
    lhs = builder.build({"type": "string"})
    rhs = builder.build({"type": "number"})

    changes = []
    DiffWalker.for_roots(changes.append, lhs, rhs, DiffConfig()).diff("", lhs, rhs)
    # [TypeRemove(string), TypeAdd(number), TypeAdd(integer)]
"""

from __future__ import annotations

from json_schema_diff.algorithm.config import DiffConfig
from json_schema_diff.algorithm.costs import CountingSink
from json_schema_diff.algorithm.matcher import hungarian_match
from json_schema_diff.algorithm.walker import DiffWalker

__all__ = ["CountingSink", "DiffConfig", "DiffWalker", "hungarian_match"]
