"""Exception hierarchy for json-schema-diff.

Every error raised by the library derives from ``SchemaDiffError`` so callers
can catch library failures with a single ``except`` clause.  The concrete
classes also derive from the closest built-in exception (``ValueError`` for
malformed input, ``RecursionError`` for the depth guard) so generic handlers
keep working.
"""

from __future__ import annotations

__all__ = ["DiffDepthError", "SchemaDiffError", "SchemaParseError"]


class SchemaDiffError(Exception):
    """Base class for all json-schema-diff errors."""


class SchemaParseError(SchemaDiffError, ValueError):
    """A JSON value could not be interpreted as a JSON Schema.

    Attributes:
        pointer: JSON Pointer (RFC 6901) of the offending keyword, ``""`` for
            the document root.
    """

    def __init__(self, message: str, pointer: str = "") -> None:
        self.pointer = pointer
        location = pointer if pointer else "<root>"
        super().__init__(f"{message} (at {location})")


class DiffDepthError(SchemaDiffError, RecursionError):
    """The walker descended deeper than ``DiffConfig.max_depth``.

    Usually caused by a cyclic ``$ref`` graph.

    Attributes:
        path: Diff path at which the limit was exceeded.
        max_depth: The configured limit.
    """

    def __init__(self, path: str, max_depth: int) -> None:
        self.path = path
        self.max_depth = max_depth
        super().__init__(
            f"diff exceeded maximum depth {max_depth} at path {path!r}; "
            "the schema may contain a reference cycle"
        )
