"""Resolver: maps ``$ref`` strings to definitions inside one root schema.

The lookup table is built once per root.  Every definition is reachable under
several canonical spellings:

- ``#/definitions/<name>`` and ``#/$defs/<name>``;
- ``<root $id>#/definitions/<name>`` and ``<root $id>#/$defs/<name>`` when the
  root carries an ``$id``;
- the definition's own ``$id``, when it has one.

Lookup is an exact string match.  Anything else (remote URLs, JSON Pointers
into non-definition locations) is unresolvable and the referring node is left
unchanged.
"""

from __future__ import annotations

import logging

from json_schema_diff.schema.nodes import SchemaNode

__all__ = ["Resolver"]

logger = logging.getLogger(__name__)


class Resolver:
    """Reference lookup for a single root schema.

    Example::

        root = SchemaBuilder().build(
            {"$id": "urn:example", "definitions": {"A": {"type": "string"}}}
        )
        resolver = Resolver.for_schema(root)
        resolver.resolve("#/definitions/A")               # -> SchemaNode
        resolver.resolve("urn:example#/$defs/A")          # -> same node
        resolver.resolve("#/definitions/missing")         # -> None
    """

    def __init__(self, root: SchemaNode, ref_lookup: dict[str, str]) -> None:
        self._root = root
        self._ref_lookup = ref_lookup

    @classmethod
    def for_schema(cls, root: SchemaNode) -> Resolver:
        """Build the reference table for ``root``."""
        ref_lookup: dict[str, str] = {}
        for name, definition in root.definitions.items():
            if definition.schema_id is not None:
                ref_lookup[definition.schema_id] = name

            if root.schema_id is not None:
                ref_lookup[f"{root.schema_id}#/definitions/{name}"] = name
                ref_lookup[f"{root.schema_id}#/$defs/{name}"] = name

            ref_lookup[f"#/definitions/{name}"] = name
            ref_lookup[f"#/$defs/{name}"] = name

        return cls(root, ref_lookup)

    def resolve(self, reference: str) -> SchemaNode | None:
        """Return the definition ``reference`` points to, or None."""
        name = self._ref_lookup.get(reference)
        if name is None:
            return None
        return self._root.definitions.get(name)

    def resolve_node(self, node: SchemaNode) -> SchemaNode:
        """Replace a ``$ref``-bearing node with the node it references.

        Chains of references are followed until a node without ``$ref`` is
        reached, a reference cannot be resolved, or a reference repeats.  The
        last node reached is returned; a node without ``$ref`` is returned as
        is.
        """
        seen: set[str] = set()
        while node.ref is not None and node.ref not in seen:
            seen.add(node.ref)
            target = self.resolve(node.ref)
            if target is None:
                logger.debug("Leaving unresolvable reference %r in place", node.ref)
                break
            node = target
        return node
