"""SchemaDiffer: orchestrator that wires SchemaBuilder + Resolver + DiffWalker.

This is the wiring layer between the raw walker and the public API.  It turns
two parsed JSON documents into schema trees, builds one reference resolver per
document, and runs a ``DiffWalker`` from the roots.

Architecture:
- ``diff_into()`` parses both documents, creates a fresh ``CostCache`` and a
  fresh walker, and streams changes into the caller's sink.
- ``diff()`` collects the stream into a list.
- Nothing is shared between calls: trial costs depend on the two roots being
  compared, so the cost cache is never reused across documents.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from json_schema_diff.algorithm.config import DiffConfig
from json_schema_diff.algorithm.walker import DiffWalker
from json_schema_diff.cache import CostCache
from json_schema_diff.errors import DiffDepthError
from json_schema_diff.schema.builder import SchemaBuilder

if TYPE_CHECKING:
    from json_schema_diff.changes import Change
    from json_schema_diff.protocols import ChangeSink

__all__ = ["SchemaDiffer"]

logger = logging.getLogger(__name__)


class SchemaDiffer:
    """Orchestrator for JSON Schema diffing.

    Example::

        from json_schema_diff import SchemaDiffer

        differ = SchemaDiffer()
        changes = differ.diff({"type": "integer"}, {"type": "number"})
        # [Change(path='', change=TypeAdd(added=<JsonSchemaType.NUMBER: 'number'>))]
    """

    def __init__(
        self,
        config: DiffConfig | None = None,
        max_cache_size: int = 1024,
    ) -> None:
        """Initialise the differ.

        Args:
            config: Walker parameters.  Defaults to ``DiffConfig()``.
            max_cache_size: Maximum number of anyOf branch pairs whose trial
                cost is memoised during one diff call.  Defaults to 1024.
                This is an infrastructure parameter, not part of
                ``DiffConfig``.
        """
        self._config: DiffConfig = config if config is not None else DiffConfig()
        self._max_cache_size = max_cache_size
        self._builder = SchemaBuilder()

    @property
    def config(self) -> DiffConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def diff(self, lhs: Any, rhs: Any) -> list[Change]:
        """Diff two schema documents and return the changes in order.

        Args:
            lhs: The old schema, as a parsed JSON value (dict or bool).
            rhs: The new schema, as a parsed JSON value (dict or bool).

        Returns:
            The list of changes going from ``lhs`` to ``rhs``.

        Raises:
            SchemaParseError: If either document is not a valid schema.
            DiffDepthError: If the walk exceeds ``config.max_depth``.
        """
        changes: list[Change] = []
        self.diff_into(lhs, rhs, changes.append)
        logger.debug("Diff produced %d change(s)", len(changes))
        return changes

    def diff_into(self, lhs: Any, rhs: Any, sink: ChangeSink) -> None:
        """Diff two schema documents, streaming each change into ``sink``.

        Both documents are parsed before the first change is emitted, so a
        parse error never leaves a partial stream behind.

        Raises:
            SchemaParseError: If either document is not a valid schema.
            DiffDepthError: If the walk exceeds ``config.max_depth``, or the
                interpreter stack runs out first (reported at path ``""``).
        """
        lhs_root = self._builder.build(lhs)
        rhs_root = self._builder.build(rhs)

        walker = DiffWalker.for_roots(
            sink,
            lhs_root,
            rhs_root,
            config=self._config,
            cost_cache=CostCache(max_size=self._max_cache_size),
        )
        try:
            walker.diff("", lhs_root, rhs_root)
        except DiffDepthError:
            raise
        except RecursionError as exc:
            # Nested anyOf trials can exhaust the interpreter stack first.
            raise DiffDepthError("", self._config.max_depth) from exc
