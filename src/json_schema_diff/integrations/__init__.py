"""Integrations subpackage for json-schema-diff.

Contains integration adapters for external frameworks:
- pytest plugin (auto-discovered via pytest11 entry point), providing the
  ``assert_schema_compatible`` fixture
"""

from __future__ import annotations

__all__: list[str] = []
