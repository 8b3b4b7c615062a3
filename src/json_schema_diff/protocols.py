"""ChangeSink Protocol: where the diff walker delivers change records.

Any callable taking a single ``Change`` satisfies the protocol: a plain
function, ``list.append``, or an object with ``__call__``.  Changes are
delivered synchronously, in emission order.

Example::

    from json_schema_diff import SchemaDiffer
    from json_schema_diff.protocols import ChangeSink

    class PrintingSink:
        def __call__(self, change):
            print(change.path, change.change.kind)

    assert isinstance(PrintingSink(), ChangeSink)  # True, structural
    SchemaDiffer().diff_into({"type": "string"}, {"type": "number"}, PrintingSink())
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from json_schema_diff.changes import Change


@runtime_checkable
class ChangeSink(Protocol):
    """Structural protocol for receivers of change records."""

    def __call__(self, change: Change) -> None: ...
