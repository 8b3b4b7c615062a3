"""DiffConfig: immutable parameters of the diff walker.

DiffConfig is a frozen (immutable) dataclass.  It governs algorithm behaviour
only; infrastructure knobs such as the trial-cost cache size live on
``SchemaDiffer``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DiffConfig:
    """Immutable configuration for the diff walker.

    Attributes:
        max_depth: Maximum recursion depth of a single diff, counted in
            subschema levels from the root (including anyOf trial diffs).
            Exceeding it raises ``DiffDepthError``; this is what stops
            self-referential ``$ref`` cycles.  Must be >= 1.  Default 128.
    """

    max_depth: int = 128

    def __post_init__(self) -> None:
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            msg = f"max_depth must be an int, got {type(self.max_depth).__name__}"
            raise ValueError(msg)
        if self.max_depth < 1:
            msg = f"max_depth must be >= 1, got {self.max_depth}"
            raise ValueError(msg)
