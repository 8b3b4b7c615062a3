"""Change records emitted by the diff walker.

A ``Change`` pairs a path with one ``ChangeKind`` payload.  Each concrete kind
is a frozen dataclass whose fields are the payload; the class name is the tag.
``Change.to_dict()`` produces the wire shape::

    {"path": ".foo", "change": "TypeAdd", "added": "number"}

``is_breaking()`` answers "could a document valid under the new schema fail
under the old one", using a conservative, documented approximation: it never
reports a shrinking change as safe, but may report a harmless one as breaking
(regex changes, for example).
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import StrEnum
from typing import Any, ClassVar

from json_schema_diff.schema.nodes import JsonSchemaType

__all__ = [
    "ArrayToTuple",
    "Change",
    "ChangeKind",
    "ConstAdd",
    "ConstRemove",
    "FormatAdd",
    "FormatChange",
    "FormatRemove",
    "MaxLengthAdd",
    "MaxLengthChange",
    "MaxLengthRemove",
    "MinLengthAdd",
    "MinLengthChange",
    "MinLengthRemove",
    "PatternAdd",
    "PatternChange",
    "PatternRemove",
    "PropertyAdd",
    "PropertyRemove",
    "Range",
    "RangeAdd",
    "RangeBound",
    "RangeChange",
    "RangeRemove",
    "RequiredAdd",
    "RequiredRemove",
    "TupleChange",
    "TupleToArray",
    "TypeAdd",
    "TypeRemove",
]


# ---------------------------------------------------------------------------
# Range
# ---------------------------------------------------------------------------


class RangeBound(StrEnum):
    """Which numeric bound a Range refers to.  Values are the schema keywords."""

    MINIMUM = "minimum"
    MAXIMUM = "maximum"
    EXCLUSIVE_MINIMUM = "exclusiveMinimum"
    EXCLUSIVE_MAXIMUM = "exclusiveMaximum"


@dataclass(frozen=True, slots=True)
class Range:
    """A numeric bound and its value, e.g. ``Range(RangeBound.MINIMUM, 1.0)``."""

    bound: RangeBound
    value: float

    @classmethod
    def minimum(cls, value: float) -> Range:
        return cls(RangeBound.MINIMUM, value)

    @classmethod
    def maximum(cls, value: float) -> Range:
        return cls(RangeBound.MAXIMUM, value)

    @classmethod
    def exclusive_minimum(cls, value: float) -> Range:
        return cls(RangeBound.EXCLUSIVE_MINIMUM, value)

    @classmethod
    def exclusive_maximum(cls, value: float) -> Range:
        return cls(RangeBound.EXCLUSIVE_MAXIMUM, value)

    def to_dict(self) -> dict[str, float]:
        return {self.bound.value: self.value}


def _is_range_change_breaking(old: Range, new: Range) -> bool:
    lower = (RangeBound.MINIMUM, RangeBound.EXCLUSIVE_MINIMUM)

    if old.bound is new.bound:
        if old.bound in lower:
            return not old.value >= new.value
        return not old.value <= new.value

    # Exclusive -> inclusive relaxes when the new bound is at least as wide.
    if old.bound is RangeBound.EXCLUSIVE_MINIMUM and new.bound is RangeBound.MINIMUM:
        return not old.value >= new.value
    if old.bound is RangeBound.EXCLUSIVE_MAXIMUM and new.bound is RangeBound.MAXIMUM:
        return not old.value <= new.value

    # Inclusive -> exclusive, or lower <-> upper: never provably safe.
    return True


# ---------------------------------------------------------------------------
# Change kinds
# ---------------------------------------------------------------------------


class ChangeKind:
    """Base class of every change payload.

    Subclasses are frozen dataclasses; ``kind`` is the class name and is used
    as the discriminator in ``to_dict()``.
    """

    __slots__ = ()

    breaking: ClassVar[bool] = True

    @property
    def kind(self) -> str:
        return type(self).__name__

    def is_breaking(self) -> bool:
        """Whether the change can shrink the set of accepted documents."""
        return self.breaking

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"change": self.kind}
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            if isinstance(value, Range):
                value = value.to_dict()
            elif isinstance(value, JsonSchemaType):
                value = value.value
            payload[f.name] = value
        return payload


@dataclass(frozen=True, slots=True)
class TypeAdd(ChangeKind):
    """A type is now additionally allowed."""

    breaking: ClassVar[bool] = False
    added: JsonSchemaType


@dataclass(frozen=True, slots=True)
class TypeRemove(ChangeKind):
    """A type is no longer allowed."""

    removed: JsonSchemaType


@dataclass(frozen=True, slots=True)
class ConstAdd(ChangeKind):
    """A const restriction has been introduced."""

    added: Any


@dataclass(frozen=True, slots=True)
class ConstRemove(ChangeKind):
    """A const restriction has been lifted."""

    breaking: ClassVar[bool] = False
    removed: Any


@dataclass(frozen=True, slots=True)
class PropertyAdd(ChangeKind):
    """A property has been declared.

    When the old schema allowed arbitrary additional properties, the new
    declaration constrains values that were previously accepted, so the
    change is breaking exactly when ``lhs_additional_properties`` is true.
    """

    lhs_additional_properties: bool
    added: str

    def is_breaking(self) -> bool:
        return self.lhs_additional_properties


@dataclass(frozen=True, slots=True)
class PropertyRemove(ChangeKind):
    """A property declaration has been dropped.

    Breaking when the old schema closed additional properties: documents
    carrying the property are now rejected.
    """

    lhs_additional_properties: bool
    removed: str

    def is_breaking(self) -> bool:
        return not self.lhs_additional_properties


@dataclass(frozen=True, slots=True)
class RangeAdd(ChangeKind):
    added: Range


@dataclass(frozen=True, slots=True)
class RangeRemove(ChangeKind):
    breaking: ClassVar[bool] = False
    removed: Range


@dataclass(frozen=True, slots=True)
class RangeChange(ChangeKind):
    """A numeric bound changed value (or kind)."""

    old_value: Range
    new_value: Range

    def is_breaking(self) -> bool:
        return _is_range_change_breaking(self.old_value, self.new_value)


@dataclass(frozen=True, slots=True)
class TupleToArray(ChangeKind):
    """Tuple validation (``items`` list) became array validation."""

    breaking: ClassVar[bool] = False
    old_length: int


@dataclass(frozen=True, slots=True)
class ArrayToTuple(ChangeKind):
    """Array validation became tuple validation (``items`` list)."""

    new_length: int


@dataclass(frozen=True, slots=True)
class TupleChange(ChangeKind):
    """The ``items`` list of a tuple changed length."""

    new_length: int


@dataclass(frozen=True, slots=True)
class RequiredAdd(ChangeKind):
    property: str


@dataclass(frozen=True, slots=True)
class RequiredRemove(ChangeKind):
    breaking: ClassVar[bool] = False
    property: str


@dataclass(frozen=True, slots=True)
class FormatAdd(ChangeKind):
    added: str


@dataclass(frozen=True, slots=True)
class FormatRemove(ChangeKind):
    breaking: ClassVar[bool] = False
    removed: str


@dataclass(frozen=True, slots=True)
class FormatChange(ChangeKind):
    old_format: str
    new_format: str


# Regex inclusion is undecidable in practice; pattern edits count as breaking.
@dataclass(frozen=True, slots=True)
class PatternAdd(ChangeKind):
    added: str


@dataclass(frozen=True, slots=True)
class PatternRemove(ChangeKind):
    breaking: ClassVar[bool] = False
    removed: str


@dataclass(frozen=True, slots=True)
class PatternChange(ChangeKind):
    old_pattern: str
    new_pattern: str


@dataclass(frozen=True, slots=True)
class MinLengthAdd(ChangeKind):
    added: int


@dataclass(frozen=True, slots=True)
class MinLengthRemove(ChangeKind):
    breaking: ClassVar[bool] = False
    removed: int


@dataclass(frozen=True, slots=True)
class MinLengthChange(ChangeKind):
    old_value: int
    new_value: int

    def is_breaking(self) -> bool:
        return self.new_value > self.old_value


@dataclass(frozen=True, slots=True)
class MaxLengthAdd(ChangeKind):
    added: int


@dataclass(frozen=True, slots=True)
class MaxLengthRemove(ChangeKind):
    breaking: ClassVar[bool] = False
    removed: int


@dataclass(frozen=True, slots=True)
class MaxLengthChange(ChangeKind):
    old_value: int
    new_value: int

    def is_breaking(self) -> bool:
        return self.new_value < self.old_value


# ---------------------------------------------------------------------------
# Change
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Change:
    """An atomic change going from the old (LHS) to the new (RHS) schema.

    Attributes:
        path: Locator of the affected subschema.  ``""`` is the root,
            ``".foo"`` property foo, ``".0"`` tuple element 0, ``".?"`` array
            items, ``".<anyOf:1>"`` an anyOf branch and
            ``".<additionalProperties>"`` the additionalProperties schema.
        change: The kind of change and its payload.
    """

    path: str
    change: ChangeKind

    def is_breaking(self) -> bool:
        return self.change.is_breaking()

    def to_dict(self, include_breaking: bool = False) -> dict[str, Any]:
        """Serialize to the flat wire shape.

        Args:
            include_breaking: Add an ``is_breaking`` field (used by the CLI).
        """
        payload: dict[str, Any] = {"path": self.path, **self.change.to_dict()}
        if include_breaking:
            payload["is_breaking"] = self.is_breaking()
        return payload
