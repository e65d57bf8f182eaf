"""
Value model for libconfig settings.

A value is exactly one of eight kinds, each with its own class:

    IntValue(42)                      -> 32-bit integer
    Int64Value(42)                    -> 64-bit integer (42L, or too big for 32 bits)
    FloatValue(3.14)
    BoolValue(True)
    StringValue("text")
    ArrayValue([IntValue(1), ...])    -> [ ... ], all elements of one kind
    GroupValue({"name": ...})         -> { ... }, named settings
    ListValue([StringValue("a"), IntValue(1)])  -> ( ... ), any kinds

Values compare by kind as well as content, so IntValue(1) != Int64Value(1).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Iterator

from .const import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN


class ValueType(Enum):
    """The kind of a configuration value."""
    INT = "int"
    INT64 = "int64"
    FLOAT = "float"
    BOOL = "bool"
    STRING = "string"
    ARRAY = "array"
    GROUP = "group"
    LIST = "list"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Value:
    """Base class for all configuration values."""

    type: ClassVar[ValueType]

    def to_python(self) -> Any:
        """Convert to native Python objects (int, float, bool, str, list, dict)."""
        raise NotImplementedError


@dataclass(frozen=True)
class IntValue(Value):
    value: int
    type: ClassVar[ValueType] = ValueType.INT

    def to_python(self) -> int:
        return self.value


@dataclass(frozen=True)
class Int64Value(Value):
    value: int
    type: ClassVar[ValueType] = ValueType.INT64

    def to_python(self) -> int:
        return self.value


@dataclass(frozen=True)
class FloatValue(Value):
    value: float
    type: ClassVar[ValueType] = ValueType.FLOAT

    def to_python(self) -> float:
        return self.value


@dataclass(frozen=True)
class BoolValue(Value):
    value: bool
    type: ClassVar[ValueType] = ValueType.BOOL

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True)
class StringValue(Value):
    value: str
    type: ClassVar[ValueType] = ValueType.STRING

    def to_python(self) -> str:
        return self.value


@dataclass(frozen=True)
class ArrayValue(Value):
    """
    Ordered, homogeneous sequence of values.

    The parser guarantees every element has the kind of the first one;
    an empty array has no element kind.
    """
    items: list[Value] = field(default_factory=list)
    type: ClassVar[ValueType] = ValueType.ARRAY

    # Mutable contents
    __hash__ = None  # type: ignore[assignment]

    @property
    def element_type(self) -> ValueType | None:
        """Kind shared by all elements, or None for an empty array."""
        return self.items[0].type if self.items else None

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Value:
        return self.items[index]

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True)
class ListValue(Value):
    """Ordered sequence of values of any kinds."""
    items: list[Value] = field(default_factory=list)
    type: ClassVar[ValueType] = ValueType.LIST

    # Mutable contents
    __hash__ = None  # type: ignore[assignment]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Value:
        return self.items[index]

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True)
class GroupValue(Value):
    """
    Named settings. Keys are unique; iteration follows insertion order.
    """
    entries: dict[str, Value] = field(default_factory=dict)
    type: ClassVar[ValueType] = ValueType.GROUP

    # Mutable contents
    __hash__ = None  # type: ignore[assignment]

    def get(self, name: str, default: Value | None = None) -> Value | None:
        """Get setting by name with default."""
        return self.entries.get(name, default)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __contains__(self, name: object) -> bool:
        return name in self.entries

    def __getitem__(self, name: str) -> Value:
        return self.entries[name]

    def to_python(self) -> dict[str, Any]:
        return {name: value.to_python() for name, value in self.entries.items()}


def from_python(obj: Any) -> Value:
    """
    Build a value tree from native Python objects.

    Mapping:
        bool              -> BoolValue
        int               -> IntValue, or Int64Value outside the 32-bit range
        float             -> FloatValue
        str               -> StringValue
        dict              -> GroupValue (keys must be strings)
        list              -> ArrayValue if all elements share a kind, else ListValue
        tuple             -> ListValue
        Value             -> returned unchanged

    Raises:
        TypeError: For objects with no libconfig equivalent
        ValueError: For integers outside the 64-bit range
    """
    if isinstance(obj, Value):
        return obj

    # bool first: it is a subclass of int
    if isinstance(obj, bool):
        return BoolValue(obj)

    if isinstance(obj, int):
        if INT32_MIN <= obj <= INT32_MAX:
            return IntValue(obj)
        if INT64_MIN <= obj <= INT64_MAX:
            return Int64Value(obj)
        raise ValueError(f"Integer {obj} does not fit in 64 bits")

    if isinstance(obj, float):
        return FloatValue(obj)

    if isinstance(obj, str):
        return StringValue(obj)

    if isinstance(obj, dict):
        entries: dict[str, Value] = {}
        for key, item in obj.items():
            if not isinstance(key, str):
                raise TypeError(f"Group keys must be strings, got {type(key).__name__}")
            entries[key] = from_python(item)
        return GroupValue(entries)

    if isinstance(obj, tuple):
        return ListValue([from_python(item) for item in obj])

    if isinstance(obj, list):
        items = [from_python(item) for item in obj]
        if len({item.type for item in items}) <= 1:
            return ArrayValue(items)
        return ListValue(items)

    raise TypeError(f"Cannot convert {type(obj).__name__} to a configuration value")
