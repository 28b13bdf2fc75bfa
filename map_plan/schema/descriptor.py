"""Type descriptors and the type-reference classifier.

A TypeDescriptor is the semantic category of a type reference: primitive,
string, numeric, enum, nullable-of-T, enumerable-of-T or complex record.
Descriptors are frozen dataclasses, so two classifications of the same
reference compare (and hash) equal.
"""

from __future__ import annotations

import collections.abc
import datetime
import decimal
import enum
import types
import typing
import uuid
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Union

from map_plan.core.enums import NumericWidth


@dataclass(frozen=True)
class PrimitiveType:
    """A non-numeric scalar (bool, temporal, identifier, bytes, char)."""

    name: str


@dataclass(frozen=True)
class StringType:
    """Text."""


@dataclass(frozen=True)
class NumericType:
    """A fixed-width integer/float or arbitrary-precision decimal."""

    width: NumericWidth


@dataclass(frozen=True)
class EnumType:
    """An enumeration, identified by type id."""

    type_id: str


@dataclass(frozen=True)
class NullableOf:
    """A nullable wrapper over a value kind."""

    inner: TypeDescriptor


@dataclass(frozen=True)
class EnumerableOf:
    """A homogeneous ordered or unordered container."""

    element: TypeDescriptor


@dataclass(frozen=True)
class ComplexType:
    """A structured record, identified by type id."""

    type_id: str


TypeDescriptor = Union[
    PrimitiveType,
    StringType,
    NumericType,
    EnumType,
    NullableOf,
    EnumerableOf,
    ComplexType,
]

_DESCRIPTOR_TYPES = (
    PrimitiveType,
    StringType,
    NumericType,
    EnumType,
    NullableOf,
    EnumerableOf,
    ComplexType,
)

# Python scalar types
_PYTHON_PRIMITIVES: dict[type, TypeDescriptor] = {
    str: StringType(),
    bool: PrimitiveType("bool"),
    bytes: PrimitiveType("bytes"),
    datetime.datetime: PrimitiveType("datetime"),
    datetime.date: PrimitiveType("date"),
    datetime.time: PrimitiveType("time"),
    datetime.timedelta: PrimitiveType("timespan"),
    uuid.UUID: PrimitiveType("uuid"),
    int: NumericType(NumericWidth.INT64),
    float: NumericType(NumericWidth.FLOAT64),
    decimal.Decimal: NumericType(NumericWidth.DECIMAL),
}

# Well-known type names, matched case-insensitively
_NAMED_PRIMITIVES: dict[str, TypeDescriptor] = {
    "string": StringType(),
    "str": StringType(),
    "bool": PrimitiveType("bool"),
    "boolean": PrimitiveType("bool"),
    "char": PrimitiveType("char"),
    "bytes": PrimitiveType("bytes"),
    "datetime": PrimitiveType("datetime"),
    "datetimeoffset": PrimitiveType("datetime"),
    "date": PrimitiveType("date"),
    "dateonly": PrimitiveType("date"),
    "time": PrimitiveType("time"),
    "timeonly": PrimitiveType("time"),
    "timespan": PrimitiveType("timespan"),
    "timedelta": PrimitiveType("timespan"),
    "guid": PrimitiveType("uuid"),
    "uuid": PrimitiveType("uuid"),
    "int8": NumericType(NumericWidth.INT8),
    "sbyte": NumericType(NumericWidth.INT8),
    "int16": NumericType(NumericWidth.INT16),
    "short": NumericType(NumericWidth.INT16),
    "int32": NumericType(NumericWidth.INT32),
    "int": NumericType(NumericWidth.INT32),
    "int64": NumericType(NumericWidth.INT64),
    "long": NumericType(NumericWidth.INT64),
    "uint8": NumericType(NumericWidth.UINT8),
    "byte": NumericType(NumericWidth.UINT8),
    "uint16": NumericType(NumericWidth.UINT16),
    "ushort": NumericType(NumericWidth.UINT16),
    "uint32": NumericType(NumericWidth.UINT32),
    "uint": NumericType(NumericWidth.UINT32),
    "uint64": NumericType(NumericWidth.UINT64),
    "ulong": NumericType(NumericWidth.UINT64),
    "float32": NumericType(NumericWidth.FLOAT32),
    "single": NumericType(NumericWidth.FLOAT32),
    "float": NumericType(NumericWidth.FLOAT32),
    "float64": NumericType(NumericWidth.FLOAT64),
    "double": NumericType(NumericWidth.FLOAT64),
    "decimal": NumericType(NumericWidth.DECIMAL),
}

_ENUMERABLE_ORIGINS: frozenset[Any] = frozenset(
    {
        list,
        tuple,
        set,
        frozenset,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Set,
        collections.abc.MutableSet,
        collections.abc.Iterable,
        collections.abc.Collection,
    }
)


def type_id_for(cls: Any) -> str:
    """Return the stable type id of a class: ``module.QualName``."""
    if cls is Any:
        return "typing.Any"
    module = getattr(cls, "__module__", None)
    qualname = getattr(cls, "__qualname__", None) or getattr(cls, "__name__", None)
    if qualname is None:
        return repr(cls)
    if module in (None, "builtins"):
        return qualname
    return f"{module}.{qualname}"


def is_descriptor(value: Any) -> bool:
    """Check if *value* is already a TypeDescriptor."""
    return isinstance(value, _DESCRIPTOR_TYPES)


def classify(type_ref: Any) -> TypeDescriptor:
    """Classify a type reference into exactly one TypeDescriptor.

    Accepts Python annotations (``int``, ``str | None``, ``list[Order]``,
    enum and record classes), well-known type names as strings
    (``"Int32"``, ``"decimal"``, ``"Guid"``) and existing descriptors.
    Unknown names classify as complex records, so the function is total.
    """
    if is_descriptor(type_ref):
        return type_ref
    try:
        return _classify_cached(type_ref)
    except TypeError:
        # Unhashable annotation objects
        return _classify(type_ref)


@lru_cache(maxsize=1024)
def _classify_cached(type_ref: Any) -> TypeDescriptor:
    return _classify(type_ref)


def _classify(type_ref: Any) -> TypeDescriptor:
    # 1. Known primitive / string / numeric
    if isinstance(type_ref, str):
        return _classify_name(type_ref)
    if isinstance(type_ref, typing.ForwardRef):
        return _classify_name(type_ref.__forward_arg__)
    if isinstance(type_ref, type) and type_ref in _PYTHON_PRIMITIVES:
        return _PYTHON_PRIMITIVES[type_ref]

    # 2. Enum
    if isinstance(type_ref, type) and issubclass(type_ref, enum.Enum):
        return EnumType(type_id_for(type_ref))

    origin = typing.get_origin(type_ref)
    args = typing.get_args(type_ref)

    # 3. Nullable wrapper
    if origin is Union or origin is types.UnionType:
        non_none = [arg for arg in args if arg is not type(None)]
        if len(non_none) == 1 and len(non_none) < len(args):
            return NullableOf(classify(non_none[0]))
        # Other unions have no structural counterpart
        return ComplexType(type_id_for(type_ref))

    # 4. Homogeneous containers
    if origin in _ENUMERABLE_ORIGINS:
        return EnumerableOf(classify(_element_type(args)))
    if isinstance(type_ref, type) and type_ref in _ENUMERABLE_ORIGINS:
        return EnumerableOf(classify(Any))

    if origin is typing.Annotated:
        return classify(args[0])

    # 5. Structured record
    return ComplexType(type_id_for(type_ref))


def _classify_name(name: str) -> TypeDescriptor:
    stripped = name.strip()
    # "System.Int32" -> "int32"
    key = stripped.rsplit(".", 1)[-1].lower()
    if key in _NAMED_PRIMITIVES:
        return _NAMED_PRIMITIVES[key]
    return ComplexType(stripped)


def _element_type(args: tuple[Any, ...]) -> Any:
    if not args:
        return Any
    # tuple[X, ...] is homogeneous; a fixed tuple[X, Y] is treated by its first slot
    return args[0]


def unwrap_nullable(descriptor: TypeDescriptor) -> TypeDescriptor:
    """Strip one level of NullableOf, if present."""
    if isinstance(descriptor, NullableOf):
        return descriptor.inner
    return descriptor


def describe(descriptor: TypeDescriptor) -> str:
    """Human-readable rendering used in diagnostics and logs."""
    if isinstance(descriptor, StringType):
        return "String"
    if isinstance(descriptor, PrimitiveType):
        return f"Primitive({descriptor.name})"
    if isinstance(descriptor, NumericType):
        return f"Numeric({descriptor.width.name})"
    if isinstance(descriptor, EnumType):
        return f"Enum({descriptor.type_id})"
    if isinstance(descriptor, NullableOf):
        return f"NullableOf({describe(descriptor.inner)})"
    if isinstance(descriptor, EnumerableOf):
        return f"EnumerableOf({describe(descriptor.element)})"
    return f"Complex({descriptor.type_id})"
