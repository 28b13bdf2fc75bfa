"""Enumerations shared across the schema and mapping layers."""

from __future__ import annotations

from enum import Enum


class NumericWidth(Enum):
    """Width class of a numeric type.

    Value is ``(bits, signed, integer)``; ``DECIMAL`` is arbitrary precision.
    """

    INT8 = (8, True, True)
    INT16 = (16, True, True)
    INT32 = (32, True, True)
    INT64 = (64, True, True)
    UINT8 = (8, False, True)
    UINT16 = (16, False, True)
    UINT32 = (32, False, True)
    UINT64 = (64, False, True)
    FLOAT32 = (32, True, False)
    FLOAT64 = (64, True, False)
    DECIMAL = (128, True, False)

    @property
    def bits(self) -> int:
        return self.value[0]

    @property
    def signed(self) -> bool:
        return self.value[1]

    @property
    def is_integer(self) -> bool:
        return self.value[2]


class HookStage(Enum):
    """When a mapping hook runs relative to property assignment."""

    BEFORE = "before"
    AFTER = "after"


class DiagnosticCode(Enum):
    """Reason a destination property was left out of a plan."""

    IGNORED = "ignored"
    NO_CORRESPONDENCE = "no_correspondence"
    DANGLING_RENAME = "dangling_rename"
    INCOMPATIBLE = "incompatible"
    CONVERTER_MISMATCH = "converter_mismatch"
    UNKNOWN_CONVERTER = "unknown_converter"
    INVALID_CONDITION = "invalid_condition"
    MISSING_SCHEMA = "missing_schema"
