"""Schema layer - type descriptors, record schemas and their providers."""

from __future__ import annotations

from map_plan.schema.descriptor import (
    ComplexType,
    EnumerableOf,
    EnumType,
    NullableOf,
    NumericType,
    PrimitiveType,
    StringType,
    TypeDescriptor,
    classify,
    type_id_for,
)
from map_plan.schema.introspect import schema_from_class
from map_plan.schema.model import PropertySchema, TypeSchema
from map_plan.schema.protocol import ConverterProvider, OverrideProvider, SchemaProvider
from map_plan.schema.registry import SchemaRegistry

__all__ = [
    "TypeDescriptor",
    "PrimitiveType",
    "StringType",
    "NumericType",
    "EnumType",
    "NullableOf",
    "EnumerableOf",
    "ComplexType",
    "classify",
    "type_id_for",
    "PropertySchema",
    "TypeSchema",
    "schema_from_class",
    "SchemaRegistry",
    "SchemaProvider",
    "OverrideProvider",
    "ConverterProvider",
]
