"""Mapping layer - resolve mapping plans between record schemas."""

from __future__ import annotations

from map_plan.mapping.builder import MappingSession, PlanTree, build_plan
from map_plan.mapping.configuration import MapperConfiguration, MappingExpression
from map_plan.mapping.converters import ConverterRegistry, ConverterSpec
from map_plan.mapping.diagnostics import Diagnostic
from map_plan.mapping.overrides import Condition, Convert, Ignore, PropertyOverride, Rename
from map_plan.mapping.plan import (
    CollectionOfComplex,
    CollectionOfPrimitive,
    Conditional,
    Converter,
    Direct,
    MappingHook,
    MappingKind,
    MappingPlan,
    NestedObject,
    NumericWiden,
    PlanRef,
    PropertyMapping,
)

__all__ = [
    "MappingSession",
    "PlanTree",
    "build_plan",
    "MapperConfiguration",
    "MappingExpression",
    "ConverterRegistry",
    "ConverterSpec",
    "Diagnostic",
    "PropertyOverride",
    "Rename",
    "Ignore",
    "Convert",
    "Condition",
    "MappingPlan",
    "PlanRef",
    "PropertyMapping",
    "MappingHook",
    "MappingKind",
    "Direct",
    "NumericWiden",
    "NestedObject",
    "CollectionOfPrimitive",
    "CollectionOfComplex",
    "Converter",
    "Conditional",
]
