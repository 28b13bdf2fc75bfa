"""MapPlan - deterministic mapping-plan resolution between record schemas."""

from __future__ import annotations

from map_plan.core.enums import DiagnosticCode, HookStage, NumericWidth
from map_plan.core.exceptions import (
    ConfigurationError,
    DuplicateConverterError,
    DuplicateSchemaError,
    InvalidSchemaError,
    MapPlanError,
    OverrideConflictError,
    PlanNotFoundError,
    ResolutionError,
    SchemaError,
    SchemaNotFoundError,
    StrictModeViolation,
)
from map_plan.core.settings import ResolutionSettings
from map_plan.mapping.builder import MappingSession, PlanTree, build_plan
from map_plan.mapping.configuration import MapperConfiguration
from map_plan.mapping.converters import ConverterRegistry
from map_plan.mapping.plan import MappingPlan, PlanRef, PropertyMapping
from map_plan.schema.descriptor import classify
from map_plan.schema.introspect import schema_from_class
from map_plan.schema.model import PropertySchema, TypeSchema
from map_plan.schema.registry import SchemaRegistry

__all__ = [
    # Schema
    "TypeSchema",
    "PropertySchema",
    "SchemaRegistry",
    "schema_from_class",
    "classify",
    # Configuration
    "MapperConfiguration",
    "ConverterRegistry",
    "ResolutionSettings",
    # Resolution
    "MappingSession",
    "build_plan",
    "PlanTree",
    "MappingPlan",
    "PlanRef",
    "PropertyMapping",
    # Enums
    "NumericWidth",
    "HookStage",
    "DiagnosticCode",
    # Exceptions
    "MapPlanError",
    "SchemaError",
    "SchemaNotFoundError",
    "DuplicateSchemaError",
    "InvalidSchemaError",
    "ConfigurationError",
    "OverrideConflictError",
    "DuplicateConverterError",
    "ResolutionError",
    "PlanNotFoundError",
    "StrictModeViolation",
]
