"""MapPlan exception hierarchy.

Plan resolution itself never raises: unmappable properties degrade to
omissions. Exceptions are reserved for configuration-time validation,
explicit registry lookups, and opt-in strict mode.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from map_plan.mapping.diagnostics import Diagnostic


class MapPlanError(Exception):
    """Base exception for all MapPlan errors."""


# --- Schema ---


class SchemaError(MapPlanError):
    """Base for schema registry errors."""


class SchemaNotFoundError(SchemaError):
    """Raised when a type schema cannot be found in the registry."""

    def __init__(self, type_id: str) -> None:
        self.type_id = type_id
        super().__init__(f"Schema not found: '{type_id}'")


class DuplicateSchemaError(SchemaError):
    """Raised when two different schemas are registered under one type id."""

    def __init__(self, type_id: str) -> None:
        self.type_id = type_id
        super().__init__(f"Duplicate schema for type '{type_id}'")


class InvalidSchemaError(SchemaError):
    """Raised when a schema is structurally malformed."""

    def __init__(self, type_id: str, detail: str) -> None:
        self.type_id = type_id
        super().__init__(f"Invalid schema '{type_id}': {detail}")


# --- Configuration ---


class ConfigurationError(MapPlanError):
    """Raised when mapping configuration input is malformed."""


class OverrideConflictError(ConfigurationError):
    """Raised when a destination member gets two overrides of the same kind."""

    def __init__(self, member_name: str, kind: str) -> None:
        self.member_name = member_name
        self.kind = kind
        super().__init__(f"Member '{member_name}' already has a {kind} override")


class DuplicateConverterError(ConfigurationError):
    """Raised when a converter reference is registered twice."""

    def __init__(self, converter_ref: str) -> None:
        self.converter_ref = converter_ref
        super().__init__(f"Duplicate converter: '{converter_ref}'")


# --- Resolution ---


class ResolutionError(MapPlanError):
    """Base for plan resolution errors."""


class PlanNotFoundError(ResolutionError):
    """Raised when a plan reference is not present in the session."""

    def __init__(self, source_id: str, dest_id: str) -> None:
        self.source_id = source_id
        self.dest_id = dest_id
        super().__init__(f"No plan for {source_id} -> {dest_id} in this session")


class StrictModeViolation(ResolutionError):
    """Raised in strict mode when resolution had to omit properties."""

    def __init__(self, source_id: str, dest_id: str, diagnostics: list[Diagnostic]) -> None:
        self.source_id = source_id
        self.dest_id = dest_id
        self.diagnostics = diagnostics
        details = "; ".join(d.describe() for d in diagnostics)
        super().__init__(
            f"Strict resolution of {source_id} -> {dest_id} omitted "
            f"{len(diagnostics)} propert{'y' if len(diagnostics) == 1 else 'ies'}: {details}"
        )
