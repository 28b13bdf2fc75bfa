"""Shared test fixtures."""

from __future__ import annotations

import pytest

from map_plan.schema.model import TypeSchema
from map_plan.schema.registry import SchemaRegistry


@pytest.fixture
def registry() -> SchemaRegistry:
    """Empty in-memory schema registry."""
    return SchemaRegistry()


@pytest.fixture
def define(registry: SchemaRegistry):
    """Helper to register a schema from a ``{name: type_ref}`` dict.

    Usage:
        define("Person", {"Name": "string", "Age": "int32"})
    """

    def _define(type_id: str, properties: dict[str, object]) -> TypeSchema:
        return registry.register(TypeSchema.of(type_id, properties))

    return _define


@pytest.fixture
def person_registry(registry: SchemaRegistry) -> SchemaRegistry:
    """Person/ContactInfo source and DTO schemas."""
    registry.register(TypeSchema.of("ContactInfo", {"Email": "string"}))
    registry.register(TypeSchema.of("ContactInfoDto", {"Email": "string"}))
    registry.register(
        TypeSchema.of(
            "Person",
            {"Name": "string", "Age": "int32", "Contact": "ContactInfo"},
        )
    )
    registry.register(
        TypeSchema.of(
            "PersonDto",
            {"Name": "string", "Age": "int32", "Contact": "ContactInfoDto"},
        )
    )
    return registry
