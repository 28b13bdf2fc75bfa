"""Collaborator protocols consumed by a resolution session.

Schemas, overrides and converters are supplied through these interfaces
instead of ambient global registries. SchemaRegistry, MapperConfiguration
and ConverterRegistry are the in-memory implementations.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from map_plan.mapping.converters import ConverterSpec
    from map_plan.mapping.overrides import PropertyOverride
    from map_plan.mapping.plan import MappingHook
    from map_plan.schema.model import TypeSchema


@runtime_checkable
class SchemaProvider(Protocol):
    """Supplies type schemas by type id.

    Must return schemas with stable property ordering for the lifetime of
    a session.
    """

    def get_schema(self, type_id: str) -> TypeSchema | None:
        """Return the schema for *type_id*, or None if unknown."""
        ...


@runtime_checkable
class OverrideProvider(Protocol):
    """Supplies the overrides and hooks declared for a (source, destination) pair."""

    def get_overrides(self, source_id: str, dest_id: str) -> Sequence[PropertyOverride]:
        """Return the overrides for the pair; empty if none were declared."""
        ...

    def get_hooks(self, source_id: str, dest_id: str) -> Sequence[MappingHook]:
        """Return the before/after hooks for the pair, in declaration order."""
        ...


@runtime_checkable
class ConverterProvider(Protocol):
    """Resolves converter references to their declared signatures."""

    def get_converter(self, ref: str) -> ConverterSpec | None:
        """Return the converter signature, or None if *ref* is unknown."""
        ...
