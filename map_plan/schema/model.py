"""Type schema data classes.

Schemas are supplied by an external adapter and treated as read-only
plain data: records are interned by type id and referenced by id.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from map_plan.core.exceptions import InvalidSchemaError
from map_plan.schema.descriptor import TypeDescriptor, classify


@dataclass(frozen=True)
class PropertySchema:
    """A single property of a record type."""

    name: str
    type: TypeDescriptor
    readable: bool = True
    writable: bool = True

    @classmethod
    def of(
        cls,
        name: str,
        type_ref: Any,
        *,
        readable: bool = True,
        writable: bool = True,
    ) -> PropertySchema:
        """Build a property, classifying *type_ref* on the way in."""
        return cls(name=name, type=classify(type_ref), readable=readable, writable=writable)


@dataclass(frozen=True)
class TypeSchema:
    """Structural description of a record type.

    Property order is declaration order and drives plan ordering.
    """

    id: str
    properties: tuple[PropertySchema, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any iterable but store a tuple so the schema stays hashable
        if not isinstance(self.properties, tuple):
            object.__setattr__(self, "properties", tuple(self.properties))
        seen: set[str] = set()
        for prop in self.properties:
            if prop.name in seen:
                raise InvalidSchemaError(self.id, f"duplicate property '{prop.name}'")
            seen.add(prop.name)

    @classmethod
    def of(cls, type_id: str, properties: Iterable[PropertySchema] | dict[str, Any]) -> TypeSchema:
        """Build a schema from properties or a ``{name: type_ref}`` dict."""
        if isinstance(properties, dict):
            return cls(
                id=type_id,
                properties=tuple(PropertySchema.of(n, t) for n, t in properties.items()),
            )
        return cls(id=type_id, properties=tuple(properties))

    def get(self, name: str) -> PropertySchema | None:
        """Look up a property by exact name."""
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    @property
    def readable(self) -> list[PropertySchema]:
        """Properties with a read capability, in declaration order."""
        return [p for p in self.properties if p.readable]

    @property
    def writable(self) -> list[PropertySchema]:
        """Properties with a write capability, in declaration order."""
        return [p for p in self.properties if p.writable]
