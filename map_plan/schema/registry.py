"""Schema Registry - interns type schemas by type id.

Type ids are plain strings; classes registered through register_class use
``module.QualName``:
    app.models.Person        -> TypeSchema(id="app.models.Person", ...)
    app.dto.PersonDto        -> TypeSchema(id="app.dto.PersonDto", ...)
"""

from __future__ import annotations

from collections.abc import Iterable

from map_plan.core.exceptions import DuplicateSchemaError, SchemaNotFoundError
from map_plan.schema.introspect import schema_from_class
from map_plan.schema.model import TypeSchema


class SchemaRegistry:
    """In-memory SchemaProvider.

    Load schemas up front, then treat the registry as read-only for the
    lifetime of any session that uses it.

    Args:
        schemas: Optional schemas to register immediately.

    Raises:
        DuplicateSchemaError: If two different schemas share a type id.
    """

    def __init__(self, schemas: Iterable[TypeSchema] = ()) -> None:
        self._schemas: dict[str, TypeSchema] = {}
        for schema in schemas:
            self.register(schema)

    def register(self, schema: TypeSchema) -> TypeSchema:
        """Register a schema. Re-registering an identical schema is a no-op."""
        existing = self._schemas.get(schema.id)
        if existing is not None and existing != schema:
            raise DuplicateSchemaError(schema.id)
        self._schemas[schema.id] = schema
        return schema

    def register_class(self, cls: type, *, type_id: str | None = None) -> TypeSchema:
        """Introspect *cls* and register the resulting schema."""
        return self.register(schema_from_class(cls, type_id=type_id))

    def get_schema(self, type_id: str) -> TypeSchema | None:
        return self._schemas.get(type_id)

    def get(self, type_id: str) -> TypeSchema:
        """Look up a schema by type id.

        Raises:
            SchemaNotFoundError: If no schema is registered under *type_id*.
        """
        try:
            return self._schemas[type_id]
        except KeyError:
            raise SchemaNotFoundError(type_id) from None

    def has(self, type_id: str) -> bool:
        """Check if a type id is registered."""
        return type_id in self._schemas

    @property
    def type_ids(self) -> list[str]:
        """List all registered type ids, sorted alphabetically."""
        return sorted(self._schemas.keys())

    def __len__(self) -> int:
        """Number of registered schemas."""
        return len(self._schemas)
