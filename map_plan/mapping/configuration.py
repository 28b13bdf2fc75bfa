"""Mapping configuration DSL.

Provides a fluent builder for declaring mapped type pairs and their
per-member overrides. A MapperConfiguration is the OverrideProvider a
MappingSession consults.
"""

from __future__ import annotations

from typing import Any

from map_plan.core.enums import HookStage
from map_plan.core.exceptions import ConfigurationError
from map_plan.mapping.overrides import (
    Condition,
    Convert,
    Ignore,
    PropertyOverride,
    Rename,
    group_overrides,
)
from map_plan.mapping.plan import MappingHook, PlanRef
from map_plan.schema.descriptor import type_id_for


def _type_id(type_ref: Any) -> str:
    if isinstance(type_ref, str):
        _require_name(type_ref, "Type id")
        return type_ref
    return type_id_for(type_ref)


def _require_name(value: str | None, what: str) -> str:
    if value is None or not value.strip():
        raise ConfigurationError(f"{what} cannot be null or whitespace")
    return value


class MappingExpression:
    """Fluent builder for one (source, destination) pair."""

    def __init__(self, configuration: MapperConfiguration, source_id: str, dest_id: str) -> None:
        self._configuration = configuration
        self._source_id = source_id
        self._dest_id = dest_id
        self._overrides: list[PropertyOverride] = []
        self._hooks: list[MappingHook] = []

    @property
    def ref(self) -> PlanRef:
        return PlanRef(self._source_id, self._dest_id)

    def for_member(
        self,
        member: str,
        *,
        map_from: str | None = None,
        ignore: bool = False,
        convert_with: str | None = None,
        map_when: str | None = None,
    ) -> MappingExpression:
        """Configure a destination member in one call."""
        _require_name(member, "Member name")
        if map_from is not None:
            self._add(Rename(member, _require_name(map_from, "Source property name")))
        if ignore:
            self._add(Ignore(member))
        if convert_with is not None:
            self._add(Convert(member, _require_name(convert_with, "Converter reference")))
        if map_when is not None:
            self._add(Condition(member, _require_name(map_when, "Condition property name")))
        return self

    def map_from(self, member: str, source_property: str) -> MappingExpression:
        """Populate *member* from a differently-named source property."""
        return self.for_member(member, map_from=source_property)

    def ignore(self, *members: str) -> MappingExpression:
        """Leave *members* at their default values."""
        for member in members:
            self.for_member(member, ignore=True)
        return self

    def convert_with(self, member: str, converter_ref: str) -> MappingExpression:
        """Populate *member* through a registered converter."""
        return self.for_member(member, convert_with=converter_ref)

    def map_when(self, member: str, condition_property: str) -> MappingExpression:
        """Populate *member* only when a boolean source property is true."""
        return self.for_member(member, map_when=condition_property)

    def before_map(self, hook_ref: str) -> MappingExpression:
        """Record a hook to run before properties are assigned."""
        self._hooks.append(MappingHook(HookStage.BEFORE, _require_name(hook_ref, "Hook reference")))
        return self

    def after_map(self, hook_ref: str) -> MappingExpression:
        """Record a hook to run after properties are assigned."""
        self._hooks.append(MappingHook(HookStage.AFTER, _require_name(hook_ref, "Hook reference")))
        return self

    def reverse_map(self) -> MappingExpression:
        """Also declare the opposite pair, with no overrides of its own.

        Returns the reverse expression so it can be configured further.
        """
        return self._configuration.create_map(self._dest_id, self._source_id)

    @property
    def overrides(self) -> list[PropertyOverride]:
        return list(self._overrides)

    @property
    def hooks(self) -> list[MappingHook]:
        return list(self._hooks)

    def _add(self, override: PropertyOverride) -> None:
        # Raises OverrideConflictError on a second override of the same kind
        group_overrides([*self._overrides, override])
        if override not in self._overrides:
            self._overrides.append(override)


class MapperConfiguration:
    """Collection of declared mapping pairs.

    Example:
        config = MapperConfiguration()
        (config.create_map(Person, PersonDto)
            .map_from("FullName", "Name")
            .ignore("Secret")
            .reverse_map())
    """

    def __init__(self) -> None:
        self._expressions: dict[PlanRef, MappingExpression] = {}

    def create_map(self, source: Any, dest: Any) -> MappingExpression:
        """Declare a (source, destination) pair.

        Declaring the same pair again returns the existing expression.
        """
        ref = PlanRef(_type_id(source), _type_id(dest))
        if ref not in self._expressions:
            self._expressions[ref] = MappingExpression(self, ref.source_id, ref.dest_id)
        return self._expressions[ref]

    def get_expression(self, source: Any, dest: Any) -> MappingExpression | None:
        return self._expressions.get(PlanRef(_type_id(source), _type_id(dest)))

    @property
    def declared_pairs(self) -> list[tuple[str, str]]:
        """Declared pairs in declaration order."""
        return [(ref.source_id, ref.dest_id) for ref in self._expressions]

    # OverrideProvider

    def get_overrides(self, source_id: str, dest_id: str) -> list[PropertyOverride]:
        expression = self._expressions.get(PlanRef(source_id, dest_id))
        return expression.overrides if expression is not None else []

    def get_hooks(self, source_id: str, dest_id: str) -> list[MappingHook]:
        expression = self._expressions.get(PlanRef(source_id, dest_id))
        return expression.hooks if expression is not None else []

    def __len__(self) -> int:
        return len(self._expressions)
