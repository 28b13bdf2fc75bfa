"""Mapping plan data classes.

Frozen dataclasses representing resolved, immutable mapping plans.
Nested plans are referenced by PlanRef, never embedded, so a
self-referential type graph is representable without cycles in memory.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from map_plan.core.enums import HookStage
from map_plan.schema.model import PropertySchema


@dataclass(frozen=True, order=True)
class PlanRef:
    """Identity of a plan within a session: the (source, destination) type pair."""

    source_id: str
    dest_id: str

    def __str__(self) -> str:
        return f"{self.source_id} -> {self.dest_id}"


# --- Mapping kinds ---


@dataclass(frozen=True)
class Direct:
    """Assign the source value as-is."""


@dataclass(frozen=True)
class NumericWiden:
    """Numeric-to-numeric conversion between width classes."""


@dataclass(frozen=True)
class NestedObject:
    """Map a complex value through another plan."""

    plan: PlanRef


@dataclass(frozen=True)
class CollectionOfPrimitive:
    """Copy a collection of non-complex elements."""


@dataclass(frozen=True)
class CollectionOfComplex:
    """Project each complex element through another plan."""

    plan: PlanRef


@dataclass(frozen=True)
class Converter:
    """Run a registered value converter."""

    converter_ref: str


@dataclass(frozen=True)
class Conditional:
    """Apply *inner* only when the boolean source property is true."""

    inner: MappingKind
    condition_property: str


MappingKind = Union[
    Direct,
    NumericWiden,
    NestedObject,
    CollectionOfPrimitive,
    CollectionOfComplex,
    Converter,
    Conditional,
]


def referenced_plan(kind: MappingKind) -> PlanRef | None:
    """Return the nested plan a mapping kind points at, looking through Conditional."""
    if isinstance(kind, Conditional):
        return referenced_plan(kind.inner)
    if isinstance(kind, (NestedObject, CollectionOfComplex)):
        return kind.plan
    return None


@dataclass(frozen=True)
class PropertyMapping:
    """One resolved connection between a source and a destination property."""

    destination: PropertySchema
    source: PropertySchema
    kind: MappingKind

    @property
    def name(self) -> str:
        return self.destination.name


@dataclass(frozen=True)
class MappingHook:
    """A before/after hook recorded on a plan. Never invoked by the engine."""

    stage: HookStage
    hook_ref: str


@dataclass(frozen=True)
class MappingPlan:
    """Resolved, ordered description of how to populate a destination type."""

    source_id: str
    dest_id: str
    mappings: tuple[PropertyMapping, ...] = field(default_factory=tuple)
    hooks: tuple[MappingHook, ...] = field(default_factory=tuple)

    @property
    def ref(self) -> PlanRef:
        return PlanRef(self.source_id, self.dest_id)

    @property
    def destination_names(self) -> list[str]:
        """Mapped destination property names, in plan order."""
        return [m.destination.name for m in self.mappings]

    def get(self, destination_name: str) -> PropertyMapping | None:
        """Look up the mapping for a destination property."""
        for mapping in self.mappings:
            if mapping.destination.name == destination_name:
                return mapping
        return None

    def nested_refs(self) -> list[PlanRef]:
        """Plans referenced by this plan, in mapping order, without duplicates."""
        refs: list[PlanRef] = []
        for mapping in self.mappings:
            ref = referenced_plan(mapping.kind)
            if ref is not None and ref not in refs:
                refs.append(ref)
        return refs

    def hooks_for(self, stage: HookStage) -> list[str]:
        return [h.hook_ref for h in self.hooks if h.stage is stage]
