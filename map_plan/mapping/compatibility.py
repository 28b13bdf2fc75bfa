"""Compatibility evaluation for a resolved (source, destination) property pair.

Decision order:
1. Convert override whose declared types match both sides -> Converter
2. Identical descriptors -> Direct
3. Identical after unwrapping one NullableOf level on either side -> Direct
4. Both numeric -> NumericWiden (narrowing is not rejected here)
5. Both enumerable of non-complex elements -> CollectionOfPrimitive
6. Both enumerable of complex elements -> CollectionOfComplex
7. Both complex -> NestedObject
8. Anything else -> incompatible

A valid Condition override wraps whatever kind was chosen.
"""

from __future__ import annotations

from dataclasses import dataclass

from map_plan.core.enums import DiagnosticCode
from map_plan.mapping.overrides import MemberOverrides
from map_plan.mapping.plan import (
    CollectionOfComplex,
    CollectionOfPrimitive,
    Conditional,
    Converter,
    Direct,
    MappingKind,
    NestedObject,
    NumericWiden,
    PlanRef,
)
from map_plan.schema.descriptor import (
    ComplexType,
    EnumerableOf,
    NumericType,
    PrimitiveType,
    TypeDescriptor,
    describe,
    unwrap_nullable,
)
from map_plan.schema.model import PropertySchema, TypeSchema
from map_plan.schema.protocol import ConverterProvider

_BOOLEAN = PrimitiveType("bool")


@dataclass(frozen=True)
class Evaluation:
    """Outcome of evaluating one property pair.

    ``kind`` is None when the pair is incompatible. ``notes`` carries
    non-fatal problems with the overrides (ignored converter, dropped
    condition) as ``(code, detail)`` pairs.
    """

    kind: MappingKind | None
    notes: tuple[tuple[DiagnosticCode, str], ...] = ()

    @property
    def compatible(self) -> bool:
        return self.kind is not None


def evaluate_compatibility(
    source: PropertySchema,
    dest: PropertySchema,
    overrides: MemberOverrides,
    source_schema: TypeSchema,
    converters: ConverterProvider | None = None,
) -> Evaluation:
    """Decide whether and how *source* can populate *dest*."""
    notes: list[tuple[DiagnosticCode, str]] = []

    kind: MappingKind | None = None
    if overrides.converter is not None:
        kind = _converter_kind(source, dest, overrides.converter, converters, notes)
    if kind is None:
        kind = classify_pair(source.type, dest.type)
    if kind is None:
        return Evaluation(None, tuple(notes))

    if overrides.condition is not None:
        problem = _condition_problem(source_schema, overrides.condition)
        if problem is None:
            kind = Conditional(kind, overrides.condition)
        else:
            notes.append((DiagnosticCode.INVALID_CONDITION, problem))

    return Evaluation(kind, tuple(notes))


def classify_pair(source: TypeDescriptor, dest: TypeDescriptor) -> MappingKind | None:
    """Structural rules 2-8: the mapping kind between two descriptors, or None."""
    if source == dest:
        return Direct()

    source = unwrap_nullable(source)
    dest = unwrap_nullable(dest)
    if source == dest:
        return Direct()

    if isinstance(source, NumericType) and isinstance(dest, NumericType):
        return NumericWiden()

    if isinstance(source, EnumerableOf) and isinstance(dest, EnumerableOf):
        source_element = unwrap_nullable(source.element)
        dest_element = unwrap_nullable(dest.element)
        if _is_scalar(source_element) and _is_scalar(dest_element):
            return CollectionOfPrimitive()
        if isinstance(source_element, ComplexType) and isinstance(dest_element, ComplexType):
            return CollectionOfComplex(PlanRef(source_element.type_id, dest_element.type_id))
        return None

    if isinstance(source, ComplexType) and isinstance(dest, ComplexType):
        return NestedObject(PlanRef(source.type_id, dest.type_id))

    return None


def _is_scalar(descriptor: TypeDescriptor) -> bool:
    return not isinstance(descriptor, (ComplexType, EnumerableOf))


def _converter_kind(
    source: PropertySchema,
    dest: PropertySchema,
    converter_ref: str,
    converters: ConverterProvider | None,
    notes: list[tuple[DiagnosticCode, str]],
) -> MappingKind | None:
    spec = converters.get_converter(converter_ref) if converters is not None else None
    if spec is None:
        notes.append((DiagnosticCode.UNKNOWN_CONVERTER, f"converter '{converter_ref}' is not registered"))
        return None
    if spec.input_type != source.type or spec.output_type != dest.type:
        notes.append(
            (
                DiagnosticCode.CONVERTER_MISMATCH,
                f"converter '{converter_ref}' is {describe(spec.input_type)} -> "
                f"{describe(spec.output_type)}, property pair is "
                f"{describe(source.type)} -> {describe(dest.type)}",
            )
        )
        return None
    return Converter(converter_ref)


def _condition_problem(source_schema: TypeSchema, name: str) -> str | None:
    prop = source_schema.get(name)
    if prop is None:
        return f"condition property '{name}' does not exist on {source_schema.id}"
    if not prop.readable:
        return f"condition property '{name}' is not readable"
    if prop.type != _BOOLEAN:
        return f"condition property '{name}' is {describe(prop.type)}, not boolean"
    return None
