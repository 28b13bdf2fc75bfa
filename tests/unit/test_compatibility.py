"""Unit tests for the compatibility evaluator."""

from __future__ import annotations

import pytest

from map_plan.core.enums import DiagnosticCode
from map_plan.mapping.compatibility import classify_pair, evaluate_compatibility
from map_plan.mapping.converters import ConverterRegistry
from map_plan.mapping.overrides import MemberOverrides
from map_plan.mapping.plan import (
    CollectionOfComplex,
    CollectionOfPrimitive,
    Conditional,
    Converter,
    Direct,
    NestedObject,
    NumericWiden,
    PlanRef,
)
from map_plan.schema.descriptor import NullableOf, classify
from map_plan.schema.model import PropertySchema, TypeSchema


def kind_of(source: object, dest: object):
    return classify_pair(classify(source), classify(dest))


class TestClassifyPair:
    def test_identical_is_direct(self) -> None:
        assert kind_of("string", "string") == Direct()
        assert kind_of("Int32", "Int32") == Direct()

    def test_nullable_destination_is_direct(self) -> None:
        assert kind_of(int, int | None) == Direct()

    def test_nullable_source_is_direct(self) -> None:
        assert kind_of(int | None, int) == Direct()

    def test_widening(self) -> None:
        assert kind_of("Int32", "Int64") == NumericWiden()

    def test_narrowing_is_still_widen(self) -> None:
        assert kind_of("Int64", "Int32") == NumericWiden()

    def test_nullable_numeric_widen(self) -> None:
        assert kind_of("Int32", NullableOf(classify("decimal"))) == NumericWiden()
        assert kind_of(int | None, float) == NumericWiden()

    def test_numeric_to_string_incompatible(self) -> None:
        assert kind_of("Int32", "string") is None

    def test_collection_of_primitives(self) -> None:
        assert kind_of(list["Int32"], set["Int64"]) == CollectionOfPrimitive()
        assert kind_of(list[str], tuple[bytes, ...]) == CollectionOfPrimitive()

    def test_identical_primitive_collections_are_direct(self) -> None:
        assert kind_of(list[int], set[int]) == Direct()
        assert kind_of(list[str], tuple[str, ...]) == Direct()

    def test_collection_of_differing_scalars(self) -> None:
        assert kind_of(list[int], list[float]) == CollectionOfPrimitive()

    def test_collection_of_complex(self) -> None:
        assert kind_of(list["Order"], list["OrderDto"]) == CollectionOfComplex(
            PlanRef("Order", "OrderDto")
        )

    def test_identical_collection_of_complex_is_direct(self) -> None:
        assert kind_of(list["Order"], list["Order"]) == Direct()

    def test_mixed_collection_incompatible(self) -> None:
        assert kind_of(list["Order"], list[str]) is None

    def test_nested_object(self) -> None:
        assert kind_of("ContactInfo", "ContactInfoDto") == NestedObject(
            PlanRef("ContactInfo", "ContactInfoDto")
        )

    def test_nullable_nested_object(self) -> None:
        assert kind_of(NullableOf(classify("ContactInfo")), "ContactInfoDto") == NestedObject(
            PlanRef("ContactInfo", "ContactInfoDto")
        )

    def test_complex_to_collection_incompatible(self) -> None:
        assert kind_of("Order", list["Order"]) is None


class TestEvaluateCompatibility:
    @pytest.fixture
    def source_schema(self) -> TypeSchema:
        return TypeSchema.of(
            "Reading",
            [
                PropertySchema.of("Celsius", float),
                PropertySchema.of("HasValue", bool),
                PropertySchema.of("Label", str),
                PropertySchema.of("MaybeFlag", bool | None),
                PropertySchema.of("Hidden", bool, readable=False),
            ],
        )

    @pytest.fixture
    def converters(self) -> ConverterRegistry:
        registry = ConverterRegistry()
        registry.register("c_to_f", float, float)
        registry.register("c_to_label", float, str)
        return registry

    def test_converter_bypasses_structural_rules(
        self, source_schema: TypeSchema, converters: ConverterRegistry
    ) -> None:
        source = source_schema.get("Celsius")
        dest = PropertySchema.of("Display", str)
        evaluation = evaluate_compatibility(
            source, dest, MemberOverrides(converter="c_to_label"), source_schema, converters
        )
        assert evaluation.kind == Converter("c_to_label")
        assert evaluation.notes == ()

    def test_converter_used_even_when_types_identical(
        self, source_schema: TypeSchema, converters: ConverterRegistry
    ) -> None:
        source = source_schema.get("Celsius")
        dest = PropertySchema.of("Fahrenheit", float)
        evaluation = evaluate_compatibility(
            source, dest, MemberOverrides(converter="c_to_f"), source_schema, converters
        )
        assert evaluation.kind == Converter("c_to_f")

    def test_converter_mismatch_falls_through(
        self, source_schema: TypeSchema, converters: ConverterRegistry
    ) -> None:
        source = source_schema.get("Celsius")
        dest = PropertySchema.of("Celsius", float)
        evaluation = evaluate_compatibility(
            source, dest, MemberOverrides(converter="c_to_label"), source_schema, converters
        )
        assert evaluation.kind == Direct()
        assert [code for code, _ in evaluation.notes] == [DiagnosticCode.CONVERTER_MISMATCH]

    def test_converter_mismatch_can_end_incompatible(
        self, source_schema: TypeSchema, converters: ConverterRegistry
    ) -> None:
        source = source_schema.get("Label")
        dest = PropertySchema.of("Label", float)
        evaluation = evaluate_compatibility(
            source, dest, MemberOverrides(converter="c_to_f"), source_schema, converters
        )
        assert evaluation.compatible is False

    def test_unknown_converter_falls_through(self, source_schema: TypeSchema) -> None:
        source = source_schema.get("Celsius")
        dest = PropertySchema.of("Celsius", float)
        evaluation = evaluate_compatibility(
            source, dest, MemberOverrides(converter="missing"), source_schema, None
        )
        assert evaluation.kind == Direct()
        assert evaluation.notes[0][0] is DiagnosticCode.UNKNOWN_CONVERTER

    def test_condition_wraps_kind(self, source_schema: TypeSchema) -> None:
        source = source_schema.get("Celsius")
        dest = PropertySchema.of("Celsius", float)
        evaluation = evaluate_compatibility(
            source, dest, MemberOverrides(condition="HasValue"), source_schema
        )
        assert evaluation.kind == Conditional(Direct(), "HasValue")

    def test_condition_wraps_converter(
        self, source_schema: TypeSchema, converters: ConverterRegistry
    ) -> None:
        source = source_schema.get("Celsius")
        dest = PropertySchema.of("Fahrenheit", float)
        evaluation = evaluate_compatibility(
            source,
            dest,
            MemberOverrides(converter="c_to_f", condition="HasValue"),
            source_schema,
            converters,
        )
        assert evaluation.kind == Conditional(Converter("c_to_f"), "HasValue")

    @pytest.mark.parametrize("condition", ["Missing", "Label", "MaybeFlag", "Hidden"])
    def test_invalid_condition_dropped(self, source_schema: TypeSchema, condition: str) -> None:
        source = source_schema.get("Celsius")
        dest = PropertySchema.of("Celsius", float)
        evaluation = evaluate_compatibility(
            source, dest, MemberOverrides(condition=condition), source_schema
        )
        assert evaluation.kind == Direct()
        assert [code for code, _ in evaluation.notes] == [DiagnosticCode.INVALID_CONDITION]

    def test_incompatible_with_condition_stays_incompatible(self, source_schema: TypeSchema) -> None:
        source = source_schema.get("Label")
        dest = PropertySchema.of("Label", int)
        evaluation = evaluate_compatibility(
            source, dest, MemberOverrides(condition="HasValue"), source_schema
        )
        assert evaluation.kind is None
