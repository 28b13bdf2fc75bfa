"""Unit tests for schema_from_class."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict

from map_plan.core.enums import NumericWidth
from map_plan.schema.descriptor import (
    ComplexType,
    EnumerableOf,
    NullableOf,
    NumericType,
    StringType,
    type_id_for,
)
from map_plan.schema.introspect import schema_from_class


@dataclass
class LineItem:
    product: str
    quantity: int


@dataclass
class Invoice:
    number: str
    total: Decimal
    notes: Optional[str] = None
    items: list[LineItem] = field(default_factory=list)


@dataclass(frozen=True)
class Money:
    amount: Decimal
    currency: str


class InvoicePydantic(BaseModel):
    number: str
    total: Decimal


class FrozenPydantic(BaseModel):
    model_config = ConfigDict(frozen=True)

    number: str


class Account:
    kind: ClassVar[str] = "account"
    owner: str

    def __init__(self, owner: str, balance: float) -> None:
        self.owner = owner
        self._balance = balance

    @property
    def balance(self) -> float:
        return self._balance

    @property
    def label(self) -> str:
        return self.owner

    @label.setter
    def label(self, value: str) -> None:
        self.owner = value


class TestSchemaFromDataclass:
    def test_fields_in_declaration_order(self) -> None:
        schema = schema_from_class(Invoice)
        assert [p.name for p in schema.properties] == ["number", "total", "notes", "items"]

    def test_default_type_id(self) -> None:
        assert schema_from_class(Invoice).id == type_id_for(Invoice)

    def test_explicit_type_id(self) -> None:
        assert schema_from_class(Invoice, type_id="Invoice").id == "Invoice"

    def test_field_types_classified(self) -> None:
        schema = schema_from_class(Invoice)
        assert schema.get("number").type == StringType()
        assert schema.get("total").type == NumericType(NumericWidth.DECIMAL)
        assert schema.get("notes").type == NullableOf(StringType())
        assert schema.get("items").type == EnumerableOf(ComplexType(type_id_for(LineItem)))

    def test_mutable_dataclass_is_writable(self) -> None:
        assert all(p.writable and p.readable for p in schema_from_class(Invoice).properties)

    def test_frozen_dataclass_is_read_only(self) -> None:
        schema = schema_from_class(Money)
        assert all(p.readable and not p.writable for p in schema.properties)


class TestSchemaFromPydantic:
    def test_model_fields(self) -> None:
        schema = schema_from_class(InvoicePydantic)
        assert [p.name for p in schema.properties] == ["number", "total"]
        assert schema.get("total").type == NumericType(NumericWidth.DECIMAL)

    def test_frozen_model_is_read_only(self) -> None:
        schema = schema_from_class(FrozenPydantic)
        assert schema.get("number").writable is False


class TestSchemaFromPlainClass:
    def test_annotations_then_init_parameters(self) -> None:
        schema = schema_from_class(Account)
        names = [p.name for p in schema.properties]
        assert names[:2] == ["owner", "balance"]

    def test_class_vars_skipped(self) -> None:
        assert schema_from_class(Account).get("kind") is None

    def test_property_without_setter_is_read_only(self) -> None:
        balance = schema_from_class(Account).get("balance")
        assert balance is not None
        assert balance.readable is True
        assert balance.writable is False
        assert balance.type == NumericType(NumericWidth.FLOAT64)

    def test_property_with_setter_is_writable(self) -> None:
        label = schema_from_class(Account).get("label")
        assert label is not None
        assert label.readable and label.writable
        assert label.type == StringType()
