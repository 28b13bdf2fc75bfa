"""Build type schemas from Python classes.

Supports dataclasses, Pydantic models, and plain classes.
"""

from __future__ import annotations

import dataclasses
import inspect
import typing
from typing import Any

from map_plan.core.exceptions import InvalidSchemaError
from map_plan.schema.descriptor import classify, type_id_for
from map_plan.schema.model import PropertySchema, TypeSchema


def _is_pydantic_model(cls: type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    try:
        from pydantic import BaseModel

        return isinstance(cls, type) and issubclass(cls, BaseModel)
    except ImportError:
        return False


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError) as e:
        raise InvalidSchemaError(type_id_for(cls), f"cannot resolve annotations: {e}") from e


def _dataclass_properties(cls: type, hints: dict[str, Any]) -> list[PropertySchema]:
    frozen = cls.__dataclass_params__.frozen  # type: ignore[attr-defined]
    return [
        PropertySchema(
            name=f.name,
            type=classify(hints.get(f.name, f.type)),
            readable=True,
            writable=not frozen,
        )
        for f in dataclasses.fields(cls)
    ]


def _pydantic_properties(cls: type) -> list[PropertySchema]:
    # FieldInfo.annotation is already resolved by pydantic
    frozen = bool(cls.model_config.get("frozen", False))  # type: ignore[attr-defined]
    return [
        PropertySchema(
            name=name,
            type=classify(info.annotation),
            readable=True,
            writable=not frozen,
        )
        for name, info in cls.model_fields.items()  # type: ignore[attr-defined]
    ]


def _declared_properties(cls: type) -> dict[str, property]:
    """``@property`` members in declaration order, base classes first."""
    found: dict[str, property] = {}
    for klass in reversed(cls.__mro__[:-1]):
        for name, member in vars(klass).items():
            if isinstance(member, property):
                found[name] = member
    return found


def _return_type(fget: Any) -> Any:
    try:
        return typing.get_type_hints(fget).get("return", Any)
    except (NameError, TypeError):
        return Any


def _plain_properties(cls: type, hints: dict[str, Any]) -> list[PropertySchema]:
    # Annotated class attributes first, then __init__ parameters not yet seen
    names = [
        n
        for n, hint in hints.items()
        if not n.startswith("_") and typing.get_origin(hint) is not typing.ClassVar
    ]
    try:
        sig: inspect.Signature | None = inspect.signature(cls.__init__)  # type: ignore[misc]
    except (ValueError, TypeError):
        sig = None
    try:
        init_hints = typing.get_type_hints(cls.__init__)  # type: ignore[misc]
    except (NameError, TypeError):
        init_hints = {}
    if sig is not None:
        for name, param in sig.parameters.items():
            if name == "self" or param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                continue
            if name not in names:
                names.append(name)

    declared = _declared_properties(cls)
    result = []
    for name in names:
        if name in declared:
            continue
        type_ref = hints.get(name, init_hints.get(name, Any))
        result.append(PropertySchema(name=name, type=classify(type_ref)))

    # @property members: readable, writable only with a setter
    for name, member in declared.items():
        if name.startswith("_"):
            continue
        result.append(
            PropertySchema(
                name=name,
                type=classify(_return_type(member.fget) if member.fget else Any),
                readable=member.fget is not None,
                writable=member.fset is not None,
            )
        )
    return result


def schema_from_class(cls: type, *, type_id: str | None = None) -> TypeSchema:
    """Build a TypeSchema from a dataclass, Pydantic model, or plain class.

    Args:
        cls: The class to describe.
        type_id: Override the schema id. Defaults to ``module.QualName``.

    Returns:
        A schema whose property order follows field declaration order.
    """
    if _is_pydantic_model(cls):
        properties = _pydantic_properties(cls)
    elif dataclasses.is_dataclass(cls):
        properties = _dataclass_properties(cls, _type_hints(cls))
    else:
        properties = _plain_properties(cls, _type_hints(cls))

    return TypeSchema(id=type_id or type_id_for(cls), properties=tuple(properties))
