"""Converter registry.

Resolves converter references to their declared input/output types. The
engine only compares those types against property types; it never calls
a converter.
"""

from __future__ import annotations

import inspect
import typing
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from map_plan.core.exceptions import ConfigurationError, DuplicateConverterError
from map_plan.schema.descriptor import TypeDescriptor, classify


@dataclass(frozen=True)
class ConverterSpec:
    """Declared signature of a value converter."""

    ref: str
    input_type: TypeDescriptor
    output_type: TypeDescriptor


class ConverterRegistry:
    """In-memory converter registry.

    Example:
        registry = ConverterRegistry()
        registry.register("celsius_to_fahrenheit", float, float)

        @registry.converter
        def cents_to_decimal(value: int) -> Decimal: ...
    """

    def __init__(self) -> None:
        self._converters: dict[str, ConverterSpec] = {}

    def register(self, ref: str, input_type: Any, output_type: Any) -> ConverterSpec:
        """Register a converter by reference with its input and output types.

        Raises:
            DuplicateConverterError: If *ref* is already registered.
        """
        if not ref or not ref.strip():
            raise ConfigurationError("Converter reference cannot be empty")
        if ref in self._converters:
            raise DuplicateConverterError(ref)
        spec = ConverterSpec(ref=ref, input_type=classify(input_type), output_type=classify(output_type))
        self._converters[ref] = spec
        return spec

    def register_callable(self, fn: Callable[..., Any], ref: str | None = None) -> ConverterSpec:
        """Register a converter function using its annotations.

        The first parameter's annotation is the input type and the return
        annotation the output type. *ref* defaults to the function's
        ``__qualname__``.
        """
        try:
            hints = typing.get_type_hints(fn)
        except (NameError, TypeError) as e:
            raise ConfigurationError(f"Cannot resolve annotations of converter {fn!r}: {e}") from e

        params = [
            p
            for p in inspect.signature(fn).parameters.values()
            if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.name not in ("self", "cls")
        ]
        if not params or params[0].name not in hints or "return" not in hints:
            raise ConfigurationError(
                f"Converter {fn!r} needs an annotated first parameter and return type"
            )
        return self.register(ref or fn.__qualname__, hints[params[0].name], hints["return"])

    def converter(self, fn: Callable[..., Any]) -> Callable[..., Any]:
        """Decorator form of register_callable."""
        self.register_callable(fn)
        return fn

    def get_converter(self, ref: str) -> ConverterSpec | None:
        return self._converters.get(ref)

    def has(self, ref: str) -> bool:
        return ref in self._converters

    @property
    def refs(self) -> list[str]:
        """All registered converter references, sorted alphabetically."""
        return sorted(self._converters.keys())

    def __len__(self) -> int:
        return len(self._converters)
