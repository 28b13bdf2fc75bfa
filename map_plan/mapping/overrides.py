"""Per-destination-property override directives.

An override names the destination member it applies to. A member carries
at most one override of each kind; ``Ignore`` wins over everything else.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Union

from map_plan.core.exceptions import OverrideConflictError


@dataclass(frozen=True)
class Rename:
    """Populate *member* from the source property *source_property*."""

    member: str
    source_property: str


@dataclass(frozen=True)
class Ignore:
    """Leave *member* out of the plan."""

    member: str


@dataclass(frozen=True)
class Convert:
    """Populate *member* through the converter registered as *converter_ref*."""

    member: str
    converter_ref: str


@dataclass(frozen=True)
class Condition:
    """Populate *member* only when boolean source property *source_property* is true."""

    member: str
    source_property: str


PropertyOverride = Union[Rename, Ignore, Convert, Condition]

_KIND_NAMES: dict[type, str] = {
    Rename: "rename",
    Ignore: "ignore",
    Convert: "convert",
    Condition: "condition",
}


@dataclass(frozen=True)
class MemberOverrides:
    """All overrides declared for one destination member, at most one per kind."""

    rename: str | None = None
    ignore: bool = False
    converter: str | None = None
    condition: str | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.rename or self.ignore or self.converter or self.condition)


_NO_OVERRIDES = MemberOverrides()


def override_kind(override: PropertyOverride) -> str:
    """Return the short kind name (``rename``, ``ignore``, ...) of an override."""
    return _KIND_NAMES[type(override)]


def group_overrides(overrides: Iterable[PropertyOverride]) -> dict[str, MemberOverrides]:
    """Group a flat override sequence by destination member.

    Repeating an identical override is harmless.

    Raises:
        OverrideConflictError: If a member gets two different overrides of one kind.
    """
    grouped: dict[str, MemberOverrides] = {}
    for override in overrides:
        current = grouped.get(override.member, _NO_OVERRIDES)
        grouped[override.member] = _merge(current, override)
    return grouped


def _merge(current: MemberOverrides, override: PropertyOverride) -> MemberOverrides:
    if isinstance(override, Ignore):
        return replace(current, ignore=True)

    if isinstance(override, Rename):
        attr, value = "rename", override.source_property
    elif isinstance(override, Convert):
        attr, value = "converter", override.converter_ref
    else:
        attr, value = "condition", override.source_property

    existing = getattr(current, attr)
    if existing is not None and existing != value:
        raise OverrideConflictError(override.member, override_kind(override))
    return replace(current, **{attr: value})


def overrides_for(grouped: dict[str, MemberOverrides], member: str) -> MemberOverrides:
    """Return the overrides for *member*, or an empty set."""
    return grouped.get(member, _NO_OVERRIDES)
