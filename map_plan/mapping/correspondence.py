"""Property correspondence resolution.

Pairs each writable destination property with the readable source
property that populates it: by Rename override if one is declared,
otherwise by identical name. Output follows destination declaration order.
"""

from __future__ import annotations

from dataclasses import dataclass

from map_plan.core.enums import DiagnosticCode
from map_plan.mapping.overrides import MemberOverrides, overrides_for
from map_plan.schema.model import PropertySchema, TypeSchema


@dataclass(frozen=True)
class Correspondence:
    """A destination property and the source property (if any) that feeds it.

    ``source`` is None when the property is excluded; ``omission`` then says why.
    """

    destination: PropertySchema
    source: PropertySchema | None
    overrides: MemberOverrides
    omission: DiagnosticCode | None = None

    @property
    def matched(self) -> bool:
        return self.source is not None


def resolve_correspondences(
    source_schema: TypeSchema,
    dest_schema: TypeSchema,
    overrides: dict[str, MemberOverrides],
) -> list[Correspondence]:
    """Resolve correspondences for every writable destination property.

    Destination properties without a write capability never appear.
    Excluded properties (ignored, dangling rename, no name match) are
    returned unmatched so callers can report them.
    """
    result: list[Correspondence] = []

    for dest in dest_schema.properties:
        if not dest.writable:
            continue

        member = overrides_for(overrides, dest.name)

        if member.ignore:
            result.append(Correspondence(dest, None, member, DiagnosticCode.IGNORED))
            continue

        if member.rename is not None:
            source = _readable(source_schema, member.rename)
            omission = DiagnosticCode.DANGLING_RENAME
        else:
            source = _readable(source_schema, dest.name)
            omission = DiagnosticCode.NO_CORRESPONDENCE

        if source is None:
            result.append(Correspondence(dest, None, member, omission))
        else:
            result.append(Correspondence(dest, source, member))

    return result


def _readable(schema: TypeSchema, name: str) -> PropertySchema | None:
    prop = schema.get(name)
    if prop is None or not prop.readable:
        return None
    return prop
