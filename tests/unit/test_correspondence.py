"""Unit tests for override grouping and property correspondence resolution."""

from __future__ import annotations

import pytest

from map_plan.core.enums import DiagnosticCode
from map_plan.core.exceptions import OverrideConflictError
from map_plan.mapping.correspondence import resolve_correspondences
from map_plan.mapping.overrides import (
    Condition,
    Convert,
    Ignore,
    MemberOverrides,
    Rename,
    group_overrides,
    override_kind,
    overrides_for,
)
from map_plan.schema.model import PropertySchema, TypeSchema


class TestGroupOverrides:
    def test_groups_by_member(self) -> None:
        grouped = group_overrides(
            [Rename("Name", "FullName"), Convert("Temp", "c_to_f"), Condition("Temp", "HasTemp")]
        )
        assert grouped["Name"] == MemberOverrides(rename="FullName")
        assert grouped["Temp"] == MemberOverrides(converter="c_to_f", condition="HasTemp")

    def test_ignore_combines_with_other_kinds(self) -> None:
        grouped = group_overrides([Rename("Name", "FullName"), Ignore("Name")])
        assert grouped["Name"].ignore is True
        assert grouped["Name"].rename == "FullName"

    def test_identical_repeat_is_harmless(self) -> None:
        grouped = group_overrides([Rename("Name", "A"), Rename("Name", "A")])
        assert grouped["Name"].rename == "A"

    def test_conflicting_kind_raises(self) -> None:
        with pytest.raises(OverrideConflictError, match="rename"):
            group_overrides([Rename("Name", "A"), Rename("Name", "B")])

    def test_missing_member_is_empty(self) -> None:
        assert overrides_for({}, "Anything").is_empty

    def test_override_kind_names(self) -> None:
        assert override_kind(Ignore("x")) == "ignore"
        assert override_kind(Condition("x", "y")) == "condition"


class TestResolveCorrespondences:
    @pytest.fixture
    def source(self) -> TypeSchema:
        return TypeSchema.of(
            "Source",
            [
                PropertySchema.of("Id", "int32"),
                PropertySchema.of("FullName", "string"),
                PropertySchema.of("Secret", "string", readable=False),
                PropertySchema.of("Email", "string"),
            ],
        )

    def test_convention_match_by_identical_name(self, source: TypeSchema) -> None:
        dest = TypeSchema.of("Dest", {"Id": "int32", "Email": "string"})
        result = resolve_correspondences(source, dest, {})
        assert [(c.destination.name, c.source.name) for c in result] == [
            ("Id", "Id"),
            ("Email", "Email"),
        ]

    def test_order_follows_destination(self, source: TypeSchema) -> None:
        dest = TypeSchema.of("Dest", {"Email": "string", "Id": "int32"})
        result = resolve_correspondences(source, dest, {})
        assert [c.destination.name for c in result] == ["Email", "Id"]

    def test_name_match_is_case_sensitive(self, source: TypeSchema) -> None:
        dest = TypeSchema.of("Dest", {"email": "string"})
        (corr,) = resolve_correspondences(source, dest, {})
        assert corr.matched is False
        assert corr.omission is DiagnosticCode.NO_CORRESPONDENCE

    def test_rename_override(self, source: TypeSchema) -> None:
        dest = TypeSchema.of("Dest", {"Name": "string"})
        grouped = group_overrides([Rename("Name", "FullName")])
        (corr,) = resolve_correspondences(source, dest, grouped)
        assert corr.source is not None
        assert corr.source.name == "FullName"

    def test_rename_replaces_convention_match(self, source: TypeSchema) -> None:
        dest = TypeSchema.of("Dest", {"Email": "string"})
        grouped = group_overrides([Rename("Email", "FullName")])
        (corr,) = resolve_correspondences(source, dest, grouped)
        assert corr.source.name == "FullName"

    def test_dangling_rename_is_excluded(self, source: TypeSchema) -> None:
        dest = TypeSchema.of("Dest", {"Name": "string"})
        grouped = group_overrides([Rename("Name", "DoesNotExist")])
        (corr,) = resolve_correspondences(source, dest, grouped)
        assert corr.matched is False
        assert corr.omission is DiagnosticCode.DANGLING_RENAME

    def test_ignore_wins_over_rename(self, source: TypeSchema) -> None:
        dest = TypeSchema.of("Dest", {"Name": "string"})
        grouped = group_overrides([Rename("Name", "FullName"), Ignore("Name")])
        (corr,) = resolve_correspondences(source, dest, grouped)
        assert corr.matched is False
        assert corr.omission is DiagnosticCode.IGNORED

    def test_unreadable_source_not_eligible(self, source: TypeSchema) -> None:
        dest = TypeSchema.of("Dest", {"Secret": "string"})
        (corr,) = resolve_correspondences(source, dest, {})
        assert corr.matched is False

    def test_unwritable_destination_never_considered(self, source: TypeSchema) -> None:
        dest = TypeSchema.of(
            "Dest",
            [
                PropertySchema.of("Id", "int32", writable=False),
                PropertySchema.of("Email", "string"),
            ],
        )
        grouped = group_overrides([Rename("Id", "Id")])
        result = resolve_correspondences(source, dest, grouped)
        assert [c.destination.name for c in result] == ["Email"]

    def test_no_writable_properties(self, source: TypeSchema) -> None:
        dest = TypeSchema.of("Dest", [PropertySchema.of("Id", "int32", writable=False)])
        assert resolve_correspondences(source, dest, {}) == []
