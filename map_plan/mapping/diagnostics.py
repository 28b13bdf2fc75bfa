"""Omission diagnostics collected during resolution."""

from __future__ import annotations

from dataclasses import dataclass

from map_plan.core.enums import DiagnosticCode


@dataclass(frozen=True)
class Diagnostic:
    """Why one destination property was left out of (or simplified in) a plan."""

    code: DiagnosticCode
    source_id: str
    dest_id: str
    property_name: str
    detail: str = ""

    @property
    def is_intentional(self) -> bool:
        """True when the property was dropped on purpose by an Ignore override."""
        return self.code is DiagnosticCode.IGNORED

    def describe(self) -> str:
        text = f"{self.dest_id}.{self.property_name} [{self.code.value}]"
        if self.detail:
            text += f" {self.detail}"
        return text
