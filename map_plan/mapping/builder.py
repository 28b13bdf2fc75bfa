"""Mapping plan builder.

A MappingSession resolves plans recursively across nested and collection
record types. Plans are memoized per (source, destination) pair; a
placeholder is stored before nested pairs are resolved so self- and
mutually-referential type graphs terminate with a reference to the
in-progress plan.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from map_plan.core.enums import DiagnosticCode
from map_plan.core.exceptions import PlanNotFoundError, SchemaNotFoundError, StrictModeViolation
from map_plan.core.settings import ResolutionSettings
from map_plan.mapping.compatibility import evaluate_compatibility
from map_plan.mapping.correspondence import Correspondence, resolve_correspondences
from map_plan.mapping.diagnostics import Diagnostic
from map_plan.mapping.overrides import group_overrides
from map_plan.mapping.plan import MappingPlan, PlanRef, PropertyMapping, referenced_plan
from map_plan.schema.descriptor import describe, type_id_for
from map_plan.schema.model import TypeSchema
from map_plan.schema.protocol import ConverterProvider, OverrideProvider, SchemaProvider

logger = logging.getLogger(__name__)

_OMISSION_DETAILS = {
    DiagnosticCode.IGNORED: "ignored by override",
    DiagnosticCode.NO_CORRESPONDENCE: "no readable source property with the same name",
}


def _to_type_id(type_ref: Any) -> str:
    return type_ref if isinstance(type_ref, str) else type_id_for(type_ref)


@dataclass(frozen=True)
class PlanTree:
    """A root plan plus every plan it transitively references.

    This is what a code-emission or interpretation layer consumes.
    """

    root: MappingPlan
    plans: Mapping[PlanRef, MappingPlan] = field(default_factory=dict)
    diagnostics: tuple[Diagnostic, ...] = ()

    def __post_init__(self) -> None:
        # Read-only view over a private copy
        if not isinstance(self.plans, MappingProxyType):
            object.__setattr__(self, "plans", MappingProxyType(dict(self.plans)))
        if not isinstance(self.diagnostics, tuple):
            object.__setattr__(self, "diagnostics", tuple(self.diagnostics))

    def get(self, ref: PlanRef) -> MappingPlan:
        try:
            return self.plans[ref]
        except KeyError:
            raise PlanNotFoundError(ref.source_id, ref.dest_id) from None

    def __iter__(self) -> Iterator[MappingPlan]:
        return iter(self.plans.values())

    def __len__(self) -> int:
        return len(self.plans)


class MappingSession:
    """One resolution session and its memo table.

    Sessions are not shared across unrelated schema sets. Each top-level
    ``build_plan`` call holds the session lock for its whole
    check-memo / placeholder / finalize sequence, so concurrent callers
    never race on the same pair. Readers take the same lock. A build that
    raises leaves the memo as it was before the call.

    Args:
        schemas: Supplies TypeSchema values by type id.
        overrides: Supplies per-pair overrides and hooks. None means no overrides.
        converters: Resolves converter references. None means no converters.
        settings: Strict mode and logging switches.
    """

    def __init__(
        self,
        schemas: SchemaProvider,
        overrides: OverrideProvider | None = None,
        converters: ConverterProvider | None = None,
        settings: ResolutionSettings | None = None,
    ) -> None:
        self._schemas = schemas
        self._overrides = overrides
        self._converters = converters
        self._settings = settings or ResolutionSettings()
        # None marks a plan whose resolution is in progress
        self._memo: dict[PlanRef, MappingPlan | None] = {}
        self._completed: list[PlanRef] = []
        self._diagnostics: dict[PlanRef, list[Diagnostic]] = {}
        self._lock = threading.RLock()

    @property
    def settings(self) -> ResolutionSettings:
        return self._settings

    # --- Public API ---

    def build_plan(self, source: Any, dest: Any) -> MappingPlan:
        """Return the plan for (source, dest), building it on first request.

        *source* and *dest* are type ids or classes.

        Raises:
            SchemaNotFoundError: If either root type has no schema.
            StrictModeViolation: In strict mode, if the plan or any plan it
                references had to omit a property.
        """
        ref = PlanRef(_to_type_id(source), _to_type_id(dest))
        with self._lock:
            for type_id in (ref.source_id, ref.dest_id):
                if self._schemas.get_schema(type_id) is None:
                    raise SchemaNotFoundError(type_id)

            mark = len(self._completed)
            try:
                self._resolve(ref)
            except BaseException:
                self._rollback(mark)
                raise
            plan = self.get_plan(ref)

            if self._settings.strict:
                problems = [d for d in self.tree(ref).diagnostics if not d.is_intentional]
                if problems:
                    raise StrictModeViolation(ref.source_id, ref.dest_id, problems)
            return plan

    def build_all(self, pairs: Iterable[tuple[Any, Any]] | None = None) -> list[MappingPlan]:
        """Build plans for several root pairs, in the given order.

        Defaults to the pairs declared on the override provider (see
        MapperConfiguration.declared_pairs).
        """
        if pairs is None:
            pairs = getattr(self._overrides, "declared_pairs", ())
        return [self.build_plan(source, dest) for source, dest in pairs]

    def get_plan(self, ref: PlanRef) -> MappingPlan:
        """Look up a finished plan.

        Raises:
            PlanNotFoundError: If the plan was never built in this session.
        """
        with self._lock:
            plan = self._memo.get(ref)
        if plan is None:
            raise PlanNotFoundError(ref.source_id, ref.dest_id)
        return plan

    def has_plan(self, ref: PlanRef) -> bool:
        with self._lock:
            return self._memo.get(ref) is not None

    @property
    def plans(self) -> list[MappingPlan]:
        """Finished plans, in completion order (nested plans before their parents)."""
        with self._lock:
            return [self._memo[ref] for ref in self._completed]  # type: ignore[misc]

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Every diagnostic recorded in this session, in completion order."""
        with self._lock:
            return [d for ref in self._completed for d in self._diagnostics.get(ref, [])]

    def diagnostics_for(self, ref: PlanRef) -> list[Diagnostic]:
        with self._lock:
            return list(self._diagnostics.get(ref, []))

    def closure(self, root: MappingPlan | PlanRef) -> list[MappingPlan]:
        """Root plan plus every transitively referenced plan.

        Depth-first in mapping order; each plan appears once.
        """
        root_ref = root.ref if isinstance(root, MappingPlan) else root
        seen: set[PlanRef] = set()
        ordered: list[MappingPlan] = []

        def visit(ref: PlanRef) -> None:
            if ref in seen:
                return
            seen.add(ref)
            plan = self.get_plan(ref)
            ordered.append(plan)
            for nested in plan.nested_refs():
                visit(nested)

        with self._lock:
            visit(root_ref)
        return ordered

    def tree(self, root: MappingPlan | PlanRef) -> PlanTree:
        """Package the closure of *root* for a consumer."""
        with self._lock:
            plans = self.closure(root)
            diagnostics = tuple(d for plan in plans for d in self._diagnostics.get(plan.ref, []))
        return PlanTree(
            root=plans[0],
            plans={plan.ref: plan for plan in plans},
            diagnostics=diagnostics,
        )

    def __contains__(self, ref: object) -> bool:
        return isinstance(ref, PlanRef) and self.has_plan(ref)

    def __len__(self) -> int:
        with self._lock:
            return len(self._completed)

    # --- Resolution ---

    def _resolve(self, ref: PlanRef) -> bool:
        """Ensure a plan (or an in-progress placeholder) exists for *ref*.

        Returns False when a schema is missing; nothing is memoized then.
        """
        if ref in self._memo:
            if self._memo[ref] is None:
                logger.debug("Plan %s is in progress; referencing placeholder", ref)
            return True

        source_schema = self._schemas.get_schema(ref.source_id)
        dest_schema = self._schemas.get_schema(ref.dest_id)
        if source_schema is None or dest_schema is None:
            return False

        self._memo[ref] = None
        diagnostics: list[Diagnostic] = []

        grouped = group_overrides(self._pair_overrides(ref))
        mappings: list[PropertyMapping] = []

        for corr in resolve_correspondences(source_schema, dest_schema, grouped):
            mapping = self._map_property(ref, corr, source_schema, diagnostics)
            if mapping is not None:
                mappings.append(mapping)

        plan = MappingPlan(
            source_id=ref.source_id,
            dest_id=ref.dest_id,
            mappings=tuple(mappings),
            hooks=tuple(self._pair_hooks(ref)),
        )
        self._memo[ref] = plan
        self._completed.append(ref)
        self._diagnostics[ref] = diagnostics
        logger.debug("Resolved plan %s with %d mapping(s)", ref, len(mappings))
        return True

    def _rollback(self, mark: int) -> None:
        """Forget everything a failed top-level build left behind.

        Plans finished after *mark* may reference the pair that failed, so
        they are dropped along with every in-progress placeholder.
        """
        for ref in self._completed[mark:]:
            del self._memo[ref]
            self._diagnostics.pop(ref, None)
        del self._completed[mark:]
        for ref in [r for r, plan in self._memo.items() if plan is None]:
            del self._memo[ref]
        logger.debug("Rolled back plans resolved by a failed build")

    def _map_property(
        self,
        ref: PlanRef,
        corr: Correspondence,
        source_schema: TypeSchema,
        diagnostics: list[Diagnostic],
    ) -> PropertyMapping | None:
        dest = corr.destination
        if corr.source is None:
            code = corr.omission or DiagnosticCode.NO_CORRESPONDENCE
            detail = _OMISSION_DETAILS.get(code)
            if detail is None:
                detail = f"rename source '{corr.overrides.rename}' not found or not readable"
            self._record(diagnostics, code, ref, dest.name, detail)
            return None

        evaluation = evaluate_compatibility(
            corr.source, dest, corr.overrides, source_schema, self._converters
        )
        for code, detail in evaluation.notes:
            self._record(diagnostics, code, ref, dest.name, detail)

        if evaluation.kind is None:
            self._record(
                diagnostics,
                DiagnosticCode.INCOMPATIBLE,
                ref,
                dest.name,
                f"{describe(corr.source.type)} cannot populate {describe(dest.type)}",
            )
            return None

        nested = referenced_plan(evaluation.kind)
        if nested is not None and not self._resolve(nested):
            self._record(
                diagnostics,
                DiagnosticCode.MISSING_SCHEMA,
                ref,
                dest.name,
                f"no schema for nested pair {nested}",
            )
            return None

        return PropertyMapping(destination=dest, source=corr.source, kind=evaluation.kind)

    def _record(
        self,
        diagnostics: list[Diagnostic],
        code: DiagnosticCode,
        ref: PlanRef,
        property_name: str,
        detail: str,
    ) -> None:
        diagnostic = Diagnostic(code, ref.source_id, ref.dest_id, property_name, detail)
        diagnostics.append(diagnostic)
        if self._settings.log_omissions:
            logger.debug("Mapping %s: %s", ref, diagnostic.describe())

    def _pair_overrides(self, ref: PlanRef) -> list[Any]:
        if self._overrides is None:
            return []
        return list(self._overrides.get_overrides(ref.source_id, ref.dest_id))

    def _pair_hooks(self, ref: PlanRef) -> list[Any]:
        if self._overrides is None:
            return []
        return list(self._overrides.get_hooks(ref.source_id, ref.dest_id))


def build_plan(
    source: Any,
    dest: Any,
    schemas: SchemaProvider,
    overrides: OverrideProvider | None = None,
    converters: ConverterProvider | None = None,
    settings: ResolutionSettings | dict[str, Any] | None = None,
) -> PlanTree:
    """Resolve the plan tree for (source, dest) in a fresh session.

    Every call is independent: rebuilding with different overrides yields
    new plans and never touches earlier results.
    """
    if isinstance(settings, dict):
        settings = ResolutionSettings.model_validate(settings)
    session = MappingSession(schemas, overrides, converters, settings)
    plan = session.build_plan(source, dest)
    return session.tree(plan)
