"""Admission policies – the create-time checks and the update-time immutability policy."""
from __future__ import annotations

import dataclasses
from typing import Mapping

from sqljob_admission.application.admission.mutability import (
    MUTABILITY_TABLE,
    FieldRule,
    changed_fields,
)
from sqljob_admission.application.sqljob.model import SqlJob, spec_path
from sqljob_admission.application.sqljob.violations import Violation, ViolationKind
from sqljob_admission.application.validation import (
    BoundsLimits,
    validate_bounds,
    validate_dependencies,
    validate_schedule,
    validate_sql_source,
)
from sqljob_admission.kernel.ddd.policies import AllOf, Policy, PolicyResult
from sqljob_admission.kernel.errors import MutabilityTableError

__all__ = [
    "BoundsPolicy",
    "DependencyPolicy",
    "ImmutabilityPolicy",
    "RecurrencePolicy",
    "SqlSourcePolicy",
    "SpecTransition",
    "create_policy",
]


class RecurrencePolicy(Policy[SqlJob]):
    def evaluate(self, context: SqlJob) -> PolicyResult:
        return PolicyResult.of(validate_schedule(context.spec.schedule))


class BoundsPolicy(Policy[SqlJob]):
    def __init__(self, limits: BoundsLimits) -> None:
        self._limits = limits

    def evaluate(self, context: SqlJob) -> PolicyResult:
        return PolicyResult.of(validate_bounds(context.spec, self._limits))


class SqlSourcePolicy(Policy[SqlJob]):
    def evaluate(self, context: SqlJob) -> PolicyResult:
        return PolicyResult.of(validate_sql_source(context.spec))


class DependencyPolicy(Policy[SqlJob]):
    def evaluate(self, context: SqlJob) -> PolicyResult:
        return PolicyResult.of(validate_dependencies(context))


def create_policy(limits: BoundsLimits) -> AllOf[SqlJob]:
    """All checks a brand-new SqlJob must pass."""
    return AllOf(
        RecurrencePolicy(),
        BoundsPolicy(limits),
        SqlSourcePolicy(),
        DependencyPolicy(),
    )


@dataclasses.dataclass(frozen=True)
class SpecTransition:
    """The last accepted snapshot of a job and the proposed replacement."""

    old: SqlJob
    new: SqlJob


class ImmutabilityPolicy(Policy[SpecTransition]):
    """Classify every changed field through the mutability table.

    Every changed immutable field is reported, then the re-validation rules of
    all changed fields run against the new object.  Unchanged fields are never
    inspected, so an update with ``new == old`` is always allowed.
    """

    def __init__(
        self,
        limits: BoundsLimits,
        table: Mapping[str, FieldRule] = MUTABILITY_TABLE,
    ) -> None:
        self._limits = limits
        self._table = table

    def evaluate(self, context: SpecTransition) -> PolicyResult:
        changed = changed_fields(context.old.spec, context.new.spec)
        unclassified = [name for name in changed if name not in self._table]
        if unclassified:
            raise MutabilityTableError(unclassified)

        rules = [(name, self._table[name]) for name in changed]
        violations = [
            Violation(
                kind=ViolationKind.IMMUTABLE_FIELD_CHANGED,
                field=spec_path(name),
                message="field is immutable and cannot be changed",
            )
            for name, rule in rules
            if not rule.is_mutable
        ]
        for _, rule in rules:
            if rule.revalidate is not None:
                violations.extend(rule.revalidate(context.new, self._limits))
        return PolicyResult.of(violations)
