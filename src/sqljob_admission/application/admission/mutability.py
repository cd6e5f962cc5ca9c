"""Field mutability table – which SqlJob spec fields may change after creation.

The table is the only place that knows whether a field is mutable.  The
update policy diffs two snapshots generically and looks every changed field up
here; adding a field to :class:`SqlJobSpec` without an entry is caught by
:func:`verify_table` before a single request is served.

Rules attached to an entry run against the *new* object whenever that field
changed, including for immutable fields (so clearing ``sql`` also reports a
missing SQL source).
"""
from __future__ import annotations

import dataclasses
import enum
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

from sqljob_admission.application.sqljob.model import SqlJob, SqlJobSpec
from sqljob_admission.application.sqljob.violations import Violation
from sqljob_admission.application.validation import (
    BoundsLimits,
    check_bound,
    validate_schedule,
    validate_sql_source,
)
from sqljob_admission.kernel.errors import MutabilityTableError

__all__ = [
    "FieldRule",
    "MUTABILITY_TABLE",
    "Mutability",
    "Revalidation",
    "changed_fields",
    "immutable",
    "mutable",
    "verify_table",
]

Revalidation = Callable[[SqlJob, BoundsLimits], Iterable[Violation]]


class Mutability(str, enum.Enum):
    IMMUTABLE = "Immutable"
    MUTABLE = "Mutable"


@dataclasses.dataclass(frozen=True)
class FieldRule:
    mutability: Mutability
    revalidate: Revalidation | None = None

    @property
    def is_mutable(self) -> bool:
        return self.mutability is Mutability.MUTABLE


def immutable(revalidate: Revalidation | None = None) -> FieldRule:
    return FieldRule(Mutability.IMMUTABLE, revalidate)


def mutable(revalidate: Revalidation | None = None) -> FieldRule:
    return FieldRule(Mutability.MUTABLE, revalidate)


def _sql_source(job: SqlJob, limits: BoundsLimits) -> list[Violation]:  # noqa: ARG001
    return validate_sql_source(job.spec)


def _schedule(job: SqlJob, limits: BoundsLimits) -> list[Violation]:  # noqa: ARG001
    return validate_schedule(job.spec.schedule)


def _bounded(field_name: str) -> Revalidation:
    def revalidate(job: SqlJob, limits: BoundsLimits) -> list[Violation]:
        violation = check_bound(
            field_name, getattr(job.spec, field_name), limits.ceiling_for(field_name)
        )
        return [] if violation is None else [violation]

    revalidate.__name__ = f"bounds[{field_name}]"
    return revalidate


MUTABILITY_TABLE: Mapping[str, FieldRule] = MappingProxyType(
    {
        "mariadb_ref": immutable(),
        "username": immutable(),
        "password_secret_key_ref": immutable(),
        "database": immutable(),
        "depends_on": immutable(),
        "sql": immutable(_sql_source),
        "sql_config_map_key_ref": mutable(_sql_source),
        "schedule": mutable(_schedule),
        "successful_jobs_history_limit": mutable(_bounded("successful_jobs_history_limit")),
        "failed_jobs_history_limit": mutable(_bounded("failed_jobs_history_limit")),
        "backoff_limit": mutable(_bounded("backoff_limit")),
        "restart_policy": immutable(),
        "resources": mutable(),
        "args": mutable(),
        "node_selector": mutable(),
        "service_account_name": mutable(),
    }
)


def verify_table(table: Mapping[str, FieldRule] = MUTABILITY_TABLE) -> None:
    """Raise :class:`MutabilityTableError` unless *table* covers exactly the spec fields."""
    known = {f.name for f in dataclasses.fields(SqlJobSpec)}
    missing = known - table.keys()
    unknown = table.keys() - known
    if missing or unknown:
        raise MutabilityTableError(
            sorted(missing | unknown),
            detail={"missing": sorted(missing), "unknown": sorted(unknown)},
        )


def changed_fields(old: SqlJobSpec, new: SqlJobSpec) -> list[str]:
    """Names of the spec fields whose values differ, in declaration order."""
    return [
        f.name
        for f in dataclasses.fields(SqlJobSpec)
        if getattr(old, f.name) != getattr(new, f.name)
    ]
