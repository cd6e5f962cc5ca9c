"""Bounds validation – retention and retry counts."""
from __future__ import annotations

import dataclasses

from sqljob_admission.application.sqljob.model import SqlJobSpec, spec_path
from sqljob_admission.application.sqljob.violations import Violation, ViolationKind

__all__ = ["BOUNDED_FIELDS", "BoundsLimits", "check_bound", "validate_bounds"]

BOUNDED_FIELDS: tuple[str, ...] = (
    "successful_jobs_history_limit",
    "failed_jobs_history_limit",
    "backoff_limit",
)


@dataclasses.dataclass(frozen=True)
class BoundsLimits:
    """Upper bounds for the counted policy fields.

    ``None`` means the field is only required to be non-negative.
    """

    history_limit_ceiling: int | None = 10
    backoff_limit_ceiling: int | None = None

    def ceiling_for(self, field_name: str) -> int | None:
        if field_name == "backoff_limit":
            return self.backoff_limit_ceiling
        if field_name in ("successful_jobs_history_limit", "failed_jobs_history_limit"):
            return self.history_limit_ceiling
        raise KeyError(field_name)


def check_bound(field_name: str, value: int | None, ceiling: int | None) -> Violation | None:
    """Check one counted field; absence is always valid."""
    if value is None:
        return None
    if value < 0:
        message = f"must be equal or greater than 0, got {value}"
    elif ceiling is not None and value > ceiling:
        message = f"must be equal or lower than {ceiling}, got {value}"
    else:
        return None
    return Violation(
        kind=ViolationKind.OUT_OF_BOUNDS_VALUE,
        field=spec_path(field_name),
        message=message,
    )


def validate_bounds(spec: SqlJobSpec, limits: BoundsLimits) -> list[Violation]:
    violations = []
    for name in BOUNDED_FIELDS:
        violation = check_bound(name, getattr(spec, name), limits.ceiling_for(name))
        if violation is not None:
            violations.append(violation)
    return violations
