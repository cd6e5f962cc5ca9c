"""Single-field validators – pure functions returning violations."""
from sqljob_admission.application.validation.bounds import (
    BOUNDED_FIELDS,
    BoundsLimits,
    check_bound,
    validate_bounds,
)
from sqljob_admission.application.validation.dependencies import validate_dependencies
from sqljob_admission.application.validation.recurrence import (
    CRON_FIELD_COUNT,
    check_recurrence,
    validate_schedule,
)
from sqljob_admission.application.validation.sources import validate_sql_source

__all__ = [
    "BOUNDED_FIELDS",
    "BoundsLimits",
    "CRON_FIELD_COUNT",
    "check_bound",
    "check_recurrence",
    "validate_bounds",
    "validate_dependencies",
    "validate_schedule",
    "validate_sql_source",
]
