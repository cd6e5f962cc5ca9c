"""Recurrence validation – five-field cron expressions.

Each field is first matched against the standard crontab grammar (``*``,
numbers, month and weekday names, ``a-b`` ranges, ``,`` lists and ``/n``
steps).  Extensions such as ``last`` or ``L`` are rejected even where a
particular scheduler understands them, because the CronJob controller does
not.  Value ranges are then checked by APScheduler's :class:`CronTrigger`,
the same trigger the scheduler adapters build from a crontab line.
Evaluation is pinned to UTC so no local timezone lookup happens on the
admission path.
"""
from __future__ import annotations

import re
from typing import Final

from apscheduler.triggers.cron import CronTrigger

from sqljob_admission.application.sqljob.model import Schedule, spec_path
from sqljob_admission.application.sqljob.violations import Violation, ViolationKind

__all__ = ["CRON_FIELD_COUNT", "check_recurrence", "validate_schedule"]

CRON_FIELD_COUNT = 5

_MONTH_NAMES: Final = "jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec"
_DAY_NAMES: Final = "sun|mon|tue|wed|thu|fri|sat"


def _field_pattern(value: str) -> re.Pattern[str]:
    item = rf"(?:\*|(?:{value})(?:-(?:{value}))?)(?:/\d+)?"
    return re.compile(rf"{item}(?:,{item})*", re.IGNORECASE)


_NUMERIC: Final = _field_pattern(r"\d+")

# (name, grammar) in crontab order
_FIELDS: Final = (
    ("minute", _NUMERIC),
    ("hour", _NUMERIC),
    ("day-of-month", _NUMERIC),
    ("month", _field_pattern(rf"\d+|{_MONTH_NAMES}")),
    ("day-of-week", _field_pattern(rf"\d+|{_DAY_NAMES}")),
)


def _check_syntax(fields: list[str]) -> str | None:
    for token, (name, pattern) in zip(fields, _FIELDS):
        if not pattern.fullmatch(token):
            return f"unsupported syntax {token!r} in {name} field"
    return None


def check_recurrence(expression: object) -> str | None:
    """Return ``None`` when *expression* is a valid cron line, else the reason.

    Accepts minute, hour, day-of-month, month and day-of-week fields with
    ``*``, ranges, lists and steps, plus names in the month and day-of-week
    fields.  Empty strings, descriptors such as ``@daily``, extensions such
    as ``L``, ``last``, ``?`` or ``#`` and any other field count are rejected.
    """
    if not isinstance(expression, str):
        return f"expected a string, got {type(expression).__name__}"
    fields = expression.split()
    if not fields:
        return "must not be empty"
    if len(fields) != CRON_FIELD_COUNT:
        return f"expected {CRON_FIELD_COUNT} fields, got {len(fields)}"
    reason = _check_syntax(fields)
    if reason is not None:
        return reason
    try:
        CronTrigger.from_crontab(expression, timezone="UTC")
    except ValueError as exc:
        return str(exc) or "unparseable expression"
    return None


def validate_schedule(schedule: Schedule | None) -> list[Violation]:
    """Validate an optional schedule; an absent schedule is always valid."""
    if schedule is None:
        return []
    reason = check_recurrence(schedule.cron)
    if reason is None:
        return []
    return [
        Violation(
            kind=ViolationKind.MALFORMED_RECURRENCE,
            field=spec_path("schedule", "cron"),
            message=f"invalid cron expression {schedule.cron!r}: {reason}",
        )
    ]
