"""SqlJob admission violations – failures returned as values."""
from __future__ import annotations

import dataclasses
import enum
from typing import Any

__all__ = ["Violation", "ViolationKind"]


class ViolationKind(str, enum.Enum):
    MALFORMED_RECURRENCE = "MalformedRecurrence"
    OUT_OF_BOUNDS_VALUE = "OutOfBoundsValue"
    MISSING_SQL_SOURCE = "MissingSqlSource"
    IMMUTABLE_FIELD_CHANGED = "ImmutableFieldChanged"
    INVALID_DEPENDENCY_REFERENCE = "InvalidDependencyReference"


@dataclasses.dataclass(frozen=True)
class Violation:
    """One reason for denying an admission request.

    Attributes:
        kind: Category of the failure.
        field: Dotted path of the offending field, e.g. ``spec.username``.
        message: Human-readable explanation.
    """

    kind: ViolationKind
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "field": self.field, "message": self.message}
