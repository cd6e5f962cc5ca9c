"""Admission request/response value types."""
from __future__ import annotations

import dataclasses
import enum
from typing import Any, Iterable

from sqljob_admission.application.sqljob.model import SqlJob
from sqljob_admission.application.sqljob.violations import Violation

__all__ = ["AdmissionRequest", "AdmissionResponse", "Operation"]


class Operation(str, enum.Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclasses.dataclass(frozen=True)
class AdmissionRequest:
    """One write observed by the admission host.

    ``new`` is absent on delete; ``old`` is only present on update (and, for
    some hosts, on delete).
    """

    operation: Operation
    new: SqlJob | None = None
    old: SqlJob | None = None


@dataclasses.dataclass(frozen=True)
class AdmissionResponse:
    allowed: bool
    violations: tuple[Violation, ...] = ()

    @classmethod
    def allow(cls) -> "AdmissionResponse":
        return cls(allowed=True)

    @classmethod
    def deny(cls, violations: Iterable[Violation]) -> "AdmissionResponse":
        return cls(allowed=False, violations=tuple(violations))

    @property
    def reasons(self) -> list[str]:
        return [str(v) for v in self.violations]

    def to_dict(self) -> dict[str, Any]:
        return {"allowed": self.allowed, "reasons": self.reasons}

    def __bool__(self) -> bool:
        return self.allowed
