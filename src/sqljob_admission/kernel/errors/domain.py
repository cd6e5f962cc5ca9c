"""Domain errors – admission rule and invariant violations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

from sqljob_admission.kernel.errors.base import BaseError

if TYPE_CHECKING:
    from sqljob_admission.application.sqljob.violations import Violation


class DomainError(BaseError):
    """Raised when a domain rule / invariant is violated."""

    default_code = "domain_error"


class InvariantViolationError(DomainError):
    """An internal invariant of the engine was violated."""

    default_code = "invariant_violation"


class MutabilityTableError(InvariantViolationError):
    """The mutability table does not cover a field of the job spec.

    This is a defect in the engine, never a property of the submitted object,
    so it is raised instead of being folded into a denial.
    """

    default_code = "mutability_table_error"

    def __init__(self, fields: Sequence[str], **kwargs: Any) -> None:
        names = ", ".join(sorted(fields))
        super().__init__(f"mutability table has no entry for: {names}", **kwargs)
        self.fields = tuple(sorted(fields))


class ValidationError(DomainError):
    """Input data does not meet validation rules.

    ``errors`` is a list of field-level validation failures.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


class AdmissionDeniedError(ValidationError):
    """A SqlJob create or update was denied by admission control."""

    default_code = "admission_denied"

    def __init__(self, violations: "Sequence[Violation]", **kwargs: Any) -> None:
        reasons = [str(v) for v in violations]
        super().__init__(
            "; ".join(reasons) or "denied",
            errors=[v.to_dict() for v in violations],
            **kwargs,
        )
        self.violations = tuple(violations)
        self.reasons = reasons


__all__ = [
    "AdmissionDeniedError",
    "DomainError",
    "InvariantViolationError",
    "MutabilityTableError",
    "ValidationError",
]
