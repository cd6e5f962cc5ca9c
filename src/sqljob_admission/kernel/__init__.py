"""Kernel – 100% framework-agnostic building blocks."""

from sqljob_admission.kernel.errors import (
    AdmissionDeniedError,
    ApplicationError,
    BaseError,
    DomainError,
    InfrastructureError,
    InvariantViolationError,
    MutabilityTableError,
    SerializationError,
    ValidationError,
)

__all__ = [
    "AdmissionDeniedError",
    "ApplicationError",
    "BaseError",
    "DomainError",
    "InfrastructureError",
    "InvariantViolationError",
    "MutabilityTableError",
    "SerializationError",
    "ValidationError",
]
