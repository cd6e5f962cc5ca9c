"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError             (domain.py)
    │   ├── InvariantViolationError
    │   │   └── MutabilityTableError
    │   └── ValidationError
    │       └── AdmissionDeniedError
    ├── ApplicationError        (application.py)
    └── InfrastructureError     (infrastructure.py)
        └── SerializationError
"""

from sqljob_admission.kernel.errors.application import ApplicationError
from sqljob_admission.kernel.errors.base import BaseError
from sqljob_admission.kernel.errors.domain import (
    AdmissionDeniedError,
    DomainError,
    InvariantViolationError,
    MutabilityTableError,
    ValidationError,
)
from sqljob_admission.kernel.errors.infrastructure import (
    InfrastructureError,
    SerializationError,
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
