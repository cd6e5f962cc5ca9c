"""Admission control – mutability table, policies and the engine."""
from sqljob_admission.application.admission.engine import AdmissionEngine
from sqljob_admission.application.admission.mutability import (
    MUTABILITY_TABLE,
    FieldRule,
    Mutability,
    changed_fields,
    immutable,
    mutable,
    verify_table,
)
from sqljob_admission.application.admission.policies import (
    BoundsPolicy,
    DependencyPolicy,
    ImmutabilityPolicy,
    RecurrencePolicy,
    SpecTransition,
    SqlSourcePolicy,
    create_policy,
)
from sqljob_admission.application.admission.request import (
    AdmissionRequest,
    AdmissionResponse,
    Operation,
)

__all__ = [
    "AdmissionEngine",
    "AdmissionRequest",
    "AdmissionResponse",
    "BoundsPolicy",
    "DependencyPolicy",
    "FieldRule",
    "ImmutabilityPolicy",
    "MUTABILITY_TABLE",
    "Mutability",
    "Operation",
    "RecurrencePolicy",
    "SpecTransition",
    "SqlSourcePolicy",
    "changed_fields",
    "create_policy",
    "immutable",
    "mutable",
    "verify_table",
]
