"""SqlJob resource – model, violations and wire codec."""
from sqljob_admission.application.sqljob.codec import sqljob_from_dict, sqljob_to_dict
from sqljob_admission.application.sqljob.model import (
    ConfigMapKeySelector,
    LocalObjectReference,
    MariaDBRef,
    ResourceRequirements,
    RestartPolicy,
    Schedule,
    SecretKeySelector,
    SqlJob,
    SqlJobSpec,
    json_name,
    spec_path,
)
from sqljob_admission.application.sqljob.violations import Violation, ViolationKind

__all__ = [
    "ConfigMapKeySelector",
    "LocalObjectReference",
    "MariaDBRef",
    "ResourceRequirements",
    "RestartPolicy",
    "Schedule",
    "SecretKeySelector",
    "SqlJob",
    "SqlJobSpec",
    "Violation",
    "ViolationKind",
    "json_name",
    "spec_path",
    "sqljob_from_dict",
    "sqljob_to_dict",
]
