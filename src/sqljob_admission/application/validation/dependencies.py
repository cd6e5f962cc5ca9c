"""Dependency declaration validation.

Only the shape of ``dependsOn`` is checked here.  Whether the referenced jobs
exist, and whether the graph is acyclic, is resolved by the executor when the
job is scheduled; admission never looks other objects up.
"""
from __future__ import annotations

from sqljob_admission.application.sqljob.model import SqlJob, spec_path
from sqljob_admission.application.sqljob.violations import Violation, ViolationKind

__all__ = ["validate_dependencies"]


def validate_dependencies(job: SqlJob) -> list[Violation]:
    violations: list[Violation] = []
    seen: set[str] = set()
    for i, ref in enumerate(job.spec.depends_on):
        field = spec_path("depends_on") + f"[{i}].name"
        name = ref.name.strip()
        if not name:
            message = "must not be empty"
        elif job.name and name == job.name:
            message = f"job {name!r} cannot depend on itself"
        elif name in seen:
            message = f"duplicate dependency {name!r}"
        else:
            seen.add(name)
            continue
        violations.append(
            Violation(
                kind=ViolationKind.INVALID_DEPENDENCY_REFERENCE,
                field=field,
                message=message,
            )
        )
    return violations
