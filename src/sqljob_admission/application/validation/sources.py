"""SQL source validation – inline SQL versus a ConfigMap reference.

Only the absence of both sources is an error.  When both are present the job
is accepted and the executor prefers the inline text.
"""
from __future__ import annotations

from sqljob_admission.application.sqljob.model import SqlJobSpec, json_name, spec_path
from sqljob_admission.application.sqljob.violations import Violation, ViolationKind

__all__ = ["validate_sql_source"]


def validate_sql_source(spec: SqlJobSpec) -> list[Violation]:
    if spec.has_sql_source:
        return []
    return [
        Violation(
            kind=ViolationKind.MISSING_SQL_SOURCE,
            field=spec_path("sql"),
            message=(
                f"either '{json_name('sql')}' or "
                f"'{json_name('sql_config_map_key_ref')}' must be set"
            ),
        )
    ]
