"""SqlJob resource model – immutable snapshots of the object under admission."""
from __future__ import annotations

import dataclasses
import enum
from typing import Any, Mapping

from sqljob_admission.kernel.ddd.value_object import ValueObject

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
    "json_name",
    "spec_path",
]


def _json(name: str, **kwargs: Any) -> Any:
    """Declare a spec field together with its wire (camelCase) name."""
    return dataclasses.field(metadata={"json": name}, **kwargs)


class RestartPolicy(str, enum.Enum):
    """Pod restart policy of the generated Jobs; immutable after creation."""

    ALWAYS = "Always"
    ON_FAILURE = "OnFailure"
    NEVER = "Never"


@dataclasses.dataclass(frozen=True)
class LocalObjectReference(ValueObject):
    """Reference to an object in the same namespace."""

    name: str


@dataclasses.dataclass(frozen=True)
class MariaDBRef(ValueObject):
    """Reference to the MariaDB cluster the job runs against."""

    name: str
    namespace: str = ""
    wait_for_it: bool = True


@dataclasses.dataclass(frozen=True)
class SecretKeySelector(ValueObject):
    name: str
    key: str


@dataclasses.dataclass(frozen=True)
class ConfigMapKeySelector(ValueObject):
    """Pointer to SQL text stored in a ConfigMap; the content may change freely."""

    name: str
    key: str = ""


@dataclasses.dataclass(frozen=True)
class Schedule(ValueObject):
    """Recurrence of a job.  A job without a schedule runs exactly once."""

    cron: str
    suspend: bool = False


@dataclasses.dataclass(frozen=True)
class ResourceRequirements(ValueObject):
    """Compute requests and limits, quantities kept as their string form."""

    requests: Mapping[str, str] = dataclasses.field(default_factory=dict)
    limits: Mapping[str, str] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass(frozen=True)
class SqlJobSpec(ValueObject):
    """Desired state of a SqlJob.

    Every field carries its wire name in ``metadata["json"]``; the same name is
    used in violation messages so a rejected ``kubectl apply`` points at the
    field the user actually wrote.
    """

    mariadb_ref: MariaDBRef = _json("mariaDbRef")
    username: str = _json("username")
    password_secret_key_ref: SecretKeySelector = _json("passwordSecretKeyRef")
    database: str | None = _json("database", default=None)
    depends_on: tuple[LocalObjectReference, ...] = _json("dependsOn", default=())
    sql: str | None = _json("sql", default=None)
    sql_config_map_key_ref: ConfigMapKeySelector | None = _json(
        "sqlConfigMapKeyRef", default=None
    )
    schedule: Schedule | None = _json("schedule", default=None)
    successful_jobs_history_limit: int | None = _json(
        "successfulJobsHistoryLimit", default=None
    )
    failed_jobs_history_limit: int | None = _json("failedJobsHistoryLimit", default=None)
    backoff_limit: int | None = _json("backoffLimit", default=None)
    restart_policy: RestartPolicy = _json("restartPolicy", default=RestartPolicy.ON_FAILURE)
    resources: ResourceRequirements | None = _json("resources", default=None)
    args: tuple[str, ...] = _json("args", default=())
    node_selector: Mapping[str, str] = _json("nodeSelector", default_factory=dict)
    service_account_name: str | None = _json("serviceAccountName", default=None)

    @property
    def has_sql_source(self) -> bool:
        return self.sql is not None or self.sql_config_map_key_ref is not None


@dataclasses.dataclass(frozen=True)
class SqlJob(ValueObject):
    """A named SqlJob as seen by admission control."""

    name: str
    spec: SqlJobSpec
    namespace: str = "default"


_JSON_NAMES: dict[str, str] = {
    f.name: f.metadata["json"] for f in dataclasses.fields(SqlJobSpec)
}


def json_name(field_name: str) -> str:
    """Return the wire name of the ``SqlJobSpec`` attribute *field_name*."""
    return _JSON_NAMES[field_name]


def spec_path(field_name: str, *suffix: str) -> str:
    """Return the dotted path used in violations, e.g. ``spec.schedule.cron``."""
    return ".".join(("spec", json_name(field_name), *suffix))
