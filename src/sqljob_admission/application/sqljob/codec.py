"""SqlJob codec – Kubernetes-style camelCase objects to and from the model.

The admission webhook receives ``object`` / ``oldObject`` as decoded JSON;
:func:`sqljob_from_dict` turns them into :class:`SqlJob` snapshots and raises
:class:`SerializationError` for anything that is not a well-typed SqlJob.
"""
from __future__ import annotations

from typing import Any, Callable, Mapping, TypeVar

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
)
from sqljob_admission.kernel.errors import SerializationError

__all__ = ["sqljob_from_dict", "sqljob_to_dict"]

T = TypeVar("T")

_PAYLOAD = "SqlJob"


def _fail(path: str, reason: str) -> SerializationError:
    return SerializationError(f"{path}: {reason}", payload_type=_PAYLOAD, detail={"path": path})


def _mapping(data: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise _fail(path, f"expected object, got {type(data).__name__}")
    return data


def _str(data: Mapping[str, Any], key: str, path: str, *, required: bool = False) -> str | None:
    value = data.get(key)
    if value is None:
        if required:
            raise _fail(f"{path}.{key}", "required")
        return None
    if not isinstance(value, str):
        raise _fail(f"{path}.{key}", f"expected string, got {type(value).__name__}")
    return value


def _int(data: Mapping[str, Any], key: str, path: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    # bool is an int subclass; JSON true is not a count
    if isinstance(value, bool) or not isinstance(value, int):
        raise _fail(f"{path}.{key}", f"expected integer, got {type(value).__name__}")
    return value


def _bool(data: Mapping[str, Any], key: str, path: str, default: bool) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise _fail(f"{path}.{key}", f"expected boolean, got {type(value).__name__}")
    return value


def _str_map(data: Any, path: str) -> dict[str, str]:
    if data is None:
        return {}
    result: dict[str, str] = {}
    for k, v in _mapping(data, path).items():
        if isinstance(v, bool) or not isinstance(v, (str, int, float)):
            raise _fail(f"{path}.{k}", f"expected scalar, got {type(v).__name__}")
        result[str(k)] = str(v)
    return result


def _optional(data: Mapping[str, Any], key: str, path: str, decode: Callable[[Mapping[str, Any], str], T]) -> T | None:
    value = data.get(key)
    if value is None:
        return None
    sub_path = f"{path}.{key}"
    return decode(_mapping(value, sub_path), sub_path)


def _mariadb_ref(data: Mapping[str, Any], path: str) -> MariaDBRef:
    return MariaDBRef(
        name=_str(data, "name", path, required=True) or "",
        namespace=_str(data, "namespace", path) or "",
        wait_for_it=_bool(data, "waitForIt", path, default=True),
    )


def _secret_key_selector(data: Mapping[str, Any], path: str) -> SecretKeySelector:
    return SecretKeySelector(
        name=_str(data, "name", path, required=True) or "",
        key=_str(data, "key", path, required=True) or "",
    )


def _config_map_key_selector(data: Mapping[str, Any], path: str) -> ConfigMapKeySelector:
    return ConfigMapKeySelector(
        name=_str(data, "name", path, required=True) or "",
        key=_str(data, "key", path) or "",
    )


def _schedule(data: Mapping[str, Any], path: str) -> Schedule:
    cron = data.get("cron")
    if not isinstance(cron, str):
        # malformed cron strings are an admission concern, not a decode failure
        raise _fail(f"{path}.cron", "expected string")
    return Schedule(cron=cron, suspend=_bool(data, "suspend", path, default=False))


def _resources(data: Mapping[str, Any], path: str) -> ResourceRequirements:
    return ResourceRequirements(
        requests=_str_map(data.get("requests"), f"{path}.requests"),
        limits=_str_map(data.get("limits"), f"{path}.limits"),
    )


def _depends_on(data: Any, path: str) -> tuple[LocalObjectReference, ...]:
    if data is None:
        return ()
    if not isinstance(data, list):
        raise _fail(path, f"expected array, got {type(data).__name__}")
    refs = []
    for i, item in enumerate(data):
        item_path = f"{path}[{i}]"
        refs.append(LocalObjectReference(name=_str(_mapping(item, item_path), "name", item_path) or ""))
    return tuple(refs)


def _args(data: Any, path: str) -> tuple[str, ...]:
    if data is None:
        return ()
    if not isinstance(data, list) or not all(isinstance(a, str) for a in data):
        raise _fail(path, "expected array of strings")
    return tuple(data)


def _restart_policy(data: Mapping[str, Any], path: str) -> RestartPolicy:
    raw = _str(data, "restartPolicy", path)
    if raw is None:
        return RestartPolicy.ON_FAILURE
    try:
        return RestartPolicy(raw)
    except ValueError as exc:
        allowed = ", ".join(p.value for p in RestartPolicy)
        raise _fail(f"{path}.restartPolicy", f"unsupported value {raw!r} (allowed: {allowed})") from exc


def _spec(data: Mapping[str, Any], path: str) -> SqlJobSpec:
    mariadb_ref = data.get("mariaDbRef")
    if mariadb_ref is None:
        raise _fail(f"{path}.mariaDbRef", "required")
    password_ref = data.get("passwordSecretKeyRef")
    if password_ref is None:
        raise _fail(f"{path}.passwordSecretKeyRef", "required")

    return SqlJobSpec(
        mariadb_ref=_mariadb_ref(_mapping(mariadb_ref, f"{path}.mariaDbRef"), f"{path}.mariaDbRef"),
        username=_str(data, "username", path, required=True) or "",
        password_secret_key_ref=_secret_key_selector(
            _mapping(password_ref, f"{path}.passwordSecretKeyRef"), f"{path}.passwordSecretKeyRef"
        ),
        database=_str(data, "database", path),
        depends_on=_depends_on(data.get("dependsOn"), f"{path}.dependsOn"),
        sql=_str(data, "sql", path),
        sql_config_map_key_ref=_optional(data, "sqlConfigMapKeyRef", path, _config_map_key_selector),
        schedule=_optional(data, "schedule", path, _schedule),
        successful_jobs_history_limit=_int(data, "successfulJobsHistoryLimit", path),
        failed_jobs_history_limit=_int(data, "failedJobsHistoryLimit", path),
        backoff_limit=_int(data, "backoffLimit", path),
        restart_policy=_restart_policy(data, path),
        resources=_optional(data, "resources", path, _resources),
        args=_args(data.get("args"), f"{path}.args"),
        node_selector=_str_map(data.get("nodeSelector"), f"{path}.nodeSelector"),
        service_account_name=_str(data, "serviceAccountName", path),
    )


def sqljob_from_dict(obj: Any) -> SqlJob:
    """Decode a SqlJob object (``metadata`` + ``spec``) into a :class:`SqlJob`.

    Raises:
        SerializationError: the payload is not a well-typed SqlJob.
    """
    data = _mapping(obj, "$")
    metadata = _mapping(data.get("metadata") or {}, "metadata")
    spec = data.get("spec")
    if spec is None:
        raise _fail("spec", "required")
    return SqlJob(
        name=_str(metadata, "name", "metadata") or "",
        namespace=_str(metadata, "namespace", "metadata") or "default",
        spec=_spec(_mapping(spec, "spec"), "spec"),
    )


def sqljob_to_dict(job: SqlJob) -> dict[str, Any]:
    """Encode *job* as a camelCase object, omitting unset optional fields."""
    spec = job.spec
    out: dict[str, Any] = {
        "mariaDbRef": {
            "name": spec.mariadb_ref.name,
            "waitForIt": spec.mariadb_ref.wait_for_it,
        },
        "username": spec.username,
        "passwordSecretKeyRef": {
            "name": spec.password_secret_key_ref.name,
            "key": spec.password_secret_key_ref.key,
        },
        "restartPolicy": spec.restart_policy.value,
    }
    if spec.mariadb_ref.namespace:
        out["mariaDbRef"]["namespace"] = spec.mariadb_ref.namespace
    if spec.database is not None:
        out["database"] = spec.database
    if spec.depends_on:
        out["dependsOn"] = [{"name": ref.name} for ref in spec.depends_on]
    if spec.sql is not None:
        out["sql"] = spec.sql
    if spec.sql_config_map_key_ref is not None:
        out["sqlConfigMapKeyRef"] = {
            "name": spec.sql_config_map_key_ref.name,
            "key": spec.sql_config_map_key_ref.key,
        }
    if spec.schedule is not None:
        out["schedule"] = {"cron": spec.schedule.cron, "suspend": spec.schedule.suspend}
    for key, value in (
        ("successfulJobsHistoryLimit", spec.successful_jobs_history_limit),
        ("failedJobsHistoryLimit", spec.failed_jobs_history_limit),
        ("backoffLimit", spec.backoff_limit),
        ("serviceAccountName", spec.service_account_name),
    ):
        if value is not None:
            out[key] = value
    if spec.resources is not None:
        out["resources"] = {
            "requests": dict(spec.resources.requests),
            "limits": dict(spec.resources.limits),
        }
    if spec.args:
        out["args"] = list(spec.args)
    if spec.node_selector:
        out["nodeSelector"] = dict(spec.node_selector)
    return {
        "apiVersion": "k8s.mariadb.com/v1alpha1",
        "kind": "SqlJob",
        "metadata": {"name": job.name, "namespace": job.namespace},
        "spec": out,
    }
