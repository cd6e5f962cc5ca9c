"""Config validation errors – the webhook refuses to start on bad settings.

Each error names the dataclass field (``setting_name``) and, when the value
came from the environment, the ``SQLJOB_ADMISSION_*`` variable it was read
from (``detail["env"]``).
"""
from __future__ import annotations

from typing import Any

from sqljob_admission.kernel.errors import ApplicationError


def _setting_detail(setting_name: str, env_key: str | None, **extra: Any) -> dict[str, Any]:
    detail: dict[str, Any] = {"setting": setting_name, **extra}
    if env_key is not None:
        detail["env"] = env_key
    return detail


class ConfigError(ApplicationError):
    """Admission settings could not be loaded."""

    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A setting without a default has no environment variable."""

    default_code = "missing_required_setting"

    def __init__(self, setting_name: str, *, env_key: str | None = None) -> None:
        super().__init__(
            f"{env_key or setting_name} must be set",
            detail=_setting_detail(setting_name, env_key),
        )
        self.setting_name = setting_name
        self.env_key = env_key


class InvalidSettingValueError(ConfigError):
    """A setting is present but cannot be used, e.g. a negative ceiling."""

    default_code = "invalid_setting_value"

    def __init__(
        self,
        setting_name: str,
        value: object,
        reason: str,
        *,
        env_key: str | None = None,
    ) -> None:
        super().__init__(
            f"{env_key or setting_name}={value!r}: {reason}",
            detail=_setting_detail(setting_name, env_key, value=repr(value), reason=reason),
        )
        self.setting_name = setting_name
        self.env_key = env_key
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
