"""Config – 12-factor settings and loaders."""

from sqljob_admission.config.settings import (
    AdmissionSettings,
    EnvSettingsLoader,
    Settings,
    SettingsLoader,
)
from sqljob_admission.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "AdmissionSettings",
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]
