"""Config settings – 12-factor env-based configuration."""
from sqljob_admission.config.settings.admission import AdmissionSettings
from sqljob_admission.config.settings.base import Settings
from sqljob_admission.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["AdmissionSettings", "EnvSettingsLoader", "Settings", "SettingsLoader"]
