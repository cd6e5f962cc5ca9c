"""Config settings – AdmissionSettings for the engine and the webhook."""
from __future__ import annotations

import dataclasses
import logging
from typing import ClassVar

from sqljob_admission.config.settings.base import Settings
from sqljob_admission.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class AdmissionSettings(Settings):
    """Runtime configuration, read from ``SQLJOB_ADMISSION_*`` variables.

    Attributes:
        history_limit_ceiling: Largest accepted successful/failed history limit.
        backoff_limit_ceiling: Largest accepted backoff limit; ``None`` only
            requires a non-negative value.
        log_level: Name of the root log level.
        webhook_path: Path the validating webhook is served on.
    """

    _prefix: ClassVar[str] = "SQLJOB_ADMISSION"

    history_limit_ceiling: int | None = 10
    backoff_limit_ceiling: int | None = None
    log_level: str = "INFO"
    webhook_path: str = "/validate-sqljob"

    def _validate(self) -> None:
        for name in ("history_limit_ceiling", "backoff_limit_ceiling"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise InvalidSettingValueError(
                    name, value, "must be >= 0", env_key=self.env_key(name)
                )
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise InvalidSettingValueError(
                "log_level", self.log_level, "unknown log level", env_key=self.env_key("log_level")
            )
        if not self.webhook_path.startswith("/"):
            raise InvalidSettingValueError(
                "webhook_path",
                self.webhook_path,
                "must start with '/'",
                env_key=self.env_key("webhook_path"),
            )

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level.upper())


__all__ = ["AdmissionSettings"]
