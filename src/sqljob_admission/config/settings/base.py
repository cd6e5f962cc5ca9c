"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import ClassVar


@dataclasses.dataclass
class Settings:
    """Base class for settings read from prefixed environment variables.

    ``_prefix`` namespaces the variables of a subclass: the field
    ``history_limit_ceiling`` of a class with prefix ``SQLJOB_ADMISSION`` is
    read from ``SQLJOB_ADMISSION_HISTORY_LIMIT_CEILING``.  Subclasses put
    cross-field checks in :meth:`_validate`, which runs on every construction.
    """

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    @classmethod
    def env_key(cls, field_name: str) -> str:
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    def _validate(self) -> None:
        """Raise :class:`InvalidSettingValueError` for unusable values."""


__all__ = ["Settings"]
