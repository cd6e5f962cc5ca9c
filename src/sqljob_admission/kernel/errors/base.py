"""Root error class for sqljob-admission.

Every error raised by the engine, the codec, the settings layer or the
webhook derives from :class:`BaseError`, so adapters can render any of them
through :meth:`BaseError.to_dict` without knowing the concrete type.
"""

from __future__ import annotations

import json
from typing import Any


class BaseError(Exception):
    """An error with a stable machine-readable ``code``.

    Args:
        message: Human-readable description, e.g. ``spec.backoffLimit: required``.
        code: Slug returned to webhook clients (defaults to ``default_code``).
        detail: JSON-safe context such as the offending field path.
        cause: Exception that triggered this one; also taken from
            ``raise ... from`` when not passed explicitly.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Render as the JSON body of an error response."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.cause is not None:
            payload["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return payload


__all__ = ["BaseError"]
