"""FastAPI adapter – FastAPIExceptionMapper."""
from __future__ import annotations

from typing import Any, Callable

from fastapi.responses import JSONResponse

from sqljob_admission.kernel.errors import (
    AdmissionDeniedError,
    BaseError,
    DomainError,
    InfrastructureError,
    InvariantViolationError,
    SerializationError,
    ValidationError,
)
from sqljob_admission.observability.logging import get_logger

logger = get_logger(__name__)


class FastAPIExceptionMapper:
    """Register error → HTTP status-code mappings on a FastAPI app.

    Error body schema::

        {"code": "serialization_error", "message": "...", "detail": {...}}

    Mappings
    --------
    ``SerializationError``      → 400
    ``AdmissionDeniedError``    → 403
    ``ValidationError``         → 400
    ``InvariantViolationError`` → 500
    ``InfrastructureError``     → 503
    ``DomainError``             → 422
    """

    def __init__(self) -> None:
        # ORDER MATTERS: more-specific subtypes first
        self._map: list[tuple[type[Exception], int]] = [
            (SerializationError, 400),
            (AdmissionDeniedError, 403),
            (ValidationError, 400),
            (InvariantViolationError, 500),
            (InfrastructureError, 503),
            (DomainError, 422),
        ]

    def status_for(self, exc: Exception) -> int:
        for exc_type, status in self._map:
            if isinstance(exc, exc_type):
                return status
        return 500

    def register(self, app: Any) -> None:
        """Register all error handlers on a ``FastAPI`` or ``Starlette`` app."""
        for exc_type, status in self._map:

            def make_handler(code: int) -> Callable[[Any, Any], Any]:
                def handler(request: Any, exc: Any) -> Any:  # noqa: ARG001
                    if code >= 500:
                        logger.error("request_failed", error=exc.to_dict())
                    body = exc.to_dict() if isinstance(exc, BaseError) else {"code": "error", "message": str(exc)}
                    return JSONResponse(status_code=code, content=body)

                return handler

            app.add_exception_handler(exc_type, make_handler(status))


__all__ = ["FastAPIExceptionMapper"]
