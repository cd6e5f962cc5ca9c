"""Observability – structured logging."""
from sqljob_admission.observability.logging import (
    JsonLoggerFactory,
    SensitiveFieldsFilter,
    get_logger,
)

__all__ = ["JsonLoggerFactory", "SensitiveFieldsFilter", "get_logger"]
