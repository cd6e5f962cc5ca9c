"""Observability – structured logging helpers."""
from sqljob_admission.observability.logging.factory import JsonLoggerFactory
from sqljob_admission.observability.logging.filters import (
    DEFAULT_SENSITIVE_FIELDS,
    SensitiveFieldsFilter,
)
from sqljob_admission.observability.logging.processors import get_logger

__all__ = [
    "DEFAULT_SENSITIVE_FIELDS",
    "JsonLoggerFactory",
    "SensitiveFieldsFilter",
    "get_logger",
]
