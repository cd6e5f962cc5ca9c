"""FastAPI adapter – admission webhook router, health router, exception mapper."""
from sqljob_admission.adapters.fastapi.app import create_app
from sqljob_admission.adapters.fastapi.exception_mapper import FastAPIExceptionMapper
from sqljob_admission.adapters.fastapi.routers import FastAPIHealthRouter
from sqljob_admission.adapters.fastapi.webhook import AdmissionWebhookRouter, handle_review

__all__ = [
    "AdmissionWebhookRouter",
    "FastAPIExceptionMapper",
    "FastAPIHealthRouter",
    "create_app",
    "handle_review",
]
