"""FastAPI adapter – application factory for the admission webhook."""
from __future__ import annotations

from fastapi import FastAPI

from sqljob_admission import __version__
from sqljob_admission.adapters.fastapi.exception_mapper import FastAPIExceptionMapper
from sqljob_admission.adapters.fastapi.routers import FastAPIHealthRouter
from sqljob_admission.adapters.fastapi.webhook import AdmissionWebhookRouter
from sqljob_admission.application.admission import AdmissionEngine, verify_table
from sqljob_admission.config.settings import AdmissionSettings, EnvSettingsLoader
from sqljob_admission.observability.logging import JsonLoggerFactory, get_logger

__all__ = ["create_app"]

logger = get_logger(__name__)


async def mutability_table_complete() -> bool:
    verify_table()
    return True


def create_app(
    settings: AdmissionSettings | None = None,
    *,
    engine: AdmissionEngine | None = None,
    configure_logging: bool = True,
) -> FastAPI:
    """Build the webhook application.

    Settings default to ``SQLJOB_ADMISSION_*`` environment variables; the
    engine defaults to one built from those settings.
    """
    settings = settings or EnvSettingsLoader().load(AdmissionSettings)
    if configure_logging:
        JsonLoggerFactory.configure(level=settings.log_level_number)
    engine = engine or AdmissionEngine.from_settings(settings)

    app = FastAPI(title="sqljob-admission", version=__version__)
    app.state.settings = settings
    app.state.engine = engine
    FastAPIExceptionMapper().register(app)
    app.include_router(AdmissionWebhookRouter(engine, path=settings.webhook_path))
    app.include_router(FastAPIHealthRouter(readiness_checks=[mutability_table_complete]))

    logger.info(
        "admission_webhook_ready",
        path=settings.webhook_path,
        history_limit_ceiling=settings.history_limit_ceiling,
        backoff_limit_ceiling=settings.backoff_limit_ceiling,
    )
    return app
