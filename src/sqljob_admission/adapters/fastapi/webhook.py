"""FastAPI adapter – validating admission webhook for SqlJobs.

Speaks ``admission.k8s.io/v1`` ``AdmissionReview``: the API server posts the
review, the router decodes ``object`` / ``oldObject``, asks the engine and
answers with the same ``uid``.  A denial is a normal 200 response with
``allowed: false``; only an unreadable review is an HTTP error.
"""
from __future__ import annotations

from typing import Any, Mapping

from fastapi import APIRouter, Body

from sqljob_admission.application.admission import (
    AdmissionEngine,
    AdmissionRequest,
    AdmissionResponse,
    Operation,
)
from sqljob_admission.application.sqljob import SqlJob, sqljob_from_dict
from sqljob_admission.kernel.errors import SerializationError
from sqljob_admission.observability.logging import get_logger

__all__ = ["AdmissionWebhookRouter", "handle_review"]

logger = get_logger(__name__)

REVIEW_API_VERSION = "admission.k8s.io/v1"


def _review_envelope(uid: str, response: dict[str, Any]) -> dict[str, Any]:
    return {
        "apiVersion": REVIEW_API_VERSION,
        "kind": "AdmissionReview",
        "response": {"uid": uid, **response},
    }


def _decision(response: AdmissionResponse) -> dict[str, Any]:
    if response.allowed:
        return {"allowed": True}
    return {
        "allowed": False,
        "status": {
            "code": 403,
            "reason": "Forbidden",
            "message": "; ".join(response.reasons),
        },
    }


def _bad_request(uid: str, message: str) -> dict[str, Any]:
    logger.warning("admission_bad_request", uid=uid, error=message)
    return _review_envelope(
        uid,
        {
            "allowed": False,
            "status": {"code": 400, "reason": "BadRequest", "message": message},
        },
    )


def _decode(obj: Any) -> SqlJob | None:
    if not obj:
        return None
    return sqljob_from_dict(obj)


def handle_review(engine: AdmissionEngine, review: Mapping[str, Any]) -> dict[str, Any]:
    """Turn an ``AdmissionReview`` request into the ``AdmissionReview`` reply.

    A CREATE or UPDATE whose ``object`` (or, on UPDATE, ``oldObject``) is
    missing or undecodable is denied with a 400 status instead of reaching
    the engine.

    Raises:
        SerializationError: *review* has no ``request`` with a ``uid``.
    """
    request = review.get("request")
    if not isinstance(request, Mapping) or not isinstance(request.get("uid"), str):
        raise SerializationError(
            "AdmissionReview must carry request.uid", payload_type="AdmissionReview"
        )
    uid = request["uid"]

    raw_operation = request.get("operation")
    if not isinstance(raw_operation, str):
        raise SerializationError(
            "AdmissionReview must carry request.operation", payload_type="AdmissionReview"
        )
    try:
        operation = Operation(raw_operation)
    except ValueError:
        # CONNECT and future operations are not governed by this webhook
        return _review_envelope(uid, {"allowed": True})
    if operation is Operation.DELETE:
        return _review_envelope(uid, _decision(engine.review(AdmissionRequest(operation))))

    try:
        new = _decode(request.get("object"))
        old = _decode(request.get("oldObject"))
    except SerializationError as exc:
        return _bad_request(uid, exc.message)
    if new is None:
        return _bad_request(uid, f"{operation.value} review must carry request.object")
    if operation is Operation.UPDATE and old is None:
        return _bad_request(uid, "UPDATE review must carry request.oldObject")

    admission_request = AdmissionRequest(operation=operation, new=new, old=old)
    return _review_envelope(uid, _decision(engine.review(admission_request)))


def AdmissionWebhookRouter(
    engine: AdmissionEngine,
    path: str = "/validate-sqljob",
    tags: list[str] | None = None,
) -> APIRouter:
    """Return a router serving the validating webhook at *path*."""
    router = APIRouter(tags=tags or ["admission"])

    @router.post(path)
    async def validate_sqljob(review: dict[str, Any] = Body(...)) -> dict[str, Any]:
        return handle_review(engine, review)

    return router
