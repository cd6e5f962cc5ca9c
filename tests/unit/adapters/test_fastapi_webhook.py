"""Unit tests for the FastAPI admission webhook adapter."""
from __future__ import annotations

from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from sqljob_admission.adapters.fastapi import (
    FastAPIExceptionMapper,
    FastAPIHealthRouter,
    create_app,
    handle_review,
)
from sqljob_admission.application.admission import AdmissionEngine
from sqljob_admission.application.sqljob import sqljob_to_dict
from sqljob_admission.application.validation import BoundsLimits
from sqljob_admission.config.settings import AdmissionSettings
from sqljob_admission.kernel.errors import (
    AdmissionDeniedError,
    DomainError,
    InfrastructureError,
    InvariantViolationError,
    SerializationError,
    ValidationError,
)
from sqljob_admission.testing import SqlJobBuilder


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def review(operation: str, obj: Any = None, old: Any = None, uid: str = "uid-1") -> dict[str, Any]:
    request: dict[str, Any] = {"uid": uid, "operation": operation}
    if obj is not None:
        request["object"] = obj
    if old is not None:
        request["oldObject"] = old
    return {"apiVersion": "admission.k8s.io/v1", "kind": "AdmissionReview", "request": request}


def job_dict(builder: SqlJobBuilder | None = None) -> dict[str, Any]:
    return sqljob_to_dict((builder or SqlJobBuilder()).build())


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(AdmissionSettings(), configure_logging=False))


# ---------------------------------------------------------------------------
# AdmissionReview endpoint
# ---------------------------------------------------------------------------


class TestAdmissionWebhook:
    def test_create_allowed(self, client: TestClient) -> None:
        resp = client.post("/validate-sqljob", json=review("CREATE", job_dict()))
        assert resp.status_code == 200
        body = resp.json()
        assert body["apiVersion"] == "admission.k8s.io/v1"
        assert body["kind"] == "AdmissionReview"
        assert body["response"] == {"uid": "uid-1", "allowed": True}

    def test_create_denied_lists_every_reason(self, client: TestClient) -> None:
        bad = SqlJobBuilder().with_(sql=None, backoff_limit=-1)
        resp = client.post("/validate-sqljob", json=review("CREATE", job_dict(bad)))
        assert resp.status_code == 200
        response = resp.json()["response"]
        assert response["allowed"] is False
        assert response["status"]["code"] == 403
        assert response["status"]["reason"] == "Forbidden"
        message = response["status"]["message"]
        assert "spec.backoffLimit" in message
        assert "spec.sql" in message

    def test_update_of_immutable_field_denied(self, client: TestClient) -> None:
        old = job_dict()
        new = job_dict(SqlJobBuilder().with_(username="other"))
        resp = client.post("/validate-sqljob", json=review("UPDATE", new, old))
        response = resp.json()["response"]
        assert response["allowed"] is False
        assert "spec.username" in response["status"]["message"]

    def test_restart_policy_change_is_an_immutable_field_denial(self, client: TestClient) -> None:
        old = job_dict()
        new = job_dict()
        new["spec"]["restartPolicy"] = "Never"
        resp = client.post("/validate-sqljob", json=review("UPDATE", new, old))
        response = resp.json()["response"]
        assert response["allowed"] is False
        assert response["status"]["code"] == 403
        assert response["status"]["message"] == (
            "spec.restartPolicy: field is immutable and cannot be changed"
        )

    def test_update_of_mutable_field_allowed(self, client: TestClient) -> None:
        old = job_dict()
        new = job_dict(SqlJobBuilder().with_(backoff_limit=3))
        resp = client.post("/validate-sqljob", json=review("UPDATE", new, old))
        assert resp.json()["response"]["allowed"] is True

    def test_delete_is_allowed_without_decoding(self, client: TestClient) -> None:
        resp = client.post("/validate-sqljob", json=review("DELETE", old={"garbage": True}))
        assert resp.json()["response"] == {"uid": "uid-1", "allowed": True}

    def test_unknown_operation_is_allowed(self, client: TestClient) -> None:
        resp = client.post("/validate-sqljob", json=review("CONNECT"))
        assert resp.json()["response"]["allowed"] is True

    def test_undecodable_object_is_a_bad_request_denial(self, client: TestClient) -> None:
        obj = job_dict()
        obj["spec"]["backoffLimit"] = "many"
        resp = client.post("/validate-sqljob", json=review("CREATE", obj))
        assert resp.status_code == 200
        response = resp.json()["response"]
        assert response["allowed"] is False
        assert response["status"]["code"] == 400
        assert response["status"]["reason"] == "BadRequest"

    def test_create_without_object_is_denied_not_failed(self, client: TestClient) -> None:
        resp = client.post("/validate-sqljob", json={"request": {"uid": "u1", "operation": "CREATE"}})
        assert resp.status_code == 200
        response = resp.json()["response"]
        assert response["uid"] == "u1"
        assert response["allowed"] is False
        assert response["status"]["code"] == 400
        assert response["status"]["reason"] == "BadRequest"

    def test_update_without_old_object_is_denied_not_failed(self, client: TestClient) -> None:
        resp = client.post("/validate-sqljob", json=review("UPDATE", job_dict()))
        assert resp.status_code == 200
        response = resp.json()["response"]
        assert response["allowed"] is False
        assert response["status"] == {
            "code": 400,
            "reason": "BadRequest",
            "message": "UPDATE review must carry request.oldObject",
        }

    def test_missing_uid_is_http_400(self, client: TestClient) -> None:
        body = review("CREATE", job_dict())
        del body["request"]["uid"]
        resp = client.post("/validate-sqljob", json=body)
        assert resp.status_code == 400
        assert resp.json()["code"] == "serialization_error"

    def test_missing_request_is_http_400(self, client: TestClient) -> None:
        resp = client.post("/validate-sqljob", json={"kind": "AdmissionReview"})
        assert resp.status_code == 400

    def test_custom_path_and_limits(self) -> None:
        settings = AdmissionSettings(history_limit_ceiling=2, webhook_path="/hooks/sqljob")
        client = TestClient(create_app(settings, configure_logging=False))
        obj = job_dict(SqlJobBuilder().with_(successful_jobs_history_limit=3))
        resp = client.post("/hooks/sqljob", json=review("CREATE", obj))
        assert resp.json()["response"]["allowed"] is False

    def test_app_state(self) -> None:
        engine = AdmissionEngine(BoundsLimits(history_limit_ceiling=1))
        app = create_app(AdmissionSettings(), engine=engine, configure_logging=False)
        assert app.state.engine is engine
        assert app.state.settings.webhook_path == "/validate-sqljob"


class TestHandleReview:
    def test_echoes_uid(self) -> None:
        reply = handle_review(AdmissionEngine(), review("CREATE", job_dict(), uid="abc"))
        assert reply["response"]["uid"] == "abc"

    def test_missing_operation(self) -> None:
        body = review("CREATE", job_dict())
        del body["request"]["operation"]
        with pytest.raises(SerializationError):
            handle_review(AdmissionEngine(), body)

    def test_create_without_object_is_a_bad_request(self) -> None:
        response = handle_review(AdmissionEngine(), review("CREATE"))["response"]
        assert response["allowed"] is False
        assert response["status"]["code"] == 400
        assert "request.object" in response["status"]["message"]

    def test_update_without_old_object_is_a_bad_request(self) -> None:
        response = handle_review(AdmissionEngine(), review("UPDATE", job_dict()))["response"]
        assert response["allowed"] is False
        assert response["status"]["code"] == 400
        assert "request.oldObject" in response["status"]["message"]


# ---------------------------------------------------------------------------
# Health router
# ---------------------------------------------------------------------------


class TestHealthRouter:
    def test_live(self, client: TestClient) -> None:
        resp = client.get("/health/live")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_ready(self, client: TestClient) -> None:
        resp = client.get("/health/ready")
        assert resp.status_code == 200
        assert resp.json()["checks"] == {"mutability_table_complete": True}

    def test_degraded_when_check_fails(self) -> None:
        async def broken() -> bool:
            raise RuntimeError("down")

        async def healthy() -> bool:
            return True

        app = FastAPI()
        app.include_router(FastAPIHealthRouter(readiness_checks=[healthy, broken]))
        resp = TestClient(app).get("/health/ready")
        assert resp.status_code == 503
        assert resp.json() == {"status": "degraded", "checks": {"healthy": True, "broken": False}}


# ---------------------------------------------------------------------------
# Exception mapper
# ---------------------------------------------------------------------------


class TestFastAPIExceptionMapper:
    @pytest.mark.parametrize(
        "exc,status",
        [
            (SerializationError("bad"), 400),
            (AdmissionDeniedError([]), 403),
            (ValidationError("bad"), 400),
            (InvariantViolationError("bug"), 500),
            (InfrastructureError("down"), 503),
            (DomainError("rule"), 422),
            (RuntimeError("other"), 500),
        ],
    )
    def test_status_for(self, exc: Exception, status: int) -> None:
        assert FastAPIExceptionMapper().status_for(exc) == status

    def test_registered_handler_renders_error_body(self) -> None:
        app = FastAPI()
        FastAPIExceptionMapper().register(app)

        @app.get("/boom")
        async def boom() -> None:
            raise DomainError("rule broken", detail={"field": "spec.sql"})

        resp = TestClient(app).get("/boom")
        assert resp.status_code == 422
        assert resp.json() == {
            "code": "domain_error",
            "message": "rule broken",
            "detail": {"field": "spec.sql"},
        }
