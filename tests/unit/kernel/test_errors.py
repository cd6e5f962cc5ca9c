"""Unit tests for kernel error hierarchy."""

from __future__ import annotations

import json

import pytest

from sqljob_admission.application.sqljob import Violation, ViolationKind
from sqljob_admission.kernel.errors import (
    AdmissionDeniedError,
    ApplicationError,
    BaseError,
    DomainError,
    InfrastructureError,
    InvariantViolationError,
    MutabilityTableError,
    SerializationError,
    ValidationError,
)


class TestBaseError:
    def test_message_is_stored(self) -> None:
        err = BaseError("something went wrong")
        assert err.message == "something went wrong"

    def test_default_code(self) -> None:
        assert BaseError("m").code == "base_error"

    def test_custom_code(self) -> None:
        assert BaseError("m", code="custom").code == "custom"

    def test_to_dict_basic(self) -> None:
        err = BaseError("m", code="my_code", detail={"key": "val"})
        assert err.to_dict() == {"code": "my_code", "message": "m", "detail": {"key": "val"}}

    def test_cause_sets_dunder_cause(self) -> None:
        cause = RuntimeError("root")
        err = BaseError("wrap", cause=cause)
        assert err.__cause__ is cause
        assert "root" in err.to_dict()["cause"]

    def test_cause_taken_from_raise_from(self) -> None:
        with pytest.raises(SerializationError) as exc_info:
            try:
                int("many")
            except ValueError as exc:
                raise SerializationError("spec.backoffLimit: expected integer") from exc
        assert isinstance(exc_info.value.cause, ValueError)
        assert exc_info.value.to_dict()["cause"].startswith("ValueError: ")

    def test_no_cause_key_without_cause(self) -> None:
        assert "cause" not in BaseError("m").to_dict()

    def test_detail_is_copied(self) -> None:
        detail = {"path": "spec.sql"}
        err = BaseError("m", detail=detail)
        err.detail["extra"] = 1
        assert detail == {"path": "spec.sql"}

    def test_str_is_valid_json(self) -> None:
        parsed = json.loads(str(BaseError("oops", code="oops", detail={"x": 1})))
        assert parsed["code"] == "oops"
        assert parsed["detail"] == {"x": 1}

    def test_repr_contains_code_and_message(self) -> None:
        r = repr(BaseError("hello", code="hi"))
        assert "hi" in r
        assert "hello" in r


class TestHierarchy:
    @pytest.mark.parametrize(
        "err,parent",
        [
            (InvariantViolationError("x"), DomainError),
            (MutabilityTableError(["schedule"]), InvariantViolationError),
            (ValidationError("x"), DomainError),
            (AdmissionDeniedError([]), ValidationError),
            (SerializationError("x"), InfrastructureError),
            (ApplicationError("x"), BaseError),
        ],
    )
    def test_subclassing(self, err: BaseError, parent: type) -> None:
        assert isinstance(err, parent)


class TestMutabilityTableError:
    def test_names_fields_sorted(self) -> None:
        err = MutabilityTableError(["username", "args"])
        assert err.fields == ("args", "username")
        assert "args, username" in err.message
        assert err.code == "mutability_table_error"


class TestAdmissionDeniedError:
    def _violations(self) -> list[Violation]:
        return [
            Violation(ViolationKind.IMMUTABLE_FIELD_CHANGED, "spec.username", "field is immutable"),
            Violation(ViolationKind.MISSING_SQL_SOURCE, "spec.sql", "no source"),
        ]

    def test_reasons_in_order(self) -> None:
        err = AdmissionDeniedError(self._violations())
        assert err.reasons == ["spec.username: field is immutable", "spec.sql: no source"]
        assert err.message == "spec.username: field is immutable; spec.sql: no source"

    def test_errors_are_structured(self) -> None:
        err = AdmissionDeniedError(self._violations())
        assert err.to_dict()["errors"][0] == {
            "kind": "ImmutableFieldChanged",
            "field": "spec.username",
            "message": "field is immutable",
        }
        assert err.code == "admission_denied"

    def test_keeps_violations(self) -> None:
        violations = self._violations()
        assert AdmissionDeniedError(violations).violations == tuple(violations)


class TestSerializationError:
    def test_payload_type(self) -> None:
        err = SerializationError("bad", payload_type="SqlJob")
        assert err.payload_type == "SqlJob"
        assert err.code == "serialization_error"
