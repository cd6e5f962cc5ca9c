"""Unit tests for SQL source selection and dependency declarations."""
from __future__ import annotations

from sqljob_admission.application.sqljob import (
    ConfigMapKeySelector,
    LocalObjectReference,
    ViolationKind,
)
from sqljob_admission.application.validation import validate_dependencies, validate_sql_source
from sqljob_admission.testing import SqlJobBuilder


def refs(*names: str) -> tuple[LocalObjectReference, ...]:
    return tuple(LocalObjectReference(name=n) for n in names)


class TestValidateSqlSource:
    def test_inline_sql(self) -> None:
        assert validate_sql_source(SqlJobBuilder().build().spec) == []

    def test_config_map_only(self) -> None:
        spec = SqlJobBuilder().with_(
            sql=None, sql_config_map_key_ref=ConfigMapKeySelector(name="sql", key="init.sql")
        ).build().spec
        assert validate_sql_source(spec) == []

    def test_both_present_is_accepted(self) -> None:
        spec = SqlJobBuilder().with_(
            sql_config_map_key_ref=ConfigMapKeySelector(name="sql", key="init.sql")
        ).build().spec
        assert validate_sql_source(spec) == []

    def test_neither_present(self) -> None:
        [violation] = validate_sql_source(SqlJobBuilder().with_(sql=None).build().spec)
        assert violation.kind is ViolationKind.MISSING_SQL_SOURCE
        assert violation.field == "spec.sql"
        assert "sqlConfigMapKeyRef" in violation.message

    def test_empty_inline_sql_counts_as_set(self) -> None:
        assert validate_sql_source(SqlJobBuilder().with_(sql="").build().spec) == []


class TestValidateDependencies:
    def test_no_dependencies(self) -> None:
        assert validate_dependencies(SqlJobBuilder().build()) == []

    def test_valid_dependencies(self) -> None:
        job = SqlJobBuilder().named("users").with_(depends_on=refs("schema", "grants")).build()
        assert validate_dependencies(job) == []

    def test_empty_name(self) -> None:
        job = SqlJobBuilder().with_(depends_on=refs("schema", "  ")).build()
        [violation] = validate_dependencies(job)
        assert violation.kind is ViolationKind.INVALID_DEPENDENCY_REFERENCE
        assert violation.field == "spec.dependsOn[1].name"
        assert violation.message == "must not be empty"

    def test_self_reference(self) -> None:
        job = SqlJobBuilder().named("users").with_(depends_on=refs("users")).build()
        [violation] = validate_dependencies(job)
        assert "cannot depend on itself" in violation.message

    def test_duplicate(self) -> None:
        job = SqlJobBuilder().with_(depends_on=refs("schema", "schema")).build()
        [violation] = validate_dependencies(job)
        assert violation.field == "spec.dependsOn[1].name"
        assert "duplicate" in violation.message

    def test_reports_every_bad_entry(self) -> None:
        job = SqlJobBuilder().named("users").with_(depends_on=refs("", "users", "ok")).build()
        assert len(validate_dependencies(job)) == 2
