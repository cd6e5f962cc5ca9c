"""Unit tests for testing builders and strategies."""
from __future__ import annotations

from hypothesis import given, settings

from sqljob_admission.application.sqljob import MariaDBRef, Schedule, SqlJob
from sqljob_admission.application.validation import check_recurrence
from sqljob_admission.testing import (
    SqlJobBuilder,
    cron_expression_strategy,
    history_limit_strategy,
    wrong_field_count_strategy,
)


class TestSqlJobBuilder:
    def test_defaults(self) -> None:
        job = SqlJobBuilder().build()
        assert isinstance(job, SqlJob)
        assert job.name == "sqljob"
        assert job.namespace == "default"
        assert job.spec.mariadb_ref == MariaDBRef(name="mariadb")
        assert job.spec.sql == "SELECT 1;"

    def test_with_returns_new_builder(self) -> None:
        base = SqlJobBuilder()
        scheduled = base.with_(schedule=Schedule("*/5 * * * *"))
        assert base.build().spec.schedule is None
        assert scheduled.build().spec.schedule == Schedule("*/5 * * * *")

    def test_named(self) -> None:
        base = SqlJobBuilder()
        job = base.named("nightly", namespace="db").build()
        assert (job.name, job.namespace) == ("nightly", "db")
        assert base.build().name == "sqljob"

    def test_named_keeps_namespace(self) -> None:
        job = SqlJobBuilder().named("a", namespace="db").named("b").build()
        assert job.namespace == "db"

    def test_call_with_overrides(self) -> None:
        job = SqlJobBuilder()(username="reporter")
        assert job.spec.username == "reporter"

    def test_attrs_snapshot(self) -> None:
        builder = SqlJobBuilder()
        snapshot = builder.attrs
        snapshot["username"] = "changed"
        assert builder.build().spec.username == "app"


class TestStrategies:
    @given(cron_expression_strategy())
    @settings(max_examples=50)
    def test_cron_expressions_are_valid(self, expression: str) -> None:
        assert check_recurrence(expression) is None

    @given(wrong_field_count_strategy())
    def test_wrong_field_counts_are_invalid(self, expression: str) -> None:
        assert check_recurrence(expression) is not None

    @given(history_limit_strategy(5))
    def test_history_limits_within_ceiling(self, value: int) -> None:
        assert 0 <= value <= 5
