"""Testing support – builders and property-based strategies.

Use in tests::

    from sqljob_admission.testing import SqlJobBuilder

    job = SqlJobBuilder().named("nightly").with_(sql=None).build()
"""

from sqljob_admission.testing.builder import Builder, SqlJobBuilder
from sqljob_admission.testing.strategies import (
    cron_expression_strategy,
    history_limit_strategy,
    wrong_field_count_strategy,
)

__all__ = [
    "Builder",
    "SqlJobBuilder",
    "cron_expression_strategy",
    "history_limit_strategy",
    "wrong_field_count_strategy",
]
