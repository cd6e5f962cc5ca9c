"""Domain Policy Pattern – composable admission rule evaluators.

A ``Policy`` encapsulates a decision rule that operates on a typed context and
returns a ``PolicyResult`` carrying every violation it found.  Unlike a boolean
gate, results are meant to be merged: ``AllOf`` evaluates each member and
concatenates their violations so a caller sees every problem at once.

Example::

    class ScheduleIsValid(Policy[SqlJob]):
        def evaluate(self, ctx: SqlJob) -> PolicyResult:
            return PolicyResult.of(validate_schedule(ctx.spec.schedule))

    result = AllOf(ScheduleIsValid(), SourceIsPresent()).evaluate(job)
    if not result.allowed:
        ...
"""

from __future__ import annotations

import abc
import dataclasses
from typing import Any, Generic, Iterable, TypeVar

TContext = TypeVar("TContext")


# ---------------------------------------------------------------------------
# PolicyResult
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class PolicyResult:
    """Outcome of a policy evaluation.

    Attributes:
        violations: Ordered, de-duplicated failures.  Empty means allowed.
    """

    violations: tuple[Any, ...] = ()

    @classmethod
    def permit(cls) -> "PolicyResult":
        return cls()

    @classmethod
    def of(cls, violations: Iterable[Any]) -> "PolicyResult":
        """Build a result from *violations*, dropping repeats but keeping order."""
        return cls(tuple(dict.fromkeys(violations)))

    @property
    def allowed(self) -> bool:
        return not self.violations

    def merge(self, other: "PolicyResult") -> "PolicyResult":
        return PolicyResult.of((*self.violations, *other.violations))

    def __bool__(self) -> bool:  # allows ``if policy.evaluate(ctx):``
        return self.allowed


# ---------------------------------------------------------------------------
# Policy base
# ---------------------------------------------------------------------------


class Policy(abc.ABC, Generic[TContext]):
    """Abstract policy evaluated against a typed context."""

    @abc.abstractmethod
    def evaluate(self, context: TContext) -> PolicyResult: ...


# ---------------------------------------------------------------------------
# Composite policies
# ---------------------------------------------------------------------------


class AllOf(Policy[TContext]):
    """Conjunction: every policy must allow.  Never short-circuits."""

    def __init__(self, *policies: Policy[TContext]) -> None:
        if not policies:
            raise ValueError("AllOf requires at least one policy")
        self._policies = policies

    @property
    def policies(self) -> tuple[Policy[TContext], ...]:
        return self._policies

    def evaluate(self, context: TContext) -> PolicyResult:
        result = PolicyResult.permit()
        for p in self._policies:
            result = result.merge(p.evaluate(context))
        return result


__all__ = [
    "AllOf",
    "Policy",
    "PolicyResult",
]
