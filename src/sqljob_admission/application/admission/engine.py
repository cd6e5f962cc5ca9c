"""Admission engine – the synchronous accept/deny gate for SqlJob writes.

The engine is built once and shared; it keeps no per-request state, so
concurrent requests need no locking.  Each call is pure computation bounded by
the size of the object: no I/O, no sleeping, no lookups of other resources.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from sqljob_admission.application.admission.mutability import (
    MUTABILITY_TABLE,
    FieldRule,
    verify_table,
)
from sqljob_admission.application.admission.policies import (
    ImmutabilityPolicy,
    SpecTransition,
    create_policy,
)
from sqljob_admission.application.admission.request import (
    AdmissionRequest,
    AdmissionResponse,
    Operation,
)
from sqljob_admission.application.sqljob.model import SqlJob
from sqljob_admission.application.validation import BoundsLimits
from sqljob_admission.kernel.ddd.policies import PolicyResult
from sqljob_admission.kernel.errors import AdmissionDeniedError, InvariantViolationError
from sqljob_admission.observability.logging import get_logger

if TYPE_CHECKING:
    from sqljob_admission.config.settings import AdmissionSettings

__all__ = ["AdmissionEngine"]

logger = get_logger(__name__)


class AdmissionEngine:
    """Decide whether a SqlJob create, update or delete may be persisted.

    Usage::

        engine = AdmissionEngine()
        response = engine.review(AdmissionRequest(Operation.CREATE, new=job))
        if not response.allowed:
            print(response.reasons)

    Raises:
        MutabilityTableError: at construction when *table* does not cover
            every spec field, or during review if an unclassified field
            changed.  Never turned into an allow.
    """

    def __init__(
        self,
        limits: BoundsLimits | None = None,
        table: Mapping[str, FieldRule] = MUTABILITY_TABLE,
    ) -> None:
        verify_table(table)
        self._limits = limits or BoundsLimits()
        self._create_policy = create_policy(self._limits)
        self._update_policy = ImmutabilityPolicy(self._limits, table)

    @classmethod
    def from_settings(cls, settings: "AdmissionSettings") -> "AdmissionEngine":
        return cls(
            BoundsLimits(
                history_limit_ceiling=settings.history_limit_ceiling,
                backoff_limit_ceiling=settings.backoff_limit_ceiling,
            )
        )

    @property
    def limits(self) -> BoundsLimits:
        return self._limits

    # ------------------------------------------------------------------
    # Per-operation checks
    # ------------------------------------------------------------------

    def validate_create(self, job: SqlJob) -> PolicyResult:
        return self._create_policy.evaluate(job)

    def validate_update(self, old: SqlJob, new: SqlJob) -> PolicyResult:
        return self._update_policy.evaluate(SpecTransition(old=old, new=new))

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def review(self, request: AdmissionRequest) -> AdmissionResponse:
        """Return the decision for *request*; denials carry every violation found."""
        if request.operation is Operation.DELETE:
            return AdmissionResponse.allow()

        if request.new is None:
            raise InvariantViolationError(
                f"{request.operation.value} request carries no object"
            )

        if request.operation is Operation.CREATE:
            result = self.validate_create(request.new)
        else:
            if request.old is None:
                raise InvariantViolationError("UPDATE request carries no old object")
            result = self.validate_update(request.old, request.new)

        job = request.new
        if result.allowed:
            logger.debug(
                "admission_allowed",
                operation=request.operation.value,
                job=job.name,
                namespace=job.namespace,
            )
            return AdmissionResponse.allow()

        response = AdmissionResponse.deny(result.violations)
        logger.warning(
            "admission_denied",
            operation=request.operation.value,
            job=job.name,
            namespace=job.namespace,
            reasons=response.reasons,
        )
        return response

    def admit(self, request: AdmissionRequest) -> None:
        """Like :meth:`review` but raise :class:`AdmissionDeniedError` on denial."""
        response = self.review(request)
        if not response.allowed:
            raise AdmissionDeniedError(response.violations)
