"""Kernel DDD – value objects and composable policies."""
from sqljob_admission.kernel.ddd.policies import AllOf, Policy, PolicyResult
from sqljob_admission.kernel.ddd.value_object import ValueObject

__all__ = ["AllOf", "Policy", "PolicyResult", "ValueObject"]
