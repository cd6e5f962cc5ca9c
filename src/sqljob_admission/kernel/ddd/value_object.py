"""ValueObject base class."""

from __future__ import annotations

import dataclasses
from typing import Any, TypeVar

V = TypeVar("V", bound="ValueObject")


@dataclasses.dataclass(frozen=True)
class ValueObject:
    """Base class for value objects.

    Subclasses should be ``@dataclass(frozen=True)``.  Equality is based on
    field values, so two snapshots of the same resource compare equal exactly
    when every field does.
    """

    def copy_with(self: V, **changes: Any) -> V:
        """Return a new instance with given fields replaced."""
        return dataclasses.replace(self, **changes)


__all__ = ["ValueObject"]
