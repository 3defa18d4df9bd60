from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class StoreError(str, Enum):
    VALIDATION = "validation_error"
    NOT_FOUND = "not_found"
    INVALID_ID = "invalid_id"
    STORAGE_UNAVAILABLE = "storage_unavailable"


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    """
    Outcome of a Product Store operation: either a value or one StoreError.

    Store functions return these instead of raising so callers can map every
    outcome explicitly.
    """

    value: Optional[T] = None
    error: Optional[StoreError] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "StoreResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: StoreError, message: str = "") -> "StoreResult[T]":
        return cls(error=error, message=message or error.value)
