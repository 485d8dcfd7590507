"""Failure taxonomy and the Result contract for the value algebra.

INVARIANT: Algebra operations never raise for bad input. Every fallible
operation returns a :class:`Result` carrying either a value or a
:class:`Failure`. The rule engine reuses the same Result type with its own
error codes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ValueErrorCode(StrEnum):
    """Failure kinds surfaced by the value algebra."""

    INVALID_PAYLOAD = "INVALID_PAYLOAD"
    COERCION_ERROR = "COERCION_ERROR"
    OVERFLOW = "OVERFLOW"
    DIVISION_BY_ZERO = "DIVISION_BY_ZERO"
    INCOMPARABLE = "INCOMPARABLE"
    PATH_NOT_FOUND = "PATH_NOT_FOUND"
    INVALID_SYMBOL = "INVALID_SYMBOL"


class Failure(BaseModel):
    """Structured failure payload within a Result."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class UnwrapError(Exception):
    """Raised by :meth:`Result.unwrap` when called on a failed result."""

    def __init__(self, failure: Failure) -> None:
        super().__init__(str(failure))
        self.failure = failure


@dataclass(frozen=True)
class Result(Generic[T]):
    """Success-or-failure return value.

    Attributes:
        ok: Whether the operation succeeded.
        value: The payload on success, ``None`` otherwise.
        error: The failure if ``ok`` is False.
    """

    ok: bool
    value: T | None = None
    error: Failure | None = None

    def __post_init__(self) -> None:
        if self.ok != (self.error is None):
            raise ValueError("Result must carry an error exactly when ok is False")

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, code: str, message: str, **detail: Any) -> Result[T]:
        return cls(ok=False, error=Failure(code=str(code), message=message, detail=detail))

    @classmethod
    def from_failure(cls, failure: Failure) -> Result[T]:
        """Re-wrap an existing failure under a different payload type."""
        return cls(ok=False, error=failure)

    def unwrap(self) -> T:
        """Return the value or raise :class:`UnwrapError`.

        Meant for callers that have already decided a failure is fatal;
        nothing inside the core calls it on untrusted input.
        """
        if self.error is not None:
            raise UnwrapError(self.error)
        return self.value  # type: ignore[return-value]
