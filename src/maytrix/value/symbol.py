"""Symbol, a validated lowercase identifier.

A Symbol matches ``^[a-z][a-z0-9_]*$`` (ASCII only). It is used for
names, keys and codes such as rule names. Symbols order and hash by
their string and compare equal to plain ``str``.
"""

from __future__ import annotations

from functools import total_ordering

from maytrix.value.errors import Result, UnwrapError, ValueErrorCode

SYMBOL_PATTERN = "^[a-z][a-z0-9_]*$"
SYMBOL_ERROR_MESSAGE = f"value must match {SYMBOL_PATTERN}"


def _is_lower(c: str) -> bool:
    return "a" <= c <= "z"


@total_ordering
class Symbol:
    """Immutable validated identifier.

    Usage::

        sym = Symbol.try_new("alpha_1").unwrap()
        assert sym == "alpha_1"
    """

    __slots__ = ("_value",)

    _value: str

    def __init__(self, value: str) -> None:
        if not isinstance(value, str) or not Symbol.is_valid(value):
            raise UnwrapError(_invalid(value).error)  # type: ignore[arg-type]
        object.__setattr__(self, "_value", value)

    @classmethod
    def try_new(cls, value: object) -> Result[Symbol]:
        """Construct a Symbol, or fail with INVALID_SYMBOL."""
        if not isinstance(value, str) or not cls.is_valid(value):
            return _invalid(value)
        return Result.success(cls(value))

    @staticmethod
    def is_valid(s: str) -> bool:
        """Return True if *s* matches ``^[a-z][a-z0-9_]*$``."""
        if not s or not _is_lower(s[0]):
            return False
        return all(_is_lower(c) or "0" <= c <= "9" or c == "_" for c in s[1:])

    def as_str(self) -> str:
        return self._value

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Symbol is immutable")

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"Symbol({self._value!r})"

    def __hash__(self) -> int:
        return hash(self._value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Symbol):
            return self._value == other._value
        if isinstance(other, str):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Symbol):
            return self._value < other._value
        if isinstance(other, str):
            return self._value < other
        return NotImplemented


def _invalid(value: object) -> Result[Symbol]:
    return Result.failure(ValueErrorCode.INVALID_SYMBOL, SYMBOL_ERROR_MESSAGE, value=repr(value))
