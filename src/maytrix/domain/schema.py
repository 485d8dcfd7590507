"""The declared shape of an entity's fields.

A schema maps field names to a :class:`ValueKind` or to a nested schema
(which implies a map). Rule sets use it at registration time to reject
dependencies on paths that cannot exist.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Union

from maytrix.value import NUMERIC_KINDS, MapValue, Result, Value, ValueErrorCode, ValueKind

FieldType = Union[ValueKind, "EntitySchema"]


@dataclass(frozen=True, eq=False)
class EntitySchema:
    """Declared field kinds, possibly nested."""

    fields: Mapping[str, FieldType]
    strict: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, strict: bool = False) -> Result[EntitySchema]:
        """Build a schema from ``{"name": "text", "address": {"city": "text"}}``."""
        fields: dict[str, FieldType] = {}
        for name, spec in data.items():
            if isinstance(spec, Mapping):
                nested = cls.from_mapping(spec, strict=strict)
                if not nested.ok:
                    return nested
                fields[name] = nested.value  # type: ignore[assignment]
                continue
            try:
                fields[name] = ValueKind(spec)
            except ValueError:
                return Result.failure(
                    ValueErrorCode.INVALID_PAYLOAD,
                    f"unknown kind {spec!r} for schema field {name!r}",
                    field=name,
                )
        return Result.success(cls(fields, strict=strict))

    def field_type(self, path: Sequence[str]) -> FieldType | None:
        """Return the declared type at *path*, or None if it cannot exist."""
        current: FieldType = self
        for segment in path:
            if not isinstance(current, EntitySchema):
                return None
            nxt = current.fields.get(segment)
            if nxt is None:
                return None
            current = nxt
        return current

    def has_path(self, path: Sequence[str]) -> bool:
        return self.field_type(path) is not None

    def violations(self, fields: MapValue, *, _prefix: str = "") -> list[str]:
        """List kind mismatches in *fields*.

        Null satisfies every declared kind; Integer and Decimal satisfy each
        other. Undeclared fields are reported only when ``strict``.
        """
        problems: list[str] = []
        for name, item in fields.entries:
            label = f"{_prefix}{name}"
            declared = self.fields.get(name)
            if declared is None:
                if self.strict:
                    problems.append(f"{label}: undeclared field")
                continue
            problems.extend(_kind_problems(label, declared, item))
        return problems


def _kind_problems(label: str, declared: FieldType, item: Value) -> list[str]:
    if item.kind is ValueKind.NULL:
        return []
    if isinstance(declared, EntitySchema):
        if not isinstance(item, MapValue):
            return [f"{label}: expected map, got {item.kind}"]
        return declared.violations(item, _prefix=f"{label}.")
    if item.kind is declared:
        return []
    if item.kind in NUMERIC_KINDS and declared in NUMERIC_KINDS:
        return []
    return [f"{label}: expected {declared}, got {item.kind}"]
