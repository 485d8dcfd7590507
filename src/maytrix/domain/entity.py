"""Entities: identified snapshots of field maps.

Entity IDs are sequential ``ENT-`` tokens from a process-wide counter,
zero-padded to at least 6 digits.

INVARIANT: IDs are never reused. Revising an entity keeps its ID and
produces a new immutable snapshot.
"""

from __future__ import annotations

import itertools
import re
import threading
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, NewType

from maytrix.value import MapValue, Result, Value, ValueErrorCode, from_python, path_get

EntityId = NewType("EntityId", str)

ENTITY_ID_PREFIX = "ENT-"
ENTITY_ID_PATTERN = re.compile(r"ENT-[0-9]{6,}")


class EntityIdAllocator:
    """Thread-safe monotonic ID source."""

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next_id(self) -> EntityId:
        with self._lock:
            n = next(self._counter)
        return EntityId(f"{ENTITY_ID_PREFIX}{n:06d}")


_allocator = EntityIdAllocator()


def allocate_entity_id() -> EntityId:
    return _allocator.next_id()


def validate_entity_id(entity_id: str) -> bool:
    """Check whether *entity_id* has the ``ENT-NNNNNN`` shape."""
    return ENTITY_ID_PATTERN.fullmatch(entity_id) is not None


@dataclass(frozen=True)
class Entity:
    """An identified, immutable field snapshot."""

    id: EntityId
    fields: MapValue

    @classmethod
    def create(cls, fields: MapValue | Mapping[str, Value] | None = None) -> Entity:
        """Create an entity with a freshly allocated ID."""
        if fields is None:
            fields = MapValue()
        elif not isinstance(fields, MapValue):
            fields = MapValue(tuple(fields.items()))
        return cls(id=allocate_entity_id(), fields=fields)

    @classmethod
    def from_python(cls, data: Any) -> Result[Entity]:
        """Create an entity from JSON-shaped data; the top level must be a dict."""
        if not isinstance(data, dict):
            return Result.failure(
                ValueErrorCode.INVALID_PAYLOAD,
                f"entity must be an object, got {type(data).__name__}",
            )
        converted = from_python(data)
        if not converted.ok:
            return Result.from_failure(converted.error)  # type: ignore[arg-type]
        return Result.success(cls.create(converted.value))  # type: ignore[arg-type]

    def revise(self, fields: MapValue) -> Entity:
        """Return a new snapshot with the same identity."""
        return Entity(id=self.id, fields=fields)

    def with_field(self, name: str, item: Value) -> Entity:
        return self.revise(self.fields.with_entry(name, item))

    def get(self, path: Sequence[str]) -> Result[Value]:
        return path_get(self.fields, path)
