"""Record port definitions for hexagonal architecture."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Tuple, runtime_checkable

from core.domain.record import ValidatedRecord
from core.domain.value_objects import RecordProfile


class NoActiveRecordError(LookupError):
    """Raised when a record operation is requested before a record exists."""


@dataclass(frozen=True)
class RecordRequest:
    """Payload describing a record to create."""

    name: str
    values: Tuple[object, ...] = ()
    validator: Optional[Callable[[object], bool]] = None


@dataclass(frozen=True)
class RecordSnapshot:
    """Immutable view of a record returned by adapters."""

    name: str
    values: Tuple[object, ...]
    undo_depth: int
    rendered: str

    @classmethod
    def from_record(cls, record: ValidatedRecord) -> "RecordSnapshot":
        return cls(
            name=record.name,
            values=tuple(record.values),
            undo_depth=record.undo_depth,
            rendered=str(record),
        )


@runtime_checkable
class RecordPort(Protocol):
    """Port for creating and mutating the current record."""

    def create(self, request: RecordRequest) -> RecordSnapshot:
        ...

    def rename(self, new_name: str) -> RecordSnapshot:
        ...

    def add_value(self, value: object) -> RecordSnapshot:
        ...

    def remove_value(self, value: object) -> RecordSnapshot:
        ...

    def undo(self) -> RecordSnapshot:
        ...

    def snapshot(self) -> RecordSnapshot:
        ...

    def profile(self) -> RecordProfile:
        ...
