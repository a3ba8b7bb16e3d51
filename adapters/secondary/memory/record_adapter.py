"""In-memory record adapter holding a single current record."""

from __future__ import annotations

import structlog

from core.domain.record import RecordConfig, ValidatedRecord
from core.domain.value_objects import RecordProfile
from ports.record_port import (
    NoActiveRecordError,
    RecordPort,
    RecordRequest,
    RecordSnapshot,
)

logger = structlog.get_logger(__name__)


class InMemoryRecordAdapter(RecordPort):
    """Adapter that keeps the current record in process memory."""

    def __init__(self, config: RecordConfig | None = None) -> None:
        self._config = config or RecordConfig()
        self._record: ValidatedRecord | None = None

    @property
    def has_record(self) -> bool:
        return self._record is not None

    def create(self, request: RecordRequest) -> RecordSnapshot:
        record = ValidatedRecord(
            request.name,
            request.values,
            request.validator,
            config=self._config,
        )
        # Replace only once construction has succeeded.
        self._record = record
        logger.info("Record created", name=record.name, values=len(request.values))
        return RecordSnapshot.from_record(record)

    def rename(self, new_name: str) -> RecordSnapshot:
        record = self._require()
        record.rename(new_name)
        return RecordSnapshot.from_record(record)

    def add_value(self, value: object) -> RecordSnapshot:
        record = self._require()
        record.add_value(value)
        return RecordSnapshot.from_record(record)

    def remove_value(self, value: object) -> RecordSnapshot:
        record = self._require()
        record.remove_value(value)
        return RecordSnapshot.from_record(record)

    def undo(self) -> RecordSnapshot:
        record = self._require()
        record.undo()
        return RecordSnapshot.from_record(record)

    def snapshot(self) -> RecordSnapshot:
        return RecordSnapshot.from_record(self._require())

    def profile(self) -> RecordProfile:
        return self._require().profile()

    def _require(self) -> ValidatedRecord:
        if self._record is None:
            raise NoActiveRecordError("No record has been created yet")
        return self._record
