"""Validated record with single-step undo."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, List, TypeVar

import structlog

from core.domain.actions import ActionLog, NameChanged, ValueAdded, ValueRemoved
from core.domain.value_objects import RecordProfile, ValidationError, validate_name

logger = structlog.get_logger(__name__)

V = TypeVar("V")

Validator = Callable[[V], bool]


def accept_all(value: object) -> bool:
    """Default validator that accepts every value."""
    return True


@dataclass(frozen=True)
class RecordConfig:
    """Behavioural switches for validated records."""

    log_noop_removals: bool = False


class ValidatedRecord(Generic[V]):
    """Named, ordered collection of values that all satisfy a fixed validator.

    Every successful ``rename``, ``add_value`` and ``remove_value`` pushes an invertible
    action onto a private log; ``undo`` pops the latest one and reverses it. Validation
    always runs before mutation, so a rejected call leaves both the values and the log
    untouched.
    """

    def __init__(
        self,
        name: str,
        values: Iterable[V] | None = None,
        validator: Validator[V] | None = None,
        *,
        config: RecordConfig | None = None,
    ) -> None:
        self._validator: Validator[V] = validator if validator is not None else accept_all
        self._name = validate_name(name)
        initial = list(values) if values is not None else []
        for value in initial:
            self._check(value)
        self._values: List[V] = initial
        self._log: ActionLog[V] = ActionLog()
        self.config = config or RecordConfig()

    @property
    def name(self) -> str:
        return self._name

    @property
    def values(self) -> List[V]:
        """Return a copy of the current values in insertion order."""
        return list(self._values)

    @property
    def validator(self) -> Validator[V]:
        return self._validator

    @property
    def undo_depth(self) -> int:
        """Number of actions that ``undo`` can still reverse."""
        return len(self._log)

    def rename(self, new_name: str) -> None:
        validate_name(new_name)
        self._log.push(NameChanged(self._name))
        logger.debug("Record renamed", old_name=self._name, new_name=new_name)
        self._name = new_name

    def add_value(self, value: V) -> None:
        self._check(value)
        self._values.append(value)
        self._log.push(ValueAdded(value))
        logger.debug("Value added", record=self._name, value=value)

    def remove_value(self, value: V) -> bool:
        """Remove the most recently added occurrence of ``value``.

        Returns whether anything was removed. A missing value is not an error.
        """
        index = self._last_index(value)
        if index is None:
            if self.config.log_noop_removals:
                self._log.push(ValueRemoved(value))
            logger.debug("Value not present", record=self._name, value=value)
            return False
        del self._values[index]
        self._log.push(ValueRemoved(value, index))
        logger.debug("Value removed", record=self._name, value=value, index=index)
        return True

    def undo(self) -> bool:
        """Reverse the most recent mutation; returns ``False`` if there is none."""
        action = self._log.pop()
        if action is None:
            return False
        # Inverses bypass the validator and are never logged.
        if isinstance(action, NameChanged):
            self._name = action.old_name
        elif isinstance(action, ValueAdded):
            # Later actions are already undone, so the added value is last.
            self._values.pop()
        elif isinstance(action, ValueRemoved) and action.effective:
            self._values.insert(action.index, action.value)
        logger.debug("Action undone", record=self._name, action=type(action).__name__)
        return True

    def profile(self) -> RecordProfile:
        """Return summary statistics over the current (numeric) values."""
        return RecordProfile.from_values(self._values)

    def _check(self, value: V) -> None:
        if not self._validator(value):
            raise ValidationError(f"Value rejected by validator: {value!r}")

    def _last_index(self, value: V) -> int | None:
        for index in range(len(self._values) - 1, -1, -1):
            if self._values[index] == value:
                return index
        return None

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ValidatedRecord):
            return NotImplemented
        return self._name == other._name and self._values == other._values

    def __hash__(self) -> int:
        return hash((self._name, tuple(self._values)))

    def __str__(self) -> str:
        return f"{self._name}: [{', '.join(str(value) for value in self._values)}]"

    def __repr__(self) -> str:
        return f"ValidatedRecord(name={self._name!r}, values={self._values!r})"
