"""Invertible actions recorded by a validated record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar, Union

V = TypeVar("V")


@dataclass(frozen=True)
class NameChanged:
    """A rename; holds the name in effect before the change."""

    old_name: str


@dataclass(frozen=True)
class ValueAdded(Generic[V]):
    """A value appended to the end of the record."""

    value: V


@dataclass(frozen=True)
class ValueRemoved(Generic[V]):
    """A value removed from the record.

    ``index`` is the position the value occupied before removal, or ``None`` when the
    removal found nothing to remove.
    """

    value: V
    index: Optional[int] = None

    @property
    def effective(self) -> bool:
        return self.index is not None


Action = Union[NameChanged, ValueAdded[V], ValueRemoved[V]]


class ActionLog(Generic[V]):
    """Last-in-first-out stack of actions owned by a single record."""

    def __init__(self) -> None:
        self._entries: List[Action[V]] = []

    def push(self, action: Action[V]) -> None:
        if not isinstance(action, (NameChanged, ValueAdded, ValueRemoved)):
            raise TypeError(f"Unsupported action: {action!r}")
        self._entries.append(action)

    def pop(self) -> Optional[Action[V]]:
        """Remove and return the most recent action, or ``None`` if the log is empty."""
        if not self._entries:
            return None
        return self._entries.pop()

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
