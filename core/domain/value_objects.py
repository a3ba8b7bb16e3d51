"""Domain value objects and validation errors for validated records."""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Sequence

import numpy as np


class ValidationError(ValueError):
    """Raised when a record name or value is rejected."""


def validate_name(name: str) -> str:
    """Return ``name`` unchanged if it is a usable record name."""
    if not isinstance(name, str):
        raise ValidationError(f"Record name must be a string, got {type(name).__name__}")
    if not name:
        raise ValidationError("Record name must be a non-empty string")
    return name


class RecordProfileError(ValueError):
    """Raised when record statistics cannot be computed."""


@dataclass(frozen=True, slots=True)
class RecordProfile:
    """Summary statistics about the numeric values of a record."""

    count: int
    minimum: float
    maximum: float
    mean: float
    median: float

    @classmethod
    def from_values(cls, values: Sequence[object]) -> "RecordProfile":
        if len(values) == 0:
            raise RecordProfileError("Cannot profile a record with no values")
        rejected = [value for value in values if not isinstance(value, numbers.Real)]
        if rejected:
            raise RecordProfileError(
                f"Record values must be numeric to be profiled: {rejected[:3]!r}"
            )
        array = np.asarray(values, dtype=np.float64)
        return cls(
            count=int(array.size),
            minimum=float(array.min()),
            maximum=float(array.max()),
            mean=float(array.mean()),
            median=float(np.median(array)),
        )

    def __str__(self) -> str:
        return (
            f"count={self.count} min={self.minimum:g} max={self.maximum:g} "
            f"mean={self.mean:g} median={self.median:g}"
        )
