"""Settings for the interactive record console."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal, Optional

from core.domain.record import RecordConfig, accept_all
from core.domain.value_objects import ValidationError

ValueType = Literal["str", "int", "float"]

_PARSERS: dict[str, Callable[[str], object]] = {
    "str": str,
    "int": int,
    "float": float,
}


class SettingsError(ValueError):
    """Raised when console settings are inconsistent."""


@dataclass(frozen=True)
class ConsoleSettings:
    """How the console parses and validates values typed by the user."""

    value_type: ValueType = "str"
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    log_noop_removals: bool = False

    def __post_init__(self) -> None:
        if self.value_type not in _PARSERS:
            raise SettingsError(
                f"Unsupported value type: {self.value_type!r} "
                f"(expected one of {sorted(_PARSERS)})"
            )
        bounded = self.min_value is not None or self.max_value is not None
        if bounded and self.value_type == "str":
            raise SettingsError("Value bounds require a numeric value type")
        if (
            self.min_value is not None
            and self.max_value is not None
            and self.min_value > self.max_value
        ):
            raise SettingsError("min_value cannot exceed max_value")

    def parse_value(self, raw: str) -> object:
        """Convert console input into a value of the configured type."""
        text = raw.strip()
        if self.value_type == "str":
            return text
        try:
            return _PARSERS[self.value_type](text)
        except ValueError as exc:
            raise ValidationError(f"Expected a {self.value_type} value, got {raw!r}") from exc

    def build_validator(self) -> Callable[[object], bool]:
        """Return the predicate enforcing the configured bounds."""
        if self.min_value is None and self.max_value is None:
            return accept_all
        low, high = self.min_value, self.max_value

        def in_bounds(value: object) -> bool:
            if low is not None and value < low:  # type: ignore[operator]
                return False
            if high is not None and value > high:  # type: ignore[operator]
                return False
            return True

        return in_bounds

    def record_config(self) -> RecordConfig:
        return RecordConfig(log_noop_removals=self.log_noop_removals)
