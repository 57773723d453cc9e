"""Immutable phase durations and quick-pick presets for the timer engine."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from .constants import (
    DEFAULT_LONG_BREAK_DURATION_MS,
    DEFAULT_LONG_BREAK_EVERY,
    DEFAULT_SHORT_BREAK_DURATION_MS,
    DEFAULT_WORK_DURATION_MS,
    PRESET_CLASSIC,
    PRESET_EXTENDED,
)
from .errors import InvalidConfiguration


class Phase(str, Enum):
    """Activity segment the timer is counting down."""

    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"


_DURATION_FIELDS = (
    "work_duration_ms",
    "short_break_duration_ms",
    "long_break_duration_ms",
)


@dataclass(frozen=True)
class Configuration:
    """Validated durations (milliseconds) and long-break cadence."""

    work_duration_ms: int = DEFAULT_WORK_DURATION_MS
    short_break_duration_ms: int = DEFAULT_SHORT_BREAK_DURATION_MS
    long_break_duration_ms: int = DEFAULT_LONG_BREAK_DURATION_MS
    long_break_every: int = DEFAULT_LONG_BREAK_EVERY

    def __post_init__(self) -> None:
        for name in _DURATION_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidConfiguration(f"{name} must be an integer, got: {value!r}")
            if value < 0:
                raise InvalidConfiguration(f"{name} must not be negative, got: {value}")

        cadence = self.long_break_every
        if isinstance(cadence, bool) or not isinstance(cadence, int):
            raise InvalidConfiguration(
                f"long_break_every must be an integer, got: {cadence!r}"
            )
        if cadence < 1:
            raise InvalidConfiguration(
                f"long_break_every must be at least 1, got: {cadence}"
            )

    def duration_for(self, phase: Phase) -> int:
        if phase is Phase.WORK:
            return self.work_duration_ms
        if phase is Phase.SHORT_BREAK:
            return self.short_break_duration_ms
        return self.long_break_duration_ms

    def with_durations(self, **overrides: int) -> "Configuration":
        return dataclasses.replace(self, **overrides)

    @classmethod
    def from_seconds(
        cls,
        work: int,
        short_break: int,
        long_break: int,
        long_break_every: int = DEFAULT_LONG_BREAK_EVERY,
    ) -> "Configuration":
        return cls(
            work_duration_ms=_seconds_to_ms(work, "work"),
            short_break_duration_ms=_seconds_to_ms(short_break, "short_break"),
            long_break_duration_ms=_seconds_to_ms(long_break, "long_break"),
            long_break_every=long_break_every,
        )


def _seconds_to_ms(value: Any, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfiguration(f"{field} seconds must be an integer, got: {value!r}")
    return value * 1000


# Presets only override the fields they name; "classic" keeps the long break.
PRESETS: Mapping[str, Mapping[str, int]] = {
    PRESET_CLASSIC: {
        "work_duration_ms": 25 * 60 * 1000,
        "short_break_duration_ms": 5 * 60 * 1000,
    },
    PRESET_EXTENDED: {
        "work_duration_ms": 50 * 60 * 1000,
        "short_break_duration_ms": 10 * 60 * 1000,
        "long_break_duration_ms": 30 * 60 * 1000,
    },
}


def apply_preset(configuration: Configuration, name: str) -> Configuration:
    """Return `configuration` with the named quick-pick preset applied."""
    overrides = PRESETS.get(name.strip().lower())
    if overrides is None:
        allowed = ", ".join(sorted(PRESETS))
        raise InvalidConfiguration(f"Unknown preset {name!r}; expected one of: {allowed}")
    return configuration.with_durations(**overrides)
