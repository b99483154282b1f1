"""Events produced by a countdown stream."""

from __future__ import annotations

from dataclasses import dataclass

from flowtimer.core.errors import TimerError, TimerErrorKind


class TimerEvent:
    """Base class of every value emitted by :class:`~flowtimer.core.timer.Timer`."""

    is_terminal = False


@dataclass(frozen=True)
class Tick(TimerEvent):
    """The countdown advanced one step; *remaining_ms* is sampled before the delay."""

    remaining_ms: int | None


@dataclass(frozen=True)
class Stopped(TimerEvent):
    """The countdown reached zero or was stopped."""

    is_terminal = True


@dataclass(frozen=True)
class Resumed(TimerEvent):
    """The timer left the paused state."""


@dataclass(frozen=True)
class Paused(TimerEvent):
    """The loop saw the timer paused with *remaining_ms* still to go."""

    remaining_ms: int


@dataclass(frozen=True)
class Failure(TimerEvent):
    """An operation was attempted from a state that does not allow it."""

    kind: TimerErrorKind

    is_terminal = True

    @property
    def message(self) -> str:
        """Return the fixed message for this failure's kind."""
        return self.kind.message

    @property
    def error(self) -> TimerError:
        """Return this failure as a raisable :class:`TimerError`."""
        return TimerError(self.kind)
