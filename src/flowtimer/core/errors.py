"""Invalid-transition errors reported by the timer."""

from enum import Enum


class TimerErrorKind(Enum):
    """Operations attempted from a state that does not allow them."""

    ALREADY_RUNNING = "already_running"
    CURRENTLY_PAUSED = "currently_paused"
    NO_TIMER_RUNNING = "no_timer_running"

    @property
    def message(self) -> str:
        """Return the fixed human-readable message for this kind."""
        return _MESSAGES[self]


_MESSAGES = {
    TimerErrorKind.ALREADY_RUNNING: (
        "This instance of the timer is already running, "
        "create a new instance or stop your current timer"
    ),
    TimerErrorKind.CURRENTLY_PAUSED: (
        "This timer is currently paused. Choose to continue or stop to start over"
    ),
    TimerErrorKind.NO_TIMER_RUNNING: "Trying to stop or pause a timer that isn't running",
}


class TimerError(Exception):
    """Exception form of a :class:`~flowtimer.core.events.Failure` event.

    The timer never raises this itself; consumers that prefer exceptions can
    raise ``failure.error``.
    """

    def __init__(self, kind: TimerErrorKind) -> None:
        super().__init__(kind.message)
        self.kind = kind
