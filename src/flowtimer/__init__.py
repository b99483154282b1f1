"""flowtimer: a pausable countdown timer exposed as an async event stream."""

from flowtimer.core.errors import TimerError, TimerErrorKind
from flowtimer.core.events import Failure, Paused, Resumed, Stopped, Tick, TimerEvent
from flowtimer.core.timer import DEFAULT_INTERVAL_MS, Timer, TimerState

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_INTERVAL_MS",
    "Failure",
    "Paused",
    "Resumed",
    "Stopped",
    "Tick",
    "Timer",
    "TimerError",
    "TimerErrorKind",
    "TimerEvent",
    "TimerState",
]
