"""Timer core -- a countdown state machine exposed as lazy event streams."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import AsyncIterator, Awaitable, Callable
from enum import Enum

from flowtimer.core.errors import TimerErrorKind
from flowtimer.core.events import Failure, Paused, Resumed, Stopped, Tick, TimerEvent

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_MS = 1000

Delay = Callable[[int], Awaitable[None]]


class TimerState(Enum):
    """Possible states of the timer."""

    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"


async def _sleep_ms(milliseconds: int) -> None:
    await asyncio.sleep(milliseconds / 1000)


def _require_int(name: str, value: object) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")


class Timer:
    """A countdown timer whose lifecycle is driven by start/stop/pause/resume.

    ``start``, ``stop`` and ``resume`` return async iterators of
    :class:`TimerEvent`.  They are lazy: nothing is checked or changed until
    the consumer begins iterating.  Invalid transitions are reported as a
    single :class:`Failure` event, never raised.

    The state cell is guarded by a ``threading.Lock`` so ``pause()`` and
    friends may be called from another thread while the countdown runs on an
    event loop.
    """

    def __init__(self, delay: Delay | None = None, paused_poll_ms: int | None = None) -> None:
        if paused_poll_ms is not None:
            _require_int("paused_poll_ms", paused_poll_ms)
            if paused_poll_ms < 1:
                raise ValueError(f"paused_poll_ms must be positive, got {paused_poll_ms}")
        self._delay: Delay = delay if delay is not None else _sleep_ms
        self._paused_poll_ms = paused_poll_ms
        self._lock = threading.Lock()
        self._state: TimerState = TimerState.STOPPED
        self._run_id = 0

    # -- public interface ----------------------------------------------------

    @property
    def state(self) -> TimerState:
        """Return the current timer state."""
        with self._lock:
            return self._state

    @property
    def is_running(self) -> bool:
        """Return whether a countdown is currently ticking."""
        return self.state is TimerState.RUNNING

    def start(
        self, duration_ms: int, interval_ms: int = DEFAULT_INTERVAL_MS
    ) -> AsyncIterator[TimerEvent]:
        """Count down *duration_ms* milliseconds, ticking every *interval_ms*.

        Emits ``Failure`` instead of counting down when the timer is already
        running or paused at the time iteration begins.
        """
        _require_int("duration_ms", duration_ms)
        _require_int("interval_ms", interval_ms)
        if interval_ms < 1:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        return self._start(duration_ms, interval_ms)

    def stop(self) -> AsyncIterator[TimerEvent]:
        """Stop the countdown.  Stopping a stopped timer emits ``Failure``."""
        return self._stop()

    def pause(self) -> None:
        """Pause the countdown.

        Pausing an already-paused timer only logs a warning.  Pausing a
        stopped timer is allowed; it then has to be stopped before the next
        ``start``.
        """
        with self._lock:
            if self._state is TimerState.PAUSED:
                logger.warning("Already paused, check code for multiple callers")
            self._state = TimerState.PAUSED
        logger.debug("Timer paused")

    def resume(self) -> AsyncIterator[TimerEvent]:
        """Put the timer back into RUNNING and emit ``Resumed``."""
        return self._resume()

    # -- streams -------------------------------------------------------------

    async def _start(self, duration_ms: int, interval_ms: int) -> AsyncIterator[TimerEvent]:
        with self._lock:
            current = self._state
            if current is TimerState.STOPPED:
                self._state = TimerState.RUNNING
                self._run_id += 1
                run_id = self._run_id
        if current is TimerState.RUNNING:
            yield Failure(TimerErrorKind.ALREADY_RUNNING)
            return
        if current is TimerState.PAUSED:
            yield Failure(TimerErrorKind.CURRENTLY_PAUSED)
            return

        logger.debug("Countdown started: %d ms every %d ms", duration_ms, interval_ms)
        finished = False
        try:
            async for event in self._countdown(run_id, duration_ms, interval_ms):
                if event.is_terminal:
                    finished = True
                yield event
            finished = True
        finally:
            if not finished:
                self._release(run_id)

    async def _countdown(
        self, run_id: int, duration_ms: int, interval_ms: int
    ) -> AsyncIterator[TimerEvent]:
        paused_poll_ms = self._paused_poll_ms or interval_ms
        time_left = duration_ms
        while True:
            with self._lock:
                superseded = self._run_id != run_id
                if time_left < 1 and not superseded:
                    self._state = TimerState.STOPPED
                state = self._state

            if superseded:
                # A newer countdown owns the state cell now.
                logger.debug("Countdown superseded with %d ms left", time_left)
                yield Stopped()
                return
            if time_left < 1:
                logger.debug("Countdown finished")
                yield Stopped()
                return
            if state is TimerState.RUNNING:
                yield Tick(time_left)
                await self._delay(interval_ms)
                time_left -= interval_ms
            elif state is TimerState.PAUSED:
                yield Paused(time_left)
                await self._delay(paused_poll_ms)
            else:
                logger.debug("Countdown stopped with %d ms left", time_left)
                yield Stopped()
                return

    async def _stop(self) -> AsyncIterator[TimerEvent]:
        with self._lock:
            previous = self._state
            self._state = TimerState.STOPPED
        if previous is TimerState.STOPPED:
            yield Failure(TimerErrorKind.NO_TIMER_RUNNING)
        else:
            logger.debug("Timer stopped from %s state", previous.value)
            yield Stopped()

    async def _resume(self) -> AsyncIterator[TimerEvent]:
        with self._lock:
            if self._state is TimerState.RUNNING:
                logger.warning("Already running, check code for multiple callers")
            self._state = TimerState.RUNNING
        logger.debug("Timer resumed")
        yield Resumed()

    # -- private helpers -----------------------------------------------------

    def _release(self, run_id: int) -> None:
        """Return to STOPPED after an abandoned countdown, unless a newer one owns the timer."""
        with self._lock:
            if self._run_id == run_id:
                self._state = TimerState.STOPPED
                logger.debug("Countdown abandoned by its consumer")
