"""CLI entry point for flowtimer.

Uses Click to expose the ``flowtimer`` command group.  ``start`` drives a
single countdown on a fresh :class:`Timer` and prints one line per event.
"""

from __future__ import annotations

import asyncio
import logging
import math
import sys

import click

import flowtimer
from flowtimer.core.events import Failure, Paused, Resumed, Stopped, Tick, TimerEvent
from flowtimer.core.timer import DEFAULT_INTERVAL_MS, Timer

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _format_remaining(milliseconds: int | None) -> str:
    """Format *milliseconds* as ``M:SS``, rounding partial seconds up."""
    total = math.ceil((milliseconds or 0) / 1000)
    return f"{total // 60}:{total % 60:02d}"


def _describe(event: TimerEvent) -> str:
    if isinstance(event, Tick):
        return f"{_format_remaining(event.remaining_ms)} remaining"
    if isinstance(event, Paused):
        return f"Paused at {_format_remaining(event.remaining_ms)}"
    if isinstance(event, Resumed):
        return "Resumed"
    if isinstance(event, Stopped):
        return "Timer stopped"
    raise TypeError(f"unexpected event {event!r}")


async def _countdown(timer: Timer, duration_ms: int, interval_ms: int) -> int:
    """Echo every event of one countdown and return the exit code.

    A ``Failure`` is printed to stderr and ends the countdown with exit code 1.
    """
    async for event in timer.start(duration_ms, interval_ms):
        if isinstance(event, Failure):
            click.echo(event.message, err=True)
            return 1
        click.echo(_describe(event))
    return 0


@click.group()
@click.version_option(version=flowtimer.__version__, prog_name="flowtimer")
@click.option("-v", "--verbose", is_flag=True, help="Log timer state transitions.")
def cli(verbose: bool) -> None:
    """flowtimer: a pausable countdown timer."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=_LOG_FORMAT)


@cli.command()
@click.argument("duration_ms", type=click.IntRange(min=0))
@click.option(
    "--interval",
    "interval_ms",
    type=click.IntRange(min=1),
    default=DEFAULT_INTERVAL_MS,
    show_default=True,
    help="Milliseconds between ticks.",
)
def start(duration_ms: int, interval_ms: int) -> None:
    """Count down DURATION_MS milliseconds, printing every tick."""
    exit_code = asyncio.run(_countdown(Timer(), duration_ms, interval_ms))
    if exit_code:
        sys.exit(exit_code)
