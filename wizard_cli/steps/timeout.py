"""Countdown that answers a step on the user's behalf.

A step built with `timeout=` starts a Countdown when it becomes active. Two
actions are scheduled: a one-second tick that refreshes the remaining time
shown next to the title, and a single sleep for the whole duration that
delivers StepTimedOut. Stopping the countdown (a key press, or the step
finishing) makes both events no-ops.
"""

from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass

from wizard_cli.queue.contract import Action, Batch, batch


logger = logging.getLogger(__name__)

TICK_INTERVAL = 1.0


@dataclass(frozen=True)
class TimerTick:
    """One tick of a step countdown elapsed."""

    pass


@dataclass(frozen=True)
class StepTimedOut:
    """The countdown of the active step ran out."""

    pass


def format_remaining(seconds: int) -> str:
    """Format seconds as MM:SS, e.g. 75 -> "01:15"."""
    minutes, seconds = divmod(max(seconds, 0), 60)
    return f"{minutes:02d}:{seconds:02d}"


class Countdown:
    def __init__(self, seconds: float, tick_interval: float = TICK_INTERVAL) -> None:
        if seconds <= 0:
            raise ValueError(f"timeout must be positive, got {seconds}")
        self.seconds = seconds
        self.tick_interval = tick_interval
        self.remaining = math.ceil(seconds)
        self.active = False

    def start(self) -> Batch | None:
        self.remaining = math.ceil(self.seconds)
        self.active = True
        logger.debug("Countdown started: %ss", self.seconds)
        return batch(self._tick, self._expire)

    def stop(self) -> None:
        self.active = False

    def tick(self) -> Action | None:
        """Count one tick down; return the next tick while time is left."""
        if not self.active:
            return None
        self.remaining = max(self.remaining - 1, 0)
        if self.remaining == 0:
            return None
        return self._tick

    def formatted(self) -> str:
        return format_remaining(self.remaining)

    async def _tick(self) -> TimerTick:
        await asyncio.sleep(self.tick_interval)
        return TimerTick()

    async def _expire(self) -> StepTimedOut:
        await asyncio.sleep(self.seconds)
        return StepTimedOut()
