"""Bounded history for long-running queues.

After every step completion the guardian:

1. reads the resident set size of the process; above the pressure threshold
   it evicts old completed steps, runs the release hooks (render caches) and
   forces a garbage collection;
2. evicts old completed steps whenever more than max_completed_steps of them
   are retained, whatever the memory usage.
"""

from __future__ import annotations

import gc
import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

import psutil

from wizard_cli.queue.contract import Step
from wizard_cli.stores.tunables import QueueTunables


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Eviction:
    """Result of truncating the step list."""

    steps: list[Step]
    cursor: int
    evicted: list[Step]

    @property
    def count(self) -> int:
        return len(self.evicted)


def evict_completed(steps: Sequence[Step], cursor: int, keep: int) -> Eviction:
    """Keep the last `keep` steps before the cursor and every step after it.

    steps[cursor] is the same object before and after eviction.
    """
    keep_from = max(0, cursor - keep)
    return Eviction(
        steps=list(steps[keep_from:]),
        cursor=cursor - keep_from,
        evicted=list(steps[:keep_from]),
    )


def process_memory() -> int:
    """Resident set size of the current process in bytes."""
    return psutil.Process().memory_info().rss


class MemoryGuardian:
    """Decides when the queue drops completed steps.

    Args:
        tunables: Retention cap and pressure threshold.
        read_memory: Returns current memory usage in bytes.
        release_hooks: Called during an emergency cleanup, e.g. to clear
            render caches.
    """

    def __init__(
        self,
        tunables: QueueTunables,
        *,
        read_memory: Callable[[], int] | None = None,
        release_hooks: Iterable[Callable[[], None]] = (),
    ) -> None:
        self.tunables = tunables
        self._read_memory = read_memory or process_memory
        self._release_hooks = list(release_hooks)
        self.emergency_cleanups = 0

    def add_release_hook(self, hook: Callable[[], None]) -> None:
        self._release_hooks.append(hook)

    def check(self, steps: Sequence[Step], cursor: int) -> Eviction | None:
        """Run both checks; return the eviction to apply, if any.

        The emergency path evicts with the same cap as the hard limit, so a
        single eviction covers both.
        """
        usage = self._read_memory()
        if usage > self.tunables.memory_pressure_threshold:
            logger.debug(
                "Memory pressure: %s bytes > %s bytes",
                usage,
                self.tunables.memory_pressure_threshold,
            )
            eviction = self.cleanup_old_steps(steps, cursor)
            self._emergency_release()
            return eviction
        return self.cleanup_old_steps(steps, cursor)

    def cleanup_old_steps(self, steps: Sequence[Step], cursor: int) -> Eviction | None:
        """Evict when more than max_completed_steps completed steps are kept."""
        limit = self.tunables.max_completed_steps
        if cursor <= limit:
            return None
        eviction = evict_completed(steps, cursor, limit)
        logger.debug(
            "Evicted %s completed steps, %s retained",
            eviction.count,
            len(eviction.steps),
        )
        return eviction

    def _emergency_release(self) -> None:
        self.emergency_cleanups += 1
        for hook in self._release_hooks:
            hook()
        collected = gc.collect()
        logger.debug("Emergency cleanup collected %s objects", collected)
