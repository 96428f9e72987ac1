"""Success and error counts of a queue run."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from wizard_cli.queue.contract import Step
from wizard_cli.stores.labels import Labels


logger = logging.getLogger(__name__)


class RunStatus(Enum):
    SUCCESS = "success"
    PROBLEM = "problem"
    IN_PROGRESS = "in_progress"
    CANCELLED = "cancelled"


@dataclass
class StatsTracker:
    """Counts finished steps for the summary footer.

    recompute() rebuilds the counts from the steps before the cursor.
    Steps evicted from the queue are folded into the evicted_* tallies
    first, so counts and total keep covering the whole run.
    """

    success_count: int = 0
    error_count: int = 0
    evicted_success: int = 0
    evicted_errors: int = 0
    evicted_total: int = 0

    def recompute(
        self,
        steps: Sequence[Step],
        cursor: int,
        halting_step: Step | None = None,
    ) -> None:
        scanned = min(cursor, len(steps))
        success = 0
        errors = 0
        for step in steps[:scanned]:
            if not step.is_complete:
                continue
            if step.has_failure:
                errors += 1
            else:
                success += 1

        # A halting step sits at the cursor, outside the scanned range
        if halting_step is not None and halting_step.has_failure:
            index = _index_of(steps, halting_step)
            if index is not None and index >= scanned:
                errors += 1

        self.success_count = self.evicted_success + success
        self.error_count = self.evicted_errors + errors

    def absorb(self, evicted: Sequence[Step]) -> None:
        """Tally steps that are about to leave the queue."""
        for step in evicted:
            self.evicted_total += 1
            if step.is_complete and step.has_failure:
                self.evicted_errors += 1
            elif step.is_complete:
                self.evicted_success += 1
        logger.debug("Absorbed %s evicted steps into stats", len(evicted))

    def total(self, steps: Sequence[Step]) -> int:
        return self.evicted_total + len(steps)

    def status(self, total: int, interrupted: bool = False) -> RunStatus:
        if self.error_count > 0:
            return RunStatus.PROBLEM
        if interrupted:
            return RunStatus.CANCELLED
        done = self.success_count + self.error_count
        if total > 0 and done == total:
            return RunStatus.SUCCESS
        return RunStatus.IN_PROGRESS

    def summary(self, total: int, labels: Labels) -> str:
        """Left part of the footer, e.g. "Completed 3 of 3 tasks"."""
        return (
            f"{labels.summary_completed} {self.success_count} "
            f"{labels.summary_of} {total} {labels.summary_tasks}"
        )


def status_label(status: RunStatus, labels: Labels) -> str:
    return {
        RunStatus.SUCCESS: labels.status_success,
        RunStatus.PROBLEM: labels.status_problem,
        RunStatus.IN_PROGRESS: labels.status_in_progress,
        RunStatus.CANCELLED: labels.status_cancelled,
    }[status]


def _index_of(steps: Sequence[Step], target: Step) -> int | None:
    for index, step in enumerate(steps):
        if step is target:
            return index
    return None
