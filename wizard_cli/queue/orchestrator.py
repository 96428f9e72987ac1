"""StepQueue - runs steps one at a time and renders their progress.

The queue is a small state machine:

    IDLE -> ACTIVE -> COMPLETED
                   -> HALTED (failing step that halts the queue, or ctrl+c)

Only the step under the cursor receives events. When it completes, the
memory guardian may evict old steps, then the queue either halts or moves
on and begins the next step. All of this happens on the caller's thread;
StepQueue.run() hosts it inside a textual app.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from rich.console import Console
from rich.style import Style
from rich.text import Text

from wizard_cli.errors import QueueRunError, StepContractError
from wizard_cli.queue.contract import Action, Batch, Step, flatten_actions
from wizard_cli.queue.events import Command, Interrupt, ScheduledAction, WindowResized
from wizard_cli.queue.memory import Eviction, MemoryGuardian
from wizard_cli.queue.stats import RunStatus, StatsTracker, status_label
from wizard_cli.render.cache import RenderCache
from wizard_cli.render.numbering import (
    DEFAULT_NUMBER_FORMAT,
    Numbering,
    normalize_number_format,
)
from wizard_cli.render.pipeline import QueueDisplay, QueueRenderer, RenderState
from wizard_cli.render.theme import (
    APP_NAME_STYLE,
    SUBTLE_STYLE,
    SUCCESS_LABEL_STYLE,
    ErrorColor,
    error_status_style,
    set_error_color,
)
from wizard_cli.stores.labels import Labels
from wizard_cli.stores.tunables import QueueTunables, get_tunables
from wizard_cli.tui.queue_app import QueueApp


logger = logging.getLogger(__name__)


class QueueState(Enum):
    IDLE = "idle"
    ACTIVE = "active"
    HALTED = "halted"
    COMPLETED = "completed"


class StepQueue:
    """Ordered run of steps with a single active step.

    Args:
        title: Text of the header line.
        tunables: Retention and memory limits; defaults to get_tunables().
        read_memory: Returns memory usage in bytes for the guardian, mostly
            replaced in tests.
    """

    def __init__(
        self,
        title: str = "",
        *,
        tunables: QueueTunables | None = None,
        read_memory: Callable[[], int] | None = None,
    ) -> None:
        self.display = QueueDisplay(title=title)
        self.steps: list[Step] = []
        self.cursor = 0
        self.state = QueueState.IDLE
        self.halting_step: Step | None = None
        self.interrupted = False
        self.stats = StatsTracker()
        self.evicted_count = 0

        self.cache = RenderCache()
        self.renderer = QueueRenderer(self.cache)
        self.guardian = MemoryGuardian(
            tunables or get_tunables(),
            read_memory=read_memory,
            release_hooks=(self.cache.clear_interned, self.cache.release_rules),
        )
        self._activation = 0

    # --- Builder -----------------------------------------------------------

    def add_steps(self, *steps: Step) -> StepQueue:
        for step in steps:
            if not isinstance(step, Step):
                raise StepContractError(
                    f"{type(step).__name__} does not implement the Step protocol"
                )
            self.steps.append(step)
        return self

    def with_title_color(self, color: str, bold: bool = False) -> StepQueue:
        self.display.title_style = Style(color=color, bold=bold)
        return self

    def with_app_name(self, name: str) -> StepQueue:
        self.display.app_name = name
        return self

    def with_app_name_color(self, color: str, bold: bool = False) -> StepQueue:
        self.display.app_name_style = APP_NAME_STYLE + Style(color=color, bold=bold)
        return self

    def with_summary(self, show: bool = True) -> StepQueue:
        self.display.show_summary = show
        return self

    def with_clear_screen(self, clear: bool = True) -> StepQueue:
        self.display.clear_screen = clear
        return self

    def with_error_color(self, color: ErrorColor) -> StepQueue:
        """Switch the error palette; error styles are shared by every step."""
        self.display.error_color = color
        set_error_color(color)
        return self

    def with_steps_numbered(
        self,
        enable: bool = True,
        keep_first_symbol: bool = False,
        number_format: str = DEFAULT_NUMBER_FORMAT,
    ) -> StepQueue:
        self.display.numbering = Numbering(
            enabled=enable,
            keep_first_symbol=keep_first_symbol,
            number_format=normalize_number_format(number_format),
        )
        return self

    def with_result_separators(self, enabled: bool = True) -> StepQueue:
        self.display.result_separators = enabled
        return self

    def with_labels(self, labels: Labels) -> StepQueue:
        self.display.labels = labels
        return self

    # --- State -------------------------------------------------------------

    @property
    def halted(self) -> bool:
        return self.state is QueueState.HALTED

    @property
    def is_finished(self) -> bool:
        return self.state in (QueueState.HALTED, QueueState.COMPLETED)

    @property
    def success_count(self) -> int:
        return self.stats.success_count

    @property
    def error_count(self) -> int:
        return self.stats.error_count

    @property
    def total(self) -> int:
        return self.stats.total(self.steps)

    @property
    def activation(self) -> int:
        """Number of the current step activation, carried by its actions."""
        return self._activation

    @property
    def active_step(self) -> Step | None:
        if self.state is QueueState.ACTIVE and self.cursor < len(self.steps):
            return self.steps[self.cursor]
        return None

    def status(self) -> RunStatus:
        return self.stats.status(self.total, interrupted=self.interrupted)

    def summary(self) -> str:
        return self.stats.summary(self.total, self.display.labels)

    # --- Transitions -------------------------------------------------------

    def start(self) -> Command:
        """Begin the first step; an empty queue completes immediately."""
        if self.state is not QueueState.IDLE:
            logger.debug("start() ignored in state %s", self.state.value)
            return Command(terminate=self.is_finished)

        if not self.steps:
            self.state = QueueState.COMPLETED
            logger.debug("Empty queue, nothing to run")
            return Command.quit()

        self.state = QueueState.ACTIVE
        return Command(self._activate())

    def update(self, event: object, activation: int | None = None) -> Command:
        """Route an event to the active step and advance the queue.

        Args:
            event: A key event, an action result, Interrupt or WindowResized.
            activation: For action results, the activation that scheduled
                the action. Results of earlier activations are dropped.
        """
        if isinstance(event, WindowResized):
            self.display.screen_width = event.width
            return Command(terminate=self.is_finished)

        if isinstance(event, Interrupt):
            if not self.is_finished:
                self._halt(None, interrupted=True)
            return Command.quit()

        if self.is_finished:
            return Command.quit()

        if self.state is QueueState.IDLE:
            logger.debug("Dropping %s received before start()", type(event).__name__)
            return Command()

        if activation is not None and activation != self._activation:
            logger.debug(
                "Dropping stale result from activation %s (current %s)",
                activation,
                self._activation,
            )
            return Command()

        step, action = self.steps[self.cursor].handle_event(event)
        if not isinstance(step, Step):
            raise StepContractError(
                f"handle_event returned {type(step).__name__}, expected a Step"
            )
        self.steps[self.cursor] = step
        follow_up = self._schedule(action)

        if not step.is_complete:
            return Command(follow_up)
        return self._complete(step, follow_up)

    def cleanup_old_steps(self) -> int:
        """Drop completed steps beyond the retention cap; return how many."""
        eviction = self.guardian.cleanup_old_steps(self.steps, self.cursor)
        if eviction is None:
            return 0
        self._apply_eviction(eviction)
        return eviction.count

    def _complete(self, step: Step, follow_up: list[ScheduledAction]) -> Command:
        if step.has_failure and step.halts_queue_on_failure:
            self._guard_memory()
            self._halt(step)
            return Command(follow_up, terminate=True)

        # Completed steps before the cursor never exceed max_completed_steps
        self.cursor += 1
        self._guard_memory()
        self.stats.recompute(self.steps, self.cursor, self.halting_step)

        if self.cursor >= len(self.steps):
            self.state = QueueState.COMPLETED
            logger.debug(
                "Queue completed: %s succeeded, %s failed",
                self.success_count,
                self.error_count,
            )
            return Command(follow_up, terminate=True)

        return Command(follow_up + self._activate())

    def _activate(self) -> list[ScheduledAction]:
        self._activation += 1
        step = self.steps[self.cursor]
        number = self.evicted_count + self.cursor
        logger.debug("Beginning step %s: %s", number, step.title)
        return self._schedule(step.begin())

    def _schedule(self, action: Action | Batch | None) -> list[ScheduledAction]:
        return [
            ScheduledAction(action=item, activation=self._activation)
            for item in flatten_actions([action])
        ]

    def _halt(self, step: Step | None, interrupted: bool = False) -> None:
        self.state = QueueState.HALTED
        self.halting_step = step
        self.interrupted = interrupted
        self.stats.recompute(self.steps, self.cursor, self.halting_step)
        if interrupted:
            logger.debug("Queue interrupted at step %s", self.cursor)
        else:
            logger.debug("Queue halted by failing step %r", step)

    def _guard_memory(self) -> None:
        eviction = self.guardian.check(self.steps, self.cursor)
        if eviction is not None:
            self._apply_eviction(eviction)

    def _apply_eviction(self, eviction: Eviction) -> None:
        self.stats.absorb(eviction.evicted)
        self.steps = eviction.steps
        self.cursor = eviction.cursor
        self.evicted_count += eviction.count

    # --- Rendering and running -------------------------------------------

    def render(self) -> Text:
        """Render the current frame."""
        status = self.status()
        labels = self.display.labels
        summary_style, status_style = _status_styles(status)
        return self.renderer.render(
            RenderState(
                steps=tuple(self.steps),
                cursor=self.cursor,
                halted=self.halted,
                display=self.display,
                summary=self.summary(),
                status=status_label(status, labels),
                summary_style=summary_style,
                status_style=status_style,
                first_number=self.evicted_count,
            )
        )

    def run(self) -> None:
        """Run the queue inline in the terminal until it finishes.

        Step failures are part of the queue state and never raise.

        Raises:
            QueueRunError: If the terminal event loop fails.
        """
        if self.display.clear_screen:
            Console().clear()

        app = QueueApp(self)
        try:
            app.run(inline=True, inline_no_clear=True)
        except Exception as e:
            raise QueueRunError(f"Queue event loop failed: {e}") from e

        if app.return_code not in (0, None):
            raise QueueRunError(f"Queue event loop exited with code {app.return_code}")


def _status_styles(status: RunStatus) -> tuple[Style, Style]:
    """(summary style, status style) for the footer."""
    if status is RunStatus.SUCCESS:
        return SUCCESS_LABEL_STYLE, SUCCESS_LABEL_STYLE
    if status in (RunStatus.PROBLEM, RunStatus.CANCELLED):
        return error_status_style(), error_status_style()
    return SUBTLE_STYLE, SUBTLE_STYLE
