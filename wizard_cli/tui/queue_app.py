"""Inline textual application that hosts a StepQueue.

The app owns no queue logic. It forwards key presses, resizes and ctrl+c
to the queue, runs the actions the queue schedules as workers, feeds their
results back as ActionCompleted messages and redraws the frame after every
queue call.
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING, ClassVar

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static
from textual.worker import Worker, WorkerState

from wizard_cli.queue.events import (
    ActionFailed,
    Command,
    Interrupt,
    ScheduledAction,
    WindowResized,
)
from wizard_cli.tui.messages import ActionCompleted


if TYPE_CHECKING:
    from wizard_cli.queue.orchestrator import StepQueue


logger = logging.getLogger(__name__)

ACTION_GROUP = "step_actions"


class QueueApp(App):
    """Runs a StepQueue until it completes, halts or is interrupted."""

    CSS = """
    Screen {
        height: auto;
        background: transparent;
    }

    #queue_frame {
        height: auto;
        width: 100%;
    }
    """

    BINDINGS: ClassVar = [
        Binding("ctrl+c", "interrupt", "Cancel", priority=True, show=False),
        Binding("ctrl+q", "interrupt", "Cancel", priority=True, show=False),
    ]

    def __init__(self, queue: StepQueue, **kwargs) -> None:
        super().__init__(**kwargs)
        self.queue = queue
        self._worker_activations: dict[Worker, int] = {}

    def compose(self) -> ComposeResult:
        yield Static(id="queue_frame")

    def on_mount(self) -> None:
        self.queue.update(WindowResized(self.size.width))
        self._apply(self.queue.start())

    def on_resize(self, event: events.Resize) -> None:
        command = self.queue.update(WindowResized(event.size.width))
        self.refresh_frame()
        if command.terminate:
            self.exit()

    def on_key(self, event: events.Key) -> None:
        if self.queue.is_finished:
            return
        event.stop()
        self._apply(self.queue.update(event))

    def on_action_completed(self, message: ActionCompleted) -> None:
        self._apply(self.queue.update(message.result, activation=message.activation))

    def action_interrupt(self) -> None:
        self._apply(self.queue.update(Interrupt()))

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        worker = event.worker
        if worker.group != ACTION_GROUP:
            return
        if event.state not in (WorkerState.SUCCESS, WorkerState.ERROR):
            if event.state is WorkerState.CANCELLED:
                self._worker_activations.pop(worker, None)
            return

        activation = self._worker_activations.pop(worker, None)
        if activation is None:
            return
        if event.state is WorkerState.ERROR:
            logger.debug("Step action %s raised: %r", worker.name, worker.error)
            self.post_message(ActionCompleted(ActionFailed(worker.error), activation))
        elif worker.result is not None:
            self.post_message(ActionCompleted(worker.result, activation))

    def refresh_frame(self) -> None:
        self.query_one("#queue_frame", Static).update(self.queue.render())

    def _apply(self, command: Command) -> None:
        self.refresh_frame()
        if command.terminate:
            if command.actions:
                logger.debug(
                    "Queue finished, skipping %s pending actions", len(command.actions)
                )
            self.exit()
            return
        for scheduled in command.actions:
            self._start_action(scheduled)

    def _start_action(self, scheduled: ScheduledAction) -> None:
        action = scheduled.action
        worker = self.run_worker(
            action,
            name=getattr(action, "__name__", "step_action"),
            group=ACTION_GROUP,
            thread=not inspect.iscoroutinefunction(action),
            exit_on_error=False,
        )
        self._worker_activations[worker] = scheduled.activation
