"""ActionStep - runs a callable in the background with a spinner."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from rich.text import Text

from wizard_cli.queue.contract import Action, Batch, batch
from wizard_cli.queue.events import ActionFailed
from wizard_cli.render.text import summary_line
from wizard_cli.render.theme import SPINNER_STYLE, SUCCESS_LABEL_STYLE
from wizard_cli.steps.base import BaseStep


SPINNER_FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧")
SPINNER_INTERVAL = 0.1


@dataclass(frozen=True)
class SpinnerTick:
    pass


@dataclass(frozen=True)
class ActionDone:
    value: object = None


class ActionStep(BaseStep):
    """Runs `function` in a worker thread.

    The step succeeds when the function returns and fails with whatever it
    raises. On success, `summary` (if given) is called and its lines are
    shown under the title. With `timeout` set, the step fails with
    StepTimeout when the function is still running at the deadline; its
    late result is ignored.
    """

    key_stops_countdown = False

    def __init__(
        self,
        title: str,
        function: Callable[[], object],
        *,
        summary: Callable[[], Iterable[str]] | None = None,
        success_label: str | None = None,
        spinner_interval: float = SPINNER_INTERVAL,
        **kwargs,
    ) -> None:
        super().__init__(title, **kwargs)
        self.function = function
        self.summary = summary
        self.success_label = success_label
        self.spinner_interval = spinner_interval
        self.value: object = None
        self.summary_lines: list[str] = []
        self._frame = 0

    def begin(self) -> Action | Batch | None:
        return batch(self._tick, self._run, super().begin())

    def process_event(
        self, event: object
    ) -> tuple[ActionStep, Action | Batch | None]:
        if isinstance(event, SpinnerTick):
            self._frame = (self._frame + 1) % len(SPINNER_FRAMES)
            return self, self._tick

        if isinstance(event, ActionDone):
            self.value = event.value
            if self.summary is not None:
                try:
                    self.summary_lines = [str(line) for line in self.summary()]
                except Exception as e:
                    self.finish(e)
                    return self, None
            self.finish()
        elif isinstance(event, ActionFailed):
            self.finish(event.error)
        return self, None

    def _run(self) -> ActionDone:
        return ActionDone(self.function())

    async def _tick(self) -> SpinnerTick:
        await asyncio.sleep(self.spinner_interval)
        return SpinnerTick()

    def active_lines(self, width: int) -> list[Text]:
        return []

    def render_active(self, width: int) -> Text:
        frame = Text(SPINNER_FRAMES[self._frame], style=SPINNER_STYLE)
        return self.active_header(width, right=frame)

    def final_status(self) -> Text:
        if self.success_label and not self.has_failure:
            return Text(self.success_label, style=SUCCESS_LABEL_STYLE)
        return super().final_status()

    def result_lines(self, width: int) -> list[Text]:
        return [summary_line(line) for line in self.summary_lines]
