"""ConfirmStep - a yes/no question."""

from __future__ import annotations

from rich.text import Text
from textual import events

from wizard_cli.errors import StepDeclined
from wizard_cli.queue.contract import Action, Batch
from wizard_cli.render.theme import (
    ARROW,
    SELECTION_STYLE,
    SUBTLE_STYLE,
    SUCCESS_LABEL_STYLE,
    error_status_style,
)
from wizard_cli.steps.base import BaseStep, body_line, help_line


TOGGLE_KEYS = ("left", "right", "up", "down", "tab")


class ConfirmStep(BaseStep):
    """Asks a yes/no question.

    Answering "No" completes the step with a StepDeclined failure. By default
    that failure is counted but does not halt the queue. When a timeout runs
    out, `timeout_default` (a bool, or "yes"/"no" in either label language)
    answers the question; without one the highlighted option is taken.
    """

    def __init__(
        self,
        title: str,
        *,
        default: bool = True,
        halts_queue_on_failure: bool = False,
        **kwargs,
    ) -> None:
        super().__init__(
            title, halts_queue_on_failure=halts_queue_on_failure, **kwargs
        )
        self.selected_yes = default
        self.answer: bool | None = None

    def process_event(
        self, event: object
    ) -> tuple[ConfirmStep, Action | Batch | None]:
        if not isinstance(event, events.Key):
            return self, None

        character = (event.character or "").lower()
        if event.key in TOGGLE_KEYS:
            self.selected_yes = not self.selected_yes
        elif character == "y":
            self._answer(True)
        elif character == "n":
            self._answer(False)
        elif event.key == "enter":
            self._answer(self.selected_yes)
        return self, None

    def apply_timeout_default(self) -> None:
        default = self.timeout_default
        if isinstance(default, str):
            self._answer(default.lower() in ("y", "yes", self.labels.yes.lower()))
        elif default is None:
            self._answer(self.selected_yes)
        else:
            self._answer(bool(default))

    def _answer(self, yes: bool) -> None:
        self.answer = yes
        self.selected_yes = yes
        if yes:
            self.finish()
        else:
            self.finish(StepDeclined(self.labels.declined_message))

    def active_lines(self, width: int) -> list[Text]:
        options = Text.assemble(
            self._option(self.labels.yes, self.selected_yes),
            "   ",
            self._option(self.labels.no, not self.selected_yes),
        )
        return [body_line(options), help_line(self.labels.confirm_help)]

    def _option(self, label: str, selected: bool) -> Text:
        if selected:
            return Text(f"{ARROW} {label}", style=SELECTION_STYLE)
        return Text(f"  {label}", style=SUBTLE_STYLE)

    def final_status(self) -> Text:
        if self.answer:
            return Text(self.labels.yes, style=SUCCESS_LABEL_STYLE)
        return Text(self.labels.no, style=error_status_style())

    def failure_lines(self, width: int) -> list[Text]:
        # The "No" on the title line says it all
        return []
