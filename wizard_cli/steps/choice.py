"""ChoiceStep - pick one option from a list."""

from __future__ import annotations

from collections.abc import Sequence

from rich.text import Text
from textual import events

from wizard_cli.queue.contract import Action, Batch
from wizard_cli.render.text import summary_line
from wizard_cli.render.theme import ARROW, SELECTION_STYLE
from wizard_cli.steps.base import BaseStep, body_line, help_line


UP_KEYS = ("up", "k")
DOWN_KEYS = ("down", "j")
SELECT_KEYS = ("enter", "right")


class ChoiceStep(BaseStep):
    """Single choice with cursor navigation. Navigation wraps around.

    On timeout the option named by `timeout_default` (an index or the option
    text) is selected, or the highlighted one when it names none.
    """

    def __init__(
        self,
        title: str,
        options: Sequence[str],
        *,
        default_index: int = 0,
        **kwargs,
    ) -> None:
        if not options:
            raise ValueError("ChoiceStep needs at least one option")
        super().__init__(title, **kwargs)
        self.options = list(options)
        self.index = min(max(default_index, 0), len(self.options) - 1)
        self.value: str | None = None

    def process_event(
        self, event: object
    ) -> tuple[ChoiceStep, Action | Batch | None]:
        if not isinstance(event, events.Key):
            return self, None

        if event.key in UP_KEYS:
            self.index = (self.index - 1) % len(self.options)
        elif event.key in DOWN_KEYS:
            self.index = (self.index + 1) % len(self.options)
        elif event.key in SELECT_KEYS:
            self.value = self.options[self.index]
            self.finish()
        return self, None

    def apply_timeout_default(self) -> None:
        default = self.timeout_default
        if isinstance(default, int) and 0 <= default < len(self.options):
            self.index = default
        elif default in self.options:
            self.index = self.options.index(default)
        self.value = self.options[self.index]
        self.finish()

    def active_lines(self, width: int) -> list[Text]:
        lines = []
        for i, option in enumerate(self.options):
            if i == self.index:
                lines.append(body_line(f"{ARROW} {option}", SELECTION_STYLE))
            else:
                lines.append(body_line(f"  {option}"))
        lines.append(help_line(self.labels.choice_help))
        return lines

    def result_lines(self, width: int) -> list[Text]:
        return [summary_line(self.value or "")]
