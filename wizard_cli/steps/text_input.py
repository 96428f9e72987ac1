"""TextInputStep - free text entry."""

from __future__ import annotations

from rich.text import Text
from textual import events

from wizard_cli.queue.contract import Action, Batch
from wizard_cli.render.text import summary_line
from wizard_cli.render.theme import ARROW, INPUT_STYLE, SUBTLE_STYLE
from wizard_cli.steps.base import BaseStep, body_line, help_line


class TextInputStep(BaseStep):
    """Reads a line of text. Enter confirms; an empty entry takes `default`.

    With `mask` set (e.g. "*"), the value is echoed as mask characters both
    while typing and in the final rendering.
    """

    def __init__(
        self,
        title: str,
        *,
        default: str = "",
        placeholder: str | None = None,
        mask: str | None = None,
        **kwargs,
    ) -> None:
        super().__init__(title, **kwargs)
        self.default = default
        self.placeholder = placeholder
        self.mask = mask
        self.buffer = ""
        self.value: str | None = None

    def process_event(
        self, event: object
    ) -> tuple[TextInputStep, Action | Batch | None]:
        if not isinstance(event, events.Key):
            return self, None

        if event.key == "enter":
            self.value = self.buffer or self.default
            self.finish()
        elif event.key == "backspace":
            self.buffer = self.buffer[:-1]
        elif event.is_printable and event.character:
            self.buffer += event.character
        return self, None

    def apply_timeout_default(self) -> None:
        if self.timeout_default is not None:
            self.value = str(self.timeout_default)
        else:
            self.value = self.buffer or self.default
        self.finish()

    def _shown(self, value: str) -> str:
        if self.mask:
            return self.mask * len(value)
        return value

    def active_lines(self, width: int) -> list[Text]:
        if self.buffer:
            entry = Text(self._shown(self.buffer), style=INPUT_STYLE)
        else:
            hint = self.placeholder or self.labels.input_placeholder
            if self.default and not self.mask:
                hint = self.placeholder or self.default
            entry = Text(hint, style=SUBTLE_STYLE)
        line = Text.assemble((f"{ARROW} ", INPUT_STYLE), entry)
        return [body_line(line), help_line(self.labels.input_help)]

    def result_lines(self, width: int) -> list[Text]:
        if not self.value:
            return []
        return [summary_line(self._shown(self.value))]
