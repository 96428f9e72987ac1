"""MultiSelectStep - pick any number of options from a list."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from rich.text import Text
from textual import events

from wizard_cli.queue.contract import Action, Batch
from wizard_cli.render.text import summary_line
from wizard_cli.render.theme import ARROW, CHECKED, SELECTION_STYLE, error_message_style
from wizard_cli.steps.base import BaseStep, body_line, help_line
from wizard_cli.steps.choice import DOWN_KEYS, UP_KEYS


TOGGLE_KEYS = ("space", "right")

# Cursor position of the "select all" row, above the first option
SELECT_ALL_ROW = -1


class MultiSelectStep(BaseStep):
    """Checklist with cursor navigation.

    Space (or right) toggles the option under the cursor and Enter confirms.
    With `select_all` on, an extra row above the options toggles all of
    them at once: everything is selected unless everything already was.
    Enter with fewer than `min_selected` options checked shows a warning
    and keeps the step active.

    On timeout the options in `timeout_default` (indexes or option texts)
    are checked and the selection is confirmed as if Enter was pressed.
    """

    def __init__(
        self,
        title: str,
        options: Sequence[str],
        *,
        selected: Iterable[int | str] = (),
        select_all: bool = False,
        select_all_text: str | None = None,
        min_selected: int = 1,
        **kwargs,
    ) -> None:
        if not options:
            raise ValueError("MultiSelectStep needs at least one option")
        super().__init__(title, **kwargs)
        self.options = list(options)
        self.has_select_all = select_all
        self.select_all_text = select_all_text or self.labels.select_all
        self.min_selected = min_selected
        self.selected: set[int] = set(self._indexes(selected))
        self.cursor = min(self.selected) if self.selected else 0
        self.warning = ""
        self.value: list[str] | None = None

    def process_event(
        self, event: object
    ) -> tuple[MultiSelectStep, Action | Batch | None]:
        if not isinstance(event, events.Key):
            return self, None

        self.warning = ""
        if event.key in UP_KEYS:
            top = SELECT_ALL_ROW if self.has_select_all else 0
            self.cursor = max(self.cursor - 1, top)
        elif event.key in DOWN_KEYS:
            self.cursor = min(self.cursor + 1, len(self.options) - 1)
        elif event.key in TOGGLE_KEYS:
            self._toggle()
        elif event.key == "enter":
            self._confirm()
        return self, None

    @property
    def all_selected(self) -> bool:
        return len(self.selected) == len(self.options)

    def selected_options(self) -> list[str]:
        return [
            option for i, option in enumerate(self.options) if i in self.selected
        ]

    def apply_timeout_default(self) -> None:
        if self.timeout_default is not None:
            self.selected.update(self._indexes(self.timeout_default))
        self._confirm()

    def _toggle(self) -> None:
        if self.cursor == SELECT_ALL_ROW:
            if self.all_selected:
                self.selected.clear()
            else:
                self.selected = set(range(len(self.options)))
        else:
            self.selected ^= {self.cursor}

    def _confirm(self) -> None:
        if len(self.selected) < self.min_selected:
            self.warning = self.labels.select_at_least_one
            return
        self.value = self.selected_options()
        self.finish()

    def _indexes(self, values: int | str | Iterable[int | str]) -> Iterable[int]:
        if isinstance(values, (int, str)):
            values = [values]
        for value in values:
            if isinstance(value, int):
                if 0 <= value < len(self.options):
                    yield value
            elif value in self.options:
                yield self.options.index(value)

    def active_lines(self, width: int) -> list[Text]:
        lines = []
        if self.has_select_all:
            lines.append(
                self._row(self.select_all_text, self.all_selected, SELECT_ALL_ROW)
            )
        for i, option in enumerate(self.options):
            lines.append(self._row(option, i in self.selected, i))
        if self.warning:
            lines.append(body_line(self.warning, error_message_style()))
        if self.has_select_all:
            lines.append(help_line(self.labels.multi_select_all_help))
        else:
            lines.append(help_line(self.labels.multi_select_help))
        return lines

    def _row(self, text: str, checked: bool, row: int) -> Text:
        mark = CHECKED if checked else " "
        if row == self.cursor:
            return body_line(f"{ARROW} [{mark}] {text}", SELECTION_STYLE)
        return body_line(f"  [{mark}] {text}")

    def result_lines(self, width: int) -> list[Text]:
        return [summary_line(option) for option in self.value or []]
