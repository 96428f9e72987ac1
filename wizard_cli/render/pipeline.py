"""Frame rendering for the step queue.

The renderer turns a snapshot of queue state into a list of rich Text lines
and joins them into a single frame:

    ──────────────────────────────────────
      Setup                     my-app
    ──────────────────────────────────────

      ●  Check environment           DONE
      ○ Install packages
    ──────────────────────────────────────

Completed steps show their final rendering, the active step its in-progress
rendering. Once the run is over a summary footer (or a blank line and a
closing rule) replaces the trailing rule.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from rich.style import Style
from rich.text import Text

from wizard_cli.queue.contract import (
    Step,
    SupportsCompletedPrefix,
    SupportsInProgressPrefix,
)
from wizard_cli.render.cache import RenderCache
from wizard_cli.render.numbering import Numbering
from wizard_cli.render.text import align_right, is_rule, split_lines, to_text
from wizard_cli.render.theme import (
    APP_NAME_STYLE,
    BRANCH,
    FINISHED_LABEL_STYLE,
    HORIZONTAL_LINE,
    MAIN_LEFT_INDENT,
    STEP_COMPLETED,
    STEP_IN_PROGRESS,
    TITLE_STYLE,
    VERTICAL_LINE,
    VERY_SUBTLE_ERROR_STYLE,
    VERY_SUBTLE_STYLE,
    ErrorColor,
    layout_width,
)
from wizard_cli.stores.labels import DEFAULT_LABELS, Labels


@dataclass
class QueueDisplay:
    """Display configuration of a queue, set through the StepQueue builder."""

    title: str = ""
    title_style: Style = TITLE_STYLE
    app_name: str = ""
    app_name_style: Style = APP_NAME_STYLE
    numbering: Numbering = field(default_factory=Numbering)
    show_summary: bool = True
    result_separators: bool = False
    clear_screen: bool = False
    error_color: ErrorColor = ErrorColor.YELLOW
    labels: Labels = field(default_factory=lambda: DEFAULT_LABELS)
    screen_width: int = 0


@dataclass(frozen=True)
class RenderState:
    """Snapshot of the queue handed to the renderer.

    first_number is the count of steps already evicted from the front of the
    queue, so that numbering keeps counting from the start of the run.
    """

    steps: Sequence[Step]
    cursor: int
    halted: bool
    display: QueueDisplay
    summary: str = ""
    status: str = ""
    summary_style: Style | None = None
    status_style: Style | None = None
    first_number: int = 0

    @property
    def running(self) -> bool:
        return self.cursor < len(self.steps) and not self.halted


class QueueRenderer:
    """Builds frames from RenderState snapshots.

    Rules are taken from a RenderCache so repeated frames of the same width
    reuse them; the cache is released by the memory guardian.
    """

    def __init__(self, cache: RenderCache | None = None) -> None:
        self.cache = cache or RenderCache()

    def render(self, state: RenderState) -> Text:
        return Text("\n").join(self.render_lines(state))

    def render_lines(self, state: RenderState) -> list[Text]:
        display = state.display
        width = layout_width(display.screen_width)

        lines: list[Text] = [self.cache.rule(width)]
        lines.append(self._title_line(display, width))
        lines.append(self.cache.rule(width))
        lines.append(Text(""))

        for index, step in enumerate(state.steps):
            if index > state.cursor:
                break
            failed = step.has_failure
            number_index = state.first_number + index
            if index < state.cursor or step.is_complete:
                self._apply_completed_prefix(display.numbering, step, number_index)
                lines.extend(self._final_lines(step, width, display.result_separators))
            else:
                self._apply_in_progress_prefix(display.numbering, step, number_index)
                lines.extend(split_lines(to_text(step.render_active(width))))
            if index == state.cursor:
                if index + 1 < len(state.steps) and not (state.halted or failed):
                    lines.append(self.cache.rule(width))

        if lines and is_rule(lines[-1]):
            lines.pop()

        if state.running:
            lines.append(self.cache.rule(width))
        elif display.show_summary:
            lines.extend(self._footer_lines(state, width))
        else:
            blank_connectors_below_last_step(lines)
            lines.append(Text(""))
            lines.append(self.cache.rule(width))
        return lines

    def _title_line(self, display: QueueDisplay, width: int) -> Text:
        indent = " " * MAIN_LEFT_INDENT
        title = Text.assemble(indent, (display.title, display.title_style))
        if not display.app_name:
            return title
        badge = Text(f" {display.app_name} ", style=display.app_name_style)
        return align_right(title, badge, width)

    def _final_lines(self, step: Step, width: int, separators: bool) -> list[Text]:
        lines = split_lines(to_text(step.render_final(width)))
        if separators and len(lines) > 1:
            style = VERY_SUBTLE_ERROR_STYLE if step.has_failure else VERY_SUBTLE_STYLE
            indent = " " * MAIN_LEFT_INDENT
            rule_width = max(width - MAIN_LEFT_INDENT - 1, 0)
            separator = indent + BRANCH + HORIZONTAL_LINE * rule_width
            lines.insert(1, Text(separator, style=style))
        return lines

    def _footer_lines(self, state: RenderState, width: int) -> list[Text]:
        indent = " " * MAIN_LEFT_INDENT
        left = Text.assemble(
            indent,
            (STEP_COMPLETED, FINISHED_LABEL_STYLE),
            "  ",
            (state.summary, state.summary_style or ""),
        )
        right = Text(state.status, style=state.status_style or "")
        return [
            Text(indent + VERTICAL_LINE),
            align_right(left, right, width),
            Text(""),
            self.cache.rule(width),
        ]

    def _apply_completed_prefix(
        self, numbering: Numbering, step: Step, index: int
    ) -> None:
        if isinstance(step, SupportsCompletedPrefix):
            prefix = numbering.completed_prefix(index, step.has_failure)
            step.set_completed_prefix(self.cache.intern(prefix))

    def _apply_in_progress_prefix(
        self, numbering: Numbering, step: Step, index: int
    ) -> None:
        if isinstance(step, SupportsInProgressPrefix):
            prefix = numbering.in_progress_prefix(index, step.has_failure)
            step.set_in_progress_prefix(self.cache.intern(prefix))


def blank_connectors_below_last_step(lines: list[Text]) -> None:
    """Blank the vertical connectors that hang below the last step glyph.

    Finds the last line holding a step glyph, takes the column of its first
    glyph and replaces "│" in that column with a space on every line below.
    Styles are kept since the text length does not change.
    """
    column = -1
    last_row = -1
    for row in range(len(lines) - 1, -1, -1):
        plain = lines[row].plain
        positions = [
            pos
            for pos in (plain.find(STEP_COMPLETED), plain.find(STEP_IN_PROGRESS))
            if pos != -1
        ]
        if positions:
            column = min(positions)
            last_row = row
            break

    if last_row == -1:
        return

    for line in lines[last_row + 1 :]:
        plain = line.plain
        if column < len(plain) and plain[column] == VERTICAL_LINE:
            line.plain = plain[:column] + " " + plain[column + 1 :]
