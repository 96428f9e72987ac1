"""Shared state and rendering for the bundled steps.

A completed step renders as a title line with a right-aligned status,
followed by optional body lines (result values or an error message) and a
closing connector:

      ●  Install packages                     DONE
      │   3 packages installed
      │
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from rich.style import Style
from rich.text import Text
from textual import events

from wizard_cli.errors import StepTimeout
from wizard_cli.queue.contract import Action, Batch, Step
from wizard_cli.render.text import align_right, connector_line, format_error_message
from wizard_cli.render.theme import (
    ACTIVE_TITLE_STYLE,
    MAIN_LEFT_INDENT,
    MESSAGE_INDENT,
    STEP_COMPLETED,
    STEP_IN_PROGRESS,
    SUBTLE_STYLE,
    SUCCESS_LABEL_STYLE,
    VERTICAL_LINE,
    error_status_style,
)
from wizard_cli.steps.timeout import Countdown, StepTimedOut, TimerTick
from wizard_cli.stores.labels import DEFAULT_LABELS, Labels


class BaseStep(ABC):
    """Base class for steps that finish once, with or without a failure.

    Subclasses implement process_event() and active_lines(); they call
    finish() when done and may override result_lines() and final_status().
    handle_event() drops events once the step is complete and runs the
    optional countdown before passing the rest to process_event().

    Args:
        title: Title shown on the step line.
        halts_queue_on_failure: Whether a failure stops the queue.
        labels: Display strings.
        preserve_error_newlines: Keep line breaks of error messages instead
            of re-wrapping them to the layout width.
        timeout: Seconds after which the step answers itself with
            `timeout_default` (see apply_timeout_default()).
        timeout_default: Value applied when the timeout runs out.
        show_timeout: Show the remaining time right of the title.
    """

    # Any key press cancels the countdown of an interactive step
    key_stops_countdown = True

    def __init__(
        self,
        title: str,
        *,
        halts_queue_on_failure: bool = True,
        labels: Labels = DEFAULT_LABELS,
        preserve_error_newlines: bool = True,
        timeout: float | None = None,
        timeout_default: object = None,
        show_timeout: bool = True,
    ) -> None:
        self._title = title
        self.halts_queue_on_failure = halts_queue_on_failure
        self.labels = labels
        self.preserve_error_newlines = preserve_error_newlines
        self._complete = False
        self._failure: BaseException | None = None
        self._completed_prefix = ""
        self._in_progress_prefix = ""
        self.countdown = Countdown(timeout) if timeout is not None else None
        self.timeout_default = timeout_default
        self.show_timeout = show_timeout
        self.timed_out = False

    def __repr__(self) -> str:
        name = type(self).__name__
        return f"{name}(title={self._title!r}, complete={self._complete})"

    @property
    def title(self) -> str:
        return self._title

    @property
    def is_complete(self) -> bool:
        return self._complete

    @property
    def has_failure(self) -> bool:
        return self._failure is not None

    @property
    def failure(self) -> BaseException | None:
        return self._failure

    def begin(self) -> Action | Batch | None:
        if self.countdown is None:
            return None
        return self.countdown.start()

    def handle_event(self, event: object) -> tuple[Step, Action | Batch | None]:
        """Apply an event; return the step to keep and a follow-up action."""
        if self.is_complete:
            return self, None
        if isinstance(event, TimerTick):
            return self, self.countdown.tick() if self.countdown else None
        if isinstance(event, StepTimedOut):
            if self.countdown is not None and self.countdown.active:
                self.countdown.stop()
                self.timed_out = True
                self.apply_timeout_default()
            return self, None
        if isinstance(event, events.Key) and self.key_stops_countdown:
            self.stop_countdown()
        return self.process_event(event)

    @abstractmethod
    def process_event(self, event: object) -> tuple[Step, Action | Batch | None]:
        """Apply an event to an incomplete step."""
        ...

    def apply_timeout_default(self) -> None:
        """Answer the step when its timeout runs out.

        Prompt steps apply `timeout_default`. By default the step fails
        with StepTimeout.
        """
        self.finish(StepTimeout(self.labels.timeout_message))

    def stop_countdown(self) -> None:
        if self.countdown is not None:
            self.countdown.stop()

    @property
    def countdown_active(self) -> bool:
        return self.countdown is not None and self.countdown.active

    @abstractmethod
    def active_lines(self, width: int) -> list[Text]:
        """Lines shown under the title while the step is active."""
        ...

    def finish(self, failure: BaseException | None = None) -> None:
        """Mark the step complete. Later calls are ignored."""
        if self._complete:
            return
        self._failure = failure
        self._complete = True
        self.stop_countdown()

    # Numbering overrides

    def set_completed_prefix(self, prefix: str) -> None:
        self._completed_prefix = prefix

    def set_in_progress_prefix(self, prefix: str) -> None:
        self._in_progress_prefix = prefix

    # Rendering

    def render_active(self, width: int) -> Text:
        header = self.active_header(width)
        return Text("\n").join([header, *self.active_lines(width)])

    def active_header(self, width: int, right: Text | None = None) -> Text:
        """Title line of the active step with the countdown right-aligned."""
        header = Text.assemble(self._active_prefix(), (self._title, ACTIVE_TITLE_STYLE))
        parts = []
        if self.show_timeout and self.countdown_active:
            parts.append(Text(f"[{self.countdown.formatted()}]", style=SUBTLE_STYLE))
        if right is not None:
            parts.append(right)
        if not parts:
            return header
        return align_right(header, Text(" ").join(parts), width)

    def render_final(self, width: int) -> Text:
        failed = self.has_failure
        title_style = error_status_style() if failed else Style()
        left = Text.assemble(self._final_prefix(), "  ", (self._title, title_style))
        lines = [align_right(left, self.final_status(), width)]

        body = self.failure_lines(width) if failed else self.result_lines(width)
        if body:
            lines.extend(body)
            lines.append(connector_line())
        return Text("\n").join(lines)

    def final_status(self) -> Text:
        """Right-hand label of the final title line."""
        if self.has_failure:
            return Text(self.labels.step_error, style=error_status_style())
        return Text(self.labels.step_done, style=SUCCESS_LABEL_STYLE)

    def result_lines(self, width: int) -> list[Text]:
        """Lines shown under the title of a successful step."""
        return []

    def failure_lines(self, width: int) -> list[Text]:
        return format_error_message(
            str(self._failure), width, preserve_newlines=self.preserve_error_newlines
        )

    def _final_prefix(self) -> Text:
        style = error_status_style() if self.has_failure else SUCCESS_LABEL_STYLE
        if self._completed_prefix:
            return Text(self._completed_prefix, style=style)
        glyph = STEP_IN_PROGRESS if self.has_failure else STEP_COMPLETED
        return Text.assemble(" " * MAIN_LEFT_INDENT, (glyph, style))

    def _active_prefix(self) -> Text:
        if self._in_progress_prefix:
            return Text(self._in_progress_prefix, style=ACTIVE_TITLE_STYLE)
        glyph = " " * MAIN_LEFT_INDENT + STEP_IN_PROGRESS + " "
        return Text(glyph, style=ACTIVE_TITLE_STYLE)


def body_line(content: Text | str, style: Style | None = None) -> Text:
    """A line inside a step's branch: "  │   <content>"."""
    return Text.assemble(
        " " * MAIN_LEFT_INDENT,
        VERTICAL_LINE,
        " " * MESSAGE_INDENT,
        content if isinstance(content, Text) else (content, style or Style()),
    )


def help_line(text: str) -> Text:
    return body_line(text, SUBTLE_STYLE)
