"""Text helpers for building frame lines with rich."""

from __future__ import annotations

import re

from rich.style import Style
from rich.text import Text

from wizard_cli.render.theme import (
    HORIZONTAL_LINE,
    MAIN_LEFT_INDENT,
    MESSAGE_INDENT,
    SUBTLE_STYLE,
    VERTICAL_LINE,
    error_message_style,
)


RIGHT_MARGIN = 2

_ESCAPED_SEQUENCES = re.compile(r"\\[nrtbfav\\'\"?]")
_ANSI_SEQUENCES = re.compile(r"\x1b\[[0-9;]*[a-zA-Z]")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def to_text(value: str | Text) -> Text:
    """Normalize a step rendering to a Text instance (copied, never shared)."""
    if isinstance(value, Text):
        return value.copy()
    return Text(value)


def split_lines(text: Text) -> list[Text]:
    """Split text on newlines, keeping blank lines and styles."""
    return list(text.split("\n", allow_blank=True))


def draw_rule(width: int, style: Style | None = None) -> Text:
    return Text(HORIZONTAL_LINE * max(width, 0), style=style or "")


def is_rule(line: Text) -> bool:
    """True when the line consists only of horizontal rule glyphs."""
    plain = line.plain
    return bool(plain) and plain.strip(HORIZONTAL_LINE) == ""


def align_right(left: Text | str, right: Text | str, width: int) -> Text:
    """Place right at the end of a line of the given width, after left.

    A two-column margin is kept after right when there is room for it.
    """
    left_text = to_text(left)
    right_text = to_text(right)
    available = width - left_text.cell_len - right_text.cell_len
    if available < 0:
        return Text.assemble(left_text, " ", right_text)
    if available <= RIGHT_MARGIN:
        return Text.assemble(left_text, " " * available, right_text)
    return Text.assemble(
        left_text, " " * (available - RIGHT_MARGIN), right_text, " " * RIGHT_MARGIN
    )


def connector_line() -> Text:
    """The vertical connector that continues a step's branch: "  │"."""
    return Text(" " * MAIN_LEFT_INDENT + VERTICAL_LINE)


def summary_line(value: str) -> Text:
    """An extra result line shown under a completed step's title."""
    return Text.assemble(
        " " * MAIN_LEFT_INDENT,
        VERTICAL_LINE,
        " " * MESSAGE_INDENT,
        (value, SUBTLE_STYLE),
    )


def capitalize_first(value: str) -> str:
    if not value:
        return value
    return value[0].upper() + value[1:]


def clean_message(message: str) -> str:
    """Strip escape sequences and control characters, collapse whitespace."""
    message = _ESCAPED_SEQUENCES.sub("", message)
    message = _ANSI_SEQUENCES.sub("", message)
    message = _CONTROL_CHARS.sub(" ", message)
    return " ".join(message.split())


def wrap_text(text: str, max_width: int) -> list[str]:
    """Wrap text on spaces, breaking long words at max_width characters."""
    if not text:
        return []
    if len(text) <= max_width:
        return [text]

    lines: list[str] = []
    start = 0
    length = len(text)
    while start < length:
        end = start + max_width
        if end >= length:
            lines.append(text[start:])
            break
        cut = text.rfind(" ", start + 1, end)
        if cut == -1:
            cut = end
        lines.append(text[start:cut])
        start = cut
        while start < length and text[start] == " ":
            start += 1
    return lines


def format_error_message(
    message: str, layout_width: int, preserve_newlines: bool = True
) -> list[Text]:
    """Format an error message as indented lines under a step.

    Each line reads "  │   <message>" in the current error message style.
    With preserve_newlines the message keeps its own line breaks; otherwise
    it is cleaned, capitalized and wrapped to the layout width.
    """
    if not message:
        return []

    prefix_len = MAIN_LEFT_INDENT + 1 + MESSAGE_INDENT
    wrap_width = max(layout_width - RIGHT_MARGIN - prefix_len, 3)

    if preserve_newlines:
        lines = message.split("\n")
    else:
        cleaned = clean_message(message)
        if not cleaned:
            return []
        lines = wrap_text(capitalize_first(cleaned), wrap_width)

    style = error_message_style()
    return [
        Text.assemble(
            " " * MAIN_LEFT_INDENT, VERTICAL_LINE, " " * MESSAGE_INDENT, (line, style)
        )
        for line in lines
    ]
