"""Glyphs, colors and styles shared by the queue renderer and the steps.

Error styles are process-wide and can be switched between palettes with
set_error_color(); every other style is fixed.
"""

from enum import Enum

from rich.style import Style


# Layout
DEFAULT_WIDTH = 80
MIN_RATIO = 4 / 7
MAIN_LEFT_INDENT = 2
MESSAGE_INDENT = 3

# Glyphs
HORIZONTAL_LINE = "─"
VERTICAL_LINE = "│"
BRANCH = "├"
ARROW = ">"
STEP_COMPLETED = "●"
STEP_IN_PROGRESS = "○"
CHECKED = "■"

# Palette
COLOR_BRIGHT_GREEN = "#00ff00"
COLOR_BRIGHT_RED = "#ff2104"
COLOR_DARK_RED = "#b10c01"
COLOR_BRIGHT_YELLOW = "#ffff00"
COLOR_DARK_YELLOW = "#d2be88"
COLOR_BRIGHT_ORANGE = "#ffa500"
COLOR_DARK_ORANGE = "#d2691e"
COLOR_BRIGHT_WHITE = "#ffffff"
COLOR_BRIGHT_GRAY = "#777777"
COLOR_DARK_GRAY = "#333333"
COLOR_VERY_DARK_GRAY = "#444444"
COLOR_VERY_DARK_YELLOW = "#666633"
COLOR_LIGHT_BLUE = "#5da9e9"

# Styles
TITLE_STYLE = Style(bold=True)
SUBTLE_STYLE = Style(color=COLOR_BRIGHT_GRAY)
VERY_SUBTLE_STYLE = Style(color=COLOR_VERY_DARK_GRAY)
VERY_SUBTLE_ERROR_STYLE = Style(color=COLOR_VERY_DARK_YELLOW)
INPUT_STYLE = Style(color=COLOR_LIGHT_BLUE, bold=True)
SPINNER_STYLE = Style(color=COLOR_LIGHT_BLUE, bold=True)
ACTIVE_TITLE_STYLE = Style(color=COLOR_BRIGHT_GREEN, bold=True)
SELECTION_STYLE = Style(color=COLOR_BRIGHT_GREEN)
SUCCESS_LABEL_STYLE = Style(color=COLOR_BRIGHT_GREEN, bold=True)
FINISHED_LABEL_STYLE = Style(color=COLOR_BRIGHT_WHITE, bold=True)
APP_NAME_STYLE = Style(color=COLOR_DARK_GRAY, bgcolor=COLOR_BRIGHT_WHITE)


class ErrorColor(Enum):
    """Palettes available for error messages and the problem status."""

    YELLOW = "yellow"
    RED = "red"
    ORANGE = "orange"


# (message color, status color) per palette
_ERROR_PALETTES: dict[ErrorColor, tuple[str, str]] = {
    ErrorColor.YELLOW: (COLOR_DARK_YELLOW, COLOR_BRIGHT_YELLOW),
    ErrorColor.RED: (COLOR_DARK_RED, COLOR_BRIGHT_RED),
    ErrorColor.ORANGE: (COLOR_DARK_ORANGE, COLOR_BRIGHT_ORANGE),
}

_error_message_style = Style(color=COLOR_DARK_YELLOW)
_error_status_style = Style(color=COLOR_BRIGHT_YELLOW, bold=True)


def set_error_color(color: ErrorColor) -> None:
    """Switch the error message and error status styles to a palette."""
    global _error_message_style, _error_status_style
    message_color, status_color = _ERROR_PALETTES[color]
    _error_message_style = Style(color=message_color)
    _error_status_style = Style(color=status_color, bold=True)


def reset_error_colors() -> None:
    set_error_color(ErrorColor.YELLOW)


def error_message_style() -> Style:
    return _error_message_style


def error_status_style() -> Style:
    return _error_status_style


def layout_width(screen_width: int) -> int:
    """Width used for rendering: the default width or 4/7 of the screen."""
    return int(max(DEFAULT_WIDTH, MIN_RATIO * screen_width))
