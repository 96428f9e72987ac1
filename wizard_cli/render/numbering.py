"""Numbered prefixes for completed and in-progress steps."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from wizard_cli.render.theme import MAIN_LEFT_INDENT


logger = logging.getLogger(__name__)

DEFAULT_NUMBER_FORMAT = "[%02d]"


def normalize_number_format(number_format: str | None) -> str:
    """Return a usable %-style template for step numbers.

    An empty template means the default; a template without "%" gets "%d"
    appended; a template that cannot format an integer falls back to the
    default.
    """
    if number_format is None or not number_format.strip():
        return DEFAULT_NUMBER_FORMAT
    if "%" not in number_format:
        number_format = number_format + "%d"
    try:
        number_format % 1
    except (TypeError, ValueError):
        logger.warning(
            "Invalid step number format %r, using %r",
            number_format,
            DEFAULT_NUMBER_FORMAT,
        )
        return DEFAULT_NUMBER_FORMAT
    return number_format


def format_step_number(number: int, number_format: str = DEFAULT_NUMBER_FORMAT) -> str:
    """Apply the template to a 1-based step number (numbers below 1 become 1)."""
    return normalize_number_format(number_format) % max(number, 1)


@dataclass(frozen=True)
class Numbering:
    """Numbering mode of a queue.

    enabled: show numbers instead of the step glyph.
    keep_first_symbol: the first step keeps its glyph when it succeeded and
        later numbers shift down by one.
    number_format: %-style template for the number.
    """

    enabled: bool = False
    keep_first_symbol: bool = False
    number_format: str = DEFAULT_NUMBER_FORMAT

    def number_for(self, index: int, failed: bool) -> int | None:
        """Number shown for the step at a 0-based position, None for the glyph."""
        if not self.enabled:
            return None
        if self.keep_first_symbol and index == 0 and not failed:
            return None
        number = index + 1
        if self.keep_first_symbol and not failed:
            number = max(index, 1)
        return number

    def completed_prefix(self, index: int, failed: bool) -> str:
        """Prefix for a completed step; "" keeps the step's own glyph."""
        number = self.number_for(index, failed)
        if number is None:
            return ""
        indent = " " * max(MAIN_LEFT_INDENT - 1, 0)
        return indent + format_step_number(number, self.number_format)

    def in_progress_prefix(self, index: int, failed: bool) -> str:
        """Prefix for the active step; "" keeps the step's own glyph."""
        number = self.number_for(index, failed)
        if number is None:
            return ""
        indent = " " * max(MAIN_LEFT_INDENT - 1, 0)
        return indent + format_step_number(number, self.number_format) + " "
