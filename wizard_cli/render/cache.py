"""Small caches used while rendering frames.

RenderCache holds two things:
- an interning table for short strings that are rebuilt on every frame
  (prefixes, indents, numbered labels), bounded to INTERN_CAPACITY entries;
- a pool of pre-built rule Text objects keyed by (width, style).

Both are cleared by the memory guardian under memory pressure.
"""

from __future__ import annotations

import logging

from rich.style import Style
from rich.text import Text

from wizard_cli.render.theme import (
    BRANCH,
    HORIZONTAL_LINE,
    STEP_COMPLETED,
    STEP_IN_PROGRESS,
    VERTICAL_LINE,
)


logger = logging.getLogger(__name__)

INTERN_CAPACITY = 128
RULE_POOL_CAPACITY = 32

# Kept across clear_interned()
CRITICAL_STRINGS = (
    STEP_COMPLETED,
    STEP_IN_PROGRESS,
    VERTICAL_LINE,
    HORIZONTAL_LINE,
    BRANCH,
    " ",
    "  ",
    "   ",
    "    ",
)


class RenderCache:
    def __init__(self) -> None:
        self._interned: dict[str, str] = {s: s for s in CRITICAL_STRINGS}
        self._rules: dict[tuple[int, Style | None], Text] = {}

    def intern(self, value: str) -> str:
        cached = self._interned.get(value)
        if cached is not None:
            return cached
        if len(self._interned) >= INTERN_CAPACITY:
            self._drop_oldest_half()
        self._interned[value] = value
        return value

    def rule(self, width: int, style: Style | None = None) -> Text:
        """Return a horizontal rule of the given width.

        The pooled instance is copied so callers may mutate the result.
        """
        key = (max(width, 0), style)
        rule = self._rules.get(key)
        if rule is None:
            if len(self._rules) >= RULE_POOL_CAPACITY:
                self._rules.clear()
            rule = Text(HORIZONTAL_LINE * key[0], style=style or "")
            self._rules[key] = rule
        return rule.copy()

    def clear_interned(self) -> None:
        """Drop every interned string except the critical glyphs."""
        dropped = len(self._interned) - len(CRITICAL_STRINGS)
        self._interned = {s: s for s in CRITICAL_STRINGS}
        logger.debug("Cleared intern cache (%s entries dropped)", max(dropped, 0))

    def release_rules(self) -> None:
        """Release every pooled rule."""
        logger.debug("Released %s pooled rules", len(self._rules))
        self._rules.clear()

    @property
    def interned_count(self) -> int:
        return len(self._interned)

    @property
    def pooled_rules(self) -> int:
        return len(self._rules)

    def _drop_oldest_half(self) -> None:
        # dicts keep insertion order, so the first keys are the oldest
        target = len(self._interned) // 2
        for key in list(self._interned)[:target]:
            if key not in CRITICAL_STRINGS:
                del self._interned[key]
