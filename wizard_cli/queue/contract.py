"""Capability contract between the step queue and the steps it runs.

The queue only ever talks to steps through the Step protocol. Numbering is
the one optional extension: steps that implement SupportsCompletedPrefix or
SupportsInProgressPrefix get their glyph replaced by a step number, others
are left alone.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Protocol, Union, runtime_checkable

from rich.text import Text


# A zero-argument callable run by the queue application as a worker.
# Coroutine functions run as async workers, anything else in a thread.
# A non-None return value is delivered back to the step as an event.
Action = Callable[[], Any]

Renderable = Union[str, Text]


@dataclass(frozen=True)
class Batch:
    """Several actions scheduled together."""

    actions: tuple[Action, ...]


def batch(*actions: Action | Batch | None) -> Batch | None:
    """Combine actions, dropping the None ones and flattening nested batches."""
    flat = tuple(flatten_actions(actions))
    if not flat:
        return None
    return Batch(flat)


def flatten_actions(actions: Iterable[Action | Batch | None]) -> Iterable[Action]:
    for action in actions:
        if action is None:
            continue
        if isinstance(action, Batch):
            yield from flatten_actions(action.actions)
        else:
            yield action


@runtime_checkable
class Step(Protocol):
    """One unit of interactive or background work in a queue.

    begin() is called exactly once, when the step becomes active.
    handle_event() is the only way a step changes; it returns the step that
    replaces it in the queue (usually itself) and an optional follow-up
    action. render_final() is only called once is_complete is true.
    """

    halts_queue_on_failure: bool

    @property
    def title(self) -> str: ...

    @property
    def is_complete(self) -> bool: ...

    @property
    def has_failure(self) -> bool: ...

    @property
    def failure(self) -> BaseException | None: ...

    def begin(self) -> Action | Batch | None: ...

    def handle_event(self, event: object) -> tuple[Step, Action | Batch | None]: ...

    def render_active(self, width: int) -> Renderable: ...

    def render_final(self, width: int) -> Renderable: ...


@runtime_checkable
class SupportsCompletedPrefix(Protocol):
    def set_completed_prefix(self, prefix: str) -> None:
        """Replace the completion glyph; an empty prefix restores it."""
        ...


@runtime_checkable
class SupportsInProgressPrefix(Protocol):
    def set_in_progress_prefix(self, prefix: str) -> None:
        """Replace the in-progress glyph; an empty prefix restores it."""
        ...
