"""Engine-level events and the commands the orchestrator hands back."""

from __future__ import annotations

from dataclasses import dataclass, field

from wizard_cli.queue.contract import Action


@dataclass(frozen=True)
class Interrupt:
    """Global cancellation (ctrl+c). Always halts the queue."""


@dataclass(frozen=True)
class WindowResized:
    width: int


@dataclass(frozen=True)
class ActionFailed:
    """Delivered to a step when one of its actions raised."""

    error: BaseException


@dataclass(frozen=True)
class ScheduledAction:
    """An action together with the step activation that scheduled it.

    Results are delivered back with the same activation number; the queue
    drops results whose step is no longer active.
    """

    action: Action
    activation: int


@dataclass(frozen=True)
class Command:
    """What the host loop must do after an orchestrator call."""

    actions: list[ScheduledAction] = field(default_factory=list)
    terminate: bool = False

    @classmethod
    def quit(cls) -> Command:
        return cls(terminate=True)
