from wizard_cli.queue.contract import (
    Action,
    Batch,
    Step,
    SupportsCompletedPrefix,
    SupportsInProgressPrefix,
    batch,
)
from wizard_cli.queue.events import (
    ActionFailed,
    Command,
    Interrupt,
    ScheduledAction,
    WindowResized,
)


__all__ = [
    "Action",
    "ActionFailed",
    "Batch",
    "Command",
    "Interrupt",
    "ScheduledAction",
    "Step",
    "SupportsCompletedPrefix",
    "SupportsInProgressPrefix",
    "WindowResized",
    "batch",
]
