"""wizard-cli: run terminal wizards as a queue of steps."""

__version__ = "0.3.0"

from wizard_cli.errors import (  # noqa: E402
    QueueRunError,
    StepContractError,
    StepDeclined,
    StepTimeout,
    TunablesError,
    WizardError,
)
from wizard_cli.queue.contract import Step, batch  # noqa: E402
from wizard_cli.queue.orchestrator import QueueState, StepQueue  # noqa: E402
from wizard_cli.render.theme import ErrorColor  # noqa: E402
from wizard_cli.steps import (  # noqa: E402
    ActionStep,
    BaseStep,
    ChoiceStep,
    ConfirmStep,
    MultiSelectStep,
    TextInputStep,
)
from wizard_cli.stores import Labels, QueueTunables, get_tunables  # noqa: E402


__all__ = [
    "ActionStep",
    "BaseStep",
    "ChoiceStep",
    "ConfirmStep",
    "ErrorColor",
    "Labels",
    "MultiSelectStep",
    "QueueRunError",
    "QueueState",
    "QueueTunables",
    "Step",
    "StepContractError",
    "StepDeclined",
    "StepQueue",
    "StepTimeout",
    "TextInputStep",
    "TunablesError",
    "WizardError",
    "__version__",
    "batch",
    "get_tunables",
]
