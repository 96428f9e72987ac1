from wizard_cli.steps.action import ActionStep
from wizard_cli.steps.base import BaseStep
from wizard_cli.steps.choice import ChoiceStep
from wizard_cli.steps.confirm import ConfirmStep
from wizard_cli.steps.multi_select import MultiSelectStep
from wizard_cli.steps.text_input import TextInputStep


__all__ = [
    "ActionStep",
    "BaseStep",
    "ChoiceStep",
    "ConfirmStep",
    "MultiSelectStep",
    "TextInputStep",
]
