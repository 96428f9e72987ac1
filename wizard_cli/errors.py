"""Exceptions raised by the wizard queue engine.

Step failures are never raised through the queue: they are carried in queue
state and shown in the rendered summary. The exceptions below cover the
engine's own failure modes only.
"""


class WizardError(Exception):
    """Base class for wizard_cli errors."""

    pass


class QueueRunError(WizardError):
    """Raised by StepQueue.run() when the underlying event loop fails."""

    pass


class TunablesError(WizardError, ValueError):
    """Raised when a tunable value (e.g. a memory size) cannot be parsed."""

    pass


class StepContractError(WizardError, TypeError):
    """Raised when a step breaks the capability contract.

    The queue detects two breaches: enqueueing an object that is not a step,
    and handle_event() returning something that is not a step.
    """

    pass


class StepDeclined(WizardError):
    """Failure recorded by a confirmation step answered with "No"."""

    pass


class StepTimeout(WizardError):
    """Failure recorded by a step whose timeout ran out without a default."""

    pass
