"""Messages used by the queue application.

Step actions run in workers. When a worker finishes, the app posts an
ActionCompleted message to itself so the result reaches the queue through
the regular message loop, one event at a time.
"""

from textual.message import Message


class ActionCompleted(Message):
    """A step action returned a value (or raised, see ActionFailed).

    activation identifies the step activation that scheduled the action;
    the queue ignores results from steps that are no longer active.
    """

    def __init__(self, result: object, activation: int) -> None:
        super().__init__()
        self.result = result
        self.activation = activation
