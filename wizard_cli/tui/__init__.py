from wizard_cli.tui.messages import ActionCompleted
from wizard_cli.tui.queue_app import QueueApp


__all__ = ["ActionCompleted", "QueueApp"]
