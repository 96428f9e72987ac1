from wizard_cli.render.cache import RenderCache
from wizard_cli.render.numbering import DEFAULT_NUMBER_FORMAT, Numbering
from wizard_cli.render.pipeline import QueueDisplay, QueueRenderer, RenderState
from wizard_cli.render.theme import ErrorColor


__all__ = [
    "DEFAULT_NUMBER_FORMAT",
    "ErrorColor",
    "Numbering",
    "QueueDisplay",
    "QueueRenderer",
    "RenderCache",
    "RenderState",
]
