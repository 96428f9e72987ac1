from wizard_cli.stores.labels import DEFAULT_LABELS, Labels
from wizard_cli.stores.tunables import (
    DEFAULT_MAX_COMPLETED_STEPS,
    DEFAULT_MEMORY_PRESSURE_THRESHOLD,
    QueueTunables,
    get_tunables,
    parse_memory_size,
)


__all__ = [
    "DEFAULT_LABELS",
    "DEFAULT_MAX_COMPLETED_STEPS",
    "DEFAULT_MEMORY_PRESSURE_THRESHOLD",
    "Labels",
    "QueueTunables",
    "get_tunables",
    "parse_memory_size",
]
