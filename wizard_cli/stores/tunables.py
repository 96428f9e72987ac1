"""Process-wide queue tunables sourced from environment variables."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, field_validator, model_validator

from wizard_cli.errors import TunablesError


logger = logging.getLogger(__name__)

# Maximum number of completed steps kept in memory
DEFAULT_MAX_COMPLETED_STEPS = 50

# Memory usage above this many bytes triggers an emergency cleanup
DEFAULT_MEMORY_PRESSURE_THRESHOLD = 64 * 1024 * 1024

# Share of the soft memory limit used as threshold when none is set explicitly
SOFT_LIMIT_RATIO = 0.8

# Environment variable names
ENV_MAX_COMPLETED_STEPS = "WIZARD_MAX_COMPLETED_STEPS"
ENV_MEMORY_PRESSURE_THRESHOLD = "WIZARD_MEMORY_PRESSURE_THRESHOLD"
ENV_MEMORY_LIMIT = "WIZARD_MEMORY_LIMIT"

# Longest suffixes first so "MIB" is not read as "B"
_SIZE_SUFFIXES: tuple[tuple[str, int], ...] = (
    ("GIB", 1024**3),
    ("MIB", 1024**2),
    ("KIB", 1024),
    ("GB", 1024**3),
    ("MB", 1024**2),
    ("KB", 1024),
    ("B", 1),
)


def parse_memory_size(value: str) -> int:
    """Parse a memory size such as "64MB", "65536KiB", "1_048_576" or "2GiB".

    KB/MB/GB are treated as binary multiples, the same as KiB/MiB/GiB.

    Args:
        value: The text to parse.

    Returns:
        Number of bytes.

    Raises:
        TunablesError: If the text is empty or not a non-negative integer
            with an optional suffix.
    """
    text = value.strip().replace("_", "")
    upper = text.upper()
    multiplier = 1
    number = text
    for suffix, factor in _SIZE_SUFFIXES:
        if upper.endswith(suffix):
            multiplier = factor
            number = text[: -len(suffix)]
            break

    number = number.strip()
    if not number.isdecimal():
        raise TunablesError(f"Invalid memory size: {value!r}")
    return int(number) * multiplier


class QueueTunables(BaseModel):
    """Memory-related limits for the step queue.

    Resolved once at startup (see get_tunables) and passed into StepQueue.
    Explicit values take precedence over environment variables; invalid
    environment values are ignored and the default is kept.
    """

    max_completed_steps: int = DEFAULT_MAX_COMPLETED_STEPS
    memory_pressure_threshold: int = DEFAULT_MEMORY_PRESSURE_THRESHOLD

    @model_validator(mode="before")
    @classmethod
    def load_from_env(cls, data: Any) -> dict[str, Any]:
        """Load values from environment variables if not explicitly provided."""
        result: dict[str, Any] = {}

        max_steps = os.environ.get(ENV_MAX_COMPLETED_STEPS, "").strip()
        if max_steps:
            try:
                parsed = int(max_steps)
            except ValueError:
                parsed = 0
            if parsed > 0:
                result["max_completed_steps"] = parsed
            else:
                logger.warning(
                    "Ignoring %s=%r: expected a positive integer",
                    ENV_MAX_COMPLETED_STEPS,
                    max_steps,
                )

        threshold = os.environ.get(ENV_MEMORY_PRESSURE_THRESHOLD, "").strip()
        limit = os.environ.get(ENV_MEMORY_LIMIT, "").strip()
        if threshold:
            size = _env_size(ENV_MEMORY_PRESSURE_THRESHOLD, threshold)
            if size:
                result["memory_pressure_threshold"] = size
        elif limit:
            size = _env_size(ENV_MEMORY_LIMIT, limit)
            if size:
                result["memory_pressure_threshold"] = int(size * SOFT_LIMIT_RATIO)

        if isinstance(data, dict):
            result.update(data)

        return result

    @field_validator("max_completed_steps", "memory_pressure_threshold")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate that limits are positive."""
        if v <= 0:
            raise ValueError(f"Value must be positive, got {v}")
        return v


def _env_size(name: str, raw: str) -> int | None:
    try:
        size = parse_memory_size(raw)
    except TunablesError:
        logger.warning("Ignoring %s=%r: not a memory size", name, raw)
        return None
    return size or None


@lru_cache(maxsize=1)
def get_tunables() -> QueueTunables:
    """Return the process-wide tunables, reading the environment once."""
    tunables = QueueTunables()
    logger.debug(
        "Queue tunables: max_completed_steps=%s memory_pressure_threshold=%s",
        tunables.max_completed_steps,
        tunables.memory_pressure_threshold,
    )
    return tunables
