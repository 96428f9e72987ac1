"""Tests for queue tunables sourced from environment variables."""

import logging
import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from wizard_cli.errors import TunablesError
from wizard_cli.stores.tunables import (
    DEFAULT_MAX_COMPLETED_STEPS,
    DEFAULT_MEMORY_PRESSURE_THRESHOLD,
    ENV_MAX_COMPLETED_STEPS,
    ENV_MEMORY_LIMIT,
    ENV_MEMORY_PRESSURE_THRESHOLD,
    QueueTunables,
    get_tunables,
    parse_memory_size,
)


MIB = 1024 * 1024


class TestParseMemorySize:
    """Tests for parse_memory_size."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("1024", 1024),
            ("64MB", 64 * MIB),
            ("64MiB", 64 * MIB),
            ("512kb", 512 * 1024),
            ("2GiB", 2 * 1024**3),
            ("1GB", 1024**3),
            ("100B", 100),
            ("1_048_576", MIB),
            (" 8 MiB ", 8 * MIB),
        ],
    )
    def test_parses_plain_and_suffixed_sizes(self, text: str, expected: int) -> None:
        assert parse_memory_size(text) == expected

    @pytest.mark.parametrize("text", ["", "MB", "-5MB", "1.5GB", "lots", "12TB"])
    def test_rejects_invalid_sizes(self, text: str) -> None:
        with pytest.raises(TunablesError):
            parse_memory_size(text)

    def test_tunables_error_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_memory_size("abc")


class TestQueueTunables:
    """Tests for QueueTunables environment loading."""

    def test_defaults_without_env(self) -> None:
        tunables = QueueTunables()
        assert tunables.max_completed_steps == DEFAULT_MAX_COMPLETED_STEPS
        assert tunables.memory_pressure_threshold == DEFAULT_MEMORY_PRESSURE_THRESHOLD
        assert DEFAULT_MAX_COMPLETED_STEPS == 50
        assert DEFAULT_MEMORY_PRESSURE_THRESHOLD == 64 * MIB

    def test_reads_env_values(self) -> None:
        env_vars = {
            ENV_MAX_COMPLETED_STEPS: "10",
            ENV_MEMORY_PRESSURE_THRESHOLD: "32MiB",
        }
        with patch.dict(os.environ, env_vars, clear=False):
            tunables = QueueTunables()
        assert tunables.max_completed_steps == 10
        assert tunables.memory_pressure_threshold == 32 * MIB

    def test_memory_limit_gives_eighty_percent_threshold(self) -> None:
        with patch.dict(os.environ, {ENV_MEMORY_LIMIT: "100MiB"}, clear=False):
            tunables = QueueTunables()
        assert tunables.memory_pressure_threshold == int(100 * MIB * 0.8)

    def test_explicit_threshold_wins_over_memory_limit(self) -> None:
        env_vars = {
            ENV_MEMORY_LIMIT: "100MiB",
            ENV_MEMORY_PRESSURE_THRESHOLD: "10MiB",
        }
        with patch.dict(os.environ, env_vars, clear=False):
            tunables = QueueTunables()
        assert tunables.memory_pressure_threshold == 10 * MIB

    def test_constructor_values_win_over_env(self) -> None:
        with patch.dict(os.environ, {ENV_MAX_COMPLETED_STEPS: "10"}, clear=False):
            tunables = QueueTunables(max_completed_steps=3)
        assert tunables.max_completed_steps == 3

    @pytest.mark.parametrize("value", ["0", "-3", "many"])
    def test_invalid_max_steps_is_ignored_with_warning(
        self, value: str, caplog: pytest.LogCaptureFixture
    ) -> None:
        with patch.dict(os.environ, {ENV_MAX_COMPLETED_STEPS: value}, clear=False):
            with caplog.at_level(logging.WARNING):
                tunables = QueueTunables()
        assert tunables.max_completed_steps == DEFAULT_MAX_COMPLETED_STEPS
        assert ENV_MAX_COMPLETED_STEPS in caplog.text

    def test_invalid_threshold_is_ignored_with_warning(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        env_vars = {ENV_MEMORY_PRESSURE_THRESHOLD: "huge"}
        with patch.dict(os.environ, env_vars, clear=False):
            with caplog.at_level(logging.WARNING):
                tunables = QueueTunables()
        assert tunables.memory_pressure_threshold == DEFAULT_MEMORY_PRESSURE_THRESHOLD
        assert ENV_MEMORY_PRESSURE_THRESHOLD in caplog.text

    def test_explicit_non_positive_value_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            QueueTunables(max_completed_steps=0)


class TestGetTunables:
    def test_resolved_once(self) -> None:
        first = get_tunables()
        with patch.dict(os.environ, {ENV_MAX_COMPLETED_STEPS: "7"}, clear=False):
            second = get_tunables()
        assert second is first
        assert second.max_completed_steps == DEFAULT_MAX_COMPLETED_STEPS
