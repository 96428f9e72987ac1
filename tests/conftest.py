import logging
from collections.abc import Callable

import pytest
from rich.text import Text

from wizard_cli.queue.orchestrator import StepQueue
from wizard_cli.render.text import summary_line
from wizard_cli.render.theme import reset_error_colors
from wizard_cli.steps.base import BaseStep
from wizard_cli.stores.tunables import (
    ENV_MAX_COMPLETED_STEPS,
    ENV_MEMORY_LIMIT,
    ENV_MEMORY_PRESSURE_THRESHOLD,
    QueueTunables,
    get_tunables,
)


class FakeStep:
    """Minimal Step implementation without the numbering capabilities.

    Events: "ok" completes the step, "fail" completes it with a failure,
    anything else is recorded and ignored.
    """

    def __init__(self, title: str, *, halts: bool = True, action=None) -> None:
        self.title = title
        self.halts_queue_on_failure = halts
        self.is_complete = False
        self.failure: BaseException | None = None
        self.action = action
        self.begin_calls = 0
        self.events: list[object] = []

    @property
    def has_failure(self) -> bool:
        return self.failure is not None

    def begin(self):
        self.begin_calls += 1
        return self.action

    def handle_event(self, event):
        self.events.append(event)
        if event == "ok":
            self.is_complete = True
        elif event == "fail":
            self.is_complete = True
            self.failure = RuntimeError(f"{self.title} failed")
        return self, None

    def render_active(self, width: int) -> str:
        return f"  ○ {self.title}"

    def render_final(self, width: int) -> str:
        glyph = "○" if self.has_failure else "●"
        return f"  {glyph}  {self.title}"


class ManualStep(BaseStep):
    """BaseStep driven by "ok" / "fail" events, for rendering tests."""

    def __init__(self, title: str, *, lines: list[str] | None = None, **kwargs):
        super().__init__(title, **kwargs)
        self.lines = lines or []

    def process_event(self, event):
        if event == "ok":
            self.finish()
        elif event == "fail":
            self.finish(RuntimeError(f"{self.title} failed"))
        return self, None

    def active_lines(self, width: int) -> list[Text]:
        return []

    def result_lines(self, width: int) -> list[Text]:
        return [summary_line(line) for line in self.lines]


@pytest.fixture(autouse=True)
def enable_logging():
    """wizard_cli.simple_main disables logging on import unless DEBUG is set."""
    logging.disable(logging.NOTSET)


@pytest.fixture(autouse=True)
def reset_error_palette():
    """Error styles are process-wide; restore the default after each test."""
    reset_error_colors()
    yield
    reset_error_colors()


@pytest.fixture(autouse=True)
def clean_tunables_env(monkeypatch):
    for name in (
        ENV_MAX_COMPLETED_STEPS,
        ENV_MEMORY_PRESSURE_THRESHOLD,
        ENV_MEMORY_LIMIT,
    ):
        monkeypatch.delenv(name, raising=False)
    get_tunables.cache_clear()
    yield
    get_tunables.cache_clear()


@pytest.fixture
def make_queue() -> Callable[..., StepQueue]:
    """Build a StepQueue with injected tunables and a fixed memory reading."""

    def factory(
        *steps,
        max_completed_steps: int = 50,
        memory: int = 0,
        threshold: int = 64 * 1024 * 1024,
        title: str = "Test run",
    ) -> StepQueue:
        tunables = QueueTunables(
            max_completed_steps=max_completed_steps,
            memory_pressure_threshold=threshold,
        )
        queue = StepQueue(title, tunables=tunables, read_memory=lambda: memory)
        queue.add_steps(*steps)
        return queue

    return factory


@pytest.fixture
def fake_steps() -> Callable[..., list[FakeStep]]:
    def factory(count: int, **kwargs) -> list[FakeStep]:
        return [FakeStep(f"Step {i + 1}", **kwargs) for i in range(count)]

    return factory


@pytest.fixture
def manual_steps() -> Callable[..., list[ManualStep]]:
    def factory(count: int, **kwargs) -> list[ManualStep]:
        return [ManualStep(f"Step {i + 1}", **kwargs) for i in range(count)]

    return factory
