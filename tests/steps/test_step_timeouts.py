"""Tests for step countdowns and timeout defaults."""

import pytest
from textual import events

from wizard_cli.errors import StepDeclined, StepTimeout
from wizard_cli.queue.contract import Batch
from wizard_cli.steps import (
    ActionStep,
    ChoiceStep,
    ConfirmStep,
    MultiSelectStep,
    TextInputStep,
)
from wizard_cli.steps.timeout import (
    Countdown,
    StepTimedOut,
    TimerTick,
    format_remaining,
)


def expire(step) -> None:
    step.begin()
    step.handle_event(StepTimedOut())


class TestCountdown:
    @pytest.mark.parametrize(
        "seconds, expected",
        [(0, "00:00"), (9, "00:09"), (75, "01:15"), (3600, "60:00"), (-3, "00:00")],
    )
    def test_format_remaining(self, seconds, expected) -> None:
        assert format_remaining(seconds) == expected

    def test_rejects_non_positive_durations(self) -> None:
        with pytest.raises(ValueError):
            Countdown(0)

    def test_ticks_count_down_to_zero(self) -> None:
        countdown = Countdown(2.5)
        assert isinstance(countdown.start(), Batch)
        assert countdown.remaining == 3
        assert countdown.tick() is not None
        assert countdown.tick() is not None
        assert countdown.tick() is None
        assert countdown.formatted() == "00:00"

    def test_stopped_countdown_ignores_ticks(self) -> None:
        countdown = Countdown(5)
        countdown.start()
        countdown.stop()
        assert countdown.tick() is None
        assert countdown.remaining == 5

    @pytest.mark.asyncio
    async def test_actions_deliver_timer_events(self) -> None:
        countdown = Countdown(0.01, tick_interval=0)
        assert await countdown._tick() == TimerTick()
        assert await countdown._expire() == StepTimedOut()


class TestPromptTimeouts:
    def test_begin_schedules_tick_and_deadline(self) -> None:
        step = ConfirmStep("Continue?", timeout=10)
        action = step.begin()
        assert isinstance(action, Batch)
        assert len(action.actions) == 2
        assert ConfirmStep("Continue?").begin() is None

    def test_remaining_time_is_shown_right_of_the_title(self) -> None:
        step = ChoiceStep("Region", ["eu", "us"], timeout=75)
        step.begin()
        title = step.render_active(40).plain.split("\n")[0]
        assert title.startswith("  ○ Region")
        assert title.endswith("[01:15]  ")
        _, follow_up = step.handle_event(TimerTick())
        assert follow_up is not None
        assert "[01:14]" in step.render_active(40).plain

    def test_hidden_countdown_still_expires(self) -> None:
        step = ChoiceStep("Region", ["eu", "us"], timeout=5, show_timeout=False)
        step.begin()
        assert "[00:05]" not in step.render_active(80).plain
        step.handle_event(StepTimedOut())
        assert step.timed_out and step.value == "eu"

    def test_key_press_cancels_the_countdown(self) -> None:
        step = ChoiceStep("Region", ["eu", "us"], timeout=5, timeout_default="us")
        step.begin()
        step.handle_event(events.Key("down", None))
        assert not step.countdown_active
        step.handle_event(StepTimedOut())
        assert not step.is_complete
        assert "[00:05]" not in step.render_active(80).plain

    def test_confirm_applies_default_answer(self) -> None:
        step = ConfirmStep("Continue?", timeout=5, timeout_default=False)
        expire(step)
        assert step.answer is False
        assert isinstance(step.failure, StepDeclined)
        assert step.timed_out

    @pytest.mark.parametrize("default, answer", [("yes", True), ("Нет", False)])
    def test_confirm_accepts_label_defaults(self, default, answer) -> None:
        step = ConfirmStep("Continue?", timeout=5, timeout_default=default)
        expire(step)
        assert step.answer is answer

    def test_confirm_without_default_takes_highlighted_option(self) -> None:
        step = ConfirmStep("Continue?", default=True, timeout=5)
        expire(step)
        assert step.answer is True and not step.has_failure

    @pytest.mark.parametrize("default, value", [(2, "ap"), ("us", "us"), (None, "eu")])
    def test_choice_defaults(self, default, value) -> None:
        step = ChoiceStep(
            "Region", ["eu", "us", "ap"], timeout=5, timeout_default=default
        )
        expire(step)
        assert step.value == value

    def test_text_input_default(self) -> None:
        step = TextInputStep("Name", default="admin", timeout=5, timeout_default="ops")
        expire(step)
        assert step.value == "ops"
        fallback = TextInputStep("Name", default="admin", timeout=5)
        expire(fallback)
        assert fallback.value == "admin"

    def test_multi_select_applies_default_options(self) -> None:
        step = MultiSelectStep(
            "Components", ["docs", "tests", "ci"], timeout=5, timeout_default=[0, "ci"]
        )
        expire(step)
        assert step.value == ["docs", "ci"]

    def test_multi_select_without_enough_defaults_stays_active(self) -> None:
        step = MultiSelectStep("Components", ["docs", "tests"], timeout=5)
        expire(step)
        assert not step.is_complete
        assert step.warning

    def test_late_timeout_after_answer_is_ignored(self) -> None:
        step = ConfirmStep("Continue?", timeout=5, timeout_default=False)
        step.begin()
        step.handle_event(events.Key("y", "y"))
        step.handle_event(StepTimedOut())
        assert step.answer is True and not step.timed_out


class TestActionTimeout:
    def test_deadline_fails_the_step(self) -> None:
        step = ActionStep("Slow work", lambda: None, spinner_interval=0, timeout=1)
        action = step.begin()
        assert len(action.actions) == 4
        step.handle_event(StepTimedOut())
        assert isinstance(step.failure, StepTimeout)
        assert "Operation took too long" in step.render_final(80).plain
        step.handle_event(step._run())
        assert isinstance(step.failure, StepTimeout)

    def test_keys_do_not_cancel_the_deadline(self) -> None:
        step = ActionStep("Slow work", lambda: None, spinner_interval=0, timeout=1)
        step.begin()
        step.handle_event(events.Key("enter", None))
        assert step.countdown_active

    def test_spinner_and_countdown_share_the_title_line(self) -> None:
        step = ActionStep("Slow work", lambda: None, spinner_interval=0, timeout=65)
        step.begin()
        line = step.render_active(40).plain
        assert line.startswith("  ○ Slow work")
        assert line.endswith("[01:05] ⠋  ")
