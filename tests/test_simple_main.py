"""Tests for the wizard-demo entry point."""

from unittest.mock import patch

import pytest

from wizard_cli import simple_main
from wizard_cli.argparsers.main_parser import create_main_parser
from wizard_cli.errors import QueueRunError
from wizard_cli.queue.orchestrator import StepQueue
from wizard_cli.render.theme import ErrorColor
from wizard_cli.steps import (
    ActionStep,
    ChoiceStep,
    ConfirmStep,
    MultiSelectStep,
    TextInputStep,
)


def parse(*argv: str):
    return create_main_parser().parse_args(list(argv))


class TestBuildDemoQueue:
    def test_demo_uses_every_step_type(self) -> None:
        queue = simple_main.build_demo_queue(parse())
        kinds = {type(step) for step in queue.steps}
        assert kinds == {
            ActionStep,
            ChoiceStep,
            MultiSelectStep,
            TextInputStep,
            ConfirmStep,
        }
        assert queue.display.app_name == "wizard"
        assert queue.display.result_separators is True

    def test_flags_configure_the_queue(self) -> None:
        queue = simple_main.build_demo_queue(
            parse(
                "--numbered",
                "--keep-first-symbol",
                "--no-summary",
                "--lang",
                "ru",
                "--error-color",
                "red",
            )
        )
        assert queue.display.numbering.enabled
        assert queue.display.numbering.keep_first_symbol
        assert queue.display.show_summary is False
        assert queue.display.labels.status_success == "УСПЕШНО"
        assert queue.display.error_color is ErrorColor.RED

    def test_fail_step_makes_that_action_raise(self) -> None:
        queue = simple_main.build_demo_queue(parse("--fail-step", "3"))
        actions = [step for step in queue.steps if isinstance(step, ActionStep)]
        with patch("wizard_cli.simple_main.time.sleep"):
            actions[0].function()
            with pytest.raises(RuntimeError, match="Permission denied"):
                actions[2].function()


class TestMain:
    def test_halted_queue_exits_with_error(self) -> None:
        with (
            patch("sys.argv", ["wizard-demo"]),
            patch("wizard_cli.simple_main.StepQueue.run"),
            patch.object(StepQueue, "halted", new=property(lambda self: True)),
        ):
            with pytest.raises(SystemExit) as exc_info:
                simple_main.main()
        assert exc_info.value.code == 1

    def test_run_error_is_reported(self) -> None:
        with (
            patch("sys.argv", ["wizard-demo"]),
            patch(
                "wizard_cli.simple_main.StepQueue.run",
                side_effect=QueueRunError("no terminal"),
            ),
            patch("wizard_cli.simple_main.print_formatted_text") as printed,
        ):
            with pytest.raises(SystemExit):
                simple_main.main()
        printed.assert_called_once()

    def test_keyboard_interrupt_says_goodbye(self) -> None:
        with (
            patch("sys.argv", ["wizard-demo"]),
            patch(
                "wizard_cli.simple_main.StepQueue.run", side_effect=KeyboardInterrupt
            ),
            patch("wizard_cli.simple_main.print_formatted_text") as printed,
        ):
            simple_main.main()
        printed.assert_called_once()
