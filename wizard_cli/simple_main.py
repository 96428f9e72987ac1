#!/usr/bin/env python3
"""
Demo entry point for wizard-cli.
Runs a small setup wizard that exercises every bundled step type.
"""

import html
import logging
import os
import time
import warnings
from argparse import Namespace

from prompt_toolkit import print_formatted_text
from prompt_toolkit.formatted_text import HTML

from wizard_cli.argparsers.main_parser import create_main_parser
from wizard_cli.errors import WizardError
from wizard_cli.queue.orchestrator import StepQueue
from wizard_cli.render.theme import ErrorColor
from wizard_cli.steps import (
    ActionStep,
    ChoiceStep,
    ConfirmStep,
    MultiSelectStep,
    TextInputStep,
)
from wizard_cli.stores.labels import Labels


DEBUG_LOG_FILE = os.getenv("WIZARD_LOG_FILE", "wizard-debug.log")

debug_env = os.getenv("DEBUG", "false").lower()
if debug_env != "1" and debug_env != "true":
    logging.disable(logging.WARNING)
    warnings.filterwarnings("ignore")
else:
    # The terminal belongs to the queue app, so debug output goes to a file
    logging.basicConfig(
        filename=DEBUG_LOG_FILE,
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _simulated_work(seconds: float, fail: bool, message: str):
    def work() -> None:
        time.sleep(seconds)
        if fail:
            raise RuntimeError(message)

    return work


def build_demo_queue(args: Namespace) -> StepQueue:
    """Build the demo queue from parsed command line arguments."""
    labels = Labels.for_language(args.lang)
    fail_step = args.fail_step or 0

    queue = (
        StepQueue("Project setup")
        .with_app_name(args.app_name)
        .with_summary(not args.no_summary)
        .with_clear_screen(args.clear_screen)
        .with_error_color(ErrorColor(args.error_color))
        .with_result_separators(not args.no_result_lines)
        .with_labels(labels)
    )
    if args.numbered:
        queue.with_steps_numbered(True, args.keep_first_symbol, args.number_format)

    queue.add_steps(
        ActionStep(
            "Check environment",
            _simulated_work(0.6, fail_step == 1, "Python 3.10 or newer is required"),
            summary=lambda: ["Python interpreter found", "Terminal supports colors"],
            labels=labels,
        ),
        ChoiceStep(
            "Select install profile",
            ["minimal", "standard", "full"],
            default_index=1,
            labels=labels,
        ),
        MultiSelectStep(
            "Optional components",
            ["docs", "tests", "examples", "ci"],
            selected=["tests"],
            select_all=True,
            labels=labels,
        ),
        TextInputStep("Project name", default="my-project", labels=labels),
        ConfirmStep(
            "Send anonymous usage statistics?",
            default=False,
            timeout=15,
            timeout_default=False,
            labels=labels,
        ),
        ActionStep(
            "Install packages",
            _simulated_work(
                1.2,
                fail_step == 2,
                "Could not resolve package 'example-lib'\n"
                "Check your network connection and try again",
            ),
            summary=lambda: ["3 packages installed"],
            labels=labels,
        ),
        ActionStep(
            "Write configuration",
            _simulated_work(0.4, fail_step == 3, "Permission denied: ./config.toml"),
            labels=labels,
        ),
    )
    return queue


def main() -> None:
    """Main entry point for the wizard-demo command.

    Raises:
        Exception: On unexpected error conditions
    """
    parser = create_main_parser()
    args = parser.parse_args()

    try:
        queue = build_demo_queue(args)
        queue.run()
    except KeyboardInterrupt:
        print_formatted_text(HTML("\n<yellow>Goodbye! 👋</yellow>"))
    except EOFError:
        print_formatted_text(HTML("\n<yellow>Goodbye! 👋</yellow>"))
    except WizardError as e:
        print_formatted_text(HTML(f"<red>Error: {html.escape(str(e))}</red>"))
        raise SystemExit(1)
    except Exception as e:
        print_formatted_text(HTML(f"<red>Error: {html.escape(str(e))}</red>"))
        import traceback

        traceback.print_exc()
        raise
    else:
        if queue.halted:
            raise SystemExit(1)


if __name__ == "__main__":
    main()
