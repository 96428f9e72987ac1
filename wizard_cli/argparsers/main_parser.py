"""Argument parser for the wizard-demo command."""

import argparse

from wizard_cli import __version__
from wizard_cli.render.numbering import DEFAULT_NUMBER_FORMAT
from wizard_cli.render.theme import ErrorColor


def create_main_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the demo queue.

    Returns:
        The configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="wizard-demo",
        description="Run a demo step queue inline in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
            Examples:
                wizard-demo                              # Default layout
                wizard-demo --numbered                   # Number the steps
                wizard-demo --numbered --keep-first-symbol
                wizard-demo --fail-step 2                # Make step 2 fail
                wizard-demo --no-summary --lang ru       # Russian labels, no footer
        """,
    )

    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"wizard-cli {__version__}",
        help="Show the version number and exit",
    )

    numbering = parser.add_argument_group("numbering")
    numbering.add_argument(
        "--numbered",
        action="store_true",
        help="Show step numbers instead of step glyphs",
    )
    numbering.add_argument(
        "--keep-first-symbol",
        action="store_true",
        help="Keep the glyph on the first step and start numbering after it",
    )
    numbering.add_argument(
        "--number-format",
        type=str,
        default=DEFAULT_NUMBER_FORMAT,
        help="printf-style template for step numbers (default: %(default)s)",
    )

    layout = parser.add_argument_group("layout")
    layout.add_argument(
        "--no-summary",
        action="store_true",
        help="Do not show the summary footer when the queue finishes",
    )
    layout.add_argument(
        "--no-result-lines",
        action="store_true",
        help="Do not draw separator rules under multi-line step results",
    )
    layout.add_argument(
        "--clear-screen",
        action="store_true",
        help="Clear the terminal before the first frame",
    )
    layout.add_argument(
        "--error-color",
        choices=[color.value for color in ErrorColor],
        default=ErrorColor.YELLOW.value,
        help="Palette for error messages and the problem status",
    )
    layout.add_argument(
        "--app-name",
        type=str,
        default="wizard",
        help="Badge shown at the right of the title line ('' to hide it)",
    )
    layout.add_argument(
        "--lang",
        type=str,
        default="en",
        help="Label language: en or ru",
    )

    parser.add_argument(
        "--fail-step",
        type=int,
        metavar="N",
        help="Make the N-th action step fail (1-based), to see how the queue halts",
    )

    return parser
