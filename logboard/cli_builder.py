"""Factory for constructing the CLI argument parser."""

import argparse

from .config import DEFAULT_INTERVAL


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="logboard",
        description="logboard - run a demonstration task board",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--tasks",
        type=int,
        default=3,
        help="Number of simulated progress tasks (default: 3)",
    )

    parser.add_argument(
        "--steps",
        type=int,
        default=20,
        help="Progress steps per task (default: 20)",
    )

    parser.add_argument(
        "--step-delay",
        dest="step_delay",
        type=float,
        default=0.1,
        help="Seconds between progress steps (default: 0.1)",
    )

    parser.add_argument(
        "--interval",
        type=float,
        default=DEFAULT_INTERVAL,
        help=f"Seconds between redraws (default: {DEFAULT_INTERVAL})",
    )

    parser.add_argument(
        "--fail",
        action="store_true",
        help="Make the background task fail to show a rejected task",
    )

    parser.add_argument(
        "--no-color",
        dest="no_color",
        action="store_true",
        help="Disable colored output and unicode glyphs",
    )

    return parser
