"""Command-line entry point for the ARCADE CLI.

Usage::

    arcade                          # banner + usage
    arcade init my-game             # full demo project
    arcade init my-game --blank     # headers and an empty main.c only
    arcade init                     # prompts for the project name
    python -m arcade_cli init my-game --release v1.2.0

Exit codes: 0 success, 1 usage error or unknown command, 2 the project
directory already exists, 3 any other scaffolding failure.
"""

from __future__ import annotations

import argparse
import sys

from pydantic import ValidationError

from arcade_cli import __version__
from arcade_cli.config import Settings
from arcade_cli.errors import EXIT_FAILURE, EXIT_OK, EXIT_USAGE, ArcadeError, PromptCancelled
from arcade_cli.prompts import Prompter
from arcade_cli.remote import ArcadeRepoClient
from arcade_cli.scaffolder import ProjectScaffolder
from arcade_cli.utils import (
    ProgressReporter,
    configure_logging,
    console,
    pick_success_message,
    print_error,
    print_next_steps,
    print_success,
    show_banner,
    show_usage,
)

COMMANDS = ("init",)


class UsageError(Exception):
    """Raised by the argument parser instead of exiting."""


class _ArgumentParser(argparse.ArgumentParser):
    # argparse exits with 2 on bad arguments; 2 means "directory exists" here.
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def build_init_parser() -> argparse.ArgumentParser:
    """Return the parser for ``arcade init``."""
    parser = _ArgumentParser(
        prog="arcade init",
        description="Create a new ARCADE project",
        add_help=False,
    )
    parser.add_argument(
        "project_name",
        nargs="?",
        default=None,
        help="Project directory name (prompted for if omitted)",
    )
    parser.add_argument(
        "-b", "--blank",
        action="store_true",
        help="Create a blank project without the demo game or audio",
    )
    parser.add_argument(
        "--release",
        default=None,
        help="ARCADE release tag to use (default: latest)",
    )
    parser.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Accept every default without prompting",
    )
    parser.add_argument(
        "-o", "--output",
        default=".",
        help="Parent directory of the new project (default: .)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``arcade`` and ``python -m arcade_cli``."""
    args = list(sys.argv[1:] if argv is None else argv)

    if not args or "-h" in args or "--help" in args:
        show_banner()
        show_usage()
        return EXIT_OK

    if args[0] == "--version":
        console.print(f"arcade {__version__}")
        return EXIT_OK

    command, rest = args[0], args[1:]
    if command not in COMMANDS:
        print_error(f"Unknown command: {' '.join(args)}")
        show_usage()
        return EXIT_USAGE

    try:
        options = build_init_parser().parse_args(rest)
    except UsageError as exc:
        print_error(f"Error: {exc}")
        show_usage()
        return EXIT_USAGE

    return run_init(options)


def run_init(options: argparse.Namespace) -> int:
    """Scaffold a project from parsed ``init`` options and return the exit code."""
    configure_logging(options.verbose)

    try:
        settings = Settings.from_env()
    except (ValidationError, ValueError) as exc:
        print_error(f"Error: invalid ARCADE_* environment settings: {exc}")
        return EXIT_FAILURE

    reporter = ProgressReporter()
    scaffolder = ProjectScaffolder(
        settings=settings,
        prompter=Prompter(console, interactive=not options.yes),
        reporter=reporter,
        client=ArcadeRepoClient(settings),
    )

    try:
        result = scaffolder.scaffold(
            options.project_name,
            blank=options.blank,
            release=options.release,
            output_dir=options.output,
        )
    except ArcadeError as exc:
        reporter.report_failure(f"Error: {exc}")
        return exc.exit_code
    except KeyboardInterrupt:
        # Ctrl-C while a download or write was running.
        cancelled = PromptCancelled("Cancelled by user.")
        reporter.report_failure(f"Error: {cancelled}")
        return cancelled.exit_code

    name = result.config.project_name
    reporter.report_success(f"Created {name} with ARCADE {result.release_tag}")
    print_success(pick_success_message(name))
    print_next_steps(str(result.project_path), result.config.main_source_file, result.blank)
    return EXIT_OK
