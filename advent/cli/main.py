# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoint for advent.

A single root command with subcommands. The global options (--config,
--log-level) are inherited by every subcommand through argparse's parent
parser mechanism.

Usage:
    advent list advent.nineteen
    advent run advent.nineteen.day3:Day3 --input-root ~/aoc
    advent run --config advent.yaml --report-dir reports
"""

import argparse
import sys

from advent.cli.commands import handle_list, handle_run
from advent.cli.exit_codes import USER_ERROR


def _build_global_parser() -> argparse.ArgumentParser:
    """
    Build the parent parser with global options.

    Kept separate (with add_help=False) so its help text doesn't collide
    with the subcommand parsers.
    """
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration file.",
    )
    parent.add_argument(
        "--log-level",
        type=str,
        default=None,
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging verbosity level (overrides the config file).",
    )
    return parent


def _add_discovery_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "selectors",
        nargs="*",
        metavar="SELECTOR",
        help="A package to scan (advent.nineteen) or one day (advent.nineteen.day1:Day1).",
    )
    parser.add_argument(
        "--input-root",
        type=str,
        default=None,
        dest="input_root",
        help="Directory containing input/day{N}.txt files.",
    )


def _register_subcommands(
    subparsers: argparse._SubParsersAction,  # type: ignore[type-arg]
    parent: argparse.ArgumentParser,
) -> None:
    """
    Register all subcommands with their handler functions.

    Each subcommand sets its handler via set_defaults(func=...).
    """
    list_parser = subparsers.add_parser(
        "list", parents=[parent], help="Discover days and show the descriptor tree."
    )
    _add_discovery_arguments(list_parser)
    list_parser.set_defaults(func=handle_list)

    run_parser = subparsers.add_parser(
        "run", parents=[parent], help="Discover days and run every check."
    )
    _add_discovery_arguments(run_parser)
    run_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of days to run in parallel.",
    )
    run_parser.add_argument(
        "--report-dir",
        type=str,
        default=None,
        dest="report_dir",
        help="Write results.json and report.txt under this directory.",
    )
    run_parser.set_defaults(func=handle_run)


def main() -> None:
    """
    Main CLI entrypoint; pyproject.toml's [project.scripts] points here.

    If no subcommand is given, we show help and exit with USER_ERROR.
    """
    parent = _build_global_parser()

    root_parser = argparse.ArgumentParser(
        prog="advent",
        description="advent: run day/problem puzzle checks.",
        parents=[parent],
    )
    subparsers = root_parser.add_subparsers(dest="command")
    _register_subcommands(subparsers, parent)

    args = root_parser.parse_args()

    if not hasattr(args, "func") or args.func is None:
        root_parser.print_help()
        sys.exit(USER_ERROR)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
