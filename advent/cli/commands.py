# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Subcommand handlers for the advent CLI.

Each function here corresponds to one CLI subcommand and returns an exit
code. No print() calls; everything goes through the structured logger.
"""

import argparse
import logging
from datetime import datetime, timezone
from pathlib import Path

from advent.cli.exit_codes import CONFIG_ERROR, RUNTIME_ERROR, SUCCESS, VALIDATION_ERROR
from advent.config.exceptions import ConfigError
from advent.config.loader import load_config
from advent.config.schema import AdventConfig
from advent.engine.descriptors import Descriptor
from advent.engine.discovery import Selector, discover, parse_selector
from advent.engine.errors import DiscoveryError
from advent.engine.executor import ExecutionContext, ExecutionEngine, FailureCollector
from advent.engine.resources import DEFAULT_INPUT_PATTERN, DirectoryResourceProvider
from advent.logging.logger import get_logger
from advent.reporting.writer import write_report
from advent.runtime.bootstrap import bootstrap, configure_logging

DEFAULT_SCAN_ROOT = "advent.nineteen"


def _load_and_bootstrap(
    args: argparse.Namespace,
    command_name: str,
) -> tuple[int, AdventConfig | None, logging.Logger]:
    """
    The shared setup every command needs: load config, run bootstrap.

    Returns (exit_code, config, logger). If exit_code is not SUCCESS, the
    caller should return it immediately.
    """
    logger = get_logger(f"advent.cli.{command_name}", log_level=args.log_level or "INFO")

    config = None
    if args.config is not None:
        try:
            config = load_config(Path(args.config))
        except ConfigError as err:
            logger.error(
                "Configuration error",
                extra={"command": command_name, "error": str(err)},
            )
            return CONFIG_ERROR, None, logger

    if config is not None:
        bootstrap(config.global_config)
    else:
        logger.debug(
            "No config provided, running with defaults",
            extra={"command": command_name},
        )

    # The command line wins over the config file.
    if args.log_level is not None:
        configure_logging(args.log_level)

    return SUCCESS, config, logger


def _resolve_selectors(args: argparse.Namespace, config: AdventConfig | None) -> list[Selector]:
    texts = list(args.selectors or [])
    if not texts and config is not None and config.engine is not None:
        texts = list(config.engine.selectors)
    if not texts:
        texts = [DEFAULT_SCAN_ROOT]
    return [parse_selector(text) for text in texts]


def _resolve_resources(
    args: argparse.Namespace, config: AdventConfig | None
) -> DirectoryResourceProvider:
    root = "."
    pattern = DEFAULT_INPUT_PATTERN
    if config is not None and config.engine is not None:
        root = config.engine.input_root
        pattern = config.engine.input_pattern
    if args.input_root is not None:
        root = args.input_root
    return DirectoryResourceProvider(Path(root), pattern)


def _discover(
    args: argparse.Namespace, config: AdventConfig | None, logger: logging.Logger
) -> Descriptor:
    selectors = _resolve_selectors(args, config)
    resources = _resolve_resources(args, config)
    logger.info(
        "Discovering days",
        extra={"selectors": [repr(selector) for selector in selectors], "resources": repr(resources)},
    )
    return discover(selectors, resources)


def handle_list(args: argparse.Namespace) -> int:
    """
    Discover days and log the tree without running anything.

    Handy for checking that every day builds before a full run. Exits with
    VALIDATION_ERROR if any day failed to build.
    """
    exit_code, config, logger = _load_and_bootstrap(args, "list")
    if exit_code != SUCCESS:
        return exit_code

    try:
        root = _discover(args, config, logger)

        broken = 0
        for day in root.children:
            if day.error is not None:
                broken += 1
                logger.error(
                    "Day could not be built",
                    extra={"node": str(day.unique_id), "error": str(day.error)},
                )
                continue

            logger.info(
                day.display_name,
                extra={
                    "node": str(day.unique_id),
                    "source": str(day.source) if day.source else None,
                    "problems": len(day.children),
                    "leaves": len(day.leaves()),
                },
            )
            for leaf in day.leaves():
                logger.debug(
                    leaf.display_name,
                    extra={"node": str(leaf.unique_id), "source": str(leaf.source)},
                )

        return VALIDATION_ERROR if broken else SUCCESS

    except DiscoveryError as err:
        logger.error("Discovery failed", extra={"error": str(err)})
        return VALIDATION_ERROR
    except Exception as err:
        logger.error("List command failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR


def handle_run(args: argparse.Namespace) -> int:
    """
    Discover days, run every check, and optionally write a report.

    Unverified answers are reported but don't fail the run; failed or
    errored leaves and days that couldn't be built do.
    """
    exit_code, config, logger = _load_and_bootstrap(args, "run")
    if exit_code != SUCCESS:
        return exit_code

    try:
        root = _discover(args, config, logger)

        max_workers = args.workers
        if max_workers is None and config is not None and config.engine is not None:
            max_workers = config.engine.max_workers

        collector = FailureCollector()
        engine = ExecutionEngine(max_workers=max_workers)
        report = engine.execute(root, ExecutionContext(collector=collector))

        report_dir = args.report_dir
        if report_dir is None and config is not None and config.report is not None:
            report_dir = config.report.output_directory

        if report_dir is not None:
            run_id = datetime.now(tz=timezone.utc).strftime("run_%Y%m%dT%H%M%SZ")
            config_snapshot = config.model_dump(by_alias=True) if config is not None else None
            write_report(report, Path(report_dir) / run_id, config_snapshot=config_snapshot)

        summary = report.summary()
        for failure in collector.results:
            logger.error(
                "Failure",
                extra={"node": failure.unique_id, "detail": failure.outcome.describe()},
            )
        logger.info(
            "Run complete",
            extra={
                "passed": summary.passed,
                "failed": summary.failed,
                "errored": summary.errored,
                "unverified": summary.unverified,
                "unit_failures": summary.unit_failures,
            },
        )
        return SUCCESS if summary.successful else VALIDATION_ERROR

    except DiscoveryError as err:
        logger.error("Discovery failed", extra={"error": str(err)})
        return VALIDATION_ERROR
    except ValueError as err:
        logger.error("Invalid run options", extra={"error": str(err)})
        return CONFIG_ERROR
    except Exception as err:
        logger.error("Run failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR
