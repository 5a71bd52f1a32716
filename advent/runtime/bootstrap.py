# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runtime bootstrap for advent.

The one-time setup every CLI command does before discovering anything:
  1. Validate the environment (Python version)
  2. Bring every advent logger to the configured level and log file
  3. Log the interpreter and host the days will run on

Engine modules create their loggers at import time with the default level;
this is where they get re-leveled once the config is known.
"""

import logging
from pathlib import Path

from advent.config.schema import GlobalConfig
from advent.logging.logger import get_logger
from advent.runtime.environment import check_minimum_python, host_info


def configure_logging(log_level: str, log_file: Path | None = None) -> logging.Logger:
    """
    Apply ``log_level`` (and ``log_file``, if given) to every existing
    ``advent.*`` logger and return the runtime one.
    """
    for name in list(logging.Logger.manager.loggerDict):
        if name.startswith("advent."):
            get_logger(name, log_level=log_level, log_file=log_file)
    return get_logger("advent.runtime", log_level=log_level, log_file=log_file)


def bootstrap(config: GlobalConfig) -> None:
    """
    Run the full bootstrap sequence.

    Args:
        config: The validated global configuration.
    """
    check_minimum_python()

    log_file = Path(config.log_file) if config.log_file is not None else None
    logger = configure_logging(config.log_level, log_file)

    logger.info("advent bootstrap complete", extra=host_info()._asdict())
