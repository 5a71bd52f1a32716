# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Interpreter checks and the host facts advent logs at startup.

Day modules are imported during discovery, so a too-old interpreter has to
be caught before that or it surfaces as a syntax error inside some puzzle.
The startup line also records how many days can run at once when the
engine is left on its default pool size.
"""

import os
import platform
import sys
from typing import NamedTuple

MINIMUM_PYTHON = (3, 11)

# ThreadPoolExecutor's own default ceiling.
_POOL_CEILING = 32


class HostInfo(NamedTuple):
    """What a run report reader needs to know about the machine."""

    python_version: str
    implementation: str
    platform: str
    cpu_count: int
    day_workers: int


def check_minimum_python(version: tuple[int, ...] | None = None) -> None:
    """
    Reject interpreters older than MINIMUM_PYTHON.

    ``version`` defaults to the running interpreter.

    Raises:
        RuntimeError: The interpreter is too old to import day modules.
    """
    current = tuple(version if version is not None else sys.version_info[:2])[:2]
    if current < MINIMUM_PYTHON:
        wanted = ".".join(str(part) for part in MINIMUM_PYTHON)
        found = ".".join(str(part) for part in current)
        raise RuntimeError(
            f"advent requires Python >= {wanted} to import day modules, "
            f"but this is Python {found}"
        )


def default_day_workers(cpu_count: int) -> int:
    """Pool size the engine gets when no ``max_workers`` is configured."""
    return min(_POOL_CEILING, max(cpu_count, 1) + 4)


def host_info() -> HostInfo:
    cpu_count = os.cpu_count() or 1
    return HostInfo(
        python_version=platform.python_version(),
        implementation=platform.python_implementation(),
        platform=f"{platform.system()}-{platform.machine()}",
        cpu_count=cpu_count,
        day_workers=default_day_workers(cpu_count),
    )
