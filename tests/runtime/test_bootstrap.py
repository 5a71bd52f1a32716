# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Tests for environment checks and the runtime bootstrap."""

import json
from pathlib import Path

import pytest

from advent.config.schema import GlobalConfig
from advent.runtime.bootstrap import bootstrap
from advent.runtime.environment import (
    MINIMUM_PYTHON,
    check_minimum_python,
    default_day_workers,
    host_info,
)


class TestEnvironment:
    def test_current_interpreter_is_supported(self) -> None:
        check_minimum_python()

    def test_minimum_itself_is_supported(self) -> None:
        check_minimum_python(MINIMUM_PYTHON)

    @pytest.mark.parametrize("version", [(3, 10), (3, 10, 12), (2, 7)])
    def test_old_interpreter_is_rejected(self, version: tuple[int, ...]) -> None:
        with pytest.raises(RuntimeError, match=r"requires Python >= 3\.11"):
            check_minimum_python(version)

    @pytest.mark.parametrize(("cpus", "workers"), [(1, 5), (0, 5), (8, 12), (64, 32)])
    def test_default_day_workers(self, cpus: int, workers: int) -> None:
        assert default_day_workers(cpus) == workers

    def test_host_info(self) -> None:
        info = host_info()
        assert info.cpu_count >= 1
        assert info.day_workers == default_day_workers(info.cpu_count)
        assert info.python_version.count(".") == 2
        assert info.implementation


class TestBootstrap:
    def test_bootstrap_writes_startup_line_to_log_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "advent.log"
        bootstrap(GlobalConfig(config_version="1.0.0", log_file=str(log_file)))

        lines = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        startup = [line for line in lines if line["msg"] == "advent bootstrap complete"]
        assert startup
        assert startup[-1]["day_workers"] >= 1
        assert "implementation" in startup[-1]
