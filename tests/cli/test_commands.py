# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
In-process tests for the list and run handlers.

The handlers take an argparse.Namespace, so we build one directly instead of
going through the parser.
"""

import argparse
import json
import textwrap
from pathlib import Path
from typing import Callable

from advent.cli.exit_codes import CONFIG_ERROR, SUCCESS, VALIDATION_ERROR
from advent.cli.commands import handle_list, handle_run
from advent.engine.day import Day
from advent.engine.dsl import DayBuilder


class UnbuildableDay(Day):
    number = 30

    def configure(self, day: DayBuilder) -> None:
        with day.problem(1) as problem:
            problem.solution(lambda i: i.value)


def _args(*selectors: str, **overrides: object) -> argparse.Namespace:
    values: dict[str, object] = {
        "config": None,
        "log_level": None,
        "selectors": list(selectors),
        "input_root": None,
        "workers": None,
        "report_dir": None,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


class TestHandleList:
    def test_lists_the_2019_days(self) -> None:
        assert handle_list(_args("advent.nineteen")) == SUCCESS

    def test_broken_day_is_a_validation_error(self) -> None:
        assert handle_list(_args(f"{__name__}:UnbuildableDay")) == VALIDATION_ERROR

    def test_bad_selector_is_a_validation_error(self) -> None:
        assert handle_list(_args("no_such_module_anywhere:Day1")) == VALIDATION_ERROR

    def test_missing_config_file(self, tmp_path: Path) -> None:
        args = _args("advent.nineteen", config=str(tmp_path / "missing.yaml"))
        assert handle_list(args) == CONFIG_ERROR


class TestHandleRun:
    def test_unverified_answers_do_not_fail_the_run(
        self, write_input: Callable[[int, str], Path], tmp_path: Path
    ) -> None:
        write_input(4, "111110-111112\n")
        args = _args("advent.nineteen.day4:Day4", input_root=str(tmp_path))
        assert handle_run(args) == SUCCESS

    def test_missing_input_fails_the_run(self, tmp_path: Path) -> None:
        args = _args("advent.nineteen.day4:Day4", input_root=str(tmp_path))
        assert handle_run(args) == VALIDATION_ERROR

    def test_broken_day_fails_the_run(self, tmp_path: Path) -> None:
        args = _args(f"{__name__}:UnbuildableDay", input_root=str(tmp_path))
        assert handle_run(args) == VALIDATION_ERROR

    def test_invalid_worker_count(self, tmp_path: Path) -> None:
        args = _args("advent.nineteen.day4:Day4", input_root=str(tmp_path), workers=0)
        assert handle_run(args) == CONFIG_ERROR

    def test_report_is_written(
        self, write_input: Callable[[int, str], Path], tmp_path: Path
    ) -> None:
        write_input(4, "111110-111112\n")
        report_root = tmp_path / "reports"
        args = _args(
            "advent.nineteen.day4:Day4",
            input_root=str(tmp_path),
            report_dir=str(report_root),
        )
        assert handle_run(args) == SUCCESS

        runs = list(report_root.iterdir())
        assert len(runs) == 1
        assert runs[0].name.startswith("run_")
        data = json.loads((runs[0] / "results.json").read_text(encoding="utf-8"))
        assert data["summary"]["passed"] == 2
        assert data["summary"]["unverified"] == 2

    def test_config_supplies_selectors_input_and_report(
        self, write_input: Callable[[int, str], Path], tmp_path: Path
    ) -> None:
        write_input(4, "111110-111112\n")
        config_file = tmp_path / "advent.yaml"
        config_file.write_text(
            textwrap.dedent(f"""\
                global:
                  config_version: "1.0.0"
                engine:
                  config_version: "1.0.0"
                  selectors: ["advent.nineteen.day4:Day4"]
                  input_root: "{tmp_path.as_posix()}"
                  max_workers: 2
                report:
                  config_version: "1.0.0"
                  output_directory: "{(tmp_path / 'reports').as_posix()}"
            """),
            encoding="utf-8",
        )

        assert handle_run(_args(config=str(config_file))) == SUCCESS

        (run_dir,) = list((tmp_path / "reports").iterdir())
        assert (run_dir / "config_snapshot.yaml").is_file()

    def test_command_line_selectors_override_config(
        self, tmp_path: Path
    ) -> None:
        config_file = tmp_path / "advent.yaml"
        config_file.write_text(
            textwrap.dedent("""\
                global:
                  config_version: "1.0.0"
                engine:
                  config_version: "1.0.0"
                  selectors: ["no_such_module_anywhere:Day1"]
            """),
            encoding="utf-8",
        )
        args = _args("advent.nineteen", config=str(config_file))
        assert handle_list(args) == SUCCESS
