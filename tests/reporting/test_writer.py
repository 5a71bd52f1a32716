# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the run report writer.

Reports must be stable regardless of the order threads finished in, and
unverified answers need to be easy to find.
"""

import json
from pathlib import Path

import yaml

from advent.engine.executor import ExecutionReport
from advent.engine.models import NodeResult, Outcome, SourceLocation
from advent.reporting.writer import format_report_text, report_to_dict, write_report

LOCATION = SourceLocation("advent", "advent/nineteen/day1.py", 20)


def _report(reverse: bool = False) -> ExecutionReport:
    results = [
        NodeResult(
            "[engine:advent]/[day:1]/[problem:1]/[test:1]", "Test #1", "leaf",
            Outcome.passed(), LOCATION, 0.001,
        ),
        NodeResult(
            "[engine:advent]/[day:1]/[problem:1]/[test:2]", "Test #2", "leaf",
            Outcome.failed(3, 4), LOCATION,
        ),
        NodeResult(
            "[engine:advent]/[day:1]/[problem:1]/[solution:0]", "Solution", "leaf",
            Outcome.unverified(3262358), LOCATION,
        ),
        NodeResult(
            "[engine:advent]/[day:2]", "Day #2", "unit",
            Outcome.errored(RuntimeError("no formatter")),
        ),
    ]
    if reverse:
        results.reverse()
    return ExecutionReport(results=results, elapsed_seconds=0.5)


class TestReportToDict:
    def test_summary_counts(self) -> None:
        summary = report_to_dict(_report())["summary"]
        assert summary["total_leaves"] == 3
        assert summary["passed"] == 1
        assert summary["failed"] == 1
        assert summary["unverified"] == 1
        assert summary["unit_failures"] == 1

    def test_results_are_sorted(self) -> None:
        assert report_to_dict(_report()) == report_to_dict(_report(reverse=True))

    def test_status_specific_fields(self) -> None:
        by_id = {entry["unique_id"]: entry for entry in report_to_dict(_report())["results"]}

        failed = by_id["[engine:advent]/[day:1]/[problem:1]/[test:2]"]
        assert (failed["actual"], failed["expected"]) == (3, 4)
        assert failed["source"] == {"root": "advent", "file": "advent/nineteen/day1.py", "line": 20}

        unverified = by_id["[engine:advent]/[day:1]/[problem:1]/[solution:0]"]
        assert unverified["candidate"] == 3262358

        unit = by_id["[engine:advent]/[day:2]"]
        assert unit["cause"] == "RuntimeError: no formatter"
        assert unit["source"] is None


class TestWriteReport:
    def test_writes_all_files(self, tmp_path: Path) -> None:
        output = write_report(_report(), tmp_path / "run", config_snapshot={"global": {"log_level": "INFO"}})

        assert (output / "results.json").is_file()
        assert (output / "report.txt").is_file()
        snapshot = yaml.safe_load((output / "config_snapshot.yaml").read_text(encoding="utf-8"))
        assert snapshot == {"global": {"log_level": "INFO"}}

    def test_results_json_is_parseable(self, tmp_path: Path) -> None:
        output = write_report(_report(), tmp_path)
        data = json.loads((output / "results.json").read_text(encoding="utf-8"))
        assert data["engine"] == "advent"
        assert len(data["results"]) == 4

    def test_values_json_cannot_hold_are_written_as_repr(self, tmp_path: Path) -> None:
        report = ExecutionReport(
            results=[
                NodeResult(
                    "[engine:advent]/[day:3]/[problem:1]/[solution:0]", "Solution", "leaf",
                    Outcome.unverified({(0, 0): 1}),
                ),
                NodeResult(
                    "[engine:advent]/[day:3]/[problem:1]/[test:1]", "Test #1", "leaf",
                    Outcome.failed({1, 2}, [1, 2]),
                ),
            ]
        )
        output = write_report(report, tmp_path)
        by_id = {
            entry["unique_id"]: entry
            for entry in json.loads((output / "results.json").read_text(encoding="utf-8"))["results"]
        }

        assert by_id["[engine:advent]/[day:3]/[problem:1]/[solution:0]"]["candidate"] == "{(0, 0): 1}"
        failed = by_id["[engine:advent]/[day:3]/[problem:1]/[test:1]"]
        assert failed["actual"] == "{1, 2}"
        assert failed["expected"] == [1, 2]

    def test_snapshot_is_optional(self, tmp_path: Path) -> None:
        output = write_report(_report(), tmp_path)
        assert not (output / "config_snapshot.yaml").exists()


class TestFormatReportText:
    def test_sections(self) -> None:
        text = format_report_text(_report())
        assert "ADVENT RUN REPORT" in text
        assert "Total Leaves: 3" in text
        assert "--- FAILURES ---" in text
        assert "expected 4 but was 3" in text
        assert "at advent/nineteen/day1.py:20" in text
        assert "--- UNVERIFIED ANSWERS ---" in text
        assert "3262358" in text

    def test_clean_run_has_no_failure_section(self) -> None:
        report = ExecutionReport(
            results=[
                NodeResult("[engine:advent]/[day:1]/[problem:1]/[test:1]", "Test #1", "leaf", Outcome.passed()),
            ]
        )
        text = format_report_text(report)
        assert "--- FAILURES ---" not in text
        assert "--- UNVERIFIED ANSWERS ---" not in text
        assert "Passed: 1" in text
