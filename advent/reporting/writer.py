# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Run report writer.

Writes the outcome of one execution to disk:

    <output_dir>/
    ├── results.json          machine-readable outcomes and summary
    ├── report.txt            human-readable summary
    └── config_snapshot.yaml  the config used for this run (optional)

results.json is the authoritative output; report.txt is a convenience view
of the same data. Unverified answers get their own section in the text
report, since those are the values someone needs to go and record.
"""

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml

from advent.engine.descriptors import ENGINE_ID
from advent.engine.executor import ExecutionReport
from advent.engine.models import NodeResult, OutcomeStatus
from advent.logging.logger import get_logger

logger = get_logger(__name__)


def _json_value(value: Any) -> Any:
    """Pass JSON-encodable values through; anything else is written as its repr."""
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)
    return value


def _result_to_dict(result: NodeResult) -> dict[str, Any]:
    outcome = result.outcome
    entry: dict[str, Any] = {
        "unique_id": result.unique_id,
        "display_name": result.display_name,
        "kind": result.kind,
        "status": outcome.status.value,
        "detail": outcome.describe(),
        "source": asdict(result.source) if result.source else None,
        "elapsed_seconds": round(result.elapsed_seconds, 6),
    }
    if outcome.status is OutcomeStatus.FAILED:
        entry["actual"] = _json_value(outcome.actual)
        entry["expected"] = _json_value(outcome.expected)
    elif outcome.status is OutcomeStatus.ERRORED:
        entry["cause"] = f"{type(outcome.cause).__name__}: {outcome.cause}"
    elif outcome.status is OutcomeStatus.UNVERIFIED:
        entry["candidate"] = _json_value(outcome.candidate)
    return entry


def report_to_dict(report: ExecutionReport) -> dict[str, Any]:
    """Results are sorted by unique id so the file is stable across thread schedules."""
    return {
        "engine": ENGINE_ID,
        "summary": asdict(report.summary()),
        "results": [
            _result_to_dict(result)
            for result in sorted(report.results, key=lambda r: r.unique_id)
        ],
    }


def write_report(
    report: ExecutionReport,
    output_dir: Path,
    config_snapshot: dict[str, object] | None = None,
) -> Path:
    """
    Write the full run report to disk and return the output directory.
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    results_path = output_dir / "results.json"
    results_path.write_text(
        json.dumps(report_to_dict(report), indent=2, sort_keys=True, default=str),
        encoding="utf-8",
    )

    report_path = output_dir / "report.txt"
    report_path.write_text(format_report_text(report), encoding="utf-8")

    if config_snapshot is not None:
        config_path = output_dir / "config_snapshot.yaml"
        config_path.write_text(
            yaml.dump(config_snapshot, default_flow_style=False, sort_keys=True),
            encoding="utf-8",
        )

    logger.info(
        "Run report written",
        extra={"output_dir": str(output_dir)},
    )

    return output_dir


def format_report_text(report: ExecutionReport) -> str:
    """Format a run into a human-readable text report."""
    summary = report.summary()
    timestamp = datetime.now(tz=timezone.utc).isoformat()
    ordered = sorted(report.results, key=lambda r: r.unique_id)

    lines: list[str] = [
        "=" * 60,
        "ADVENT RUN REPORT",
        f"Generated: {timestamp}",
        "=" * 60,
        "",
        "--- SUMMARY ---",
        f"Total Leaves: {summary.total_leaves}",
        f"Passed: {summary.passed}",
        f"Failed: {summary.failed}",
        f"Errored: {summary.errored}",
        f"Unverified: {summary.unverified}",
        f"Unit Failures: {summary.unit_failures}",
        f"Elapsed: {summary.elapsed_seconds:.3f}s",
    ]

    failures = [r for r in ordered if r.outcome.is_failure]
    if failures:
        lines.extend(["", "--- FAILURES ---"])
        for result in failures:
            lines.append(f"  {result.unique_id} ({result.display_name}): {result.outcome.describe()}")
            if result.source is not None:
                lines.append(f"    at {result.source}")

    unverified = [r for r in ordered if r.outcome.status is OutcomeStatus.UNVERIFIED]
    if unverified:
        lines.extend(["", "--- UNVERIFIED ANSWERS ---"])
        for result in unverified:
            lines.append(f"  {result.unique_id}: {result.outcome.candidate!r}")

    lines.extend(["", "=" * 60])
    return "\n".join(lines) + "\n"
