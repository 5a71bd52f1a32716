# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Execution engine. Walks a descriptor tree and records one outcome per leaf.

Scheduling:
  - the root's children (one per day) run concurrently on a thread pool
  - inside a day, everything runs sequentially in declaration order, so a
    problem's examples always finish before its Solution leaf starts

Isolation: a leaf body is called exactly once and whatever it raises is
turned into an Outcome right there:

    UnverifiedAnswer   -> UNVERIFIED(candidate)
    AssertionMismatch  -> FAILED(actual, expected)
    any other error    -> ERRORED(cause)
    nothing            -> PASSED

A day whose subtree couldn't be built is reported once, as ERRORED on the
day node itself. Nothing raised by user code crosses a node boundary, so one
broken day never takes down its siblings.
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Protocol

from advent.engine.descriptors import Descriptor, NodeKind
from advent.engine.errors import AssertionMismatch, UnverifiedAnswer
from advent.engine.models import NodeResult, Outcome, OutcomeStatus, RunSummary
from advent.logging.logger import get_logger

logger = get_logger(__name__)


class ExecutionListener(Protocol):
    def execution_started(self, node: Descriptor) -> None: ...

    def execution_finished(self, node: Descriptor, result: NodeResult) -> None: ...


class LoggingListener:
    """Default listener: one structured log line per finished node."""

    def execution_started(self, node: Descriptor) -> None:
        if node.kind is NodeKind.UNIT:
            logger.debug("Day started", extra={"node": str(node.unique_id)})

    def execution_finished(self, node: Descriptor, result: NodeResult) -> None:
        extra = {
            "node": result.unique_id,
            "display_name": result.display_name,
            "status": result.outcome.status.value,
            "detail": result.outcome.describe(),
            "source": str(result.source) if result.source else None,
            "elapsed_seconds": round(result.elapsed_seconds, 6),
        }
        status = result.outcome.status
        if status is OutcomeStatus.PASSED:
            logger.info("Passed", extra=extra)
        elif status is OutcomeStatus.UNVERIFIED:
            logger.warning("Unverified answer", extra=extra)
        else:
            logger.error("Failed", extra=extra)


class FailureCollector:
    """Thread-safe sink for the FAILED and ERRORED results of a run."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._results: list[NodeResult] = []

    def add(self, result: NodeResult) -> None:
        with self._lock:
            self._results.append(result)

    @property
    def results(self) -> list[NodeResult]:
        with self._lock:
            return list(self._results)

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)


@dataclass
class ExecutionContext:
    """Threaded through the walk. Carries no business state."""

    collector: FailureCollector | None = None


@dataclass
class ExecutionReport:
    """Every recorded result, in completion order."""

    results: list[NodeResult] = field(default_factory=list)
    elapsed_seconds: float = 0.0
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def record(self, result: NodeResult) -> None:
        with self._lock:
            self.results.append(result)

    def outcome_for(self, unique_id: str) -> Outcome | None:
        for result in self.results:
            if result.unique_id == unique_id:
                return result.outcome
        return None

    def results_under(self, unique_id: str) -> list[NodeResult]:
        """Results for a node and everything beneath it, in completion order."""
        return [
            result
            for result in self.results
            if result.unique_id == unique_id or result.unique_id.startswith(f"{unique_id}/")
        ]

    def summary(self) -> RunSummary:
        summary = RunSummary(elapsed_seconds=self.elapsed_seconds)
        for result in self.results:
            status = result.outcome.status
            if result.kind == NodeKind.UNIT.value:
                summary.unit_failures += 1
                summary.failed_ids.append(result.unique_id)
                continue

            summary.total_leaves += 1
            if status is OutcomeStatus.PASSED:
                summary.passed += 1
            elif status is OutcomeStatus.UNVERIFIED:
                summary.unverified += 1
            elif status is OutcomeStatus.FAILED:
                summary.failed += 1
                summary.failed_ids.append(result.unique_id)
            else:
                summary.errored += 1
                summary.failed_ids.append(result.unique_id)
        return summary


def run_leaf(node: Descriptor) -> Outcome:
    """Call a leaf body once and convert whatever happens into an Outcome."""
    if node.body is None:
        return Outcome.errored(RuntimeError(f"Leaf {node.unique_id} has no body"))
    try:
        node.body()
    except UnverifiedAnswer as err:
        return Outcome.unverified(err.candidate)
    except AssertionMismatch as err:
        return Outcome.failed(err.actual, err.expected)
    except Exception as err:
        return Outcome.errored(err)
    return Outcome.passed()


class ExecutionEngine:
    """
    Runs a descriptor tree.

    Args:
        max_workers: Size of the pool the days run on. None lets
            ThreadPoolExecutor pick its default.
        listener: Notified as nodes start and finish. Defaults to logging.
    """

    def __init__(
        self,
        max_workers: int | None = None,
        listener: ExecutionListener | None = None,
    ) -> None:
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self._max_workers = max_workers
        self._listener = listener if listener is not None else LoggingListener()

    def execute(self, root: Descriptor, context: ExecutionContext | None = None) -> ExecutionReport:
        context = context if context is not None else ExecutionContext()
        report = ExecutionReport()

        logger.info(
            "Execution started",
            extra={"root": str(root.unique_id), "days": len(root.children)},
        )
        start = time.monotonic()
        self._visit(root, context, report)
        report.elapsed_seconds = time.monotonic() - start

        summary = report.summary()
        logger.info(
            "Execution finished",
            extra={
                "passed": summary.passed,
                "failed": summary.failed,
                "errored": summary.errored,
                "unverified": summary.unverified,
                "unit_failures": summary.unit_failures,
                "elapsed_seconds": round(report.elapsed_seconds, 3),
            },
        )
        return report

    def _visit(self, node: Descriptor, context: ExecutionContext, report: ExecutionReport) -> None:
        if node.kind is NodeKind.ROOT:
            self._visit_concurrently(node.children, context, report)
        elif node.kind is NodeKind.UNIT:
            self._listener.execution_started(node)
            if node.error is not None:
                self._finish(node, Outcome.errored(node.error), 0.0, context, report)
            else:
                self._visit_sequentially(node.children, context, report)
        elif node.kind is NodeKind.PROBLEM:
            self._visit_sequentially(node.children, context, report)
        else:
            self._listener.execution_started(node)
            start = time.monotonic()
            outcome = run_leaf(node)
            self._finish(node, outcome, time.monotonic() - start, context, report)

    def _visit_sequentially(
        self,
        children: tuple[Descriptor, ...],
        context: ExecutionContext,
        report: ExecutionReport,
    ) -> None:
        for child in children:
            self._visit(child, context, report)

    def _visit_concurrently(
        self,
        children: tuple[Descriptor, ...],
        context: ExecutionContext,
        report: ExecutionReport,
    ) -> None:
        if not children:
            return
        with ThreadPoolExecutor(
            max_workers=self._max_workers, thread_name_prefix="advent-day"
        ) as pool:
            futures = [pool.submit(self._visit, child, context, report) for child in children]
            for future in futures:
                future.result()

    def _finish(
        self,
        node: Descriptor,
        outcome: Outcome,
        elapsed: float,
        context: ExecutionContext,
        report: ExecutionReport,
    ) -> None:
        result = NodeResult(
            unique_id=str(node.unique_id),
            display_name=node.display_name,
            kind=node.kind.value,
            outcome=outcome,
            source=node.source,
            elapsed_seconds=elapsed,
        )
        report.record(result)
        if context.collector is not None and outcome.is_failure:
            context.collector.add(result)
        self._listener.execution_finished(node, result)
