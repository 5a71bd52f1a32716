# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Data models for the advent engine.

Declarations are frozen dataclasses: a day's configuration is captured once
while its builder runs and never changes afterwards. Outcomes are frozen too,
since they cross thread boundaries on their way to the report.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, TextIO, TypeVar

T = TypeVar("T")


class _NoAnswer:
    """Sentinel type for "no answer recorded" (None is a valid answer)."""

    def __repr__(self) -> str:
        return "NO_ANSWER"


NO_ANSWER: Any = _NoAnswer()


@dataclass(frozen=True)
class SourceLocation:
    """
    Where a declaration was made, for report display and IDE navigation.

    ``root`` is the top-level package of the declaring module, ``file`` the
    module path relative to it (``advent/nineteen/day1.py``), ``line`` the
    line of the declaration call. Never used for control flow.
    """

    root: str
    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


@dataclass(frozen=True)
class Input(Generic[T]):
    """
    What a solution receives.

    ``testing`` is the only way a solution can tell an example check from
    the production run.
    """

    value: T
    testing: bool = False


Formatter = Callable[[TextIO], Any]
Solution = Callable[[Input[Any]], Any]


@dataclass(frozen=True)
class ExampleCheck:
    """An inline input / expected output pair."""

    raw_input: str
    expected: Any
    location: SourceLocation


@dataclass(frozen=True)
class ProblemDeclaration:
    """One numbered problem of a day, as declared in the DSL."""

    number: int
    tests: tuple[ExampleCheck, ...]
    solution: Solution
    location: SourceLocation
    solution_location: SourceLocation
    answer: Any = NO_ANSWER

    @property
    def has_answer(self) -> bool:
        return self.answer is not NO_ANSWER


@dataclass(frozen=True)
class UnitConfiguration:
    """Snapshot of everything a day declared."""

    formatter: Formatter | None = None
    problems: tuple[ProblemDeclaration, ...] = ()


class OutcomeStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    ERRORED = "errored"
    UNVERIFIED = "unverified"


@dataclass(frozen=True)
class Outcome:
    """
    The result of executing one node.

    Only the fields that belong to ``status`` are set:
      FAILED      actual, expected
      ERRORED     cause
      UNVERIFIED  candidate
    """

    status: OutcomeStatus
    actual: Any = None
    expected: Any = None
    cause: BaseException | None = None
    candidate: Any = None

    @classmethod
    def passed(cls) -> "Outcome":
        return cls(OutcomeStatus.PASSED)

    @classmethod
    def failed(cls, actual: Any, expected: Any) -> "Outcome":
        return cls(OutcomeStatus.FAILED, actual=actual, expected=expected)

    @classmethod
    def errored(cls, cause: BaseException) -> "Outcome":
        return cls(OutcomeStatus.ERRORED, cause=cause)

    @classmethod
    def unverified(cls, candidate: Any) -> "Outcome":
        return cls(OutcomeStatus.UNVERIFIED, candidate=candidate)

    @property
    def is_failure(self) -> bool:
        return self.status in (OutcomeStatus.FAILED, OutcomeStatus.ERRORED)

    def describe(self) -> str:
        if self.status is OutcomeStatus.FAILED:
            return f"expected {self.expected!r} but was {self.actual!r}"
        if self.status is OutcomeStatus.ERRORED:
            return f"{type(self.cause).__name__}: {self.cause}"
        if self.status is OutcomeStatus.UNVERIFIED:
            return f"unverified answer: {self.candidate!r}"
        return "passed"


@dataclass(frozen=True)
class NodeResult:
    """One reported outcome, tied to the node that produced it."""

    unique_id: str
    display_name: str
    kind: str
    outcome: Outcome
    source: SourceLocation | None = None
    elapsed_seconds: float = 0.0


@dataclass
class RunSummary:
    """Counts over a finished run. Unit failures are counted separately from leaves."""

    total_leaves: int = 0
    passed: int = 0
    failed: int = 0
    errored: int = 0
    unverified: int = 0
    unit_failures: int = 0
    elapsed_seconds: float = 0.0
    failed_ids: list[str] = field(default_factory=list)

    @property
    def successful(self) -> bool:
        return self.failed == 0 and self.errored == 0 and self.unit_failures == 0
