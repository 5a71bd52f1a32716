# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
The declaration DSL a day uses to describe itself.

A day gets a DayBuilder, sets its input formatter, and opens one problem
scope per problem:

    def configure(self, day: DayBuilder) -> None:
        day.format(lambda stream: [int(line) for line in stream])

        with day.problem(1) as problem:
            problem.test("12", 2)
            problem.solution(lambda i: sum(i.value))
            problem.answer(3262358)

Each scope is its own ProblemBuilder. When the ``with`` block closes, the
builder is frozen into a ProblemDeclaration and handed back to the day.
Nothing is shared between scopes, and nothing is mutated after it's built.
Every declaration records its source location on the way in.
"""

from types import TracebackType
from typing import Any

from advent.engine.errors import ConfigurationError
from advent.engine.location import capture_location
from advent.engine.models import (
    NO_ANSWER,
    ExampleCheck,
    Formatter,
    ProblemDeclaration,
    Solution,
    SourceLocation,
    UnitConfiguration,
)


class ProblemBuilder:
    """Collects the examples, solution and optional answer for one problem."""

    def __init__(self, number: int, location: SourceLocation, parent: "DayBuilder") -> None:
        self._number = number
        self._location = location
        self._parent = parent
        self._tests: list[ExampleCheck] = []
        self._solution: Solution | None = None
        self._solution_location: SourceLocation | None = None
        self._answer: Any = NO_ANSWER
        self._closed = False

    @property
    def number(self) -> int:
        return self._number

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise ConfigurationError(
                f"Problem #{self._number} is already closed; declare inside its `with` block"
            )

    def test(self, raw_input: str, expected: Any) -> None:
        """Add an example check: ``raw_input`` formatted and solved should equal ``expected``."""
        self._check_open()
        self._tests.append(ExampleCheck(raw_input, expected, capture_location()))

    def solution(self, solution: Solution) -> None:
        """Set the solution. Required; a second call replaces the first."""
        self._check_open()
        self._solution = solution
        self._solution_location = capture_location()

    def answer(self, answer: Any) -> None:
        """Record the known-good production answer."""
        self._check_open()
        self._answer = answer

    def build(self) -> ProblemDeclaration:
        if self._solution is None or self._solution_location is None:
            raise ConfigurationError(
                f"solution required: `solution` must be provided for problem #{self._number}"
            )
        return ProblemDeclaration(
            number=self._number,
            tests=tuple(self._tests),
            solution=self._solution,
            location=self._location,
            solution_location=self._solution_location,
            answer=self._answer,
        )

    def __enter__(self) -> "ProblemBuilder":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._closed = True
        # A failing body propagates as-is; only clean scopes get recorded.
        if exc_type is None:
            self._parent._add_problem(self.build())


class DayBuilder:
    """Collects a day's formatter and problems, then snapshots them."""

    def __init__(self) -> None:
        self._formatter: Formatter | None = None
        self._problems: list[ProblemDeclaration] = []
        self._scopes: list[ProblemBuilder] = []

    def format(self, formatter: Formatter) -> None:
        """Set the formatter shared by every check. Last call wins."""
        self._formatter = formatter

    def problem(self, number: int) -> ProblemBuilder:
        """Open a problem scope; use the result as a context manager."""
        scope = ProblemBuilder(number, capture_location(), self)
        self._scopes.append(scope)
        return scope

    def _add_problem(self, problem: ProblemDeclaration) -> None:
        self._problems.append(problem)

    def build(self) -> UnitConfiguration:
        """
        Snapshot the day.

        Raises:
            ConfigurationError: A problem was opened but never closed, i.e.
                ``day.problem(N)`` was called outside a ``with`` statement.
        """
        for scope in self._scopes:
            if not scope.closed:
                raise ConfigurationError(
                    f"problem #{scope.number} was never closed; "
                    f"declare it with `with day.problem({scope.number})`"
                )
        return UnitConfiguration(formatter=self._formatter, problems=tuple(self._problems))
