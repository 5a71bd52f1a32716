# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
The Day base class: one per puzzle day.

A concrete day sets its ``number`` and implements ``configure``:

    class Day1(Day):
        number = 1

        def configure(self, day: DayBuilder) -> None:
            day.format(...)
            with day.problem(1) as problem:
                ...

Constructing a day runs ``configure`` once and keeps the frozen snapshot.
``get_descriptors`` turns that snapshot into the day's subtree:

    Day #1
    ├── Problem #1
    │   ├── Test #1 ... Test #k    (examples, declaration order)
    │   └── Solution               (production input)
    └── Problem #2
        └── ...

Every subclass registers itself when its class statement runs, so discovery
never has to scan for subclasses; it reads the registry.
"""

import io
from abc import ABC, abstractmethod
from functools import partial
from typing import Any, ClassVar

from advent.engine.descriptors import Descriptor, UniqueId
from advent.engine.dsl import DayBuilder
from advent.engine.errors import AssertionMismatch, ConfigurationError, UnverifiedAnswer
from advent.engine.location import class_location
from advent.engine.models import (
    NO_ANSWER,
    ExampleCheck,
    Formatter,
    Input,
    ProblemDeclaration,
    Solution,
    UnitConfiguration,
)
from advent.engine.resources import ResourceProvider
from advent.logging.logger import get_logger

logger = get_logger(__name__)

# Every Day subclass in definition order; abstract ones are filtered on read.
_REGISTRY: list[type["Day"]] = []


class Day(ABC):
    number: ClassVar[int]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        _REGISTRY.append(cls)

    def __init__(self) -> None:
        number = getattr(type(self), "number", None)
        if not isinstance(number, int) or isinstance(number, bool):
            raise ConfigurationError(
                f"{type(self).__qualname__} must set an integer `number` class attribute"
            )

        builder = DayBuilder()
        self.configure(builder)
        self._configuration = builder.build()

    @abstractmethod
    def configure(self, day: DayBuilder) -> None:
        """Declare the formatter and problems for this day."""

    @property
    def configuration(self) -> UnitConfiguration:
        return self._configuration

    def get_descriptors(self, parent_id: UniqueId, resources: ResourceProvider) -> Descriptor:
        """
        Build this day's descriptor subtree under ``parent_id``.

        Raises:
            ConfigurationError: No formatter was set, or no problem was declared.
        """
        formatter = self._configuration.formatter
        problems = self._configuration.problems

        if formatter is None:
            raise ConfigurationError("`formatter` must be specified in day DSL!")
        if not problems:
            raise ConfigurationError("At least one `problem` must be specified in day DSL!")

        day_id = parent_id.append("day", self.number)
        return Descriptor.unit(
            day_id,
            f"Day #{self.number}",
            class_location(type(self)),
            tuple(
                self._problem_descriptor(day_id, problem, formatter, resources)
                for problem in problems
            ),
        )

    def _problem_descriptor(
        self,
        day_id: UniqueId,
        problem: ProblemDeclaration,
        formatter: Formatter,
        resources: ResourceProvider,
    ) -> Descriptor:
        problem_id = day_id.append("problem", problem.number)

        leaves = [
            Descriptor.leaf(
                problem_id.append("test", index),
                f"Test #{index}",
                check.location,
                partial(run_example, formatter, problem.solution, check),
            )
            for index, check in enumerate(problem.tests, start=1)
        ]
        leaves.append(
            Descriptor.leaf(
                problem_id.append("solution", 0),
                "Solution",
                problem.solution_location,
                partial(
                    run_solution,
                    self.number,
                    formatter,
                    problem.solution,
                    problem.answer,
                    resources,
                ),
            )
        )

        return Descriptor.problem(
            problem_id, f"Problem #{problem.number}", problem.location, tuple(leaves)
        )


def run_example(formatter: Formatter, solution: Solution, check: ExampleCheck) -> None:
    """Body of an example leaf."""
    # The solution runs while the stream is open: formatters may be lazy.
    with io.StringIO(check.raw_input) as stream:
        result = solution(Input(formatter(stream), testing=True))

    logger.debug(
        "Example computed",
        extra={"input": check.raw_input, "expected": check.expected, "result": result},
    )

    if result != check.expected:
        raise AssertionMismatch(result, check.expected)


def run_solution(
    number: int,
    formatter: Formatter,
    solution: Solution,
    answer: Any,
    resources: ResourceProvider,
) -> None:
    """Body of a production leaf."""
    with resources.open_input(number) as stream:
        result = solution(Input(formatter(stream), testing=False))

    if answer is NO_ANSWER:
        raise UnverifiedAnswer(result)
    if result != answer:
        raise AssertionMismatch(result, answer)


def is_day_class(candidate: object) -> bool:
    """True for concrete Day subclasses, False for Day itself and anything else."""
    return (
        isinstance(candidate, type)
        and issubclass(candidate, Day)
        and candidate is not Day
        and not getattr(candidate, "__abstractmethods__", None)
    )


def registered_days() -> list[type[Day]]:
    """Concrete days defined so far, in definition order."""
    return [cls for cls in _REGISTRY if is_day_class(cls)]
