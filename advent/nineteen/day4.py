# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Day 4: counting passwords in a range."""

from itertools import groupby
from typing import Callable, TextIO

from advent.engine.day import Day
from advent.engine.dsl import DayBuilder


def parse_range(stream: TextIO) -> tuple[int, int]:
    parts = stream.readline().strip().split("-")
    if len(parts) != 2:
        raise ValueError(f"Expected a range like 111110-111112, got {'-'.join(parts)!r}")
    return int(parts[0]), int(parts[1])


def matches_format(number: int, accepts_group: Callable[[int], bool]) -> bool:
    """
    Six digits, never decreasing, and at least one run of equal digits whose
    length ``accepts_group`` likes.
    """
    digits = str(abs(number))
    if number == 0 or len(digits) != 6:
        return False
    if any(left > right for left, right in zip(digits, digits[1:])):
        return False
    # Digits never decrease, so equal digits are always adjacent.
    return any(accepts_group(len(list(run))) for _, run in groupby(digits))


def count_matching(bounds: tuple[int, int], accepts_group: Callable[[int], bool]) -> int:
    low, high = bounds
    return sum(1 for number in range(low, high + 1) if matches_format(number, accepts_group))


class Day4(Day):
    number = 4

    def configure(self, day: DayBuilder) -> None:
        day.format(parse_range)

        with day.problem(1) as problem:
            problem.test("111110-111112", 2)

            problem.solution(lambda puzzle: count_matching(puzzle.value, lambda size: size >= 2))

        with day.problem(2) as problem:
            problem.test("111110-111112", 0)

            problem.solution(lambda puzzle: count_matching(puzzle.value, lambda size: size == 2))
