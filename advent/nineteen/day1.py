# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Day 1: fuel requirements for module masses."""

from typing import Iterator, TextIO

from advent.engine.day import Day
from advent.engine.dsl import DayBuilder


def calculate_fuel(mass: int) -> int:
    return mass // 3 - 2


def fuel_for_fuel(mass: int) -> Iterator[int]:
    """Fuel for the mass, then fuel for that fuel, until it stops being positive."""
    fuel = calculate_fuel(mass)
    while fuel > 0:
        yield fuel
        fuel = calculate_fuel(fuel)


def parse_masses(stream: TextIO) -> list[int]:
    return [int(line) for line in stream if line.strip()]


class Day1(Day):
    number = 1

    def configure(self, day: DayBuilder) -> None:
        day.format(parse_masses)

        with day.problem(1) as problem:
            problem.test("12", 2)
            problem.test("14", 2)
            problem.test("1969", 654)
            problem.test("100756", 33583)

            problem.solution(lambda puzzle: sum(calculate_fuel(mass) for mass in puzzle.value))

        with day.problem(2) as problem:
            problem.test("14", 2)
            problem.test("1969", 966)
            problem.test("100756", 50346)

            problem.solution(
                lambda puzzle: sum(sum(fuel_for_fuel(mass)) for mass in puzzle.value)
            )
