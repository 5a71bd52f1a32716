# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Day 3: crossed wires on a Manhattan grid."""

from typing import Iterator, TextIO

from advent.engine.day import Day
from advent.engine.dsl import DayBuilder

Coordinate = tuple[int, int]
Wires = tuple[list[str], list[str]]

STEPS: dict[str, Coordinate] = {
    "U": (1, 0),
    "D": (-1, 0),
    "R": (0, 1),
    "L": (0, -1),
}


def parse_wires(stream: TextIO) -> Wires:
    lines = [line.strip() for line in stream if line.strip()]
    if len(lines) != 2:
        raise ValueError(f"Malformed input, expected 2 lines but got: {len(lines)}")
    return lines[0].split(","), lines[1].split(",")


def trace_wire(instructions: list[str]) -> Iterator[Coordinate]:
    """Every grid point the wire visits, in order, excluding the origin."""
    row, column = 0, 0
    for instruction in instructions:
        direction, distance = instruction[0], int(instruction[1:])
        if direction not in STEPS:
            raise ValueError(f"Invalid direction: {direction}")
        d_row, d_column = STEPS[direction]
        for _ in range(distance):
            row, column = row + d_row, column + d_column
            yield row, column


def steps_to(instructions: list[str], target: Coordinate) -> int:
    for index, coordinate in enumerate(trace_wire(instructions), start=1):
        if coordinate == target:
            return index
    raise ValueError(f"Wire never reaches {target}")


def find_intersections(first: list[str], second: list[str]) -> list[Coordinate]:
    visited = set(trace_wire(first))
    return [coordinate for coordinate in trace_wire(second) if coordinate in visited]


def closest_intersection(first: list[str], second: list[str]) -> int:
    intersections = find_intersections(first, second)
    if not intersections:
        raise ValueError("No intersections found!")
    return min(abs(row) + abs(column) for row, column in intersections)


def fewest_combined_steps(first: list[str], second: list[str]) -> int:
    return min(
        steps_to(first, point) + steps_to(second, point)
        for point in find_intersections(first, second)
    )


FIRST_EXAMPLE = "R75,D30,R83,U83,L12,D49,R71,U7,L72\nU62,R66,U55,R34,D71,R55,D58,R83"
SECOND_EXAMPLE = "R98,U47,R26,D63,R33,U87,L62,D20,R33,U53,R51\nU98,R91,D20,R16,D67,R40,U7,R15,U6,R7"


class Day3(Day):
    number = 3

    def configure(self, day: DayBuilder) -> None:
        day.format(parse_wires)

        with day.problem(1) as problem:
            problem.test(FIRST_EXAMPLE, 159)
            problem.test(SECOND_EXAMPLE, 135)

            problem.solution(lambda puzzle: closest_intersection(*puzzle.value))
            problem.answer(2427)

        with day.problem(2) as problem:
            problem.test(FIRST_EXAMPLE, 610)
            problem.test(SECOND_EXAMPLE, 410)

            problem.solution(lambda puzzle: fewest_combined_steps(*puzzle.value))
            problem.answer(27890)
