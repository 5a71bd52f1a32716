# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
pytest integration: run days as ordinary pytest items.

Enable it with ``-p advent.pytest_plugin`` (or ``pytest_plugins`` in a
conftest). Any concrete Day subclass visible in a collected test module is
turned into collectors and items built from the same descriptor tree the
engine uses:

    test_2019.py::Day1::problem1::test1
    test_2019.py::Day1::problem1::solution

Mapping of outcomes:
  - AssertionMismatch   -> failed item, with both values in the report
  - UnverifiedAnswer    -> xfail, the candidate answer in the reason
  - anything else       -> failed item with the original traceback
  - a day that can't be built -> collection error for that day only

pytest runs items one after another, so days are not parallelised here;
use the ``advent run`` command for that.
"""

from pathlib import Path
from typing import Any, Callable, Iterator

import pytest

from advent.engine.day import is_day_class
from advent.engine.descriptors import ENGINE_ID, Descriptor, UniqueId
from advent.engine.discovery import materialize_day
from advent.engine.errors import AssertionMismatch, UnverifiedAnswer
from advent.engine.resources import DirectoryResourceProvider


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("advent")
    group.addoption(
        "--advent-input-root",
        dest="advent_input_root",
        default=None,
        help="Directory containing input/day{N}.txt files (default: rootdir).",
    )
    parser.addini(
        "advent_input_root",
        help="Directory containing input/day{N}.txt files, relative to rootdir.",
        default=".",
    )


def _input_root(config: pytest.Config) -> Path:
    option = config.getoption("advent_input_root")
    if option is not None:
        return Path(option)
    return config.rootpath / str(config.getini("advent_input_root"))


def _leaf_body(descriptor: Descriptor) -> Callable[[], None]:
    if descriptor.body is None:
        raise RuntimeError(f"Leaf {descriptor.unique_id} has no body")
    return descriptor.body


def _node_name(descriptor: Descriptor) -> str:
    kind, key = descriptor.unique_id.last
    return kind if kind == "solution" else f"{kind}{key}"


def pytest_pycollect_makeitem(
    collector: pytest.Collector, name: str, obj: object
) -> "DayCollector | None":
    if is_day_class(obj):
        return DayCollector.from_parent(collector, name=name, day_class=obj)
    return None


class DayCollector(pytest.Collector):
    def __init__(self, *, day_class: type, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.day_class = day_class

    def collect(self) -> Iterator["ProblemCollector"]:
        resources = DirectoryResourceProvider(_input_root(self.config))
        day = materialize_day(self.day_class, UniqueId.for_engine(ENGINE_ID), resources)
        if day.error is not None:
            raise day.error
        for problem in day.children:
            yield ProblemCollector.from_parent(
                self, name=_node_name(problem), descriptor=problem
            )


class ProblemCollector(pytest.Collector):
    def __init__(self, *, descriptor: Descriptor, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.descriptor = descriptor

    def collect(self) -> Iterator["LeafItem"]:
        for leaf in self.descriptor.children:
            yield LeafItem.from_parent(self, name=_node_name(leaf), descriptor=leaf)


class LeafItem(pytest.Item):
    def __init__(self, *, descriptor: Descriptor, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.descriptor = descriptor

    def runtest(self) -> None:
        body = _leaf_body(self.descriptor)
        try:
            body()
        except UnverifiedAnswer as err:
            pytest.xfail(str(err))

    def repr_failure(self, excinfo: pytest.ExceptionInfo[BaseException]) -> Any:  # type: ignore[override]
        if isinstance(excinfo.value, AssertionMismatch):
            return (
                f"{self.descriptor.display_name} at {self.descriptor.source}\n"
                f"  expected: {excinfo.value.expected!r}\n"
                f"  actual:   {excinfo.value.actual!r}"
            )
        return super().repr_failure(excinfo)

    def reportinfo(self) -> tuple[Path, int | None, str]:
        source = self.descriptor.source
        label = f"{self.descriptor.unique_id}"
        if source is not None:
            label = f"{label} ({source})"
        return self.path, None, label
