# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
The descriptor tree handed to a host runner.

There is one node type, tagged by NodeKind:

    ROOT     "All Days"       children: one UNIT per discovered day
    UNIT     "Day #N"         children: PROBLEM nodes, or none plus `error`
    PROBLEM  "Problem #N"     children: example LEAFs, then the solution LEAF
    LEAF     "Test #i" / "Solution"   body: zero-argument callable

Each node only carries the fields its kind needs. Nodes are built once during
discovery and never modified; the executor dispatches on ``kind`` alone.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator

from advent.engine.models import SourceLocation

ENGINE_ID = "advent"


class NodeKind(str, Enum):
    ROOT = "root"
    UNIT = "unit"
    PROBLEM = "problem"
    LEAF = "leaf"


@dataclass(frozen=True)
class UniqueId:
    """
    Path of (kind, key) segments from the engine root down to a node.

    Rendered the same way JUnit-style runners do:
        [engine:advent]/[day:1]/[problem:2]/[test:3]
    """

    segments: tuple[tuple[str, str], ...]

    @classmethod
    def for_engine(cls, engine_id: str = ENGINE_ID) -> "UniqueId":
        return cls((("engine", engine_id),))

    def append(self, kind: str, key: object) -> "UniqueId":
        return UniqueId(self.segments + ((kind, str(key)),))

    @property
    def last(self) -> tuple[str, str]:
        return self.segments[-1]

    def __str__(self) -> str:
        return "/".join(f"[{kind}:{key}]" for kind, key in self.segments)


@dataclass(frozen=True)
class Descriptor:
    kind: NodeKind
    unique_id: UniqueId
    display_name: str
    source: SourceLocation | None = None
    children: tuple["Descriptor", ...] = ()
    body: Callable[[], None] | None = field(default=None, compare=False, repr=False)
    error: BaseException | None = field(default=None, compare=False)

    @classmethod
    def root(cls, unique_id: UniqueId, children: tuple["Descriptor", ...]) -> "Descriptor":
        return cls(NodeKind.ROOT, unique_id, "All Days", children=children)

    @classmethod
    def unit(
        cls,
        unique_id: UniqueId,
        display_name: str,
        source: SourceLocation | None,
        children: tuple["Descriptor", ...],
    ) -> "Descriptor":
        return cls(NodeKind.UNIT, unique_id, display_name, source, children)

    @classmethod
    def failed_unit(
        cls,
        unique_id: UniqueId,
        display_name: str,
        source: SourceLocation | None,
        error: BaseException,
    ) -> "Descriptor":
        """A day whose subtree could not be built."""
        return cls(NodeKind.UNIT, unique_id, display_name, source, error=error)

    @classmethod
    def problem(
        cls,
        unique_id: UniqueId,
        display_name: str,
        source: SourceLocation,
        children: tuple["Descriptor", ...],
    ) -> "Descriptor":
        return cls(NodeKind.PROBLEM, unique_id, display_name, source, children)

    @classmethod
    def leaf(
        cls,
        unique_id: UniqueId,
        display_name: str,
        source: SourceLocation,
        body: Callable[[], None],
    ) -> "Descriptor":
        return cls(NodeKind.LEAF, unique_id, display_name, source, body=body)

    @property
    def is_container(self) -> bool:
        return self.kind is not NodeKind.LEAF

    def walk(self) -> Iterator["Descriptor"]:
        """Depth-first, pre-order, in declaration order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def leaves(self) -> list["Descriptor"]:
        return [node for node in self.walk() if node.kind is NodeKind.LEAF]

    def find(self, unique_id: str) -> "Descriptor | None":
        for node in self.walk():
            if str(node.unique_id) == unique_id:
                return node
        return None
