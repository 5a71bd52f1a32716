# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Production input lookup.

The engine treats puzzle input as an opaque text stream keyed by day
number. Anything that can hand back a fresh readable stream per call can
act as a provider; the engine only relies on ``open_input``.

The stock provider resolves a fixed pattern under a root directory:

    <root>/input/day{number}.txt

Every call opens a new file handle, so concurrent days never share a stream.
The caller owns the handle and closes it.
"""

import os
from pathlib import Path
from typing import Protocol, TextIO

from advent.engine.errors import ResourceNotFound

DEFAULT_INPUT_PATTERN = "input/day{number}.txt"


class ResourceProvider(Protocol):
    def open_input(self, number: int) -> TextIO:
        """Open the production input for day ``number`` or raise ResourceNotFound."""
        ...


class DirectoryResourceProvider:
    """Reads ``pattern.format(number=N)`` relative to ``root``."""

    def __init__(self, root: Path | str = ".", pattern: str = DEFAULT_INPUT_PATTERN) -> None:
        if "{number}" not in pattern:
            raise ValueError(f"Input pattern must contain '{{number}}': {pattern!r}")
        self.root = Path(root)
        self.pattern = pattern

    def path_for(self, number: int) -> Path:
        return self.root / self.pattern.format(number=number)

    def open_input(self, number: int) -> TextIO:
        path = self.path_for(number)
        # Lexical check: the pattern may not climb out of the root, but
        # symlinked directories inside it are followed.
        root = Path(os.path.normpath(self.root.absolute()))
        if not Path(os.path.normpath(path.absolute())).is_relative_to(root):
            raise ResourceNotFound(number, f"{path} (outside input root)")
        if not path.is_file():
            raise ResourceNotFound(number, str(path))
        try:
            return path.open("r", encoding="utf-8")
        except OSError as err:
            raise ResourceNotFound(number, f"{path}: {err}") from err

    def __repr__(self) -> str:
        return f"DirectoryResourceProvider(root={str(self.root)!r}, pattern={self.pattern!r})"
