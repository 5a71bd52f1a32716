# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Source location capture for DSL declarations.

Every declaration (format, problem, test, solution, answer) records where
the user wrote it, so reports and IDEs can point back at the line. We walk
the live call stack, skip every frame that belongs to the DSL itself, and
take the first frame above it.

Frames are skipped by module membership instead of by a fixed depth, so
helper methods inside the DSL can call each other freely without shifting
the result.

The addressing is file-granular and derived from the module name, not the
absolute path on disk, so an unchanged day produces the same locator on
every run and on every machine:

    advent.nineteen.day1  ->  SourceLocation("advent", "advent/nineteen/day1.py", 12)
"""

import inspect
from pathlib import Path
from types import FrameType

from advent.engine.errors import FatalConfigurationError
from advent.engine.models import SourceLocation

# Frames from these modules are DSL plumbing, never declaration sites.
_DSL_MODULES: frozenset[str] = frozenset({"advent.engine.dsl", __name__})


def _module_of(frame: FrameType) -> str:
    return str(frame.f_globals.get("__name__", ""))


def _locate(module: str, path: Path, line: int) -> SourceLocation:
    if not module or module == "__main__":
        return SourceLocation(root="__main__", file=path.name, line=line)

    relative = module.replace(".", "/")
    if path.stem == "__init__":
        relative = f"{relative}/__init__"

    return SourceLocation(
        root=module.split(".")[0],
        file=relative + (path.suffix or ".py"),
        line=line,
    )


def _location_for(frame: FrameType) -> SourceLocation:
    return _locate(_module_of(frame), Path(frame.f_code.co_filename), frame.f_lineno)


def class_location(cls: type) -> SourceLocation:
    """Location of a class statement; line 0 when the source isn't available."""
    try:
        path = Path(inspect.getsourcefile(cls) or "")
        line = inspect.getsourcelines(cls)[1]
    except (OSError, TypeError):
        path, line = Path(""), 0
    return _locate(cls.__module__, path, line)


def capture_location() -> SourceLocation:
    """
    Return the location of the user code that invoked the current DSL method.

    Raises:
        FatalConfigurationError: If not called from inside a DSL method, or if
            the stack has nothing above the DSL frames.
    """
    frame = inspect.currentframe()
    try:
        caller = frame.f_back if frame is not None else None
        if caller is None or _module_of(caller) not in _DSL_MODULES:
            raise FatalConfigurationError(
                "capture_location() must be called from a DSL declaration method"
            )

        declaration = caller
        while declaration is not None and _module_of(declaration) in _DSL_MODULES:
            declaration = declaration.f_back

        if declaration is None:
            raise FatalConfigurationError(
                "No declaration site found above the DSL frames"
            )

        return _location_for(declaration)
    finally:
        # Frames hold references to their locals; drop ours promptly.
        del frame
