# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Error taxonomy for the advent engine.

Declaration-time problems (ConfigurationError, DiscoveryError) are raised
early and scoped to the smallest unit of work. Everything a leaf raises at
run time is caught at the leaf boundary and turned into an Outcome by the
executor, so none of these ever unwind past the engine.
"""


class AdventError(Exception):
    """Base for all engine errors."""


class ConfigurationError(AdventError):
    """
    A day broke the declaration contract: no formatter, zero problems,
    or a problem without a solution. Fatal to that day's subtree only.
    """


class FatalConfigurationError(ConfigurationError):
    """Location capture was invoked from outside the DSL (engine misuse)."""


class DiscoveryError(AdventError):
    """Unknown selector kind, or a type claimed as a day that isn't one."""


class ResourceNotFound(AdventError):
    """The production input for a day could not be opened."""

    def __init__(self, number: int, location: str) -> None:
        super().__init__(f"Input file not found for day {number}: {location}")
        self.number = number
        self.location = location


class AssertionMismatch(AssertionError):
    """A computed value differs from the expected one."""

    def __init__(self, actual: object, expected: object) -> None:
        super().__init__(f"Expected {expected!r} but was {actual!r}")
        self.actual = actual
        self.expected = expected


class UnverifiedAnswer(AssertionError):
    """
    The production check computed a value but no answer was recorded.

    Not a failure of the run. It carries the candidate so a human can check
    it and record it with ``answer(...)``.
    """

    def __init__(self, candidate: object) -> None:
        super().__init__(
            "No answer supplied. Try this possible answer and record it "
            f"if it works: {candidate!r}"
        )
        self.candidate = candidate
