# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
advent engine: discovery and execution for day/problem puzzle checks.

A day declares a formatter and numbered problems; each problem has inline
example checks and one production check against the real input. The engine
turns every day into a tree of independently reported nodes.

Subsystems:
  - dsl / location: declaring days, with source locations for reports
  - day: the Day base class and its self-registration
  - discovery: selectors -> descriptor tree
  - executor: running the tree, one outcome per leaf
  - resources: where production input comes from
"""

from advent.engine.day import Day, is_day_class, registered_days
from advent.engine.descriptors import ENGINE_ID, Descriptor, NodeKind, UniqueId
from advent.engine.discovery import (
    ClassSelector,
    PackageSelector,
    discover,
    parse_selector,
)
from advent.engine.dsl import DayBuilder, ProblemBuilder
from advent.engine.errors import (
    AdventError,
    AssertionMismatch,
    ConfigurationError,
    DiscoveryError,
    FatalConfigurationError,
    ResourceNotFound,
    UnverifiedAnswer,
)
from advent.engine.executor import (
    ExecutionContext,
    ExecutionEngine,
    ExecutionReport,
    FailureCollector,
)
from advent.engine.models import Input, Outcome, OutcomeStatus, SourceLocation
from advent.engine.resources import DirectoryResourceProvider, ResourceProvider

__all__ = [
    "ENGINE_ID",
    "AdventError",
    "AssertionMismatch",
    "ClassSelector",
    "ConfigurationError",
    "Day",
    "DayBuilder",
    "Descriptor",
    "DirectoryResourceProvider",
    "DiscoveryError",
    "ExecutionContext",
    "ExecutionEngine",
    "ExecutionReport",
    "FailureCollector",
    "FatalConfigurationError",
    "Input",
    "NodeKind",
    "Outcome",
    "OutcomeStatus",
    "PackageSelector",
    "ProblemBuilder",
    "ResourceNotFound",
    "ResourceProvider",
    "SourceLocation",
    "UniqueId",
    "UnverifiedAnswer",
    "discover",
    "is_day_class",
    "parse_selector",
    "registered_days",
]
