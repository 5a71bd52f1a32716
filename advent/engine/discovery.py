# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Discovery: selectors in, descriptor tree out.

Two selector kinds are understood:
  - ClassSelector    one explicit Day subclass
  - PackageSelector  a package (or module) to scan; every concrete Day
                     defined anywhere under it is picked up

Scanning imports the package tree and then reads the Day registry, which
every subclass joins when its class statement runs. No subclass
introspection across the interpreter is needed.

Each resolved day is instantiated and asked for its subtree. A day that
breaks its declaration contract becomes a failed UNIT node carrying the
error; the other days are unaffected. Selector problems, on the other
hand, fail the whole request with DiscoveryError.
"""

import importlib
import pkgutil
from dataclasses import dataclass
from typing import Iterable, Union

from advent.engine.day import Day, is_day_class, registered_days
from advent.engine.descriptors import ENGINE_ID, Descriptor, UniqueId
from advent.engine.errors import ConfigurationError, DiscoveryError
from advent.engine.location import class_location
from advent.engine.resources import DirectoryResourceProvider, ResourceProvider
from advent.logging.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ClassSelector:
    day_class: type


@dataclass(frozen=True)
class PackageSelector:
    package: str


Selector = Union[ClassSelector, PackageSelector]


def parse_selector(text: str) -> Selector:
    """
    Turn ``pkg.module:ClassName`` into a ClassSelector and ``pkg`` into a
    PackageSelector.
    """
    if ":" not in text:
        return PackageSelector(text)

    module_name, _, attribute = text.partition(":")
    try:
        module = importlib.import_module(module_name)
    except ImportError as err:
        raise DiscoveryError(f"Cannot import module '{module_name}': {err}") from err

    candidate = getattr(module, attribute, None)
    if candidate is None:
        raise DiscoveryError(f"Module '{module_name}' has no attribute '{attribute}'")
    return ClassSelector(candidate)


def _import_tree(package_name: str) -> None:
    try:
        package = importlib.import_module(package_name)
    except ImportError as err:
        raise DiscoveryError(f"Cannot import scan root '{package_name}': {err}") from err

    search_path = getattr(package, "__path__", None)
    if search_path is None:
        return

    for info in pkgutil.walk_packages(search_path, prefix=f"{package.__name__}."):
        try:
            importlib.import_module(info.name)
        except ImportError as err:
            raise DiscoveryError(f"Cannot import '{info.name}': {err}") from err


def _scan_order(day_class: type[Day]) -> tuple[int, str, str]:
    number = getattr(day_class, "number", None)
    return (
        number if isinstance(number, int) else -1,
        day_class.__module__,
        day_class.__qualname__,
    )


def _under(module: str, package: str) -> bool:
    return module == package or module.startswith(f"{package}.")


def resolve_selector(selector: object) -> list[type[Day]]:
    """Expand one selector into the Day classes it refers to."""
    if isinstance(selector, ClassSelector):
        if not is_day_class(selector.day_class):
            raise DiscoveryError(
                f"{selector.day_class!r} is not a concrete Day subclass"
            )
        return [selector.day_class]

    if isinstance(selector, PackageSelector):
        _import_tree(selector.package)
        found = [cls for cls in registered_days() if _under(cls.__module__, selector.package)]
        return sorted(found, key=_scan_order)

    raise DiscoveryError(f"Unknown selector: {type(selector).__name__}")


def materialize_day(
    day_class: type[Day],
    parent_id: UniqueId,
    resources: ResourceProvider,
) -> Descriptor:
    """
    Instantiate a day and build its subtree.

    Anything that goes wrong here is reported as that day's own failure:
    the returned UNIT node carries a ConfigurationError and has no children.
    """
    try:
        return day_class().get_descriptors(parent_id, resources)
    except Exception as err:
        error = err
        if not isinstance(err, ConfigurationError):
            error = ConfigurationError(f"{day_class.__qualname__} failed to configure: {err}")
            error.__cause__ = err

        number = getattr(day_class, "number", None)
        key = number if isinstance(number, int) else day_class.__qualname__
        logger.error(
            "Day could not be built",
            extra={"day": day_class.__qualname__, "error": str(error)},
        )
        return Descriptor.failed_unit(
            parent_id.append("day", key),
            f"Day #{key}",
            class_location(day_class),
            error,
        )


def discover(
    selectors: Iterable[object],
    resources: ResourceProvider | None = None,
    engine_id: str = ENGINE_ID,
) -> Descriptor:
    """
    Resolve every selector and build the full descriptor tree.

    Days appear under the root in the order they were resolved; a day
    selected twice appears once.

    Raises:
        DiscoveryError: A selector is of an unknown kind, points at something
            that isn't a concrete Day, or its package can't be imported.
    """
    if resources is None:
        resources = DirectoryResourceProvider()

    resolved: dict[type[Day], None] = {}
    for selector in selectors:
        for day_class in resolve_selector(selector):
            resolved.setdefault(day_class, None)

    root_id = UniqueId.for_engine(engine_id)
    children = tuple(materialize_day(cls, root_id, resources) for cls in resolved)

    logger.info(
        "Discovery complete",
        extra={
            "days": len(children),
            "failed_days": sum(1 for child in children if child.error is not None),
            "leaves": sum(len(child.leaves()) for child in children),
        },
    )
    return Descriptor.root(root_id, children)
