# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Type scanner — enumerates the candidate classes of a scan unit.

A scan unit is a module object, a dotted module name, or any iterable of
classes. No marker filtering happens here; every class of the unit is a
candidate.
"""

from __future__ import annotations

import importlib
import inspect
import pkgutil
import types
from collections.abc import Iterable, Iterator
from typing import Union

import structlog

ScanUnit = Union[types.ModuleType, str, Iterable[type]]

logger = structlog.get_logger("servicescan.container.scanner")


def scan_module_classes(module: types.ModuleType) -> list[type]:
    """Return the classes defined in *module*, in definition order.

    Each class is followed by the classes nested in its body. Classes
    imported into the module from elsewhere are skipped, and a class bound
    to several names is returned once.
    """
    classes: list[type] = []
    seen: set[type] = set()
    for obj in vars(module).values():
        if inspect.isclass(obj) and obj.__module__ == module.__name__:
            _collect(obj, classes, seen)
    return classes


def _collect(cls: type, classes: list[type], seen: set[type]) -> None:
    if cls in seen:
        return
    seen.add(cls)
    classes.append(cls)
    for name, member in vars(cls).items():
        if inspect.isclass(member) and member.__qualname__ == f"{cls.__qualname__}.{name}":
            _collect(member, classes, seen)


def scan_unit(unit: ScanUnit) -> list[type]:
    """Return the ordered candidate classes of *unit*."""
    if isinstance(unit, types.ModuleType):
        return scan_module_classes(unit)
    if isinstance(unit, str):
        return scan_module_classes(importlib.import_module(unit))

    classes: list[type] = []
    seen: set[type] = set()
    for obj in unit:
        if not inspect.isclass(obj):
            raise TypeError(f"Scan units may only contain classes, got {obj!r}")
        if obj not in seen:
            seen.add(obj)
            classes.append(obj)
    return classes


def iter_package_modules(package_name: str) -> Iterator[types.ModuleType]:
    """Import a package and yield it followed by every submodule.

    Submodules that fail to import are logged and skipped.

    Args:
        package_name: Dotted package name to scan (e.g. "myapp.services").
    """
    module = importlib.import_module(package_name)
    yield module

    if hasattr(module, "__path__"):
        for _importer, modname, _ispkg in pkgutil.walk_packages(module.__path__, prefix=module.__name__ + "."):
            try:
                yield importlib.import_module(modname)
            except ImportError as exc:
                logger.warning("submodule_import_failed", module=modname, error=str(exc))
                continue


def scan_package(package_name: str) -> list[type]:
    """Return the candidate classes of a package and all its submodules."""
    classes: list[type] = []
    for module in iter_package_modules(package_name):
        classes.extend(scan_module_classes(module))
    return classes
