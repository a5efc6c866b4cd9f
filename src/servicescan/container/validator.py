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
"""Compatibility validator — type-shape checks on a declaration."""

from __future__ import annotations

import dis
import inspect
from typing import Any, Generic, Protocol, get_origin

from servicescan.container.exceptions import ActualTypeMismatchError, ServiceContractUnmetError
from servicescan.container.registry import RegistrationDeclaration

# Attributes every Protocol class carries that are not part of its contract.
_PROTOCOL_INTERNALS = frozenset({
    "__abstractmethods__",
    "__annotate__",
    "__annotate_func__",
    "__annotations__",
    "__annotations_cache__",
    "__dict__",
    "__doc__",
    "__init__",
    "__module__",
    "__non_callable_proto_members__",
    "__parameters__",
    "__protocol_attrs__",
    "__subclasshook__",
    "__weakref__",
    "_abc_impl",
    "_is_protocol",
    "_is_runtime_protocol",
})


def validate_declaration(declaration: RegistrationDeclaration) -> None:
    """Check that *declaration* is self-consistent.

    Raises:
        ActualTypeMismatchError: the implementation type is not the decorated class.
        ServiceContractUnmetError: the implementation does not satisfy the service type.
    """
    if declaration.implementation_type is not declaration.decorated_type:
        raise ActualTypeMismatchError(declaration.decorated_type, declaration.implementation_type)
    if not satisfies_contract(declaration.implementation_type, declaration.service_type):
        raise ServiceContractUnmetError(declaration.decorated_type, declaration.service_type)


def satisfies_contract(implementation: type, service: Any) -> bool:
    """Return True if *implementation* can be handed out as *service*.

    A Protocol is satisfied structurally: its methods must exist on the
    class, its data members on the class or on its instances (annotated
    fields, or attributes assigned in a method).
    """
    origin = get_origin(service)
    if origin is not None:
        service = origin
    if not inspect.isclass(service):
        return False
    if implementation is service:
        return True
    if _is_protocol(service):
        if service in inspect.getmro(implementation):
            return True
        methods, data = _protocol_members(service)
        if not all(hasattr(implementation, name) for name in methods):
            return False
        missing = {name for name in data if not hasattr(implementation, name)}
        return not missing or missing <= _instance_attributes(implementation)
    return issubclass(implementation, service)


def _is_protocol(cls: type) -> bool:
    """Check if a class is a Protocol definition."""
    return bool(getattr(cls, "_is_protocol", False)) and cls is not Protocol  # type: ignore[comparison-overlap]


def _protocol_members(protocol: type) -> tuple[set[str], set[str]]:
    """Split the members of *protocol* into methods and data members."""
    methods: set[str] = set()
    data: set[str] = set()
    for base in inspect.getmro(protocol):
        if base in (object, Protocol, Generic):
            continue
        for name, value in vars(base).items():
            if name in _PROTOCOL_INTERNALS or name.startswith("_abc"):
                continue
            if callable(value) or isinstance(value, (staticmethod, classmethod)):
                methods.add(name)
            elif not _is_dunder(name):
                data.add(name)
        data.update(name for name in inspect.get_annotations(base) if not _is_dunder(name))
    return methods, data - methods


def _instance_attributes(cls: type) -> set[str]:
    """Names the instances of *cls* carry beyond its class attributes."""
    names: set[str] = set()
    for klass in inspect.getmro(cls):
        if klass is object:
            continue
        names.update(inspect.get_annotations(klass))
        names.update(vars(klass).get("__static_attributes__", ()))
        for member in vars(klass).values():
            func = member.fget if isinstance(member, property) else getattr(member, "__func__", member)
            code = getattr(func, "__code__", None)
            if code is not None:
                names.update(ins.argval for ins in dis.get_instructions(code) if ins.opname == "STORE_ATTR")
    return names


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")
