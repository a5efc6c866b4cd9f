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
"""Attribute resolver — turns the marker on a class into a declaration."""

from __future__ import annotations

import inspect

from servicescan.container.exceptions import DuplicateDeclarationError
from servicescan.container.lifecycle import class_initializer, has_initializers
from servicescan.container.markers import (
    CONDITION_MEMBER_ATTR,
    declared_conditions,
    declared_markers,
    has_member_mark,
)
from servicescan.container.registry import (
    ConditionPredicate,
    RegistrationDeclaration,
    ServiceMarker,
)
from servicescan.container.types import DeclarationSource, PredicateKind


def resolve_declaration(cls: type) -> RegistrationDeclaration | None:
    """Return the registration declaration of *cls*, or None if it has none.

    Raises:
        DuplicateDeclarationError: *cls* carries more than one marker.
    """
    markers = declared_markers(cls)
    if not markers:
        return None
    if len(markers) > 1:
        raise DuplicateDeclarationError(cls, markers)
    return _to_declaration(cls, markers[0])


def _to_declaration(cls: type, marker: ServiceMarker) -> RegistrationDeclaration:
    service_type = marker.service_type if marker.service_type is not None else cls
    implementation_type = marker.implementation_type if marker.implementation_type is not None else cls

    if marker.source is DeclarationSource.NAMED:
        conditions = _named_conditions(cls, marker)
    else:
        conditions = _marked_conditions(cls) + _class_conditions(cls)

    return RegistrationDeclaration(
        decorated_type=cls,
        lifetime=marker.lifetime,
        service_type=service_type,
        implementation_type=implementation_type,
        source=marker.source,
        conditions=conditions,
        initializers=(class_initializer(cls),) if has_initializers(cls) else (),
    )


def _named_conditions(cls: type, marker: ServiceMarker) -> tuple[ConditionPredicate, ...]:
    conditions: list[ConditionPredicate] = []
    if marker.condition_method:
        conditions.append(ConditionPredicate(marker.condition_method, PredicateKind.METHOD, cls))
    if marker.condition_property:
        conditions.append(ConditionPredicate(marker.condition_property, PredicateKind.PROPERTY, cls))
    return tuple(conditions)


def _marked_conditions(cls: type) -> tuple[ConditionPredicate, ...]:
    """Collect ``@condition`` members of *cls* and its bases.

    The class's own members come first, in definition order; a name
    overridden in a subclass shadows the base member.
    """
    conditions: list[ConditionPredicate] = []
    seen: set[str] = set()
    for klass in inspect.getmro(cls):
        if klass is object:
            continue
        for name, member in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            if has_member_mark(member, CONDITION_MEMBER_ATTR):
                conditions.append(ConditionPredicate(name, PredicateKind.MARKED, cls, member))
    return tuple(conditions)


def _class_conditions(cls: type) -> tuple[ConditionPredicate, ...]:
    return tuple(
        ConditionPredicate(name, PredicateKind.CALLABLE, cls, check)
        for name, check in declared_conditions(cls)
    )
