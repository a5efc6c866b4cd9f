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
"""Service registration metadata."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

from servicescan.container.types import DeclarationSource, Lifetime, PredicateKind


@dataclass(frozen=True)
class ServiceMarker:
    """Raw declaration attached to a class by a lifetime decorator."""

    name: str
    lifetime: Lifetime
    source: DeclarationSource
    service_type: Any = None
    implementation_type: type | None = None
    condition_method: str | None = None
    condition_property: str | None = None


@dataclass(frozen=True)
class ConditionPredicate:
    """A gating check attached to a declaration.

    Named references (``METHOD`` / ``PROPERTY``) carry only the member name;
    the member is looked up on ``owner`` when the predicate is evaluated.
    """

    name: str
    kind: PredicateKind
    owner: type
    target: Any = field(default=None, repr=False, compare=False)


@dataclass(frozen=True)
class RegistrationDeclaration:
    """The resolved registration intent of one class."""

    decorated_type: type
    lifetime: Lifetime
    service_type: Any
    implementation_type: Any
    source: DeclarationSource = DeclarationSource.MARKER
    conditions: tuple[ConditionPredicate, ...] = ()
    initializers: tuple[Callable[[], Any], ...] = field(default=(), repr=False, compare=False)

    @property
    def is_abstracted(self) -> bool:
        return self.service_type is not self.implementation_type

    @property
    def is_conditional(self) -> bool:
        return bool(self.conditions)


@dataclass(frozen=True)
class RegistrationDescriptor:
    """Final ``(service_type, implementation_type, lifetime)`` triple."""

    service_type: Any
    implementation_type: type
    lifetime: Lifetime

    def __iter__(self) -> Iterator[Any]:
        yield self.service_type
        yield self.implementation_type
        yield self.lifetime
