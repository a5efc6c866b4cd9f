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
"""RegistryBuilder — explicit, decorator-free service declarations.

A module lists its services with typed calls instead of decorating the
classes::

    builder = RegistryBuilder()
    builder.add_singleton(SmtpMailer, Mailer, conditions=[smtp_configured])
    builder.add_transient(ReportJob, initializer=load_templates)

Entries go through the same validation, condition evaluation and
registration as decorated classes. Each condition is a function taking no
arguments or the external configuration, evaluated in order with AND
semantics. An entry's initializer runs at most once, before its conditions.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Any, TypeVar

from servicescan.container.lifecycle import Once
from servicescan.container.registry import ConditionPredicate, RegistrationDeclaration
from servicescan.container.types import DeclarationSource, Lifetime, PredicateKind

T = TypeVar("T")

Predicate = Callable[..., bool]


class RegistryBuilder:
    """Collects declarations in insertion order."""

    def __init__(self) -> None:
        self._declarations: list[RegistrationDeclaration] = []

    def add(
        self,
        lifetime: Lifetime,
        implementation: type[T],
        service: Any = None,
        *,
        conditions: Iterable[Predicate] = (),
        initializer: Callable[[], Any] | None = None,
    ) -> RegistryBuilder:
        """Declare *implementation* under *service* (itself when omitted)."""
        predicates = tuple(
            ConditionPredicate(
                name=getattr(check, "__qualname__", repr(check)),
                kind=PredicateKind.CALLABLE,
                owner=implementation,
                target=check,
            )
            for check in conditions
        )
        self._declarations.append(
            RegistrationDeclaration(
                decorated_type=implementation,
                lifetime=lifetime,
                service_type=implementation if service is None else service,
                implementation_type=implementation,
                source=DeclarationSource.BUILDER,
                conditions=predicates,
                initializers=(Once(initializer),) if initializer is not None else (),
            )
        )
        return self

    def add_singleton(
        self,
        implementation: type[T],
        service: Any = None,
        *,
        conditions: Iterable[Predicate] = (),
        initializer: Callable[[], Any] | None = None,
    ) -> RegistryBuilder:
        return self.add(
            Lifetime.SINGLETON, implementation, service, conditions=conditions, initializer=initializer
        )

    def add_scoped(
        self,
        implementation: type[T],
        service: Any = None,
        *,
        conditions: Iterable[Predicate] = (),
        initializer: Callable[[], Any] | None = None,
    ) -> RegistryBuilder:
        return self.add(
            Lifetime.SCOPED, implementation, service, conditions=conditions, initializer=initializer
        )

    def add_transient(
        self,
        implementation: type[T],
        service: Any = None,
        *,
        conditions: Iterable[Predicate] = (),
        initializer: Callable[[], Any] | None = None,
    ) -> RegistryBuilder:
        return self.add(
            Lifetime.TRANSIENT, implementation, service, conditions=conditions, initializer=initializer
        )

    def build(self) -> list[RegistrationDeclaration]:
        """Return the declarations in insertion order."""
        return list(self._declarations)

    def __iter__(self) -> Iterator[RegistrationDeclaration]:
        return iter(self.build())

    def __len__(self) -> int:
        return len(self._declarations)
