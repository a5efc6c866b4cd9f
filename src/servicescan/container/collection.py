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
"""In-memory ContainerAdapter that records descriptors in registration order."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from servicescan.container.registry import RegistrationDescriptor
from servicescan.container.types import Lifetime


class ServiceCollection:
    """Ordered list of registration descriptors.

    Hosts without a container of their own can hand the collection to
    whatever builds their object graph later. The same service type may be
    registered several times; lookups return the last registration.
    """

    def __init__(self) -> None:
        self._descriptors: list[RegistrationDescriptor] = []

    def add_singleton(self, service_type: Any, implementation_type: type) -> ServiceCollection:
        return self._add(service_type, implementation_type, Lifetime.SINGLETON)

    def add_scoped(self, service_type: Any, implementation_type: type) -> ServiceCollection:
        return self._add(service_type, implementation_type, Lifetime.SCOPED)

    def add_transient(self, service_type: Any, implementation_type: type) -> ServiceCollection:
        return self._add(service_type, implementation_type, Lifetime.TRANSIENT)

    def _add(self, service_type: Any, implementation_type: type, lifetime: Lifetime) -> ServiceCollection:
        self._descriptors.append(RegistrationDescriptor(service_type, implementation_type, lifetime))
        return self

    @property
    def descriptors(self) -> list[RegistrationDescriptor]:
        return list(self._descriptors)

    def get(self, service_type: Any) -> RegistrationDescriptor | None:
        """Return the last descriptor registered for *service_type*."""
        for descriptor in reversed(self._descriptors):
            if descriptor.service_type is service_type:
                return descriptor
        return None

    def get_all(self, service_type: Any) -> list[RegistrationDescriptor]:
        """Return every descriptor registered for *service_type*, oldest first."""
        return [d for d in self._descriptors if d.service_type is service_type]

    def of_lifetime(self, lifetime: Lifetime) -> list[RegistrationDescriptor]:
        return [d for d in self._descriptors if d.lifetime is lifetime]

    def __contains__(self, service_type: object) -> bool:
        return self.get(service_type) is not None

    def __iter__(self) -> Iterator[RegistrationDescriptor]:
        return iter(list(self._descriptors))

    def __len__(self) -> int:
        return len(self._descriptors)

    def __repr__(self) -> str:
        return f"ServiceCollection({len(self._descriptors)} descriptors)"
