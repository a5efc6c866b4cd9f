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
"""Registrar — hands accepted declarations to the container adapter."""

from __future__ import annotations

import structlog

from servicescan.container.port import ContainerAdapter
from servicescan.container.registry import RegistrationDeclaration, RegistrationDescriptor
from servicescan.container.types import Lifetime

logger = structlog.get_logger("servicescan.container.registrar")


def to_descriptor(declaration: RegistrationDeclaration) -> RegistrationDescriptor:
    """Map a declaration to its ``(service, implementation, lifetime)`` triple."""
    return RegistrationDescriptor(
        service_type=declaration.service_type,
        implementation_type=declaration.implementation_type,
        lifetime=declaration.lifetime,
    )


class Registrar:
    """Dispatches descriptors to the lifetime-specific adapter entry point.

    No validation happens here: declarations must already be validated and
    accepted by their conditions.
    """

    def __init__(self, adapter: ContainerAdapter) -> None:
        self._adapter = adapter

    @property
    def adapter(self) -> ContainerAdapter:
        return self._adapter

    def register(self, declaration: RegistrationDeclaration) -> RegistrationDescriptor:
        descriptor = to_descriptor(declaration)
        self.emit(descriptor)
        return descriptor

    def emit(self, descriptor: RegistrationDescriptor) -> None:
        service_type, implementation_type, lifetime = descriptor
        if lifetime is Lifetime.SINGLETON:
            self._adapter.add_singleton(service_type, implementation_type)
        elif lifetime is Lifetime.SCOPED:
            self._adapter.add_scoped(service_type, implementation_type)
        else:
            self._adapter.add_transient(service_type, implementation_type)

        logger.debug(
            "service_registered",
            service=getattr(service_type, "__qualname__", repr(service_type)),
            implementation=implementation_type.__qualname__,
            lifetime=lifetime.name,
        )
