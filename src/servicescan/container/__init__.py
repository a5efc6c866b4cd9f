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
"""servicescan container — declaration markers, model, and registration."""

from servicescan.container.builder import RegistryBuilder
from servicescan.container.collection import ServiceCollection
from servicescan.container.decorators import injectable
from servicescan.container.exceptions import (
    ActualTypeMismatchError,
    DuplicateDeclarationError,
    InvalidConditionSignatureError,
    RegistrationError,
    RegistrationFailedError,
    ServiceContractUnmetError,
)
from servicescan.container.markers import scoped, singleton, transient
from servicescan.container.port import ContainerAdapter
from servicescan.container.registrar import Registrar
from servicescan.container.registry import (
    ConditionPredicate,
    RegistrationDeclaration,
    RegistrationDescriptor,
    ServiceMarker,
)
from servicescan.container.resolver import resolve_declaration
from servicescan.container.scanner import scan_module_classes, scan_package, scan_unit
from servicescan.container.types import DeclarationSource, ErrorPolicy, Lifetime, PredicateKind
from servicescan.container.validator import validate_declaration

__all__ = [
    "ActualTypeMismatchError",
    "ConditionPredicate",
    "ContainerAdapter",
    "DeclarationSource",
    "DuplicateDeclarationError",
    "ErrorPolicy",
    "InvalidConditionSignatureError",
    "Lifetime",
    "PredicateKind",
    "Registrar",
    "RegistrationDeclaration",
    "RegistrationDescriptor",
    "RegistrationError",
    "RegistrationFailedError",
    "RegistryBuilder",
    "ServiceCollection",
    "ServiceContractUnmetError",
    "ServiceMarker",
    "injectable",
    "resolve_declaration",
    "scan_module_classes",
    "scan_package",
    "scan_unit",
    "scoped",
    "singleton",
    "transient",
    "validate_declaration",
]
