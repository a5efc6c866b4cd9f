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
"""servicescan — declarative service registration for IoC containers.

Decorate classes with a lifetime, scan the module, and hand the resulting
descriptors to your container::

    from servicescan import ServiceCollection, add_attributed_services, condition, singleton

    @singleton(service=Notifier)
    class EmailNotifier(Notifier):
        @condition
        @staticmethod
        def enabled(config: Config) -> bool:
            return config.get("mail.enabled") == "true"

    services = add_attributed_services(ServiceCollection(), config, "myapp.services")
"""

from servicescan.container import (
    ActualTypeMismatchError,
    ContainerAdapter,
    DuplicateDeclarationError,
    ErrorPolicy,
    InvalidConditionSignatureError,
    Lifetime,
    RegistrationDeclaration,
    RegistrationDescriptor,
    RegistrationError,
    RegistrationFailedError,
    RegistryBuilder,
    ServiceCollection,
    ServiceContractUnmetError,
    injectable,
    scoped,
    singleton,
    transient,
)
from servicescan.context import (
    ConditionEvaluator,
    ScanContext,
    add_attributed_services,
    condition,
    conditional_on_module,
    conditional_on_property,
    initializer,
)
from servicescan.core.config import Config, config_properties
from servicescan.kernel.exceptions import ConfigurationException, ServiceScanException

__version__ = "0.1.0"

__all__ = [
    "ActualTypeMismatchError",
    "ConditionEvaluator",
    "Config",
    "ConfigurationException",
    "ContainerAdapter",
    "DuplicateDeclarationError",
    "ErrorPolicy",
    "InvalidConditionSignatureError",
    "Lifetime",
    "RegistrationDeclaration",
    "RegistrationDescriptor",
    "RegistrationError",
    "RegistrationFailedError",
    "RegistryBuilder",
    "ScanContext",
    "ServiceCollection",
    "ServiceContractUnmetError",
    "ServiceScanException",
    "add_attributed_services",
    "condition",
    "conditional_on_module",
    "conditional_on_property",
    "config_properties",
    "initializer",
    "injectable",
    "scoped",
    "singleton",
    "transient",
]
