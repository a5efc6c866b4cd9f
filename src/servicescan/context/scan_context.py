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
"""ScanContext — runs the registration pipeline over scan units."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, TypeVar

import structlog

from servicescan.container.builder import RegistryBuilder
from servicescan.container.exceptions import RegistrationError, RegistrationFailedError
from servicescan.container.port import ContainerAdapter
from servicescan.container.registrar import Registrar
from servicescan.container.registry import RegistrationDeclaration, RegistrationDescriptor
from servicescan.container.resolver import resolve_declaration
from servicescan.container.scanner import ScanUnit, iter_package_modules, scan_module_classes, scan_unit
from servicescan.container.types import ErrorPolicy
from servicescan.container.validator import validate_declaration
from servicescan.context.condition_evaluator import ConditionEvaluator
from servicescan.core.config import Config, config_properties
from servicescan.kernel.exceptions import ConfigurationException

A = TypeVar("A", bound=ContainerAdapter)

logger = structlog.get_logger("servicescan.context.scan_context")


@config_properties(prefix="servicescan.scan")
@dataclass
class ScanProperties:
    """Scan settings bound from ``servicescan.scan.*``."""

    error_policy: str = ErrorPolicy.FAIL_FAST.value


class ScanContext:
    """Resolves, validates and evaluates declarations, then registers them.

    Every call is all-or-nothing: declarations are collected for the whole
    call first and descriptors reach the adapter only when no declaration
    failed. With ``ErrorPolicy.FAIL_FAST`` the first failure is raised as is;
    with ``ErrorPolicy.COLLECT`` every failure of the call is gathered into
    one :class:`RegistrationFailedError`.

    Args:
        adapter: Receives one ``add_*`` call per accepted declaration.
        config: External configuration passed to condition predicates. When
            it is a :class:`Config`, the error policy is read from
            ``servicescan.scan.error-policy`` unless given explicitly.
        error_policy: Overrides the configured policy.
        configuration_type: Parameter type ``@condition`` methods must accept.
    """

    def __init__(
        self,
        adapter: ContainerAdapter,
        config: Any = None,
        *,
        error_policy: ErrorPolicy | None = None,
        configuration_type: type | None = None,
    ) -> None:
        self._registrar = Registrar(adapter)
        self._evaluator = ConditionEvaluator(config, configuration_type=configuration_type)
        self._error_policy = error_policy or self._configured_policy(config)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def adapter(self) -> ContainerAdapter:
        return self._registrar.adapter

    @property
    def config(self) -> Any:
        return self._evaluator.config

    @property
    def error_policy(self) -> ErrorPolicy:
        return self._error_policy

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def scan(self, unit: ScanUnit) -> list[RegistrationDescriptor]:
        """Register the declared classes of one scan unit."""
        return self.scan_all(unit)

    def scan_all(self, *units: ScanUnit) -> list[RegistrationDescriptor]:
        """Register the declared classes of several units as one batch."""
        candidates: list[type] = []
        for unit in units:
            candidates.extend(scan_unit(unit))
        return self._run(candidates, units=len(units))

    def scan_package(self, package_name: str) -> list[RegistrationDescriptor]:
        """Register the declared classes of a package and all its submodules."""
        modules = list(iter_package_modules(package_name))
        candidates = [cls for module in modules for cls in scan_module_classes(module)]
        return self._run(candidates, units=len(modules))

    def apply(self, builder: RegistryBuilder) -> list[RegistrationDescriptor]:
        """Register the entries of a :class:`RegistryBuilder`."""
        return self._run(builder.build(), units=1)

    def plan(self, unit: ScanUnit) -> list[RegistrationDeclaration]:
        """Return the accepted declarations of *unit* without registering them."""
        return self._collect(scan_unit(unit))

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _run(
        self,
        entries: Iterable[type | RegistrationDeclaration],
        *,
        units: int,
    ) -> list[RegistrationDescriptor]:
        accepted = self._collect(entries)
        descriptors = [self._registrar.register(declaration) for declaration in accepted]
        logger.info("scan_completed", units=units, registered=len(descriptors))
        return descriptors

    def _collect(
        self,
        entries: Iterable[type | RegistrationDeclaration],
    ) -> list[RegistrationDeclaration]:
        accepted: list[RegistrationDeclaration] = []
        errors: list[RegistrationError] = []

        for entry in entries:
            if isinstance(entry, RegistrationDeclaration):
                cls, declaration = entry.decorated_type, entry
            else:
                cls, declaration = entry, None
            try:
                if declaration is None:
                    declaration = resolve_declaration(cls)
                    if declaration is None:
                        continue
                validate_declaration(declaration)
                if self._evaluator.evaluate(declaration):
                    accepted.append(declaration)
                else:
                    logger.info("declaration_rejected", type=cls.__qualname__, lifetime=declaration.lifetime.name)
            except RegistrationError as exc:
                logger.error("declaration_invalid", type=cls.__qualname__, **exc.to_dict())
                if self._error_policy is ErrorPolicy.FAIL_FAST:
                    raise
                errors.append(exc)

        if errors:
            raise RegistrationFailedError(errors)
        return accepted

    @staticmethod
    def _configured_policy(config: Any) -> ErrorPolicy:
        if not isinstance(config, Config):
            return ErrorPolicy.FAIL_FAST
        value = str(config.bind(ScanProperties).error_policy).lower()
        try:
            return ErrorPolicy(value)
        except ValueError:
            allowed = ", ".join(p.value for p in ErrorPolicy)
            raise ConfigurationException(
                f"Unknown servicescan.scan.error-policy '{value}' (expected one of: {allowed})",
                code="CONFIG_ERROR_POLICY",
                context={"value": value},
            ) from None


def add_attributed_services(
    adapter: A,
    config: Any,
    *units: ScanUnit,
    error_policy: ErrorPolicy | None = None,
) -> A:
    """Scan *units* and register their declared classes into *adapter*.

    Returns *adapter* to allow chaining.
    """
    ScanContext(adapter, config, error_policy=error_policy).scan_all(*units)
    return adapter
