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
"""Condition decorators — control when a declared service is registered.

``@condition`` marks a static method as a gating predicate of its class.
``@conditional_on_*`` attach ready-made predicates to the class itself.
All of them apply to classes declared with @singleton, @scoped or @transient
and are evaluated with AND semantics, stopping at the first False.
"""

from __future__ import annotations

import importlib
from collections.abc import Callable
from typing import TypeVar

from servicescan.container.markers import CONDITION_MEMBER_ATTR, CONDITIONS_ATTR
from servicescan.core.config import Config

T = TypeVar("T", bound=type)
M = TypeVar("M")


def condition(member: M) -> M:
    """Mark a static method as a registration condition.

    The method takes no parameters, or exactly one parameter annotated with
    the configuration type, and returns bool::

        @singleton
        class Mailer:
            @condition
            @staticmethod
            def smtp_enabled(config: Config) -> bool:
                return bool(config.get("mail.smtp.host"))
    """
    func = getattr(member, "__func__", member)
    setattr(func, CONDITION_MEMBER_ATTR, True)
    return member


def _attach(cls: T, name: str, check: Callable[..., bool]) -> T:
    conditions = cls.__dict__.get(CONDITIONS_ATTR, ())
    setattr(cls, CONDITIONS_ATTR, (*conditions, (name, check)))
    return cls


def conditional_on_property(key: str, having_value: str = "") -> Callable[[T], T]:
    """Only register this class if the given config property matches.

    Evaluated at scan time against the configuration passed to the scan.
    Without ``having_value`` the key only has to be present.
    """

    def _check(config: Config) -> bool:
        if not isinstance(config, Config):
            return False
        value = config.get(key)
        if value is None:
            return False
        if having_value:
            return str(value).lower() == having_value.lower()
        return True

    def decorator(cls: T) -> T:
        return _attach(cls, f"on_property({key})", _check)

    return decorator


def conditional_on_module(module_name: str) -> Callable[[T], T]:
    """Only register this class if the given module is importable."""

    def _check() -> bool:
        try:
            importlib.import_module(module_name)
            return True
        except ImportError:
            return False

    def decorator(cls: T) -> T:
        return _attach(cls, f"on_module({module_name})", _check)

    return decorator
