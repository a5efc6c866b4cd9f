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
"""Registration exceptions — fatal errors found while scanning declarations."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from servicescan.kernel.exceptions import ConfigurationException

if TYPE_CHECKING:
    from servicescan.container.registry import ServiceMarker


def type_name(tp: Any) -> str:
    """Return the fully-qualified name of *tp* for error messages."""
    qualname = getattr(tp, "__qualname__", None)
    if qualname is None:
        return repr(tp)
    module = getattr(tp, "__module__", None)
    if module in (None, "builtins"):
        return qualname
    return f"{module}.{qualname}"


class RegistrationError(ConfigurationException):
    """A class's registration declaration is malformed; the host cannot start."""

    def __init__(self, decorated_type: type, headline: str, lines: list[str], code: str, **context: Any) -> None:
        self.decorated_type = decorated_type
        self.headline = headline
        message = "\n".join([f"{type(self).__name__}: {headline}", *lines])
        super().__init__(
            message=message,
            code=f"REGISTRATION_{code}",
            context={"type": type_name(decorated_type), **context},
        )


class DuplicateDeclarationError(RegistrationError):
    """More than one lifetime marker is attached to one class."""

    def __init__(self, decorated_type: type, markers: Sequence[ServiceMarker]) -> None:
        self.markers = tuple(markers)
        marker_names = [m.name for m in self.markers]
        headline = (
            f"The type {type_name(decorated_type)} has multiple service declarations "
            f"({', '.join(marker_names)})"
        )
        lines = [
            "",
            "  Fix: Keep exactly one of @singleton, @scoped, @transient or @injectable on the class",
        ]
        super().__init__(decorated_type, headline, lines, "DUPLICATE", markers=marker_names)


class ActualTypeMismatchError(RegistrationError):
    """The declared implementation type is not the decorated class itself."""

    def __init__(self, decorated_type: type, actual_type: Any) -> None:
        self.actual_type = actual_type
        headline = f"{type_name(decorated_type)} is not matching the given {type_name(actual_type)} type"
        lines = [
            "",
            "  Fix: Drop implementation=... or set it to the decorated class",
        ]
        super().__init__(decorated_type, headline, lines, "TYPE_MISMATCH", actual_type=type_name(actual_type))


class ServiceContractUnmetError(RegistrationError):
    """The decorated class does not implement its declared service contract."""

    def __init__(self, decorated_type: type, service_type: Any) -> None:
        self.service_type = service_type
        headline = f"{type_name(decorated_type)} is not implementing the given {type_name(service_type)} type"
        lines = [
            "",
            f"  Fix: Subclass {getattr(service_type, '__name__', repr(service_type))} "
            "or declare a contract the class satisfies",
        ]
        super().__init__(decorated_type, headline, lines, "CONTRACT_UNMET", service_type=type_name(service_type))


class InvalidConditionSignatureError(RegistrationError):
    """A condition member is missing, ambiguous, or has the wrong shape."""

    def __init__(self, decorated_type: type, member: str, reason: str) -> None:
        self.member = member
        self.reason = reason
        headline = f"The condition {type_name(decorated_type)}.{member} has an invalid signature: {reason}"
        lines = [
            "",
            "  Expected one of:",
            "    @staticmethod def check() -> bool",
            "    @staticmethod def check(config: Config) -> bool   (marker conditions only)",
        ]
        super().__init__(decorated_type, headline, lines, "INVALID_CONDITION", member=member, reason=reason)


class RegistrationFailedError(ConfigurationException):
    """Several declarations failed; raised by scans using the collect policy."""

    def __init__(self, errors: Sequence[RegistrationError]) -> None:
        self.errors = list(errors)
        lines = [f"RegistrationFailedError: {len(self.errors)} malformed service declaration(s)", ""]
        for error in self.errors:
            lines.append(f"  - {error.headline}")
        super().__init__(
            message="\n".join(lines),
            code="REGISTRATION_FAILED",
            context={"errors": [e.code for e in self.errors]},
        )
