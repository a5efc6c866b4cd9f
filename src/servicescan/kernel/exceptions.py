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
"""Exception hierarchy for servicescan.

Flat hierarchy rooted at :class:`ServiceScanException`. Every error raised
by the scanner is a configuration-time failure: the host cannot start until
the offending declaration is fixed, so nothing here is retryable.
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class ServiceScanException(Exception):
    """Base exception for all servicescan errors.

    Carries an optional error code and context dict for structured error data.
    Catch ServiceScanException to handle every scanner error, or catch a
    specific subclass for targeted handling.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "REGISTRATION_DUPLICATE").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}

    def to_dict(self) -> dict:
        """Return the error as structured data for log events."""
        return {
            "error": type(self).__name__,
            "code": self.code,
            "message": str(self),
            "context": dict(self.context),
        }


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(ServiceScanException):
    """Declarations or settings are malformed; the host must not start."""
