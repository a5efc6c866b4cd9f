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
"""LoggingPort — how a host plugs its logging setup into the scanner."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from servicescan.core.config import Config


@runtime_checkable
class LoggingPort(Protocol):
    """Configures the loggers the scanner writes its events to."""

    def configure(self, config: Config) -> None: ...
    def get_logger(self, name: str) -> Any: ...
    def set_level(self, name: str, level: str) -> None: ...


def configure_logging(config: Config, port: LoggingPort | None = None) -> LoggingPort:
    """Configure scanner logging from *config* and return the port used.

    Uses :class:`StructlogAdapter` unless a port is given.
    """
    if port is None:
        from servicescan.logging.structlog_adapter import StructlogAdapter

        port = StructlogAdapter()
    port.configure(config)
    return port
