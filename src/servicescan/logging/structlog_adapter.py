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
"""StructlogAdapter — LoggingPort implementation for the scanner's log events.

The scanner only writes to loggers under the ``servicescan`` namespace. The
adapter configures that namespace and leaves the host's root logger alone::

    servicescan:
      logging:
        level: INFO
        format: json
        loggers:
          servicescan.context.condition_evaluator: DEBUG
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from servicescan.core.config import Config
from servicescan.kernel.exceptions import ConfigurationException

LOGGER_NAMESPACE = "servicescan"

_FORMATS = ("console", "json")

_HANDLER_ATTR = "_servicescan_handler"


class StructlogAdapter:
    """Logging adapter backed by structlog.

    Reads ``servicescan.logging.level`` (default ``WARNING``), per-logger
    levels under ``servicescan.logging.loggers`` and
    ``servicescan.logging.format`` (``console`` or ``json``).
    """

    def __init__(self, stream: Any = None) -> None:
        self._stream = stream if stream is not None else sys.stderr
        self._level: str = "WARNING"
        self._format: str = "console"
        self._logger_levels: dict[str, str] = {}

    @property
    def level(self) -> str:
        return self._level

    @property
    def format(self) -> str:
        return self._format

    def configure(self, config: Config) -> None:
        """Configure structlog and the ``servicescan`` loggers from *config*."""
        self._level = str(config.get("servicescan.logging.level", "WARNING")).upper()
        self._logger_levels = {
            name: str(level).upper() for name, level in config.get_section("servicescan.logging.loggers").items()
        }
        fmt = str(config.get("servicescan.logging.format", "console")).lower()
        if fmt not in _FORMATS:
            raise ConfigurationException(
                f"Unknown servicescan.logging.format '{fmt}' (expected one of: {', '.join(_FORMATS)})",
                code="CONFIG_LOGGING_FORMAT",
                context={"value": fmt},
            )
        self._format = fmt

        self._setup_structlog()
        self._install_handler()
        for name, level in self._logger_levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        """Get a structlog logger inside the ``servicescan`` namespace."""
        if name != LOGGER_NAMESPACE and not name.startswith(f"{LOGGER_NAMESPACE}."):
            name = f"{LOGGER_NAMESPACE}.{name}"
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        """Set the level of one stdlib logger; unknown levels fall back to INFO."""
        logging.getLogger(name).setLevel(_level_number(level))

    def _setup_structlog(self) -> None:
        processors: list[structlog.types.Processor] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
        ]

        if self._format == "json":
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer(colors=False))

        structlog.configure(
            processors=processors,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=False,
        )

    def _install_handler(self) -> None:
        """Replace the handler this adapter previously put on the namespace logger."""
        namespace = logging.getLogger(LOGGER_NAMESPACE)
        for handler in list(namespace.handlers):
            if getattr(handler, _HANDLER_ATTR, False):
                namespace.removeHandler(handler)

        handler = logging.StreamHandler(self._stream)
        handler.setFormatter(logging.Formatter("%(message)s"))
        setattr(handler, _HANDLER_ATTR, True)
        namespace.addHandler(handler)
        namespace.setLevel(_level_number(self._level))
        namespace.propagate = False


def _level_number(level: str) -> int:
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.INFO
