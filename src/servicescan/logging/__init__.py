"""servicescan logging — logging port and structlog adapter."""

from servicescan.logging.port import LoggingPort, configure_logging
from servicescan.logging.structlog_adapter import LOGGER_NAMESPACE, StructlogAdapter

__all__ = ["LOGGER_NAMESPACE", "LoggingPort", "StructlogAdapter", "configure_logging"]
