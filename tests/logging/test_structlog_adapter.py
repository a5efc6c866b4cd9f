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
"""Tests for the structlog logging adapter and port."""

import io
import json
import logging

import pytest
import structlog

from servicescan.core.config import Config
from servicescan.kernel.exceptions import ConfigurationException
from servicescan.logging import LOGGER_NAMESPACE, LoggingPort, StructlogAdapter, configure_logging


@pytest.fixture(autouse=True)
def _restore_logging():
    namespace = logging.getLogger(LOGGER_NAMESPACE)
    handlers, level, propagate = list(namespace.handlers), namespace.level, namespace.propagate
    yield
    structlog.reset_defaults()
    namespace.handlers[:] = handlers
    namespace.setLevel(level)
    namespace.propagate = propagate


def _config(**logging_section):
    return Config({"servicescan": {"logging": logging_section}})


class TestStructlogAdapter:
    def test_implements_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)

    def test_defaults(self):
        adapter = StructlogAdapter(io.StringIO())
        adapter.configure(Config())

        assert adapter.level == "WARNING"
        assert adapter.format == "console"
        assert logging.getLogger(LOGGER_NAMESPACE).level == logging.WARNING

    def test_namespace_does_not_propagate_to_root(self):
        root_handlers = list(logging.getLogger().handlers)
        StructlogAdapter(io.StringIO()).configure(_config(level="debug"))

        namespace = logging.getLogger(LOGGER_NAMESPACE)
        assert namespace.level == logging.DEBUG
        assert namespace.propagate is False
        assert logging.getLogger().handlers == root_handlers

    def test_per_logger_levels(self):
        StructlogAdapter(io.StringIO()).configure(
            _config(loggers={"servicescan.context.scan_context": "error"})
        )
        assert logging.getLogger("servicescan.context.scan_context").level == logging.ERROR

    def test_reconfigure_replaces_handler(self):
        adapter = StructlogAdapter(io.StringIO())
        adapter.configure(Config())
        adapter.configure(Config())

        namespace = logging.getLogger(LOGGER_NAMESPACE)
        own = [h for h in namespace.handlers if getattr(h, "_servicescan_handler", False)]
        assert len(own) == 1

    def test_json_output(self):
        stream = io.StringIO()
        adapter = StructlogAdapter(stream)
        adapter.configure(_config(level="INFO", format="json"))

        adapter.get_logger("scanner").info("scan_completed", registered=3)

        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["event"] == "scan_completed"
        assert record["registered"] == 3
        assert record["logger"] == "servicescan.scanner"
        assert record["level"] == "info"

    def test_below_level_is_filtered(self):
        stream = io.StringIO()
        adapter = StructlogAdapter(stream)
        adapter.configure(_config(level="WARNING", format="json"))

        adapter.get_logger("servicescan.scanner").info("quiet")
        assert stream.getvalue() == ""

    def test_unknown_format(self):
        with pytest.raises(ConfigurationException) as info:
            StructlogAdapter(io.StringIO()).configure(_config(format="xml"))
        assert info.value.code == "CONFIG_LOGGING_FORMAT"

    def test_unknown_level_falls_back_to_info(self):
        adapter = StructlogAdapter(io.StringIO())
        adapter.set_level("servicescan.test_unknown_level", "LOUD")
        assert logging.getLogger("servicescan.test_unknown_level").level == logging.INFO


class TestConfigureLogging:
    def test_uses_structlog_adapter_by_default(self):
        port = configure_logging(Config())
        assert isinstance(port, StructlogAdapter)

    def test_uses_given_port(self):
        class RecordingPort:
            def __init__(self):
                self.configured = []

            def configure(self, config):
                self.configured.append(config)

            def get_logger(self, name):
                return None

            def set_level(self, name, level):
                pass

        config = Config()
        port = RecordingPort()
        assert configure_logging(config, port) is port
        assert port.configured == [config]
