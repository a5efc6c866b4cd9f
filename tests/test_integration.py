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
"""End-to-end: a package scanned with a YAML configuration."""

import sys
import textwrap

import pytest

from servicescan import (
    Config,
    Lifetime,
    RegistrationFailedError,
    ServiceCollection,
    ScanContext,
    add_attributed_services,
)


@pytest.fixture
def app_package(tmp_path, monkeypatch):
    pkg = tmp_path / "notify_app"
    (pkg / "channels").mkdir(parents=True)
    (pkg / "__init__.py").write_text("")
    (pkg / "ports.py").write_text(
        textwrap.dedent(
            """
            from typing import Protocol


            class Notifier(Protocol):
                def send(self, message: str) -> None: ...
            """
        )
    )
    (pkg / "channels" / "__init__.py").write_text("")
    (pkg / "channels" / "email.py").write_text(
        textwrap.dedent(
            """
            from servicescan import Config, condition, initializer, singleton
            from notify_app.ports import Notifier


            @singleton(service=Notifier)
            class EmailNotifier:
                templates = None

                @initializer
                @staticmethod
                def load_templates() -> None:
                    EmailNotifier.templates = {"welcome": "Hi"}

                @condition
                @staticmethod
                def templates_loaded() -> bool:
                    return EmailNotifier.templates is not None

                @condition
                @staticmethod
                def smtp_configured(config: Config) -> bool:
                    return config.get("mail.smtp.host") is not None

                def send(self, message: str) -> None:
                    pass
            """
        )
    )
    (pkg / "channels" / "sms.py").write_text(
        textwrap.dedent(
            """
            from servicescan import conditional_on_property, injectable, transient, Lifetime
            from notify_app.ports import Notifier


            @transient(service=Notifier)
            @conditional_on_property("sms.enabled", having_value="true")
            class SmsNotifier:
                def send(self, message: str) -> None:
                    pass


            @injectable(lifetime=Lifetime.SCOPED, condition_property="ACTIVE")
            class DeliveryLog:
                ACTIVE = True
            """
        )
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    yield "notify_app"
    for name in [n for n in sys.modules if n == "notify_app" or n.startswith("notify_app.")]:
        del sys.modules[name]


class TestPackageScan:
    def test_registers_enabled_services(self, app_package, tmp_path):
        config_file = tmp_path / "app.yaml"
        config_file.write_text("mail:\n  smtp:\n    host: smtp.local\nsms:\n  enabled: false\n")

        services = ServiceCollection()
        ScanContext(services, Config.from_file(config_file)).scan_package(app_package)

        ports = sys.modules["notify_app.ports"]
        email = sys.modules["notify_app.channels.email"]
        sms = sys.modules["notify_app.channels.sms"]
        assert [tuple(d) for d in services] == [
            (ports.Notifier, email.EmailNotifier, Lifetime.SINGLETON),
            (sms.DeliveryLog, sms.DeliveryLog, Lifetime.SCOPED),
        ]

    def test_profile_enables_sms(self, app_package, tmp_path):
        (tmp_path / "app.yaml").write_text("sms:\n  enabled: false\n")
        (tmp_path / "app-prod.yaml").write_text("sms:\n  enabled: 'true'\n")
        config = Config.from_file(tmp_path / "app.yaml", active_profiles=["prod"])

        services = ServiceCollection()
        ScanContext(services, config).scan_package(app_package)

        notifier = sys.modules["notify_app.ports"].Notifier
        sms = sys.modules["notify_app.channels.sms"]
        assert [d.implementation_type for d in services.get_all(notifier)] == [sms.SmsNotifier]


class TestMalformedPackage:
    def test_collect_policy_reports_all_and_registers_nothing(self, tmp_path, monkeypatch):
        pkg = tmp_path / "broken_app"
        pkg.mkdir()
        (pkg / "__init__.py").write_text("")
        (pkg / "services.py").write_text(
            textwrap.dedent(
                """
                from servicescan import scoped, singleton, transient


                class Store:
                    pass


                @singleton(service=Store)
                class NotAStore:
                    pass


                @scoped
                @transient
                class Twice:
                    pass


                @singleton
                class Fine:
                    pass
                """
            )
        )
        monkeypatch.syspath_prepend(str(tmp_path))
        config = Config({"servicescan": {"scan": {"error-policy": "collect"}}})
        services = ServiceCollection()

        with pytest.raises(RegistrationFailedError) as info:
            add_attributed_services(services, config, "broken_app.services")

        assert len(info.value.errors) == 2
        assert len(services) == 0
