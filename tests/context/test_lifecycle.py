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
"""Tests for @initializer and the one-time class initialization."""

import pytest

from servicescan.container.builder import RegistryBuilder
from servicescan.container.collection import ServiceCollection
from servicescan.container.markers import transient
from servicescan.context.condition_evaluator import ConditionEvaluator
from servicescan.context.conditions import condition
from servicescan.context.lifecycle import ensure_initialized, initializer, is_initialized
from servicescan.context.scan_context import ScanContext


class TestEnsureInitialized:
    def test_runs_once(self):
        calls = []

        class Exporter:
            @initializer
            @staticmethod
            def load() -> None:
                calls.append("load")

        assert not is_initialized(Exporter)
        ensure_initialized(Exporter)
        ensure_initialized(Exporter)
        assert calls == ["load"]
        assert is_initialized(Exporter)

    def test_bases_run_first(self):
        calls = []

        class Base:
            @initializer
            @staticmethod
            def base_init() -> None:
                calls.append("base")

        class Child(Base):
            @initializer
            @classmethod
            def child_init(cls) -> None:
                calls.append(cls.__name__)

        ensure_initialized(Child)
        ensure_initialized(Base)
        assert calls == ["base", "Child"]

    def test_failure_is_retried(self):
        attempts = []

        class Flaky:
            @initializer
            @staticmethod
            def load() -> None:
                attempts.append(1)
                if len(attempts) == 1:
                    raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            ensure_initialized(Flaky)
        assert not is_initialized(Flaky)

        ensure_initialized(Flaky)
        assert is_initialized(Flaky)
        assert len(attempts) == 2

    def test_class_without_initializers_is_marked(self):
        class Plain:
            pass

        ensure_initialized(Plain)
        assert is_initialized(Plain)


class TestInitializerOrdering:
    def test_runs_before_first_condition(self):
        events = []

        @transient
        class Exporter:
            enabled = False

            @initializer
            @staticmethod
            def load() -> None:
                events.append("init")
                Exporter.enabled = True

            @condition
            @staticmethod
            def is_enabled() -> bool:
                events.append("condition")
                return Exporter.enabled

        services = ServiceCollection()
        ScanContext(services).scan([Exporter])

        assert events == ["init", "condition"]
        assert Exporter in services

    def test_runs_once_across_scans(self):
        events = []

        @transient
        class Exporter:
            @initializer
            @staticmethod
            def load() -> None:
                events.append("init")

            @condition
            @staticmethod
            def is_enabled() -> bool:
                events.append("condition")
                return True

        context = ScanContext(ServiceCollection())
        context.scan([Exporter])
        context.scan([Exporter])

        assert events == ["init", "condition", "condition"]

    def test_runs_without_conditions(self):
        events = []

        @transient
        class Exporter:
            @initializer
            @staticmethod
            def load() -> None:
                events.append("init")

        ScanContext(ServiceCollection()).scan([Exporter])
        assert events == ["init"]

    def test_builder_initializer_once_per_entry(self):
        events = []

        class Exporter:
            pass

        def load() -> None:
            events.append("init")

        def enabled() -> bool:
            events.append("condition")
            return True

        builder = RegistryBuilder().add_transient(Exporter, conditions=[enabled], initializer=load)
        (declaration,) = builder.build()
        evaluator = ConditionEvaluator()
        evaluator.evaluate(declaration)
        evaluator.evaluate(declaration)

        assert events == ["init", "condition", "condition"]
