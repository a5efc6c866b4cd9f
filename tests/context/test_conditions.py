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
"""Tests for the class-level condition decorators."""

from servicescan.container.markers import declared_conditions, singleton
from servicescan.container.resolver import resolve_declaration
from servicescan.container.types import PredicateKind
from servicescan.context.condition_evaluator import ConditionEvaluator
from servicescan.context.conditions import condition, conditional_on_module, conditional_on_property
from servicescan.core.config import Config


def _evaluate(cls, config=None):
    return ConditionEvaluator(config).evaluate(resolve_declaration(cls))


class TestConditionalOnProperty:
    def test_marks_class(self):
        @conditional_on_property("cache.enabled", having_value="true")
        class MyService:
            pass

        ((name, check),) = declared_conditions(MyService)
        assert name == "on_property(cache.enabled)"
        assert callable(check)

    def test_stacks_in_application_order(self):
        @conditional_on_property("a", having_value="1")
        @conditional_on_property("b", having_value="2")
        class MyService:
            pass

        assert [name for name, _ in declared_conditions(MyService)] == ["on_property(b)", "on_property(a)"]

    def test_matching_value_is_case_insensitive(self):
        @singleton
        @conditional_on_property("cache.enabled", having_value="true")
        class MyService:
            pass

        assert _evaluate(MyService, Config({"cache": {"enabled": "TRUE"}})) is True

    def test_non_matching_value(self):
        @singleton
        @conditional_on_property("cache.enabled", having_value="true")
        class MyService:
            pass

        assert _evaluate(MyService, Config({"cache": {"enabled": "false"}})) is False

    def test_presence_only(self):
        @singleton
        @conditional_on_property("cache.provider")
        class MyService:
            pass

        assert _evaluate(MyService, Config({"cache": {"provider": "redis"}})) is True
        assert _evaluate(MyService, Config({})) is False

    def test_without_configuration(self):
        @singleton
        @conditional_on_property("cache.enabled")
        class MyService:
            pass

        assert _evaluate(MyService) is False

    def test_not_inherited(self):
        @conditional_on_property("cache.enabled")
        class Base:
            pass

        class Child(Base):
            pass

        assert declared_conditions(Child) == ()


class TestConditionalOnModule:
    def test_available_module(self):
        @singleton
        @conditional_on_module("json")
        class MyService:
            pass

        assert _evaluate(MyService) is True

    def test_missing_module(self):
        @singleton
        @conditional_on_module("servicescan_no_such_module_xyz")
        class MyService:
            pass

        assert _evaluate(MyService) is False


class TestConditionMarker:
    def test_marks_underlying_function(self):
        class Holder:
            @condition
            @staticmethod
            def check() -> bool:
                return True

        assert getattr(Holder.check, "__servicescan_condition__", False) is True

    def test_marker_conditions_run_before_class_conditions(self):
        calls = []

        @singleton
        @conditional_on_module("json")
        class MyService:
            @condition
            @staticmethod
            def check() -> bool:
                calls.append("check")
                return True

        decl = resolve_declaration(MyService)
        assert [c.kind for c in decl.conditions] == [PredicateKind.MARKED, PredicateKind.CALLABLE]
        assert _evaluate(MyService) is True
        assert calls == ["check"]
