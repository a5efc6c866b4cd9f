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
"""Class initialization: the @initializer annotation.

Condition predicates often read class-level state prepared by an
initializer. The scanner runs a class's initializers exactly once per
process, before the first predicate of that class is evaluated.
"""

from __future__ import annotations

from typing import TypeVar

from servicescan.container.lifecycle import ensure_initialized, is_initialized
from servicescan.container.markers import INITIALIZER_MEMBER_ATTR

M = TypeVar("M")

__all__ = ["ensure_initialized", "initializer", "is_initialized"]


def initializer(member: M) -> M:
    """Mark a static method to run once before the class's conditions.

    Replaces a static constructor::

        @transient
        class Exporter:
            enabled = False

            @initializer
            @staticmethod
            def load() -> None:
                Exporter.enabled = os.environ.get("EXPORT") == "1"
    """
    func = getattr(member, "__func__", member)
    setattr(func, INITIALIZER_MEMBER_ATTR, True)
    return member
