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
"""servicescan context — condition evaluation and scan orchestration."""

from servicescan.context.condition_evaluator import ConditionEvaluator
from servicescan.context.conditions import (
    condition,
    conditional_on_module,
    conditional_on_property,
)
from servicescan.context.lifecycle import ensure_initialized, initializer, is_initialized
from servicescan.context.scan_context import (
    ScanContext,
    ScanProperties,
    add_attributed_services,
)

__all__ = [
    "ConditionEvaluator",
    "ScanContext",
    "ScanProperties",
    "add_attributed_services",
    "condition",
    "conditional_on_module",
    "conditional_on_property",
    "ensure_initialized",
    "initializer",
    "is_initialized",
]
