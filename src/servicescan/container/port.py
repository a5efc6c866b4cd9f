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
"""ContainerAdapter — the port through which descriptors leave the scanner."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ContainerAdapter(Protocol):
    """Port defining the registration contract of an external IoC container.

    The scanner calls exactly one of these per accepted declaration.
    """

    def add_singleton(self, service_type: Any, implementation_type: type) -> Any: ...
    def add_scoped(self, service_type: Any, implementation_type: type) -> Any: ...
    def add_transient(self, service_type: Any, implementation_type: type) -> Any: ...
