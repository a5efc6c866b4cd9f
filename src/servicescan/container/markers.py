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
"""Lifetime decorators that declare how a class is registered.

Each decorator attaches a :class:`ServiceMarker` to the class:
- @singleton: one shared instance
- @scoped: one instance per logical operation
- @transient: a new instance per request

Used bare the class is its own contract. Pass ``service=`` to register the
class under an abstraction::

    @singleton(service=Notifier)
    class EmailNotifier(Notifier): ...

Markers are stored on the class itself and are not inherited by subclasses.
Gating conditions for these decorators are the ``@condition`` static methods
found on the class.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar, overload

from servicescan.container.registry import ServiceMarker
from servicescan.container.types import DeclarationSource, Lifetime

T = TypeVar("T", bound=type)

MARKERS_ATTR = "__servicescan_markers__"
CONDITIONS_ATTR = "__servicescan_conditions__"
CONDITION_MEMBER_ATTR = "__servicescan_condition__"
INITIALIZER_MEMBER_ATTR = "__servicescan_initializer__"


def attach_marker(cls: T, marker: ServiceMarker) -> T:
    """Append *marker* to the markers declared directly on *cls*."""
    markers = cls.__dict__.get(MARKERS_ATTR, ())
    setattr(cls, MARKERS_ATTR, (*markers, marker))
    return cls


def declared_markers(cls: type) -> tuple[ServiceMarker, ...]:
    """Markers declared on *cls* itself, in decoration order (innermost first)."""
    return tuple(cls.__dict__.get(MARKERS_ATTR, ()))


def has_member_mark(member: Any, attr: str) -> bool:
    """Return True if the raw class attribute *member* carries the mark *attr*.

    Marks live on the underlying function, so ``staticmethod`` and
    ``classmethod`` wrappers are looked through.
    """
    func = getattr(member, "__func__", member)
    return bool(getattr(func, attr, False))


def declared_conditions(cls: type) -> tuple[tuple[str, Callable[..., bool]], ...]:
    """Class-level ``@conditional_on_*`` predicates declared directly on *cls*."""
    return tuple(cls.__dict__.get(CONDITIONS_ATTR, ()))


def _make_marker(lifetime: Lifetime) -> Callable[..., Any]:
    """Factory that creates a lifetime decorator for *lifetime*."""
    marker_name = lifetime.name.lower()

    @overload
    def marker(cls: T) -> T: ...

    @overload
    def marker(
        *,
        service: Any = None,
        implementation: type | None = None,
    ) -> Callable[[T], T]: ...

    def marker(
        cls: T | None = None,
        *,
        service: Any = None,
        implementation: type | None = None,
    ) -> T | Callable[[T], T]:
        def decorator(cls: T) -> T:
            return attach_marker(
                cls,
                ServiceMarker(
                    name=f"@{marker_name}",
                    lifetime=lifetime,
                    source=DeclarationSource.MARKER,
                    service_type=service,
                    implementation_type=implementation,
                ),
            )

        if cls is not None:
            return decorator(cls)
        return decorator

    marker.__name__ = marker_name
    marker.__qualname__ = marker_name
    return marker


singleton = _make_marker(Lifetime.SINGLETON)
scoped = _make_marker(Lifetime.SCOPED)
transient = _make_marker(Lifetime.TRANSIENT)
