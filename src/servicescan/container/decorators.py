"""Legacy @injectable decorator with named condition members."""

from __future__ import annotations

from typing import Any, Callable, TypeVar, overload

from servicescan.container.markers import attach_marker
from servicescan.container.registry import ServiceMarker
from servicescan.container.types import DeclarationSource, Lifetime

T = TypeVar("T", bound=type)


@overload
def injectable(cls: T) -> T: ...


@overload
def injectable(
    *,
    lifetime: Lifetime = Lifetime.SINGLETON,
    service: Any = None,
    condition_method: str | None = None,
    condition_property: str | None = None,
) -> Callable[[T], T]: ...


def injectable(
    cls: T | None = None,
    *,
    lifetime: Lifetime = Lifetime.SINGLETON,
    service: Any = None,
    condition_method: str | None = None,
    condition_property: str | None = None,
) -> T | Callable[[T], T]:
    """Mark a class as a service, gated by members referenced by name.

    ``condition_method`` names a zero-argument static method returning bool;
    ``condition_property`` names a class-level bool attribute. When both are
    given both must be true. ``@condition`` methods are ignored for classes
    declared this way.

    Can be used with or without arguments:
        @injectable
        class MyService: ...

        @injectable(lifetime=Lifetime.TRANSIENT, condition_method="is_enabled")
        class MyService: ...
    """

    def decorator(cls: T) -> T:
        return attach_marker(
            cls,
            ServiceMarker(
                name="@injectable",
                lifetime=lifetime,
                source=DeclarationSource.NAMED,
                service_type=service,
                condition_method=condition_method,
                condition_property=condition_property,
            ),
        )

    if cls is not None:
        return decorator(cls)
    return decorator
