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
"""One-shot callables for registration hooks.

Builder entries wrap their initializer in :class:`Once`. Decorated classes
get a hook that runs their @initializer members once per class, bases
first, memoized across scans.
"""

from __future__ import annotations

import functools
import inspect
import weakref
from collections.abc import Callable
from typing import Any

import structlog

from servicescan.container.markers import INITIALIZER_MEMBER_ATTR, has_member_mark

logger = structlog.get_logger("servicescan.container.lifecycle")


class Once:
    """Callable wrapper that invokes *func* at most once.

    The wrapper only counts as done after *func* returned, so a hook that
    raised runs again on the next call.
    """

    __slots__ = ("_func", "_done")

    def __init__(self, func: Callable[[], Any]) -> None:
        self._func = func
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    def __call__(self) -> None:
        if self._done:
            return
        self._func()
        self._done = True

    def __repr__(self) -> str:
        return f"Once({self._func!r}, done={self._done})"


_initialized: weakref.WeakSet[type] = weakref.WeakSet()


def has_initializers(cls: type) -> bool:
    """Return True if *cls* or one of its bases declares an @initializer member."""
    return any(
        has_member_mark(member, INITIALIZER_MEMBER_ATTR)
        for klass in inspect.getmro(cls)
        for member in vars(klass).values()
    )


def is_initialized(cls: type) -> bool:
    """Return True if the initializers of *cls* have already run."""
    return cls in _initialized


def ensure_initialized(cls: type) -> None:
    """Run the @initializer members of *cls* and its bases, once per class.

    Bases are initialized before subclasses. A class is only marked done
    after all its initializers returned, so a failing initializer is retried
    on the next scan.
    """
    for klass in reversed(inspect.getmro(cls)):
        if klass is object or klass in _initialized:
            continue
        for name, member in list(vars(klass).items()):
            if has_member_mark(member, INITIALIZER_MEMBER_ATTR):
                logger.debug("running_initializer", type=klass.__qualname__, member=name)
                getattr(klass, name)()
        _initialized.add(klass)


def class_initializer(cls: type) -> Callable[[], None]:
    """Return the hook that runs the initializers of *cls* once."""
    return functools.partial(ensure_initialized, cls)
