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
"""Condition evaluator — decides whether a declaration is registered."""

from __future__ import annotations

import inspect
import types
import typing
from collections.abc import Callable
from typing import Any

import structlog

from servicescan.container.exceptions import InvalidConditionSignatureError
from servicescan.container.registry import ConditionPredicate, RegistrationDeclaration
from servicescan.container.types import PredicateKind
from servicescan.core.config import Config

logger = structlog.get_logger("servicescan.context.condition_evaluator")

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


class ConditionEvaluator:
    """Evaluates the gating predicates of a declaration.

    All predicates must return True (logical AND); evaluation stops at the
    first False. Before the first predicate runs, the initializers of the
    declaration are run once.

    Predicate shapes by kind:
    - ``METHOD``: named static method, no parameters, returns bool.
    - ``PROPERTY``: named class-level bool attribute.
    - ``MARKED``: ``@condition`` static method taking nothing, or one
      parameter annotated with ``configuration_type`` (or a base of it).
    - ``CALLABLE``: plain function taking nothing or one positional argument.

    Args:
        config: The external configuration handed to predicates that take a
            parameter. Never mutated.
        configuration_type: Type a ``MARKED`` predicate's parameter must
            accept. Defaults to the type of *config*, or :class:`Config`.
    """

    def __init__(self, config: Any = None, *, configuration_type: type | None = None) -> None:
        self._config = config
        if configuration_type is None:
            configuration_type = Config if config is None else type(config)
        self._configuration_type = configuration_type

    @property
    def config(self) -> Any:
        return self._config

    def evaluate(self, declaration: RegistrationDeclaration) -> bool:
        """Return True if *declaration* should be registered.

        Raises:
            InvalidConditionSignatureError: a predicate is missing, ambiguous,
                has the wrong shape, or returned a non-bool.
        """
        self._initialize(declaration)

        for predicate in declaration.conditions:
            if not self._evaluate(predicate, declaration.decorated_type):
                logger.debug(
                    "condition_rejected",
                    type=declaration.decorated_type.__qualname__,
                    condition=predicate.name,
                )
                return False
        return True

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    @staticmethod
    def _initialize(declaration: RegistrationDeclaration) -> None:
        for hook in declaration.initializers:
            hook()

    # ------------------------------------------------------------------
    # Individual predicate evaluators
    # ------------------------------------------------------------------

    def _evaluate(self, predicate: ConditionPredicate, decorated_type: type) -> bool:
        if predicate.kind is PredicateKind.METHOD:
            result = self._eval_named_method(predicate, decorated_type)
        elif predicate.kind is PredicateKind.PROPERTY:
            result = self._eval_named_property(predicate, decorated_type)
        elif predicate.kind is PredicateKind.MARKED:
            result = self._eval_marked(predicate, decorated_type)
        else:
            result = self._eval_callable(predicate, decorated_type)

        if not isinstance(result, bool):
            raise InvalidConditionSignatureError(
                decorated_type,
                predicate.name,
                f"returned {type(result).__name__} instead of bool",
            )
        return result

    def _eval_named_method(self, predicate: ConditionPredicate, decorated_type: type) -> Any:
        raw = self._lookup(predicate, decorated_type)
        if not isinstance(raw, (staticmethod, classmethod)):
            reason = "is not a static method" if callable(raw) else "is not a method"
            raise InvalidConditionSignatureError(decorated_type, predicate.name, reason)

        func = getattr(predicate.owner, predicate.name)
        if _overload_count(raw) > 0:
            raise InvalidConditionSignatureError(
                decorated_type, predicate.name, "is overloaded; the name matches multiple signatures"
            )
        params = self._positional_parameters(func, predicate, decorated_type)
        if params:
            raise InvalidConditionSignatureError(decorated_type, predicate.name, "must not take parameters")
        self._check_return_annotation(func, predicate, decorated_type)
        return func()

    def _eval_named_property(self, predicate: ConditionPredicate, decorated_type: type) -> Any:
        raw = self._lookup(predicate, decorated_type)
        if isinstance(raw, (staticmethod, classmethod, property)) or callable(raw):
            raise InvalidConditionSignatureError(
                decorated_type, predicate.name, "must be a class-level bool value, not a callable"
            )
        value = getattr(predicate.owner, predicate.name)
        if not isinstance(value, bool):
            raise InvalidConditionSignatureError(
                decorated_type, predicate.name, f"is a {type(value).__name__}, expected bool"
            )
        return value

    def _eval_marked(self, predicate: ConditionPredicate, decorated_type: type) -> Any:
        raw = predicate.target
        if not isinstance(raw, (staticmethod, classmethod)):
            raise InvalidConditionSignatureError(decorated_type, predicate.name, "is not a static method")

        func = getattr(predicate.owner, predicate.name)
        params = self._positional_parameters(func, predicate, decorated_type)
        self._check_return_annotation(func, predicate, decorated_type)
        if not params:
            return func()
        if len(params) > 1:
            raise InvalidConditionSignatureError(
                decorated_type, predicate.name, f"takes {len(params)} parameters, expected 0 or 1"
            )
        self._check_configuration_parameter(func, params[0], predicate, decorated_type, required=True)
        return func(self._config)

    def _eval_callable(self, predicate: ConditionPredicate, decorated_type: type) -> Any:
        func: Callable[..., Any] = predicate.target
        if not callable(func):
            raise InvalidConditionSignatureError(decorated_type, predicate.name, "is not callable")
        params = self._positional_parameters(func, predicate, decorated_type)
        if not params:
            return func()
        if len(params) > 1:
            raise InvalidConditionSignatureError(
                decorated_type, predicate.name, f"takes {len(params)} parameters, expected 0 or 1"
            )
        self._check_configuration_parameter(func, params[0], predicate, decorated_type, required=False)
        return func(self._config)

    # ------------------------------------------------------------------
    # Signature helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _lookup(predicate: ConditionPredicate, decorated_type: type) -> Any:
        """Find the member named by *predicate* on its owner, without binding it."""
        try:
            return inspect.getattr_static(predicate.owner, predicate.name)
        except AttributeError:
            raise InvalidConditionSignatureError(
                decorated_type, predicate.name, "no member with this name exists"
            ) from None

    @staticmethod
    def _positional_parameters(
        func: Callable[..., Any],
        predicate: ConditionPredicate,
        decorated_type: type,
    ) -> list[inspect.Parameter]:
        """Return the parameters *func* must be called with.

        Variadic parameters and required keyword-only parameters make the
        predicate uncallable with our fixed argument list.
        """
        try:
            sig = inspect.signature(func)
        except (TypeError, ValueError):
            raise InvalidConditionSignatureError(
                decorated_type, predicate.name, "signature cannot be inspected"
            ) from None

        params: list[inspect.Parameter] = []
        for param in sig.parameters.values():
            if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                raise InvalidConditionSignatureError(
                    decorated_type, predicate.name, f"variadic parameter '{param.name}' is not allowed"
                )
            if param.kind is inspect.Parameter.KEYWORD_ONLY:
                if param.default is inspect.Parameter.empty:
                    raise InvalidConditionSignatureError(
                        decorated_type, predicate.name, f"keyword-only parameter '{param.name}' is not allowed"
                    )
                continue
            if param.kind in _POSITIONAL:
                params.append(param)
        return params

    @staticmethod
    def _check_return_annotation(
        func: Callable[..., Any],
        predicate: ConditionPredicate,
        decorated_type: type,
    ) -> None:
        hints = _type_hints(func)
        if "return" in hints and hints["return"] not in (bool, "bool"):
            raise InvalidConditionSignatureError(
                decorated_type, predicate.name, f"return annotation is {hints['return']!r}, expected bool"
            )

    def _check_configuration_parameter(
        self,
        func: Callable[..., Any],
        param: inspect.Parameter,
        predicate: ConditionPredicate,
        decorated_type: type,
        *,
        required: bool,
    ) -> None:
        """Reject a parameter whose annotation cannot receive the configuration.

        ``@condition`` members must annotate it; plain callables may leave it
        bare.
        """
        expected = self._configuration_type.__name__
        annotation = _type_hints(func).get(param.name)
        if annotation is None:
            if required:
                raise InvalidConditionSignatureError(
                    decorated_type, predicate.name, f"parameter '{param.name}' must be annotated with {expected}"
                )
            return
        if isinstance(annotation, str):
            raise InvalidConditionSignatureError(
                decorated_type,
                predicate.name,
                f"annotation {annotation!r} of parameter '{param.name}' cannot be resolved",
            )
        if annotation is Any:
            return
        if isinstance(annotation, types.UnionType) or typing.get_origin(annotation) is typing.Union:
            candidates = [a for a in typing.get_args(annotation) if a is not type(None)]
        else:
            candidates = [typing.get_origin(annotation) or annotation]
        if not any(inspect.isclass(c) and issubclass(self._configuration_type, c) for c in candidates):
            raise InvalidConditionSignatureError(
                decorated_type,
                predicate.name,
                f"parameter '{param.name}' must be annotated with {expected}, not {_describe(annotation)}",
            )


def _type_hints(func: Callable[..., Any]) -> dict[str, Any]:
    """Resolve annotations of *func*; names that cannot be resolved stay strings."""
    try:
        return typing.get_type_hints(func)
    except (NameError, AttributeError, TypeError):
        return dict(getattr(func, "__annotations__", {}))


def _describe(annotation: Any) -> str:
    return annotation.__name__ if inspect.isclass(annotation) else repr(annotation)


def _overload_count(raw: Any) -> int:
    func = getattr(raw, "__func__", raw)
    return len(typing.get_overloads(func))
