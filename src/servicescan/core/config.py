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
"""Configuration for scans and condition predicates.

A :class:`Config` is the default configuration object handed to
``@condition`` predicates and the source of the scanner's own settings
(``servicescan.scan.*``, ``servicescan.logging.*``). Values come from a
dict or a YAML/TOML file and can be overridden by ``SERVICESCAN_*``
environment variables.
"""

from __future__ import annotations

import dataclasses
import os
import re
import tomllib
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, TypeVar, get_type_hints

import yaml  # type: ignore[import-untyped]

T = TypeVar("T")

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")

_CONFIG_PROPERTIES_ATTR = "__servicescan_config_prefix__"

_ENV_PREFIX = "SERVICESCAN_"
_NAMESPACE = "servicescan."

_MAX_PLACEHOLDER_DEPTH = 10

_MISSING = object()


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a dataclass as bindable to a configuration prefix.

    Usage:
        @config_properties(prefix="servicescan.scan")
        @dataclass
        class ScanProperties:
            error_policy: str = "fail-fast"

    Field names match either their kebab-case or snake_case key.
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


def env_key(key: str) -> str:
    """Return the environment variable that overrides *key*.

    ``servicescan.scan.error-policy`` -> ``SERVICESCAN_SCAN_ERROR_POLICY``,
    ``mail.smtp.host`` -> ``SERVICESCAN_MAIL_SMTP_HOST``.
    """
    return _ENV_PREFIX + key.removeprefix(_NAMESPACE).upper().replace(".", "_").replace("-", "_")


class Config:
    """Hierarchical configuration with dot-notation access.

    Priority (highest wins):
    1. Environment variables (see :func:`env_key`)
    2. Values of the dict or files the config was built from
    3. Defaults passed to :meth:`get` or declared on bound dataclasses

    The scanner never mutates a Config; predicates receive it as is.
    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(data) if data else {}
        self._loaded_sources: list[str] = []

    @property
    def loaded_sources(self) -> list[str]:
        """Paths of the files merged into this config, in merge order."""
        return list(self._loaded_sources)

    def to_dict(self) -> dict[str, Any]:
        """Return a shallow copy of the raw configuration data."""
        return dict(self._data)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def from_file(cls, path: str | Path, active_profiles: list[str] | None = None) -> Config:
        """Load a YAML or TOML file plus its profile overlays.

        An overlay for profile ``dev`` of ``app.yaml`` is ``app-dev.yaml`` in
        the same directory. Overlays are merged in the given order and may
        be absent. A missing *path* gives an empty config.
        """
        path = Path(path)
        instance = cls()
        if not path.exists():
            return instance

        instance._merge_file(path, str(path))
        for profile in active_profiles or []:
            overlay = path.with_name(f"{path.stem}-{profile}{path.suffix}")
            if overlay.exists():
                instance._merge_file(overlay, f"{overlay} (profile: {profile})")
        return instance

    def _merge_file(self, path: Path, source: str) -> None:
        self._data = _deep_merge(self._data, _read_file(path))
        self._loaded_sources.append(source)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value at dot-notation *key*.

        The matching environment variable wins over the stored value.
        String values have their ``${...}`` placeholders resolved:
        ``${ENV_VAR}``, ``${other.key}`` and ``${key:default}``.
        """
        override = os.environ.get(env_key(key))
        if override is not None:
            return override

        value = self._lookup(key)
        if value is _MISSING:
            return default
        if isinstance(value, str) and "${" in value:
            return self._resolve_placeholders(value)
        return value

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Return the mapping stored under *prefix*, or an empty dict."""
        value = self._lookup(prefix)
        return dict(value) if isinstance(value, dict) else {}

    def _lookup(self, key: str) -> Any:
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict) or current.get(part) is None:
                return _MISSING
            current = current[part]
        return current

    def _resolve_placeholders(self, value: str, depth: int = 0) -> str:
        if depth > _MAX_PLACEHOLDER_DEPTH:
            raise ValueError(
                f"Max recursion depth exceeded resolving placeholders in '{value}'. Check for circular references."
            )

        def _replace(match: re.Match[str]) -> str:
            ref, sep, fallback = match.group(1).partition(":")

            from_env = os.environ.get(ref)
            if from_env is not None:
                return from_env

            found = self._lookup(ref)
            if found is not _MISSING:
                text = str(found)
                return self._resolve_placeholders(text, depth + 1) if "${" in text else text

            if sep:
                return fallback
            raise ValueError(
                f"Cannot resolve placeholder '${{{match.group(1)}}}': not found in environment or config"
            )

        return _PLACEHOLDER_RE.sub(_replace, value)

    # ------------------------------------------------------------------
    # Binding
    # ------------------------------------------------------------------

    def bind(self, config_cls: type[T]) -> T:
        """Build a @config_properties dataclass from the values under its prefix.

        Fields without a value keep their dataclass default. String values
        are coerced to ``int``, ``float`` and ``bool`` fields.
        """
        prefix = getattr(config_cls, _CONFIG_PROPERTIES_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")

        hints = get_type_hints(config_cls)
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            value = self.get(f"{prefix}.{field.name.replace('_', '-')}")
            if value is None:
                value = self.get(f"{prefix}.{field.name}")
            if value is not None:
                kwargs[field.name] = _coerce(value, hints.get(field.name))
        return config_cls(**kwargs)


def _read_file(path: Path) -> dict[str, Any]:
    if path.suffix == ".toml":
        with open(path, "rb") as f:
            return tomllib.load(f)
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge *override* into a copy of *base*; nested dicts merge recursively."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _to_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes", "on")


_COERCERS: dict[Any, Callable[[str], Any]] = {int: int, float: float, bool: _to_bool}


def _coerce(value: Any, expected: Any) -> Any:
    coercer = _COERCERS.get(expected)
    if coercer is None or not isinstance(value, str):
        return value
    return coercer(value)
