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
"""Layering checks: which packages may import which."""

import ast
from pathlib import Path

import pytest

SRC = Path(__file__).resolve().parent.parent / "src" / "servicescan"


def _imports(path: Path) -> set[str]:
    tree = ast.parse(path.read_text())
    names: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            names.update(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            names.add(node.module)
    return names


def _modules(package: str) -> list[Path]:
    return sorted((SRC / package).rglob("*.py"))


class TestLayering:
    @pytest.mark.parametrize("path", _modules("kernel"), ids=lambda p: p.name)
    def test_kernel_depends_on_nothing(self, path):
        own = [n for n in _imports(path) if n.startswith("servicescan")]
        assert all(n.startswith("servicescan.kernel") for n in own)

    @pytest.mark.parametrize("path", _modules("container"), ids=lambda p: p.name)
    def test_container_does_not_import_context(self, path):
        bad = {
            n for n in _imports(path)
            if n.startswith(("servicescan.context", "servicescan.logging", "servicescan.core"))
        }
        assert not bad, f"{path.name} imports {sorted(bad)}"

    def test_yaml_only_in_config(self):
        users = [p.name for p in SRC.rglob("*.py") if "yaml" in _imports(p)]
        assert users == ["config.py"]

    def test_structlog_configuration_only_in_adapter(self):
        offenders = [
            p.relative_to(SRC).as_posix()
            for p in SRC.rglob("*.py")
            if "structlog.configure(" in p.read_text() and p.name != "structlog_adapter.py"
        ]
        assert offenders == []
