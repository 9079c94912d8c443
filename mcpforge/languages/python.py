"""Python (FastMCP) projects."""

from __future__ import annotations

import re
import sys
import tomllib
from pathlib import Path
from typing import Any

from mcpforge.analyzer.models import CapabilityKind, ValidationResult
from mcpforge.config import Language
from mcpforge.naming import NameForms, to_snake

from .base import LanguageSupport

_REQUIREMENT_NAME = re.compile(r"^\s*([A-Za-z0-9][A-Za-z0-9._-]*)")
_PROTOCOL_PACKAGES = {"mcp", "fastmcp"}


class PythonSupport(LanguageSupport):
    language = Language.PYTHON
    manifest = "pyproject.toml"
    dependency_label = "mcp or fastmcp"
    entry_label = "server.py file"
    snippet_target = "server.py"
    install_command = [sys.executable, "-m", "pip", "install", "-e", "."]
    type_map = {"string": "str", "integer": "int"}
    blueprint = [
        ("python/pyproject.toml.j2", "pyproject.toml"),
        ("python/__init__.py.j2", "{{ projectNameSnake }}/__init__.py"),
        ("python/__main__.py.j2", "{{ projectNameSnake }}/__main__.py"),
        ("python/server.py.j2", "{{ projectNameSnake }}/server.py"),
        ("python/README.md.j2", "README.md"),
        ("python/gitignore.j2", ".gitignore"),
    ]
    patterns = {
        CapabilityKind.TOOL: (
            re.compile(r"@\w+\.tool(?:\([^)]*\))?\s*\n\s*(?:async\s+)?def\s+(\w+)"),
        ),
        CapabilityKind.RESOURCE: (
            re.compile(r"@\w+\.resource\(\s*['\"]([^'\"]+)['\"]"),
        ),
        CapabilityKind.PROMPT: (
            re.compile(r"@\w+\.prompt(?:\([^)]*\))?\s*\n\s*(?:async\s+)?def\s+(\w+)"),
        ),
    }

    def next_steps(self, names: NameForms, installed: bool) -> list[str]:
        steps = [] if installed else ["pip install -e ."]
        return steps + [f"python -m {names.snake}"]

    def entry_candidates(self, root: Path) -> list[Path]:
        root = Path(root)
        packages = self._manifest_package_names(root) + self.project_dir_names(root)
        candidates: list[Path] = []
        for package in dict.fromkeys(packages):
            candidates.append(root / package / "server.py")
            candidates.append(root / "src" / package / "server.py")
        candidates.append(root / "src" / "server.py")
        candidates.append(root / "server.py")
        return candidates

    def parse_manifest(self, text: str) -> Any:
        try:
            return tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ValueError(f"Invalid {self.manifest}: {exc}") from exc

    def has_protocol_dependency(self, manifest: Any) -> bool:
        project = manifest.get("project", {})
        requirements = list(project.get("dependencies", []))
        for extra in project.get("optional-dependencies", {}).values():
            requirements.extend(extra)
        poetry = manifest.get("tool", {}).get("poetry", {}).get("dependencies", {})
        requirements.extend(poetry.keys())

        for requirement in requirements:
            match = _REQUIREMENT_NAME.match(str(requirement))
            if match and match.group(1).lower().replace("_", "-") in _PROTOCOL_PACKAGES:
                return True
        return False

    def check_manifest(self, root: Path, manifest: Any, result: ValidationResult) -> None:
        if "requires-python" not in manifest.get("project", {}):
            result.warn(f"Missing requires-python in {self.manifest}")

    def _manifest_package_names(self, root: Path) -> list[str]:
        path = root / self.manifest
        if not path.is_file():
            return []
        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except (OSError, tomllib.TOMLDecodeError):
            return []
        name = data.get("project", {}).get("name")
        return [to_snake(name)] if isinstance(name, str) and name else []
