"""Structural validation of MCP server projects.

Checks run in a fixed order and only ever append findings: common checks
(README, ignore file, stray ``.env``) first, then the language's manifest,
protocol dependency, manifest extras, entry point and tool declarations.
A missing manifest stops the language checks.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from mcpforge.config import Language
from mcpforge.languages import LanguageSupport, get_language

from .models import CapabilityKind, ValidationResult


async def validate_project(path: str | Path, language: Language | str) -> ValidationResult:
    """Validate the project at *path* as a *language* MCP server."""
    root = Path(path)
    support = get_language(language)
    result = ValidationResult()

    await asyncio.to_thread(_check_common, root, result)
    await _check_language(root, support, result)
    return result


def _check_common(root: Path, result: ValidationResult) -> None:
    if not (root / "README.md").is_file():
        result.warn("Missing README.md")
    if not (root / ".gitignore").is_file():
        result.warn("Missing .gitignore")
    if (root / ".env").exists():
        result.warn(".env file found - ensure it is in .gitignore")


async def _check_language(root: Path, support: LanguageSupport, result: ValidationResult) -> None:
    manifest_path = root / support.manifest
    if not manifest_path.is_file():
        result.error(f"Missing {support.manifest}")
        return

    text = await asyncio.to_thread(manifest_path.read_text, encoding="utf-8", errors="replace")
    try:
        manifest = support.parse_manifest(text)
    except ValueError as exc:
        result.error(str(exc))
    else:
        if not support.has_protocol_dependency(manifest):
            result.error(f"Missing MCP dependency ({support.dependency_label})")
        support.check_manifest(root, manifest, result)

    entry = support.find_entry_point(root)
    if entry is None:
        result.error(f"Missing {support.entry_label}")
        return

    content = await asyncio.to_thread(entry.read_text, encoding="utf-8", errors="replace")
    if not any(c.kind is CapabilityKind.TOOL for c in support.extract(content)):
        result.warn("No tools defined in server")
