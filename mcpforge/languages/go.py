"""Go (mcp-go) projects."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from mcpforge.analyzer.models import CapabilityKind
from mcpforge.config import Language
from mcpforge.naming import NameForms

from .base import LanguageSupport

_MODULE_MARKERS = ("mcp-go", "go-sdk")


class GoSupport(LanguageSupport):
    language = Language.GO
    manifest = "go.mod"
    dependency_label = "mcp-go or go-sdk"
    entry_label = "main.go"
    snippet_target = "main.go"
    install_command = ["go", "mod", "tidy"]
    type_map = {"string": "String", "integer": "Number"}
    blueprint = [
        ("go/go.mod.j2", "go.mod"),
        ("go/main.go.j2", "main.go"),
        ("go/README.md.j2", "README.md"),
        ("go/gitignore.j2", ".gitignore"),
    ]
    patterns = {
        CapabilityKind.TOOL: (re.compile(r"mcp\.NewTool\(\s*[\"`]([\w-]+)[\"`]"),),
        CapabilityKind.RESOURCE: (re.compile(r"mcp\.NewResource\(\s*[\"`]([^\"`]+)[\"`]"),),
        CapabilityKind.PROMPT: (re.compile(r"mcp\.NewPrompt\(\s*[\"`]([\w-]+)[\"`]"),),
    }

    def next_steps(self, names: NameForms, installed: bool) -> list[str]:
        steps = [] if installed else ["go mod tidy"]
        return steps + ["go run ."]

    def entry_candidates(self, root: Path) -> list[Path]:
        return [Path(root) / "main.go"]

    def has_protocol_dependency(self, manifest: Any) -> bool:
        return any(marker in manifest for marker in _MODULE_MARKERS)
