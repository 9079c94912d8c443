"""TypeScript (@modelcontextprotocol/sdk) projects."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from mcpforge.analyzer.models import Capability, CapabilityKind, ValidationResult
from mcpforge.config import Language
from mcpforge.naming import NameForms

from .base import LanguageSupport

SDK_PACKAGE = "@modelcontextprotocol/sdk"

_LIST_HANDLERS = {
    CapabilityKind.TOOL: ("ListToolsRequestSchema", re.compile(r"^\s*name:\s*['\"]([\w-]+)['\"]", re.MULTILINE)),
    CapabilityKind.RESOURCE: ("ListResourcesRequestSchema", re.compile(r"^\s*uri:\s*['\"]([^'\"]+)['\"]", re.MULTILINE)),
    CapabilityKind.PROMPT: ("ListPromptsRequestSchema", re.compile(r"^\s*name:\s*['\"]([\w-]+)['\"]", re.MULTILINE)),
}


def _handler_block(content: str, schema: str) -> str:
    """Text of the ``setRequestHandler(<schema>, ...)`` call up to the next handler."""
    start = re.search(rf"setRequestHandler\(\s*{schema}\b", content)
    if start is None:
        return ""
    end = content.find("setRequestHandler(", start.end())
    return content[start.end(): end if end != -1 else len(content)]


class TypeScriptSupport(LanguageSupport):
    language = Language.TYPESCRIPT
    manifest = "package.json"
    dependency_label = SDK_PACKAGE
    entry_label = "src/index.ts"
    snippet_target = "src/index.ts"
    install_command = ["npm", "install"]
    type_map = {"string": "string", "integer": "number"}
    blueprint = [
        ("typescript/package.json.j2", "package.json"),
        ("typescript/tsconfig.json.j2", "tsconfig.json"),
        ("typescript/index.ts.j2", "src/index.ts"),
        ("typescript/README.md.j2", "README.md"),
        ("typescript/gitignore.j2", ".gitignore"),
    ]
    # Direct registrations (server.tool(...) / server.registerTool(...)).
    patterns = {
        CapabilityKind.TOOL: (
            re.compile(r"server\.(?:tool|registerTool)\(\s*['\"]([\w-]+)['\"]"),
            re.compile(r"server\.tool\(\{[^}]*?name:\s*['\"]([\w-]+)['\"]"),
        ),
        CapabilityKind.RESOURCE: (
            re.compile(r"server\.(?:resource|registerResource)\(\s*['\"][^'\"]+['\"]\s*,\s*['\"]([^'\"]+)['\"]"),
            re.compile(r"server\.resource\(\{[^}]*?uri:\s*['\"]([^'\"]+)['\"]"),
        ),
        CapabilityKind.PROMPT: (
            re.compile(r"server\.(?:prompt|registerPrompt)\(\s*['\"]([\w-]+)['\"]"),
            re.compile(r"server\.prompt\(\{[^}]*?name:\s*['\"]([\w-]+)['\"]"),
        ),
    }

    def next_steps(self, names: NameForms, installed: bool) -> list[str]:
        steps = [] if installed else ["npm install"]
        return steps + ["npm run build", "npm start"]

    def entry_candidates(self, root: Path) -> list[Path]:
        root = Path(root)
        candidates = [root / "src" / "index.ts", root / "index.ts"]
        candidates.extend(root / name / "index.ts" for name in self.project_dir_names(root))
        return candidates

    def extract(self, content: str) -> list[Capability]:
        found: list[Capability] = []
        for kind, (schema, pattern) in _LIST_HANDLERS.items():
            block = _handler_block(content, schema)
            found.extend(
                Capability(kind=kind, identifier=m.group(1)) for m in pattern.finditer(block)
            )
        found.extend(super().extract(content))
        return found

    def parse_manifest(self, text: str) -> Any:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid {self.manifest}: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {self.manifest}: expected a JSON object")
        return data

    def has_protocol_dependency(self, manifest: Any) -> bool:
        deps = {
            **(manifest.get("dependencies") or {}),
            **(manifest.get("devDependencies") or {}),
        }
        return SDK_PACKAGE in deps

    def check_manifest(self, root: Path, manifest: Any, result: ValidationResult) -> None:
        if not (Path(root) / "tsconfig.json").is_file():
            result.warn("Missing tsconfig.json")
