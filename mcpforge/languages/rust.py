"""Rust (rmcp) projects."""

from __future__ import annotations

import re
import tomllib
from pathlib import Path
from typing import Any

from mcpforge.analyzer.models import CapabilityKind
from mcpforge.config import Language
from mcpforge.naming import NameForms

from .base import LanguageSupport


class RustSupport(LanguageSupport):
    language = Language.RUST
    manifest = "Cargo.toml"
    dependency_label = "rmcp"
    entry_label = "src/main.rs"
    snippet_target = "src/main.rs"
    install_command = ["cargo", "build"]
    type_map = {"string": "String", "integer": "i64"}
    blueprint = [
        ("rust/Cargo.toml.j2", "Cargo.toml"),
        ("rust/main.rs.j2", "src/main.rs"),
        ("rust/README.md.j2", "README.md"),
        ("rust/gitignore.j2", ".gitignore"),
    ]
    patterns = {
        CapabilityKind.TOOL: (re.compile(r"#\[tool\(\s*name\s*=\s*\"([\w-]+)\""),),
        CapabilityKind.RESOURCE: (
            re.compile(r"RawResource::new\(\s*\"([^\"]+)\""),
            re.compile(r"#\[resource\(\s*uri\s*=\s*\"([^\"]+)\""),
        ),
        CapabilityKind.PROMPT: (re.compile(r"#\[prompt\(\s*name\s*=\s*\"([\w-]+)\""),),
    }

    def next_steps(self, names: NameForms, installed: bool) -> list[str]:
        return ["cargo run"]

    def entry_candidates(self, root: Path) -> list[Path]:
        return [Path(root) / "src" / "main.rs"]

    def parse_manifest(self, text: str) -> Any:
        try:
            return tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ValueError(f"Invalid {self.manifest}: {exc}") from exc

    def has_protocol_dependency(self, manifest: Any) -> bool:
        tables = [manifest.get("dependencies", {})]
        tables.append(manifest.get("workspace", {}).get("dependencies", {}))
        return any("rmcp" in table for table in tables)
