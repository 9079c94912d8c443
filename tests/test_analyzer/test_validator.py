"""Tests for structural validation (mcpforge.analyzer.validator).

Covers:
- Common checks (README, .gitignore, .env)
- Manifest existence short-circuit and malformed manifests
- Protocol dependency errors per language
- Language extras (requires-python, tsconfig.json)
- Entry point and tool presence
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from mcpforge.analyzer.models import ValidationResult
from mcpforge.analyzer.validator import validate_project

pytestmark = pytest.mark.unit


def _write(root: Path, files: dict[str, str]) -> Path:
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


COMMON = {"README.md": "# x\n", ".gitignore": ".env\n"}


class TestValidationResult:
    def test_valid_is_derived(self):
        result = ValidationResult()
        assert result.valid is True
        result.warn("only a warning")
        assert result.valid is True
        result.error("broken")
        assert result.valid is False

    def test_valid_is_serialized(self):
        result = ValidationResult(errors=["e"])
        assert result.model_dump()["valid"] is False


class TestCommonChecks:
    async def test_valid_python_project(self, python_project: Path):
        result = await validate_project(python_project, "python")
        assert result.errors == []
        assert result.warnings == []
        assert result.valid

    async def test_missing_readme_and_gitignore(self, python_project: Path):
        (python_project / "README.md").unlink()
        (python_project / ".gitignore").unlink()
        result = await validate_project(python_project, "python")
        assert result.warnings == ["Missing README.md", "Missing .gitignore"]
        assert result.valid

    async def test_env_file_is_a_warning(self, python_project: Path):
        (python_project / ".env").write_text("SECRET=1\n")
        result = await validate_project(python_project, "python")
        assert result.warnings == [".env file found - ensure it is in .gitignore"]
        assert result.valid


class TestManifest:
    @pytest.mark.parametrize("language,manifest", [
        ("python", "pyproject.toml"),
        ("typescript", "package.json"),
        ("go", "go.mod"),
        ("rust", "Cargo.toml"),
    ])
    async def test_missing_manifest_stops(self, tmp_path: Path, language: str, manifest: str):
        _write(tmp_path, COMMON)
        result = await validate_project(tmp_path, language)
        assert result.errors == [f"Missing {manifest}"]
        assert not result.valid

    async def test_malformed_package_json(self, tmp_path: Path):
        _write(tmp_path, {**COMMON, "package.json": "{oops", "tsconfig.json": "{}", "src/index.ts": ""})
        result = await validate_project(tmp_path, "typescript")
        assert len(result.errors) == 1
        assert result.errors[0].startswith("Invalid package.json")

    @pytest.mark.parametrize("language,files,message", [
        ("python", {"pyproject.toml": '[project]\nrequires-python = ">=3.11"\ndependencies = []\n',
                    "server.py": "@server.tool()\ndef t(): ...\n"},
         "Missing MCP dependency (mcp or fastmcp)"),
        ("typescript", {"package.json": json.dumps({"dependencies": {}}), "tsconfig.json": "{}",
                        "src/index.ts": "server.tool('t', handler);\n"},
         "Missing MCP dependency (@modelcontextprotocol/sdk)"),
        ("go", {"go.mod": "module x\n", "main.go": 'mcp.NewTool("t")\n'},
         "Missing MCP dependency (mcp-go or go-sdk)"),
        ("rust", {"Cargo.toml": '[dependencies]\nserde = "1"\n', "src/main.rs": '#[tool(name = "t")]\n'},
         "Missing MCP dependency (rmcp)"),
    ])
    async def test_missing_dependency(self, tmp_path: Path, language: str, files: dict, message: str):
        _write(tmp_path, {**COMMON, **files})
        result = await validate_project(tmp_path, language)
        assert result.errors == [message]
        assert result.warnings == []

    async def test_missing_requires_python(self, python_project: Path):
        (python_project / "pyproject.toml").write_text(
            '[project]\nname = "demo"\ndependencies = ["mcp"]\n'
        )
        result = await validate_project(python_project, "python")
        assert result.warnings == ["Missing requires-python in pyproject.toml"]
        assert result.valid

    async def test_missing_tsconfig(self, tmp_path: Path):
        _write(tmp_path, {
            **COMMON,
            "package.json": json.dumps({"dependencies": {"@modelcontextprotocol/sdk": "^1"}}),
            "src/index.ts": "server.tool('t', handler);\n",
        })
        result = await validate_project(tmp_path, "typescript")
        assert result.warnings == ["Missing tsconfig.json"]
        assert result.valid


class TestEntryPoint:
    @pytest.mark.parametrize("language,files,entry", [
        ("python", {"pyproject.toml": '[project]\nrequires-python = ">=3.11"\ndependencies = ["fastmcp"]\n'},
         "server.py"),
        ("typescript", {"package.json": json.dumps({"dependencies": {"@modelcontextprotocol/sdk": "^1"}}),
                        "tsconfig.json": "{}"},
         "src/index.ts"),
        ("go", {"go.mod": "require github.com/mark3labs/mcp-go v0.32.0\n"}, "main.go"),
        ("rust", {"Cargo.toml": '[dependencies]\nrmcp = "0.8"\n'}, "src/main.rs"),
    ])
    async def test_manifest_without_entry_point(self, tmp_path: Path, language: str, files: dict, entry: str):
        _write(tmp_path, {**COMMON, **files})
        result = await validate_project(tmp_path, language)
        assert len(result.errors) == 1
        assert entry in result.errors[0]
        assert result.valid is False

    async def test_no_tools_is_a_warning(self, python_project: Path):
        (python_project / "demo" / "server.py").write_text("server = None\n")
        result = await validate_project(python_project, "python")
        assert result.warnings == ["No tools defined in server"]
        assert result.valid

    async def test_tool_mention_without_declaration_warns(self, tmp_path: Path):
        _write(tmp_path, {
            **COMMON,
            "go.mod": "require github.com/mark3labs/mcp-go v0.32.0\n",
            "main.go": "// s.AddTool(...) is registered elsewhere\n",
        })
        result = await validate_project(tmp_path, "go")
        assert result.warnings == ["No tools defined in server"]
