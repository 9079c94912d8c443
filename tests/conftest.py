"""Shared pytest fixtures for the MCPForge test suite.

Provides reusable fixtures for:
- A generator configuration that never touches git or package managers
- A project factory that generates real projects into a temp directory
- Hand-written minimal projects per language
- On-disk template trees
- Mock subprocess helpers
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Awaitable, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from mcpforge.config import ForgeConfig, ProjectSpec
from mcpforge.scaffolder import ProjectGenerator


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def forge_config(tmp_path: Path) -> ForgeConfig:
    """Config pointing at an empty templates root, so blueprints are used."""
    templates_root = tmp_path / "templates"
    templates_root.mkdir()
    return ForgeConfig(templates_root=templates_root, git=False, install=False)


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Parent directory for generated projects."""
    out = tmp_path / "out"
    out.mkdir()
    return out


# ---------------------------------------------------------------------------
# Generated projects
# ---------------------------------------------------------------------------

@pytest.fixture
def generate_project(
    forge_config: ForgeConfig, output_dir: Path
) -> Callable[..., Awaitable[Path]]:
    """Factory generating a project from the built-in blueprints.

    Usage:
        async def test_x(generate_project):
            root = await generate_project("hello-mcp", language="go")
    """
    async def factory(name: str = "hello-mcp", **options: str) -> Path:
        spec = ProjectSpec(name=name, **options)
        return await ProjectGenerator(spec, forge_config).generate(output_dir)

    return factory


# ---------------------------------------------------------------------------
# Hand-written projects
# ---------------------------------------------------------------------------

PYPROJECT = textwrap.dedent("""\
    [project]
    name = "demo"
    version = "0.1.0"
    requires-python = ">=3.11"
    dependencies = ["fastmcp>=2.0.0"]
""")

PYTHON_SERVER = textwrap.dedent('''\
    from fastmcp import FastMCP

    server = FastMCP("demo")


    @server.tool()
    async def search(query: str) -> str:
        """Search."""
        return query


    @server.resource("docs://index")
    async def index() -> str:
        return "{}"


    @server.prompt()
    def summarize() -> str:
        return "Summarize"
''')


@pytest.fixture
def python_project(tmp_path: Path) -> Path:
    """A minimal, valid Python MCP project named ``demo``."""
    root = tmp_path / "demo"
    (root / "demo").mkdir(parents=True)
    (root / "pyproject.toml").write_text(PYPROJECT, encoding="utf-8")
    (root / "demo" / "server.py").write_text(PYTHON_SERVER, encoding="utf-8")
    (root / "README.md").write_text("# Demo\n", encoding="utf-8")
    (root / ".gitignore").write_text(".env\n", encoding="utf-8")
    return root


# ---------------------------------------------------------------------------
# Template trees
# ---------------------------------------------------------------------------

@pytest.fixture
def template_tree(tmp_path: Path) -> Path:
    """A ``templates/<language>/<pattern>`` root with a python/basic tree.

    Layout::

        templates/python/basic/
            README.md.hbs
            __projectNameSnake__/__projectNameSnake__.conf.hbs
            __projectNameSnake__/__init__.py.j2
            logo.bin
    """
    root = tmp_path / "tree-templates"
    tree = root / "python" / "basic"
    package = tree / "__projectNameSnake__"
    package.mkdir(parents=True)
    (tree / "README.md.hbs").write_text(
        "# {{projectNamePascal}}\n\nTransport: {{transport}}\n", encoding="utf-8"
    )
    (package / "__projectNameSnake__.conf.hbs").write_text(
        "name={{projectName}}\nkebab={{projectNameKebab}}\n", encoding="utf-8"
    )
    (package / "__init__.py.j2").write_text(
        '"""{{ projectNamePascal }}"""\n', encoding="utf-8"
    )
    (tree / "logo.bin").write_bytes(b"\x89PNG\r\n\x1a\n\xff\xfe\x00")
    return root


# ---------------------------------------------------------------------------
# Subprocess mocks
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
