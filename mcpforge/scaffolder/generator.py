"""Main scaffolding orchestrator.

Takes a ``ProjectSpec`` and generates a complete MCP server project, either by
materializing an on-disk template tree (``templates/<language>/<pattern>``)
or, when no such tree exists, by rendering the language's built-in blueprint
against the pattern's capability set.
"""

from __future__ import annotations

import asyncio
import shutil
import uuid
from pathlib import Path
from typing import Any, Optional

from mcpforge.config import ForgeConfig, Language, ProjectSpec
from mcpforge.errors import CommandError, ProjectExistsError, UnsupportedPatternError
from mcpforge.languages import LanguageSupport, get_language
from mcpforge.naming import NameForms
from mcpforge.utils import console, run_command

from .catalog import CapabilitySet, capabilities_for
from .templates import TemplateRenderer, materialize, resolve_template

GIT_COMMIT_MESSAGE = "Initial commit from MCPForge"


def build_template_context(spec: ProjectSpec) -> dict[str, str]:
    """The string context shared by file-name markers and content placeholders."""
    names = NameForms.from_name(spec.name)
    return {
        "projectName": names.raw,
        "projectNameSnake": names.snake,
        "projectNamePascal": names.pascal,
        "projectNameKebab": names.kebab,
        "transport": spec.transport.value,
        "pattern": spec.pattern.value,
    }


class ProjectGenerator:
    """Generates one project described by a ``ProjectSpec``.

    Generation is transactional: files are written into a staging directory
    beside the target, which is renamed into place only once every file has
    been written.  A failure at any point removes the staging directory.
    """

    def __init__(self, spec: ProjectSpec, config: ForgeConfig | None = None) -> None:
        self.spec = spec
        self.config = config or ForgeConfig()
        self.names = NameForms.from_name(spec.name)
        self.support: LanguageSupport = get_language(spec.language)
        self.renderer = TemplateRenderer()

    # -- Public API --------------------------------------------------------

    async def generate(self, parent_dir: str | Path) -> Path:
        """Generate the project below *parent_dir*.

        Returns:
            Path to the generated project root (``parent_dir / spec.name``).

        Raises:
            ProjectExistsError: If the target directory already exists.
            UnsupportedPatternError: If the pattern has neither a template
                tree nor a built-in blueprint for the language.
        """
        parent = Path(parent_dir).resolve()
        target = parent / self.spec.name
        if target.exists():
            raise ProjectExistsError(target)

        template_dir = resolve_template(
            self.spec.language.value, self.spec.pattern.value, self.config.templates_root
        )
        capabilities = capabilities_for(self.spec.pattern)
        if template_dir is None and capabilities is None:
            raise UnsupportedPatternError(self.spec.language.value, self.spec.pattern.value)

        if self.config.debug:
            console.print(f"[dim]Template path: {template_dir or '(none)'}[/dim]")
            console.print(
                f"[dim]Using {'template tree' if template_dir else 'built-in blueprint'}"
                f" for {self.spec.language.value}/{self.spec.pattern.value}[/dim]"
            )

        await asyncio.to_thread(parent.mkdir, parents=True, exist_ok=True)
        staging = parent / f".{self.spec.name}-{uuid.uuid4().hex[:8]}"
        # Created under the umask; the rename keeps its mode.
        await asyncio.to_thread(staging.mkdir)
        try:
            if template_dir is not None:
                await materialize(template_dir, staging, build_template_context(self.spec), self.renderer)
            else:
                await self._render_blueprint(staging, capabilities)
            await asyncio.to_thread(staging.rename, target)
        except BaseException:
            await asyncio.to_thread(shutil.rmtree, staging, ignore_errors=True)
            raise

        return target

    async def initialize_git(self, project_root: str | Path) -> None:
        """Create a repository holding the generated files as its first commit."""
        for cmd in (
            ["git", "init"],
            ["git", "add", "."],
            ["git", "commit", "-m", GIT_COMMIT_MESSAGE],
        ):
            await self._run(cmd, project_root)

    async def install_dependencies(
        self, project_root: str | Path, language: Language | None = None
    ) -> None:
        """Run the language's install command inside *project_root*."""
        support = get_language(language) if language else self.support
        await self._run(list(support.install_command), project_root)

    def next_steps(self, installed: bool) -> list[str]:
        return [f"cd {self.spec.name}"] + self.support.next_steps(self.names, installed)

    # -- Context building --------------------------------------------------

    def _build_context(self, capabilities: CapabilitySet) -> dict[str, Any]:
        """Build the Jinja2 blueprint context: names, options and capabilities."""
        context: dict[str, Any] = dict(build_template_context(self.spec))
        context.update(
            tools=capabilities.tools,
            resources=capabilities.resources,
            prompts=capabilities.prompts,
            lifecycle=capabilities.lifecycle,
            auth=capabilities.auth,
        )
        context.update(self.support.blueprint_context(self.names))
        return context

    # -- Rendering ---------------------------------------------------------

    async def _render_blueprint(self, root: Path, capabilities: Optional[CapabilitySet]) -> list[Path]:
        context = self._build_context(capabilities or CapabilitySet())
        written: list[Path] = []
        for template, output in self.support.blueprint:
            out = root / self.renderer.render_string(output, context)
            written.append(await self.renderer.render_to_file(template, out, context))
        return written

    # -- Subprocesses ------------------------------------------------------

    async def _run(self, cmd: list[str], cwd: str | Path) -> None:
        returncode, _, stderr = await run_command(
            cmd, cwd=cwd, timeout=self.config.command_timeout
        )
        if returncode != 0:
            raise CommandError(cmd, returncode, stderr)
