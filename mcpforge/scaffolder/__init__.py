"""MCPForge scaffolder -- generates MCP server projects.

Quick usage::

    from mcpforge.config import ProjectSpec
    from mcpforge.scaffolder import ProjectGenerator

    spec = ProjectSpec(name="hello-mcp", language="python", pattern="basic")
    project_path = await ProjectGenerator(spec).generate("/tmp/output")
"""

from mcpforge.scaffolder.catalog import PATTERN_CATALOG, CapabilitySet, capabilities_for
from mcpforge.scaffolder.generator import ProjectGenerator, build_template_context
from mcpforge.scaffolder.templates import TemplateRenderer, materialize, resolve_template

__all__ = [
    "PATTERN_CATALOG",
    "CapabilitySet",
    "ProjectGenerator",
    "TemplateRenderer",
    "build_template_context",
    "capabilities_for",
    "materialize",
    "resolve_template",
]
