"""MCPForge -- scaffolding, diagramming and validation for MCP servers.

Creates starter Model Context Protocol server projects in Python,
TypeScript, Go or Rust, and inspects existing projects to draw their
capabilities or check their structure.

Quick usage::

    from mcpforge.config import Language, Pattern, ProjectSpec
    from mcpforge.scaffolder import ProjectGenerator

    spec = ProjectSpec(name="hello-mcp", language=Language.PYTHON)
    project_path = await ProjectGenerator(spec).generate("/tmp/output")
"""

__version__ = "1.0.0"
