"""Mermaid rendering of an :class:`AnalysisResult`."""

from __future__ import annotations

from mcpforge.errors import UnsupportedFormatError

from .models import AnalysisResult, Capability

SUPPORTED_FORMATS: list[str] = ["mermaid"]

# (subgraph title, node prefix, result attribute) in drawing order.
_SECTIONS = (
    ("Tools", "T", "tools"),
    ("Resources", "R", "resources"),
    ("Prompts", "P", "prompts"),
)


def check_format(fmt: str) -> str:
    """Return *fmt* if it can be produced, else raise ``UnsupportedFormatError``."""
    if fmt not in SUPPORTED_FORMATS:
        raise UnsupportedFormatError(fmt, SUPPORTED_FORMATS)
    return fmt


def _label(text: str) -> str:
    return text.replace('"', "#quot;")


def _section(title: str, prefix: str, items: list[Capability]) -> list[str]:
    if not items:
        return []
    lines = [f'        subgraph "{title}"']
    lines.extend(
        f'            {prefix}{i}["{_label(item.identifier)}"]' for i, item in enumerate(items)
    )
    lines.append("        end")
    lines.extend(f"        SERVER --> {prefix}{i}" for i in range(len(items)))
    return lines


def render_mermaid(result: AnalysisResult) -> str:
    """Render *result* as a Mermaid ``graph TB`` flowchart.

    The server sits in its own subgraph together with one nested subgraph per
    non-empty capability kind; the MCP client node is drawn outside and
    linked to the server by a bidirectional edge.  Pure function.
    """
    name = _label(result.project_name)
    lines = [
        "graph TB",
        f'    subgraph "{name} MCP Server"',
        "        direction TB",
        f'        SERVER[("{name}<br/>Language: {_label(result.language)}")]',
    ]
    for title, prefix, attr in _SECTIONS:
        lines.extend(_section(title, prefix, getattr(result, attr)))
    lines.append("    end")
    lines.append('    CLIENT[("MCP Client<br/>(Claude, etc.)")]')
    lines.append('    CLIENT <-->|"MCP Protocol"| SERVER')
    return "\n".join(lines)
