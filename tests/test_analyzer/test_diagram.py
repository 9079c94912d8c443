"""Tests for Mermaid diagram synthesis (mcpforge.analyzer.diagram)."""

from __future__ import annotations

import pytest

from mcpforge.analyzer.diagram import SUPPORTED_FORMATS, check_format, render_mermaid
from mcpforge.analyzer.models import AnalysisResult, Capability, CapabilityKind
from mcpforge.errors import InputValidationError, UnsupportedFormatError

pytestmark = pytest.mark.unit


def _result(tools=(), resources=(), prompts=(), name="hello-mcp", language="python") -> AnalysisResult:
    result = AnalysisResult(project_name=name, language=language)
    for kind, items in (
        (CapabilityKind.TOOL, tools),
        (CapabilityKind.RESOURCE, resources),
        (CapabilityKind.PROMPT, prompts),
    ):
        for item in items:
            result.add(Capability(kind=kind, identifier=item))
    return result


class TestRenderMermaid:
    def test_full_diagram(self):
        diagram = render_mermaid(
            _result(tools=["hello", "add"], resources=["config://settings"], prompts=["system_prompt"])
        )
        assert diagram == "\n".join([
            "graph TB",
            '    subgraph "hello-mcp MCP Server"',
            "        direction TB",
            '        SERVER[("hello-mcp<br/>Language: python")]',
            '        subgraph "Tools"',
            '            T0["hello"]',
            '            T1["add"]',
            "        end",
            "        SERVER --> T0",
            "        SERVER --> T1",
            '        subgraph "Resources"',
            '            R0["config://settings"]',
            "        end",
            "        SERVER --> R0",
            '        subgraph "Prompts"',
            '            P0["system_prompt"]',
            "        end",
            "        SERVER --> P0",
            "    end",
            '    CLIENT[("MCP Client<br/>(Claude, etc.)")]',
            '    CLIENT <-->|"MCP Protocol"| SERVER',
        ])

    def test_empty_kinds_have_no_subgraph(self):
        diagram = render_mermaid(_result(tools=["hello"]))
        assert 'subgraph "Tools"' in diagram
        assert "Resources" not in diagram
        assert "Prompts" not in diagram
        assert "R0" not in diagram and "P0" not in diagram

    def test_empty_analysis_still_renders_server_and_client(self):
        lines = render_mermaid(_result()).splitlines()
        assert lines[0] == "graph TB"
        assert "SERVER -->" not in "\n".join(lines)
        assert lines[-1] == '    CLIENT <-->|"MCP Protocol"| SERVER'

    def test_one_edge_per_node(self):
        diagram = render_mermaid(_result(tools=[f"t{i}" for i in range(5)]))
        assert diagram.count("SERVER --> T") == 5
        assert '            T4["t4"]' in diagram

    def test_quotes_are_escaped(self):
        diagram = render_mermaid(_result(resources=['file://"quoted"']))
        assert 'R0["file://#quot;quoted#quot;"]' in diagram

    def test_deterministic(self):
        result = _result(tools=["a", "b"], prompts=["p"])
        assert render_mermaid(result) == render_mermaid(result)


class TestCheckFormat:
    def test_mermaid_supported(self):
        assert check_format("mermaid") == "mermaid"
        assert SUPPORTED_FORMATS == ["mermaid"]

    @pytest.mark.parametrize("fmt", ["svg", "png", "pdf"])
    def test_other_formats_rejected(self, fmt: str):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            check_format(fmt)
        assert isinstance(exc_info.value, InputValidationError)
        assert fmt in str(exc_info.value)
