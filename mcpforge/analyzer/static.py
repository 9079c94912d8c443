"""Static capability extraction from an MCP server's entry point."""

from __future__ import annotations

import asyncio
from pathlib import Path

from mcpforge.config import Language
from mcpforge.languages import get_language

from .models import AnalysisResult


async def analyze_project(path: str | Path, language: Language | str) -> AnalysisResult:
    """Extract the tools, resources and prompts declared by the project at *path*.

    The project name is the directory's basename.  When no entry point exists
    the result simply has empty capability lists; that is a displayable state,
    not an error.
    """
    root = Path(path).resolve()
    support = get_language(language)
    result = AnalysisResult(project_name=root.name, language=support.language.value)

    entry = support.find_entry_point(root)
    if entry is None:
        return result

    content = await asyncio.to_thread(entry.read_text, encoding="utf-8", errors="replace")
    for capability in support.extract(content):
        result.add(capability)
    return result
