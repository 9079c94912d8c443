"""Static analysis, diagram synthesis and structural validation of MCP projects.

The result models live here; the operations are in :mod:`.static`,
:mod:`.diagram` and :mod:`.validator`.
"""

from mcpforge.analyzer.models import (
    AnalysisResult,
    Capability,
    CapabilityKind,
    ValidationResult,
)

__all__ = [
    "AnalysisResult",
    "Capability",
    "CapabilityKind",
    "ValidationResult",
]
