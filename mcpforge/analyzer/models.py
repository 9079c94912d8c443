"""Pydantic v2 models for project analysis and validation results."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, computed_field


class CapabilityKind(str, Enum):
    """What an MCP server declares."""
    TOOL = "tool"
    RESOURCE = "resource"
    PROMPT = "prompt"


class Capability(BaseModel):
    """A tool, resource or prompt discovered in a source file."""
    kind: CapabilityKind
    identifier: str = Field(..., description="Tool/prompt name or resource URI")


class AnalysisResult(BaseModel):
    """Capabilities found in one project, in discovery order."""

    project_name: str
    language: str
    tools: list[Capability] = Field(default_factory=list)
    resources: list[Capability] = Field(default_factory=list)
    prompts: list[Capability] = Field(default_factory=list)

    @property
    def tool_names(self) -> list[str]:
        return [c.identifier for c in self.tools]

    @property
    def resource_names(self) -> list[str]:
        return [c.identifier for c in self.resources]

    @property
    def prompt_names(self) -> list[str]:
        return [c.identifier for c in self.prompts]

    def add(self, capability: Capability) -> None:
        """Append *capability* to the list matching its kind."""
        bucket = {
            CapabilityKind.TOOL: self.tools,
            CapabilityKind.RESOURCE: self.resources,
            CapabilityKind.PROMPT: self.prompts,
        }[capability.kind]
        bucket.append(capability)


class ValidationResult(BaseModel):
    """Findings of a structural validation run.

    Errors block success; warnings are advisory.  ``valid`` is derived from
    the error list and cannot be set.
    """

    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def valid(self) -> bool:
        return not self.errors

    def error(self, message: str) -> None:
        self.errors.append(message)

    def warn(self, message: str) -> None:
        self.warnings.append(message)
