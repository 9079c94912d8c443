"""Capability catalog for the built-in blueprints.

Each generatable pattern maps to one :class:`CapabilitySet`.  The per-language
blueprints iterate over these records to emit tool, resource and prompt
declarations, so the identifiers a generated project declares are exactly
the identifiers listed here.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from mcpforge.config import Pattern


# ---------------------------------------------------------------------------
# Catalog records
# ---------------------------------------------------------------------------


class ParamSpec(BaseModel):
    """A single tool argument."""
    name: str
    type: str = Field(..., description="Abstract type: 'string' or 'integer'")
    description: str = ""
    default: Optional[str] = None
    required: bool = False


class ToolSpec(BaseModel):
    name: str
    description: str
    params: list[ParamSpec] = Field(default_factory=list)


class ResourceSpec(BaseModel):
    uri: str
    name: str
    function: str = Field(..., description="Handler name in languages that need one")
    description: str = ""


class PromptSpec(BaseModel):
    name: str
    description: str = ""


class CapabilitySet(BaseModel):
    """Everything a pattern contributes to a generated server."""
    tools: list[ToolSpec] = Field(default_factory=list)
    resources: list[ResourceSpec] = Field(default_factory=list)
    prompts: list[PromptSpec] = Field(default_factory=list)
    lifecycle: bool = Field(default=False, description="Emit startup/shutdown hooks")
    auth: bool = Field(default=False, description="Emit OAUTH2_ENABLED-gated auth wiring")


# ---------------------------------------------------------------------------
# Example capabilities
# ---------------------------------------------------------------------------

HELLO = ToolSpec(
    name="hello",
    description="Say hello to someone",
    params=[
        ParamSpec(name="name", type="string", description="The name to greet", default="World"),
    ],
)

ADD = ToolSpec(
    name="add",
    description="Add two numbers",
    params=[
        ParamSpec(name="a", type="integer", description="First number", required=True),
        ParamSpec(name="b", type="integer", description="Second number", required=True),
    ],
)

HEALTH_CHECK = ToolSpec(name="health_check", description="Check server health status")

SETTINGS = ResourceSpec(
    uri="config://settings",
    name="Settings",
    function="get_settings",
    description="Server configuration settings",
)

SYSTEM_PROMPT = PromptSpec(name="system_prompt", description="System prompt for this server")


PATTERN_CATALOG: dict[Pattern, CapabilitySet] = {
    Pattern.BASIC: CapabilitySet(tools=[HELLO, ADD], resources=[SETTINGS]),
    Pattern.ENTERPRISE: CapabilitySet(
        tools=[HELLO, HEALTH_CHECK],
        resources=[SETTINGS],
        prompts=[SYSTEM_PROMPT],
        lifecycle=True,
        auth=True,
    ),
}


def capabilities_for(pattern: Pattern) -> Optional[CapabilitySet]:
    """Return the capability set of *pattern*, or ``None`` if it has no blueprint."""
    return PATTERN_CATALOG.get(Pattern(pattern))
