"""MCPForge configuration and request models.

Typed configuration for every command.  All settings use Pydantic v2 models so
that invalid languages, patterns, transports or project names are rejected at
construction time, before anything touches the file system.
"""

from __future__ import annotations

import os
import re
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Language(str, Enum):
    """Target language of a generated MCP server."""
    PYTHON = "python"
    TYPESCRIPT = "typescript"
    GO = "go"
    RUST = "rust"


class Pattern(str, Enum):
    """Architectural variant of a generated project."""
    BASIC = "basic"
    ENTERPRISE = "enterprise"
    MICROSERVICES = "microservices"


class Transport(str, Enum):
    """Communication channel the generated server is configured for."""
    STDIO = "stdio"
    SSE = "sse"
    HTTP = "http"


NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


# ---------------------------------------------------------------------------
# Project request
# ---------------------------------------------------------------------------


class ProjectSpec(BaseModel):
    """A validated request to create a project.  Immutable once built."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Project name (letters, digits, '-' and '_')")
    language: Language = Field(default=Language.PYTHON)
    pattern: Pattern = Field(default=Pattern.BASIC)
    transport: Transport = Field(default=Transport.STDIO)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not NAME_PATTERN.match(value):
            raise ValueError(
                "project name must be non-empty and contain only letters, "
                "digits, hyphens and underscores"
            )
        return value


# ---------------------------------------------------------------------------
# Tool configuration
# ---------------------------------------------------------------------------


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


class ForgeConfig(BaseModel):
    """Global MCPForge configuration.

    Instances are created once by the CLI entry point (usually through
    :meth:`from_env`) and passed to the generator.
    """

    templates_root: Optional[Path] = Field(
        default=None,
        description="Directory holding <language>/<pattern> template trees; "
        "defaults to <package root>/templates",
    )
    debug: bool = Field(default=False, description="Print template resolution details")
    git: bool = Field(default=True, description="Initialise a git repository after generation")
    install: bool = Field(default=True, description="Install dependencies after generation")
    command_timeout: int = Field(
        default=600, ge=1, description="Timeout in seconds for git / package manager commands"
    )

    @classmethod
    def from_env(cls) -> "ForgeConfig":
        """Build a ``ForgeConfig`` from environment variables.

        Recognised variables (all optional):
            MCPFORGE_TEMPLATES_DIR, MCPFORGE_DEBUG, MCPFORGE_NO_GIT,
            MCPFORGE_NO_INSTALL, MCPFORGE_COMMAND_TIMEOUT.

        Raises:
            pydantic.ValidationError: If a variable holds an unusable value.
        """
        templates = os.environ.get("MCPFORGE_TEMPLATES_DIR")
        kwargs: dict = {
            "templates_root": Path(templates) if templates else None,
            "debug": _env_flag("MCPFORGE_DEBUG"),
            "git": not _env_flag("MCPFORGE_NO_GIT"),
            "install": not _env_flag("MCPFORGE_NO_INSTALL"),
        }
        if os.environ.get("MCPFORGE_COMMAND_TIMEOUT"):
            kwargs["command_timeout"] = os.environ["MCPFORGE_COMMAND_TIMEOUT"]
        return cls(**kwargs)
