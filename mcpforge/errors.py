"""Exception hierarchy for MCPForge commands.

Every error the CLI reports deliberately derives from :class:`ForgeError`.
Anything else (``OSError`` from the file system, for instance) propagates
unchanged and is reported at the command boundary as well.
"""

from __future__ import annotations

from pathlib import Path


class ForgeError(Exception):
    """Base class for all MCPForge errors."""


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------


class InputValidationError(ForgeError):
    """Raised when a command is invoked with values it cannot act on."""


class UnsupportedPatternError(InputValidationError):
    """Raised when a pattern has neither a template tree nor a blueprint."""

    def __init__(self, language: str, pattern: str) -> None:
        self.language = language
        self.pattern = pattern
        super().__init__(
            f"Pattern '{pattern}' is not available for {language}: "
            f"no template tree exists and no built-in blueprint covers it"
        )


class UnsupportedFormatError(InputValidationError):
    """Raised when a diagram format cannot be produced."""

    def __init__(self, fmt: str, supported: list[str]) -> None:
        self.format = fmt
        super().__init__(
            f"Unsupported diagram format: {fmt} (supported: {', '.join(supported)})"
        )


class ProjectExistsError(InputValidationError):
    """Raised when the target directory of ``new`` already exists."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Directory already exists: {path}")


class TemplateRenderError(InputValidationError):
    """Raised when a file in a template tree is not a valid Jinja2 template."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot render template {path}: {reason}")


# ---------------------------------------------------------------------------
# Not found
# ---------------------------------------------------------------------------


class NotFoundError(ForgeError):
    """Raised when a command's subject cannot be located."""


class ProjectNotFoundError(NotFoundError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Project path not found: {path}")


class LanguageDetectionError(NotFoundError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"Could not detect project language in {path} "
            f"(expected pyproject.toml, package.json, go.mod or Cargo.toml)"
        )


# ---------------------------------------------------------------------------
# External processes
# ---------------------------------------------------------------------------


class CommandError(ForgeError):
    """Raised when git or a package manager exits with a non-zero status."""

    def __init__(self, cmd: list[str], returncode: int, stderr: str = "") -> None:
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr
        message = f"Command failed ({returncode}): {' '.join(cmd)}"
        if stderr:
            message += f"\n{stderr}"
        super().__init__(message)
