"""Command-line interface: ``mcpforge new | add | diagram | validate``.

Each command runs as a single asyncio task.  Errors derived from
:class:`~mcpforge.errors.ForgeError`, file-system errors and invalid project
requests are reported in red at this boundary and turn into exit status 1;
validator errors do the same.  Warnings never change the exit status.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from mcpforge import __version__
from mcpforge.analyzer import CapabilityKind
from mcpforge.analyzer.diagram import SUPPORTED_FORMATS, check_format, render_mermaid
from mcpforge.analyzer.static import analyze_project
from mcpforge.analyzer.validator import validate_project
from mcpforge.config import NAME_PATTERN, ForgeConfig, Language, Pattern, ProjectSpec, Transport
from mcpforge.errors import (
    ForgeError,
    InputValidationError,
    LanguageDetectionError,
    ProjectNotFoundError,
)
from mcpforge.languages import detect_language, get_language
from mcpforge.scaffolder import ProjectGenerator
from mcpforge.utils import (
    console,
    create_progress,
    print_error,
    print_header,
    print_success,
    print_summary_table,
    print_warning,
)

QUICK_START = """\
[bold blue]MCPForge[/bold blue] - The Architecture Patterns Framework for MCP

[dim]Quick Start:[/dim]
  [cyan]mcpforge new my-server --lang python[/cyan]     Create Python MCP server
  [cyan]mcpforge new my-server --lang typescript[/cyan] Create TypeScript MCP server
  [cyan]mcpforge add tool search[/cyan]                 Add a tool to existing project
"""


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _existing_project(project: str) -> tuple[Path, Language]:
    """Resolve *project* and detect its language, raising not-found errors."""
    path = Path(project).resolve()
    if not path.exists():
        raise ProjectNotFoundError(path)
    language = detect_language(path)
    if language is None:
        raise LanguageDetectionError(path)
    return path, language


def _print_plain(text: str, style: str = "") -> None:
    console.print(text, style=style, markup=False, highlight=False)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


async def cmd_new(args: argparse.Namespace) -> int:
    spec = ProjectSpec(
        name=args.name,
        language=args.lang,
        pattern=args.pattern,
        transport=args.transport,
    )
    config = ForgeConfig.from_env()
    config = config.model_copy(
        update={
            "git": config.git and not args.no_git,
            "install": config.install and not args.no_install,
        }
    )
    generator = ProjectGenerator(spec, config)

    print_header("Creating new MCP server")
    print_summary_table(
        {
            "Name": spec.name,
            "Language": spec.language.value,
            "Pattern": spec.pattern.value,
            "Transport": spec.transport.value,
        },
        title="Project",
    )

    with create_progress() as progress:
        task = progress.add_task("Creating project structure...", total=None)
        project_root = await generator.generate(args.directory)
        console.print("[green]✓[/green] Project structure created")

        if config.git:
            progress.update(task, description="Initializing git repository...")
            await generator.initialize_git(project_root)
            console.print("[green]✓[/green] Git repository initialized")

        if config.install:
            progress.update(task, description="Installing dependencies...")
            await generator.install_dependencies(project_root)
            console.print("[green]✓[/green] Dependencies installed")

    console.print()
    print_success("Project created successfully!")
    console.print()
    console.print("[dim]Next steps:[/dim]")
    for step in generator.next_steps(installed=config.install):
        _print_plain(f"  {step}", style="cyan")
    console.print()
    return 0


async def cmd_add(args: argparse.Namespace) -> int:
    kinds = [kind.value for kind in CapabilityKind]
    if args.kind not in kinds:
        print_error(f"Unsupported type: {args.kind}")
        console.print(f"[dim]Supported types: {', '.join(kinds)}[/dim]")
        return 1

    if not NAME_PATTERN.match(args.name):
        raise InputValidationError(
            f"Invalid {args.kind} name: {args.name!r} (use letters, digits, '-' and '_')"
        )

    path, language = _existing_project(args.server)
    support = get_language(language)

    print_header(f"Adding {args.kind}")
    print_summary_table(
        {"Type": args.kind, "Name": args.name, "Language": language.value},
        title="Snippet",
    )

    snippet = support.snippet(args.kind, args.name)
    console.print(f"[dim]Add this to your {support.snippet_target}:[/dim]")
    console.print()
    _print_plain(snippet, style="cyan")
    console.print()
    console.print(f"[dim]Edit the generated code in your server file to customize the {args.kind}.[/dim]")
    return 0


async def cmd_diagram(args: argparse.Namespace) -> int:
    check_format(args.output)
    path, language = _existing_project(args.project)

    print_header("Generating diagram")
    with create_progress() as progress:
        progress.add_task("Analyzing project structure...", total=None)
        result = await analyze_project(path, language)
    mermaid = render_mermaid(result)

    if args.file:
        out = Path(args.file)
        await asyncio.to_thread(out.write_text, mermaid, encoding="utf-8")
        print_success(f"Diagram saved to {out}")
        return 0

    print_success("Diagram generated")
    console.print()
    console.print("[dim]Mermaid diagram:[/dim]")
    console.print()
    _print_plain(mermaid, style="cyan")
    console.print()
    console.print("[dim]Paste this into https://mermaid.live to visualize[/dim]")
    return 0


async def cmd_validate(args: argparse.Namespace) -> int:
    path, language = _existing_project(args.project)

    print_header("Validating project")
    with create_progress() as progress:
        progress.add_task("Analyzing project...", total=None)
        result = await validate_project(path, language)

    if result.valid and not result.warnings:
        print_success("Project is valid")
        console.print()
        print_success("All checks passed!")
        return 0

    if result.errors:
        print_error("Errors:")
        for message in result.errors:
            print_error(f"  - {message}")
        console.print()
    if result.warnings:
        print_warning("Warnings:")
        for message in result.warnings:
            print_warning(f"  - {message}")
        console.print()
    return 0 if result.valid else 1


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcpforge",
        description="The Architecture Patterns Framework for Model Context Protocol",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  mcpforge new my-server --lang python\n"
            "  mcpforge new my-server -l go -p enterprise -t http\n"
            "  mcpforge add tool search -s ./my-server\n"
            "  mcpforge diagram ./my-server -f diagram.mmd\n"
            "  mcpforge validate ./my-server\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    commands = parser.add_subparsers(dest="command", metavar="<command>")

    new = commands.add_parser("new", help="Create a new MCP server project")
    new.add_argument("name", help="Project name (letters, digits, '-' and '_')")
    new.add_argument(
        "--lang", "-l",
        default=Language.PYTHON.value,
        help="Language: python, typescript, go, rust (default: python)",
    )
    new.add_argument(
        "--pattern", "-p",
        default=Pattern.BASIC.value,
        help="Pattern: basic, enterprise, microservices (default: basic)",
    )
    new.add_argument(
        "--transport", "-t",
        default=Transport.STDIO.value,
        help="Transport: stdio, sse, http (default: stdio)",
    )
    new.add_argument("--no-git", action="store_true", help="Skip git initialization")
    new.add_argument("--no-install", action="store_true", help="Skip dependency installation")
    new.add_argument(
        "--directory", "-d",
        default=".",
        help="Parent directory for the new project (default: current directory)",
    )
    new.set_defaults(handler=cmd_new)

    add = commands.add_parser("add", help="Add tool, resource, or prompt to existing project")
    add.add_argument("kind", metavar="type", help="tool, resource or prompt")
    add.add_argument("name", help="Name of the new capability")
    add.add_argument("--server", "-s", default=".", help="Path to MCP server project (default: .)")
    add.set_defaults(handler=cmd_add)

    diagram = commands.add_parser("diagram", help="Generate architecture diagram")
    diagram.add_argument("project", help="Path to MCP server project")
    diagram.add_argument(
        "--output", "-o",
        default="mermaid",
        help=f"Output format: {', '.join(SUPPORTED_FORMATS)} (default: mermaid)",
    )
    diagram.add_argument("--file", "-f", default=None, help="Write the diagram to this file")
    diagram.set_defaults(handler=cmd_diagram)

    validate = commands.add_parser("validate", help="Validate project structure and code")
    validate.add_argument("project", help="Path to MCP server project")
    validate.set_defaults(handler=cmd_validate)

    return parser


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = ".".join(str(loc) for loc in err["loc"])
        parts.append(f"{field}: {err['msg']}")
    subject = "configuration" if exc.title == ForgeConfig.__name__ else "project request"
    return f"Invalid {subject}: " + "; ".join(parts)


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point for ``mcpforge`` and ``python -m mcpforge``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        console.print(QUICK_START)
        parser.print_help()
        return

    try:
        code = asyncio.run(args.handler(args))
    except ValidationError as exc:
        print_error(_format_validation_error(exc))
        code = 1
    except (ForgeError, OSError) as exc:
        print_error(str(exc))
        code = 1

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
