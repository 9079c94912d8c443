"""Jinja2 template rendering, template-tree resolution and materialization.

Provides the TemplateRenderer class which loads the built-in Jinja2 blueprints
from ``mcpforge/scaffolder/blueprints/`` and renders them with
project-specific context data, plus the two functions that handle on-disk
template trees:

* :func:`resolve_template` locates ``templates/<language>/<pattern>`` below
  the package root;
* :func:`materialize` copies such a tree into a project directory, replacing
  ``__key__`` markers in names and ``{{ key }}`` placeholders in contents.
"""

from __future__ import annotations

import asyncio
import shutil
import tomllib
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from mcpforge.errors import TemplateRenderError
from mcpforge.naming import to_kebab, to_pascal, to_snake


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_BLUEPRINT_DIR = Path(__file__).parent / "blueprints"
_PACKAGE_DIR = Path(__file__).resolve().parent.parent
_PACKAGE_NAME = "mcpforge"

# Suffixes marking a file as a template; stripped on materialization.
TEMPLATE_SUFFIXES: tuple[str, ...] = (".hbs", ".j2")


def find_package_root(start: str | Path | None = None) -> Path:
    """Return the directory that owns the ``templates/`` tree.

    Walks up from *start* until a ``pyproject.toml`` declaring the
    ``mcpforge`` project is found, which is the case for a source checkout or
    an editable install.  Falls back to the installed package directory.
    """
    current = Path(start).resolve() if start else Path(__file__).resolve().parent
    for directory in (current, *current.parents):
        manifest = directory / "pyproject.toml"
        if manifest.is_file() and _declares_package(manifest):
            return directory
    return _PACKAGE_DIR


def _declares_package(manifest: Path) -> bool:
    try:
        data = tomllib.loads(manifest.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return False
    return data.get("project", {}).get("name") == _PACKAGE_NAME


def resolve_template(
    language: str,
    pattern: str,
    templates_root: str | Path | None = None,
) -> Optional[Path]:
    """Locate the template tree for *language* / *pattern*.

    Returns ``None`` when no such directory exists; callers fall back to the
    built-in blueprints in that case.
    """
    root = Path(templates_root) if templates_root else find_package_root() / "templates"
    candidate = root / str(language) / str(pattern)
    return candidate if candidate.is_dir() else None


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    The renderer discovers ``.j2`` blueprint files under a configurable
    template directory.  Templates are rendered with a context dictionary that
    typically contains the project name forms, transport, pattern and the
    capability set of the pattern.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _BLUEPRINT_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([], default_for_string=False),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["pascal_case"] = to_pascal
        self.env.filters["snake_case"] = to_snake
        self.env.filters["kebab_case"] = to_kebab

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"python/server.py.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context.

        Used for output paths of blueprints and for the contents of files in
        on-disk template trees.
        """
        template = self.env.from_string(template_string)
        return template.render(**context)

    # -- File-based rendering (async) --------------------------------------

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically.  Returns the output
        path.
        """
        content = self.render(template_path, context)
        out = Path(output_path)
        await asyncio.to_thread(_write_file, out, content)
        return out


# ---------------------------------------------------------------------------
# Template tree materialization
# ---------------------------------------------------------------------------


def substitute_name(name: str, context: dict[str, str]) -> str:
    """Replace every ``__key__`` marker in a file or directory name."""
    for key, value in context.items():
        name = name.replace(f"__{key}__", str(value))
    return name


def strip_template_suffix(name: str) -> str:
    for suffix in TEMPLATE_SUFFIXES:
        if name.endswith(suffix):
            return name[: -len(suffix)]
    return name


async def materialize(
    template_dir: str | Path,
    target_dir: str | Path,
    context: dict[str, str],
    renderer: TemplateRenderer | None = None,
) -> list[Path]:
    """Mirror *template_dir* into *target_dir*, rendering as it goes.

    Directory and file names have their ``__key__`` markers substituted from
    *context*; file names additionally lose their template suffix; file
    contents are rendered as Jinja2 templates.  Files that are not UTF-8
    text are copied byte for byte.  I/O errors propagate unchanged; invalid
    template syntax raises :class:`~mcpforge.errors.TemplateRenderError`
    naming the offending file.

    Returns:
        Paths of all written files, in traversal order.
    """
    renderer = renderer or TemplateRenderer()
    source = Path(template_dir)
    target = Path(target_dir)
    await asyncio.to_thread(target.mkdir, parents=True, exist_ok=True)

    written: list[Path] = []
    entries = await asyncio.to_thread(lambda: sorted(source.iterdir()))
    for entry in entries:
        target_name = substitute_name(entry.name, context)
        if entry.is_dir():
            written.extend(
                await materialize(entry, target / target_name, context, renderer)
            )
            continue

        out = target / strip_template_suffix(target_name)
        raw = await asyncio.to_thread(entry.read_bytes)
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            await asyncio.to_thread(shutil.copyfile, entry, out)
        else:
            try:
                rendered = renderer.render_string(text, context)
            except TemplateError as exc:
                raise TemplateRenderError(entry, exc.message or str(exc)) from exc
            await asyncio.to_thread(_write_file, out, rendered)
        written.append(out)

    return written


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
