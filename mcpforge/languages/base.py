"""Per-language support interface.

A :class:`LanguageSupport` bundles everything MCPForge knows about one target
language: how to recognise a project, which blueprint files generate it,
where its entry point lives, which declaration shapes mark a capability, and
which manifest checks validate it.  One instance per language is registered
in :data:`mcpforge.languages.LANGUAGES`.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar, Optional

from mcpforge.analyzer.models import Capability, CapabilityKind, ValidationResult
from mcpforge.config import Language
from mcpforge.naming import NameForms, to_snake

if TYPE_CHECKING:
    from mcpforge.scaffolder.templates import TemplateRenderer


class LanguageSupport:
    """Base class; subclasses fill in the class attributes."""

    language: ClassVar[Language]
    # Characteristic manifest file used for detection and validation.
    manifest: ClassVar[str]
    # Human-readable dependency requirement for error messages.
    dependency_label: ClassVar[str]
    # Entry point as reported when missing.
    entry_label: ClassVar[str]
    # (blueprint template, output path template) pairs.
    blueprint: ClassVar[list[tuple[str, str]]]
    # Abstract parameter type -> language type.
    type_map: ClassVar[dict[str, str]]
    install_command: ClassVar[list[str]]
    # File the `add` snippets are meant for.
    snippet_target: ClassVar[str]
    patterns: ClassVar[dict[CapabilityKind, tuple[re.Pattern[str], ...]]]

    # -- Detection ---------------------------------------------------------

    def detect(self, path: Path) -> bool:
        return (Path(path) / self.manifest).is_file()

    # -- Generation --------------------------------------------------------

    def blueprint_context(self, names: NameForms) -> dict[str, Any]:
        """Extra template variables this language's blueprints need."""
        return {"types": self.type_map}

    def snippet(self, kind: CapabilityKind | str, name: str, renderer: TemplateRenderer | None = None) -> str:
        """Render a code snippet declaring a new capability called *name*."""
        from mcpforge.scaffolder.templates import TemplateRenderer

        kind = CapabilityKind(kind)
        renderer = renderer or TemplateRenderer()
        names = NameForms.from_name(name)
        context = {
            "name": name,
            "name_snake": names.snake,
            "name_pascal": names.pascal,
            "name_camel": names.pascal[:1].lower() + names.pascal[1:],
        }
        return renderer.render(
            f"{self.language.value}/snippets/{kind.value}.j2", context
        ).rstrip("\n")

    def next_steps(self, names: NameForms, installed: bool) -> list[str]:
        return []

    # -- Analysis ----------------------------------------------------------

    def entry_candidates(self, root: Path) -> list[Path]:
        raise NotImplementedError

    def find_entry_point(self, root: Path) -> Optional[Path]:
        """Return the first existing entry-point candidate, or ``None``."""
        for candidate in self.entry_candidates(Path(root)):
            if candidate.is_file():
                return candidate
        return None

    def extract(self, content: str) -> list[Capability]:
        """Find capability declarations in *content*.

        Surface-level pattern matching against the declaration idiom the
        blueprints emit; not a parser.
        """
        found: list[Capability] = []
        for kind in CapabilityKind:
            for pattern in self.patterns.get(kind, ()):
                for match in pattern.finditer(content):
                    found.append(Capability(kind=kind, identifier=match.group(1)))
        return found

    # -- Validation --------------------------------------------------------

    def parse_manifest(self, text: str) -> Any:
        """Parse manifest text; raises ``ValueError`` when it is malformed."""
        return text

    def has_protocol_dependency(self, manifest: Any) -> bool:
        raise NotImplementedError

    def check_manifest(self, root: Path, manifest: Any, result: ValidationResult) -> None:
        """Language-specific advisory checks; default adds nothing."""

    # -- Helpers -----------------------------------------------------------

    @staticmethod
    def project_dir_names(root: Path) -> list[str]:
        """Package directory names derived from the project directory name."""
        base = Path(root).resolve().name
        names = [base.replace("-", "_"), to_snake(base)]
        return list(dict.fromkeys(names))
