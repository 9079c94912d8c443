"""Language registry and detection.

``LANGUAGES`` is the single dispatch table for generation, analysis,
validation and snippets.  Its insertion order is the detection priority.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from mcpforge.config import Language

from .base import LanguageSupport
from .go import GoSupport
from .python import PythonSupport
from .rust import RustSupport
from .typescript import TypeScriptSupport

LANGUAGES: dict[Language, LanguageSupport] = {
    support.language: support
    for support in (PythonSupport(), TypeScriptSupport(), GoSupport(), RustSupport())
}


def get_language(language: Language | str) -> LanguageSupport:
    return LANGUAGES[Language(language)]


def detect_language(path: str | Path) -> Optional[Language]:
    """Classify a project directory by its manifest file; ``None`` if unknown."""
    for language, support in LANGUAGES.items():
        if support.detect(Path(path)):
            return language
    return None


__all__ = [
    "LANGUAGES",
    "LanguageSupport",
    "detect_language",
    "get_language",
]
