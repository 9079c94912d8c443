"""Project name case conversion.

Every generated identifier (package names, module paths, type names) is
derived from the project name through these three functions.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict

_UPPER = re.compile(r"([A-Z])")
_SEPARATORS = re.compile(r"[-_]")


def to_snake(name: str) -> str:
    """Convert ``MyProject`` or ``my-project`` to ``my_project``."""
    result = _UPPER.sub(r"_\1", name).lower().replace("-", "_")
    return result[1:] if result.startswith("_") else result


def to_pascal(name: str) -> str:
    """Convert ``my-project`` or ``my_project`` to ``MyProject``."""
    return "".join(
        segment[:1].upper() + segment[1:].lower()
        for segment in _SEPARATORS.split(name)
    )


def to_kebab(name: str) -> str:
    """Convert ``MyProject`` or ``my_project`` to ``my-project``."""
    result = _UPPER.sub(r"-\1", name).lower().replace("_", "-")
    return result[1:] if result.startswith("-") else result


class NameForms(BaseModel):
    """All case variants of one project name, computed once."""

    model_config = ConfigDict(frozen=True)

    raw: str
    snake: str
    pascal: str
    kebab: str

    @classmethod
    def from_name(cls, name: str) -> "NameForms":
        return cls(
            raw=name,
            snake=to_snake(name),
            pascal=to_pascal(name),
            kebab=to_kebab(name),
        )
