"""Data model for a scaffolding run.

Pydantic v2 models describe the values that flow between the orchestrator and
its collaborators.  ``Step`` is a plain dataclass because it carries
callables.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Awaitable, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import InvalidProjectName

if TYPE_CHECKING:
    from .steps import Toolkit


# ---------------------------------------------------------------------------
# Input normalisation
# ---------------------------------------------------------------------------

_AFFIRMATIVE = frozenset({"yes", "y"})
_SAFE_NAME = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")
MAX_NAME_LENGTH = 214


def parse_affirmative(answer: str | None) -> bool:
    """Return ``True`` only for ``"yes"`` or ``"y"`` (trimmed, case-folded).

    Any other answer, including ``None`` and the empty string, is a plain
    "no" rather than an error.
    """
    if answer is None:
        return False
    return answer.strip().casefold() in _AFFIRMATIVE


def validate_project_name(raw: str | None) -> str:
    """Trim *raw* and check that it is usable as a directory and package name.

    Raises:
        InvalidProjectName: If the name is empty or contains unsafe characters.
    """
    name = (raw or "").strip()
    if not name:
        raise InvalidProjectName(raw or "", "project name cannot be empty")
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidProjectName(name, f"longer than {MAX_NAME_LENGTH} characters")
    if name in {".", ".."} or not _SAFE_NAME.match(name):
        raise InvalidProjectName(
            name,
            "use letters, digits, '.', '_' or '-', starting with a letter or digit",
        )
    return name


# ---------------------------------------------------------------------------
# Project context
# ---------------------------------------------------------------------------


class ProjectContext(BaseModel):
    """Everything a step needs to know about the project being scaffolded.

    Created once from validated user input.  The only change allowed
    afterwards is :meth:`enter`, which the orchestrator calls once the base
    directory exists.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Validated project name")
    working_directory: Path = Field(..., description="Root for every step's commands and writes")
    selected_options: frozenset[str] = Field(
        default_factory=frozenset, description="Names of enabled optional features"
    )

    def is_selected(self, option: str) -> bool:
        return option in self.selected_options

    def enter(self, directory: Path) -> "ProjectContext":
        """Return a copy rooted at *directory*."""
        return self.model_copy(update={"working_directory": directory})


# ---------------------------------------------------------------------------
# Artifacts & manifest patches
# ---------------------------------------------------------------------------


class WriteMode(str, Enum):
    """How an artifact treats an existing file at its path."""
    OVERWRITE = "overwrite"


class ConfigArtifact(BaseModel):
    """A fully rendered file, addressed relative to the project root."""

    model_config = ConfigDict(frozen=True)

    relative_path: str = Field(..., description="POSIX path relative to the project root")
    content: str = Field(..., description="Complete rendered file content")
    write_mode: WriteMode = Field(default=WriteMode.OVERWRITE)
    executable: bool = Field(default=False, description="Set the owner/group/other execute bits")

    @field_validator("relative_path")
    @classmethod
    def _check_relative(cls, value: str) -> str:
        path = PurePosixPath(value)
        if not value or path.is_absolute() or ".." in path.parts:
            raise ValueError(f"artifact path must stay inside the project: {value!r}")
        return str(path)

    @property
    def path(self) -> PurePosixPath:
        return PurePosixPath(self.relative_path)


class ManifestPatch(BaseModel):
    """Command aliases to merge into the manifest's ``scripts`` table."""

    scripts_to_add: dict[str, str] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Template substitution record
# ---------------------------------------------------------------------------


class TemplateVars(BaseModel):
    """Substitution values shared by every artifact renderer."""

    model_config = ConfigDict(frozen=True)

    project_name: str
    tsconfig_path: str = "./tsconfig.json"
    app_tsconfig_path: str = "tsconfig.app.json"
    source_dir: str = "src"
    style_extensions: tuple[str, ...] = ("css", "less", "scss", "sass")
    path_alias: str = "@"
    print_width: int = Field(default=80, ge=40)
    tab_width: int = Field(default=2, ge=1)
    runner: str = "npx"

    @classmethod
    def for_context(cls, context: ProjectContext, runner: str = "npx") -> "TemplateVars":
        return cls(project_name=context.name, runner=runner)


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------

StepAction = Callable[[ProjectContext, "Toolkit"], Awaitable[None]]


def always(context: ProjectContext) -> bool:
    return True


@dataclass(frozen=True)
class Step:
    """One named unit of orchestrated work."""

    name: str
    action: StepAction
    is_applicable: Callable[[ProjectContext], bool] = field(default=always)


# ---------------------------------------------------------------------------
# Run input / output
# ---------------------------------------------------------------------------


class ScaffoldInput(BaseModel):
    """Raw answers supplied up front; ``None`` means "ask interactively"."""

    project_name: Optional[str] = None
    tests_answer: Optional[str] = None


class ScaffoldSummary(BaseModel):
    """Report produced only when every step succeeded."""

    project_name: str
    project_path: Path
    features: list[str] = Field(default_factory=list)
    steps_completed: list[str] = Field(default_factory=list)
    steps_skipped: list[str] = Field(default_factory=list)
    duration_seconds: float = 0.0
