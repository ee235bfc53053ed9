"""Error taxonomy for the scaffolding orchestrator.

Every error raised by the orchestrator derives from ``OrchestrationError`` so
the CLI can turn any failure into a single diagnostic line and a non-zero exit
code.  None of these errors are recovered from locally: each one ends the run.
"""

from __future__ import annotations

from pathlib import Path


def _last_line(text: str) -> str:
    """Return the last non-empty line of *text*, stripped."""
    for line in reversed(text.splitlines()):
        if line.strip():
            return line.strip()
    return ""


class OrchestrationError(Exception):
    """Base class for every failure that aborts a scaffolding run."""


class InvalidProjectName(OrchestrationError):
    """Raised when the project name is empty or unsafe as a directory name."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid project name {name!r}: {reason}")


class MissingPrerequisite(OrchestrationError):
    """Raised when a required executable is not on ``PATH``."""

    def __init__(self, tool: str) -> None:
        self.tool = tool
        super().__init__(f"Missing prerequisite: '{tool}' is not installed or not on PATH")


class DirectoryExists(OrchestrationError):
    """Raised when the target project directory is already present."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Directory already exists: {path}")


class BaseScaffoldFailed(OrchestrationError):
    """Raised when the base template tool exits with a non-zero status."""

    def __init__(self, exit_code: int, stderr: str = "") -> None:
        self.exit_code = exit_code
        self.stderr = stderr
        message = f"Base scaffold failed (exit {exit_code})"
        detail = _last_line(stderr)
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class CommandFailed(OrchestrationError):
    """Raised when an external command inside a step exits non-zero."""

    def __init__(self, command: list[str], exit_code: int, stderr: str = "") -> None:
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr
        message = f"Command failed (exit {exit_code}): {' '.join(command)}"
        detail = _last_line(stderr)
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class StepFailed(OrchestrationError):
    """Raised when a step's action fails; carries the step name and cause."""

    def __init__(self, step_name: str, cause: BaseException) -> None:
        self.step_name = step_name
        self.cause = cause
        super().__init__(f"Step '{step_name}' failed: {cause}")


class ConditionalFeatureFailed(OrchestrationError):
    """Raised when an optional feature bundle cannot be installed."""

    def __init__(self, feature: str, cause: BaseException) -> None:
        self.feature = feature
        self.cause = cause
        super().__init__(f"Feature '{feature}' failed: {cause}")


class ManifestNotFound(OrchestrationError):
    """Raised when the project manifest (``package.json``) does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Manifest not found: {path}")


class ManifestUnreadable(OrchestrationError):
    """Raised when the manifest exists but cannot be read."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Could not read manifest {path}: {cause}")


class ManifestMalformed(OrchestrationError):
    """Raised when the manifest cannot be parsed or has the wrong shape."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Manifest is malformed: {path}: {reason}")


class ArtifactWriteError(OrchestrationError):
    """Raised when a generated artifact cannot be written to disk."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Could not write {path}: {cause}")
