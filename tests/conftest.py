"""Shared pytest fixtures for the frontstrap test suite.

Provides reusable fixtures for:
- A fake command runner that records invocations and simulates the Vite
  base template by writing a ``package.json``
- A prerequisite checker that finds every tool
- A ready-made project context and toolkit rooted in ``tmp_path``
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from frontstrap.config import Config
from frontstrap.models import ProjectContext
from frontstrap.scaffolder.emitter import ConfigTemplateEmitter
from frontstrap.scaffolder.prerequisites import PrerequisiteChecker
from frontstrap.steps import Toolkit


BASE_MANIFEST: dict[str, Any] = {
    "name": "demo",
    "private": True,
    "version": "0.0.0",
    "type": "module",
    "scripts": {
        "dev": "vite",
        "build": "tsc -b && vite build",
        "preview": "vite preview",
    },
    "dependencies": {"react": "^18.3.1", "react-dom": "^18.3.1"},
}


# ---------------------------------------------------------------------------
# Fake command runner
# ---------------------------------------------------------------------------


class FakeRunner:
    """Async stand-in for ``frontstrap.utils.run_command``.

    Every call is recorded as ``(cmd, cwd)``.  ``pnpm create vite`` writes a
    ``package.json`` and ``src/`` into *cwd*, like the real template.  Any
    command whose text contains a key of ``failures`` returns that exit code.
    """

    def __init__(self, failures: dict[str, int] | None = None) -> None:
        self.calls: list[tuple[list[str], Path | None]] = []
        self.failures = failures or {}

    async def __call__(
        self,
        cmd: str | list[str],
        cwd: str | Path | None = None,
        timeout: float | None = None,
        capture: bool = True,
        env: dict[str, str] | None = None,
    ) -> tuple[int, str, str]:
        args = cmd if isinstance(cmd, list) else cmd.split()
        self.calls.append((list(args), Path(cwd) if cwd else None))

        text = " ".join(args)
        for fragment, code in self.failures.items():
            if fragment in text:
                return (code, "", f"simulated failure: {fragment}")

        if args[1:3] == ["create", "vite"] and cwd is not None:
            root = Path(cwd)
            manifest = dict(BASE_MANIFEST, name=root.name)
            (root / "package.json").write_text(json.dumps(manifest, indent=2), encoding="utf-8")
            (root / "src").mkdir(exist_ok=True)
            (root / "src" / "App.tsx").write_text("export default function App() { return null; }\n")
        return (0, "", "")

    @property
    def commands(self) -> list[str]:
        return [" ".join(cmd) for cmd, _ in self.calls]


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


# ---------------------------------------------------------------------------
# Prerequisites
# ---------------------------------------------------------------------------


@pytest.fixture
def all_tools_checker() -> PrerequisiteChecker:
    """Checker that finds every executable."""
    return PrerequisiteChecker(lookup=lambda tool: f"/usr/bin/{tool}")


# ---------------------------------------------------------------------------
# Config / context / toolkit
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_config() -> Config:
    return Config(quiet=True)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A scaffolded-looking project directory containing ``package.json``."""
    root = tmp_path / "demo"
    root.mkdir()
    (root / "package.json").write_text(json.dumps(BASE_MANIFEST, indent=2), encoding="utf-8")
    return root


@pytest.fixture
def project_context(project_dir: Path) -> ProjectContext:
    return ProjectContext(name="demo", working_directory=project_dir, selected_options=frozenset({"tests"}))


@pytest.fixture
def toolkit(quiet_config: Config, project_dir: Path, fake_runner: FakeRunner) -> Toolkit:
    return Toolkit(
        config=quiet_config,
        emitter=ConfigTemplateEmitter(project_dir),
        runner=fake_runner,
    )
