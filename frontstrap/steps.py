"""The canonical, ordered list of scaffolding steps.

Each step is a :class:`~frontstrap.models.Step` descriptor whose action
receives the project context and a :class:`Toolkit`.  The declared order is
the dependency order; nothing here reorders or parallelises.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from .config import Config
from .errors import CommandFailed
from .models import ConfigArtifact, ManifestPatch, ProjectContext, Step, TemplateVars
from .scaffolder.artifacts import EDITOR_ARTIFACTS, GIT_HOOK_ARTIFACTS, eslint_config, prettier_config
from .scaffolder.emitter import ConfigTemplateEmitter
from .scaffolder.features import build_tests_feature
from .scaffolder.manifest import MANIFEST_NAME, ScriptPatcher
from .utils import CommandRunner, print_command, run_command

BASE_SCRIPTS: dict[str, str] = {
    "lint": "eslint . --ext .ts,.tsx --fix",
    "format": "prettier --write .",
    "prepare": "husky install",
}


# ---------------------------------------------------------------------------
# Toolkit
# ---------------------------------------------------------------------------


@dataclass
class Toolkit:
    """Collaborators handed to every step action.

    Commands run with the context's working directory as ``cwd`` and block
    until the process exits.
    """

    config: Config
    emitter: ConfigTemplateEmitter
    patcher: ScriptPatcher = field(default_factory=ScriptPatcher)
    runner: CommandRunner = run_command

    async def execute(self, context: ProjectContext, cmd: list[str]) -> str:
        """Run *cmd* inside the project and return its stdout.

        Raises:
            CommandFailed: If the command exits non-zero.
        """
        quiet = self.config.quiet
        if not quiet:
            print_command(cmd)
        returncode, stdout, stderr = await self.runner(
            cmd,
            cwd=context.working_directory,
            timeout=self.config.command_timeout,
            capture=quiet,
        )
        if returncode != 0:
            raise CommandFailed(cmd, returncode, stderr)
        return stdout

    async def add_dev_dependencies(self, context: ProjectContext, packages: Sequence[str]) -> None:
        if not packages:
            return
        await self.execute(context, [self.config.toolchain.package_manager, "add", "-D", *packages])

    def variables(self, context: ProjectContext) -> TemplateVars:
        return TemplateVars.for_context(context, runner=self.config.toolchain.runner)

    def emit(self, artifact: ConfigArtifact) -> Path:
        return self.emitter.emit(artifact)

    def patch_scripts(self, context: ProjectContext, scripts: dict[str, str]) -> None:
        self.patcher.patch(
            context.working_directory / MANIFEST_NAME,
            ManifestPatch(scripts_to_add=scripts),
        )


# ---------------------------------------------------------------------------
# Step actions
# ---------------------------------------------------------------------------


async def git_init(context: ProjectContext, toolkit: Toolkit) -> None:
    await toolkit.execute(context, [toolkit.config.toolchain.vcs, "init"])


async def install_dependencies(context: ProjectContext, toolkit: Toolkit) -> None:
    await toolkit.execute(context, [toolkit.config.toolchain.package_manager, "install"])


async def install_lint_tooling(context: ProjectContext, toolkit: Toolkit) -> None:
    await toolkit.add_dev_dependencies(context, toolkit.config.packages.lint)


async def write_eslint_config(context: ProjectContext, toolkit: Toolkit) -> None:
    toolkit.emit(eslint_config(toolkit.variables(context)))


async def write_prettier_config(context: ProjectContext, toolkit: Toolkit) -> None:
    toolkit.emit(prettier_config(toolkit.variables(context)))


async def install_git_hooks(context: ProjectContext, toolkit: Toolkit) -> None:
    await toolkit.add_dev_dependencies(context, toolkit.config.packages.git_hooks)
    await toolkit.execute(context, [toolkit.config.toolchain.runner, "husky", "install"])


async def write_git_hook_config(context: ProjectContext, toolkit: Toolkit) -> None:
    variables = toolkit.variables(context)
    for render in GIT_HOOK_ARTIFACTS:
        toolkit.emit(render(variables))


async def write_editor_settings(context: ProjectContext, toolkit: Toolkit) -> None:
    variables = toolkit.variables(context)
    for render in EDITOR_ARTIFACTS:
        toolkit.emit(render(variables))


async def patch_manifest_scripts(context: ProjectContext, toolkit: Toolkit) -> None:
    toolkit.patch_scripts(context, BASE_SCRIPTS)


async def commit_snapshot(context: ProjectContext, toolkit: Toolkit) -> None:
    vcs = toolkit.config.toolchain.vcs
    await toolkit.execute(context, [vcs, "add", "."])
    await toolkit.execute(context, [vcs, "commit", "-m", toolkit.config.commit_message])


FINALIZE_STEP = Step("finalize", commit_snapshot)


def default_steps(config: Config) -> list[Step]:
    """Return the canonical step sequence for *config*."""
    tests = build_tests_feature(config)
    return [
        Step("git-init", git_init),
        Step("install-dependencies", install_dependencies),
        Step("install-test-framework", tests.install, tests.applies_to),
        Step("install-lint-tooling", install_lint_tooling),
        Step("write-eslint-config", write_eslint_config),
        Step("write-prettier-config", write_prettier_config),
        Step("install-git-hooks", install_git_hooks),
        Step("write-git-hook-config", write_git_hook_config),
        Step("write-editor-settings", write_editor_settings),
        Step("patch-manifest-scripts", patch_manifest_scripts),
    ]
