"""frontstrap scaffolding orchestrator.

Bootstraps a React + TypeScript project in a fresh directory:

1. COLLECT   -- project name and optional features (prompted when not given).
2. CHECK     -- every required executable is on PATH.
3. CREATE    -- make the project directory and run the Vite base template.
4. STEPS     -- the declared step list (see ``frontstrap.steps``).
5. FINALIZE  -- commit the result with git and print a summary.

The run is fail-fast: the first error ends it with a single diagnostic and
a non-zero exit code, and nothing that was already applied is rolled back.

Usage::

    frontstrap my-app --tests yes
    python -m frontstrap            # prompts for everything
"""

from __future__ import annotations

import argparse
import asyncio
import time
from pathlib import Path
from typing import Callable, Iterable, Sequence

from pydantic import ValidationError
from rich.markup import escape
from rich.prompt import Prompt

from .config import Config
from .errors import ArtifactWriteError, BaseScaffoldFailed, DirectoryExists, OrchestrationError, StepFailed
from .models import (
    ProjectContext,
    ScaffoldInput,
    ScaffoldSummary,
    Step,
    parse_affirmative,
    validate_project_name,
)
from .scaffolder.emitter import ConfigTemplateEmitter
from .scaffolder.features import TESTS_FEATURE
from .scaffolder.prerequisites import PrerequisiteChecker
from .steps import FINALIZE_STEP, Toolkit, default_steps
from .utils import (
    CommandRunner,
    console,
    format_duration,
    print_command,
    print_error,
    print_step_header,
    print_success,
    print_summary_table,
    print_warning,
    run_command,
)

Prompter = Callable[[str, str], str]

NAME_PROMPT = "Enter project name"
TESTS_PROMPT = "Set up a test framework (Jest + Testing Library)? [y/N]"


def rich_prompt(question: str, default: str = "") -> str:
    """Ask *question* on the shared console and return the raw answer."""
    return Prompt.ask(question, default=default, show_default=False, console=console)


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class ScaffoldOrchestrator:
    """Sequences a scaffolding run from user input to the initial commit.

    Attributes:
        config: Toolchain names, package bundles and run options.
        steps: The ordered step list; exposed so it can be inspected.
        checker: Prerequisite gate run before anything is created.
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        runner: CommandRunner = run_command,
        checker: PrerequisiteChecker | None = None,
        prompter: Prompter | None = None,
        steps: Iterable[Step] | None = None,
    ) -> None:
        self.config = config or Config()
        self.runner = runner
        self.checker = checker or PrerequisiteChecker()
        self.prompter = prompter or rich_prompt
        self.steps: list[Step] = list(steps) if steps is not None else default_steps(self.config)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def collect_input(self, initial: ScaffoldInput, parent: Path) -> ProjectContext:
        """Validate the name and parse feature answers, prompting for gaps.

        The name is validated before the feature question is asked, so an
        invalid name fails without any further interaction.
        """
        raw_name = initial.project_name
        if raw_name is None:
            raw_name = self.prompter(NAME_PROMPT, "")
        name = validate_project_name(raw_name)

        tests_answer = initial.tests_answer
        if tests_answer is None:
            tests_answer = self.prompter(TESTS_PROMPT, "")

        selected: set[str] = set()
        if parse_affirmative(tests_answer):
            selected.add(TESTS_FEATURE)

        return ProjectContext(
            name=name,
            working_directory=parent,
            selected_options=frozenset(selected),
        )

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    async def run(
        self,
        initial_input: ScaffoldInput | None = None,
        parent_directory: str | Path | None = None,
    ) -> ScaffoldSummary:
        """Execute the whole run and return its summary.

        Args:
            initial_input: Answers supplied up front; missing ones are prompted.
            parent_directory: Where the project directory is created.
                Defaults to the current working directory.

        Raises:
            OrchestrationError: On the first failure of any kind.
        """
        started = time.monotonic()
        parent = Path(parent_directory) if parent_directory is not None else Path.cwd()
        context = self.collect_input(initial_input or ScaffoldInput(), parent.resolve())

        self.checker.check(self.config.required_tools)

        project_dir = self._create_project_directory(context)
        context = context.enter(project_dir)
        toolkit = Toolkit(
            config=self.config,
            emitter=ConfigTemplateEmitter(project_dir),
            runner=self.runner,
        )

        await self._create_base_scaffold(context)

        completed: list[str] = []
        skipped: list[str] = []
        total = len(self.steps) + 1
        for index, step in enumerate(self.steps, start=1):
            print_step_header(index, total, step.name)
            if not step.is_applicable(context):
                console.print("  [dim]skipped: not selected[/dim]")
                skipped.append(step.name)
                continue
            await self._run_step(step, context, toolkit)
            completed.append(step.name)

        print_step_header(total, total, FINALIZE_STEP.name)
        await self._run_step(FINALIZE_STEP, context, toolkit)
        completed.append(FINALIZE_STEP.name)

        return ScaffoldSummary(
            project_name=context.name,
            project_path=project_dir,
            features=sorted(context.selected_options),
            steps_completed=completed,
            steps_skipped=skipped,
            duration_seconds=time.monotonic() - started,
        )

    def _create_project_directory(self, context: ProjectContext) -> Path:
        target = context.working_directory / context.name
        if target.exists():
            raise DirectoryExists(target)
        try:
            target.mkdir()
        except FileExistsError as exc:
            raise DirectoryExists(target) from exc
        except OSError as exc:
            raise ArtifactWriteError(target, exc) from exc
        console.print(f"  Created [bold]{escape(str(target))}[/bold]")
        return target

    async def _create_base_scaffold(self, context: ProjectContext) -> None:
        toolchain = self.config.toolchain
        cmd = [
            toolchain.package_manager,
            "create",
            "vite",
            ".",
            "--template",
            toolchain.base_template,
        ]
        quiet = self.config.quiet
        if not quiet:
            console.print(f"[bold green]Creating Vite {toolchain.base_template} project...[/bold green]")
            print_command(cmd)
        try:
            returncode, _, stderr = await self.runner(
                cmd,
                cwd=context.working_directory,
                timeout=self.config.command_timeout,
                capture=quiet,
            )
        except OSError as exc:
            raise BaseScaffoldFailed(-1, str(exc)) from exc
        if returncode != 0:
            raise BaseScaffoldFailed(returncode, stderr)

    async def _run_step(self, step: Step, context: ProjectContext, toolkit: Toolkit) -> None:
        try:
            await step.action(context, toolkit)
        except Exception as exc:
            raise StepFailed(step.name, exc) from exc


# ---------------------------------------------------------------------------
# Reporting
# ---------------------------------------------------------------------------


def print_report(summary: ScaffoldSummary, config: Config) -> None:
    """Print the success summary and the command that starts the dev server."""
    print_summary_table(
        {
            "Project": summary.project_name,
            "Location": str(summary.project_path),
            "Features": ", ".join(summary.features) or "none",
            "Steps run": str(len(summary.steps_completed)),
            "Steps skipped": ", ".join(summary.steps_skipped) or "none",
            "Duration": format_duration(summary.duration_seconds),
        },
        title="Project setup complete",
    )
    print_success("Project setup complete!")
    console.print("[bold yellow]To start the development server, run:[/bold yellow]")
    console.print(f"cd {summary.project_name} && {config.toolchain.package_manager} run dev")


def print_prerequisites(checker: PrerequisiteChecker, tools: Sequence[str]) -> bool:
    """Print a presence table for *tools*; return ``True`` if all are installed."""
    missing = set(checker.missing(tools))
    print_summary_table(
        {tool: ("missing" if tool in missing else "found") for tool in tools},
        title="Prerequisites",
    )
    return not missing


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="frontstrap",
        description="Bootstrap a React + TypeScript project with ESLint, Prettier, git hooks and optional Jest tests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  frontstrap\n"
            "  frontstrap my-app --tests yes\n"
            "  frontstrap my-app --tests no -d ~/code --quiet\n"
        ),
    )
    parser.add_argument(
        "name",
        nargs="?",
        default=None,
        help="Project name (prompted for when omitted)",
    )
    parser.add_argument(
        "--tests",
        metavar="ANSWER",
        default=None,
        help="Set up Jest + Testing Library; 'yes' or 'y' enables it (prompted for when omitted)",
    )
    parser.add_argument(
        "--directory", "-d",
        type=Path,
        default=None,
        help="Parent directory for the new project (default: current directory)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON configuration file (default: built-in defaults plus FRONTSTRAP_* variables)",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Hide the output of external tools",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only report which required tools are installed",
    )
    return parser


def _load_config(args: argparse.Namespace) -> Config:
    config = Config.load(args.config) if args.config else Config.from_env()
    if args.quiet:
        config = config.model_copy(update={"quiet": True})
    return config


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for ``frontstrap`` and ``python -m frontstrap``."""
    args = build_parser().parse_args(argv)

    try:
        config = _load_config(args)
    except OSError as exc:
        print_error(f"Error: could not load configuration: {exc}")
        return 1
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "config"
        print_error(f"Error: invalid configuration: {location}: {first['msg']}")
        return 1

    if args.check:
        return 0 if print_prerequisites(PrerequisiteChecker(), config.required_tools) else 1

    orchestrator = ScaffoldOrchestrator(config)
    initial = ScaffoldInput(project_name=args.name, tests_answer=args.tests)
    try:
        summary = asyncio.run(orchestrator.run(initial, args.directory))
    except OrchestrationError as exc:
        print_error(f"Error: {exc}")
        return 1
    except KeyboardInterrupt:
        print_warning("Aborted.")
        return 130

    print_report(summary, config)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
