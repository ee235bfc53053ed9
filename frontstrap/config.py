"""frontstrap configuration.

Centralised, typed configuration for a scaffolding run.  All settings use
Pydantic v2 models so they can be validated at construction time and serialised
to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field


class ToolchainConfig(BaseModel):
    """Names of the external executables the orchestrator drives."""

    package_manager: str = Field(default="pnpm", min_length=1)
    runner: str = Field(default="npx", min_length=1, description="Package binary runner")
    vcs: str = Field(default="git", min_length=1)
    manifest_tool: str = Field(default="npm", min_length=1)
    base_template: str = Field(default="react-ts", description="Vite template name")


class PackageBundles(BaseModel):
    """Dev-dependency bundles installed by the individual steps."""

    lint: list[str] = Field(
        default_factory=lambda: [
            "eslint@^8.2.0",
            "prettier",
            "eslint-plugin-react@^7.28.0",
            "eslint-plugin-react-hooks@^4.3.0",
            "eslint-plugin-jsx-a11y",
            "eslint-plugin-import",
            "@typescript-eslint/parser@^7.0.0",
            "@typescript-eslint/eslint-plugin@^7.0.0",
            "eslint-config-airbnb",
            "eslint-config-airbnb-typescript",
            "eslint-config-prettier",
            "eslint-plugin-prettier",
        ]
    )
    git_hooks: list[str] = Field(default_factory=lambda: ["husky", "lint-staged"])
    tests: list[str] = Field(
        default_factory=lambda: [
            "jest",
            "jest-environment-jsdom",
            "ts-jest",
            "@types/jest",
            "@testing-library/react",
            "@testing-library/jest-dom",
            "@testing-library/user-event",
            "identity-obj-proxy",
        ]
    )


class Config(BaseModel):
    """Global frontstrap configuration.

    Instances are created once by the CLI entry point (defaults, a JSON file,
    or the environment) and handed to the orchestrator.
    """

    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)
    packages: PackageBundles = Field(default_factory=PackageBundles)
    commit_message: str = Field(
        default="Initial project setup with React, TypeScript, ESLint, and Prettier",
        min_length=1,
    )
    # None means wait for every external tool indefinitely.
    command_timeout: Optional[float] = Field(default=None, gt=0)
    quiet: bool = Field(default=False, description="Hide external tool output")

    @property
    def required_tools(self) -> list[str]:
        """Executables that must be on ``PATH`` before anything is created."""
        tc = self.toolchain
        return [tc.package_manager, tc.runner, tc.vcs, tc.manifest_tool]

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON.

        Args:
            path: The JSON file to read.

        Returns:
            A validated ``Config`` instance.
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            FRONTSTRAP_PACKAGE_MANAGER, FRONTSTRAP_RUNNER, FRONTSTRAP_TEMPLATE,
            FRONTSTRAP_COMMIT_MESSAGE, FRONTSTRAP_COMMAND_TIMEOUT.
        """
        toolchain_kwargs: dict[str, Any] = {}
        if os.environ.get("FRONTSTRAP_PACKAGE_MANAGER"):
            toolchain_kwargs["package_manager"] = os.environ["FRONTSTRAP_PACKAGE_MANAGER"]
        if os.environ.get("FRONTSTRAP_RUNNER"):
            toolchain_kwargs["runner"] = os.environ["FRONTSTRAP_RUNNER"]
        if os.environ.get("FRONTSTRAP_TEMPLATE"):
            toolchain_kwargs["base_template"] = os.environ["FRONTSTRAP_TEMPLATE"]

        kwargs: dict[str, Any] = {"toolchain": ToolchainConfig(**toolchain_kwargs)}
        if os.environ.get("FRONTSTRAP_COMMIT_MESSAGE"):
            kwargs["commit_message"] = os.environ["FRONTSTRAP_COMMIT_MESSAGE"]
        if os.environ.get("FRONTSTRAP_COMMAND_TIMEOUT"):
            kwargs["command_timeout"] = os.environ["FRONTSTRAP_COMMAND_TIMEOUT"]

        return cls(**kwargs)
