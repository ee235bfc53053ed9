"""Unit tests for Config and related Pydantic models (frontstrap.config).

Tests cover:
- ToolchainConfig / PackageBundles defaults
- Config.required_tools ordering
- Config save/load round trip
- Config.from_env overrides and validation
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from frontstrap.config import Config, PackageBundles, ToolchainConfig


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


class TestToolchainConfig:
    @pytest.mark.unit
    def test_defaults(self):
        tc = ToolchainConfig()
        assert tc.package_manager == "pnpm"
        assert tc.runner == "npx"
        assert tc.vcs == "git"
        assert tc.manifest_tool == "npm"
        assert tc.base_template == "react-ts"

    @pytest.mark.unit
    def test_empty_tool_name_rejected(self):
        with pytest.raises(ValidationError):
            ToolchainConfig(package_manager="")


class TestPackageBundles:
    @pytest.mark.unit
    def test_lint_bundle_keeps_pinned_versions(self):
        bundles = PackageBundles()
        assert "eslint@^8.2.0" in bundles.lint
        assert "@typescript-eslint/parser@^7.0.0" in bundles.lint
        assert "prettier" in bundles.lint

    @pytest.mark.unit
    def test_test_bundle_contains_jest_and_proxy(self):
        bundles = PackageBundles()
        assert "jest" in bundles.tests
        assert "identity-obj-proxy" in bundles.tests
        assert "@testing-library/react" in bundles.tests

    @pytest.mark.unit
    def test_git_hook_bundle(self):
        assert PackageBundles().git_hooks == ["husky", "lint-staged"]


class TestConfig:
    @pytest.mark.unit
    def test_required_tools_order(self):
        assert Config().required_tools == ["pnpm", "npx", "git", "npm"]

    @pytest.mark.unit
    def test_required_tools_follow_toolchain(self):
        config = Config(toolchain=ToolchainConfig(package_manager="yarn"))
        assert config.required_tools[0] == "yarn"

    @pytest.mark.unit
    def test_no_timeout_by_default(self):
        assert Config().command_timeout is None

    @pytest.mark.unit
    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValidationError):
            Config(command_timeout=0)

    @pytest.mark.unit
    def test_save_and_load(self, tmp_path: Path):
        config = Config(commit_message="chore: bootstrap", quiet=True)
        path = config.save(tmp_path / "nested" / "frontstrap.json")

        assert path.exists()
        data = json.loads(path.read_text())
        assert data["commit_message"] == "chore: bootstrap"

        loaded = Config.load(path)
        assert loaded == config

    @pytest.mark.unit
    def test_load_rejects_invalid_json(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(ValidationError):
            Config.load(path)


class TestConfigFromEnv:
    @pytest.mark.unit
    def test_defaults_without_env(self):
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_env()
        assert config == Config()

    @pytest.mark.unit
    def test_overrides(self):
        env = {
            "FRONTSTRAP_PACKAGE_MANAGER": "npm",
            "FRONTSTRAP_RUNNER": "pnpm",
            "FRONTSTRAP_TEMPLATE": "react-swc-ts",
            "FRONTSTRAP_COMMIT_MESSAGE": "init",
            "FRONTSTRAP_COMMAND_TIMEOUT": "90",
        }
        with patch.dict(os.environ, env, clear=True):
            config = Config.from_env()

        assert config.toolchain.package_manager == "npm"
        assert config.toolchain.runner == "pnpm"
        assert config.toolchain.base_template == "react-swc-ts"
        assert config.commit_message == "init"
        assert config.command_timeout == 90.0

    @pytest.mark.unit
    def test_invalid_timeout_raises_validation_error(self):
        with patch.dict(os.environ, {"FRONTSTRAP_COMMAND_TIMEOUT": "soon"}, clear=True):
            with pytest.raises(ValidationError):
                Config.from_env()
