"""Pure renderers for every generated configuration artifact.

Each public function takes a :class:`TemplateVars` record and returns a fully
rendered :class:`ConfigArtifact`.  None of them touch the filesystem, so the
exact bytes of every artifact can be tested in isolation from file I/O.

JSON artifacts are built as dictionaries and serialised with ``dump_json``;
script-like artifacts come from the Jinja2 templates shipped next to this
module.
"""

from __future__ import annotations

from typing import Any

from ..models import ConfigArtifact, TemplateVars
from ..utils import dump_json
from .templates import TemplateRenderer

_renderer = TemplateRenderer()


# ---------------------------------------------------------------------------
# Lint / format
# ---------------------------------------------------------------------------


def eslint_config(variables: TemplateVars) -> ConfigArtifact:
    """``.eslintrc.json``: airbnb + TypeScript + React + Prettier."""
    config: dict[str, Any] = {
        "env": {
            "browser": True,
            "es2021": True,
            "node": True,
        },
        "extends": [
            "airbnb",
            "airbnb-typescript",
            "plugin:react/recommended",
            "plugin:@typescript-eslint/recommended",
            "plugin:prettier/recommended",
        ],
        "parser": "@typescript-eslint/parser",
        "parserOptions": {
            "ecmaFeatures": {"jsx": True},
            "ecmaVersion": 12,
            "sourceType": "module",
            "project": variables.tsconfig_path,
        },
        "plugins": ["react", "@typescript-eslint", "prettier"],
        "rules": {
            "prettier/prettier": "error",
            "react/react-in-jsx-scope": "off",
            "react/prop-types": "off",
            "react/jsx-filename-extension": [1, {"extensions": [".tsx"]}],
            "@typescript-eslint/explicit-module-boundary-types": "off",
        },
    }
    return ConfigArtifact(relative_path=".eslintrc.json", content=dump_json(config))


def prettier_config(variables: TemplateVars) -> ConfigArtifact:
    """``.prettierrc``."""
    config = {
        "singleQuote": True,
        "trailingComma": "all",
        "printWidth": variables.print_width,
        "tabWidth": variables.tab_width,
        "useTabs": False,
        "semi": True,
        "bracketSpacing": True,
        "jsxBracketSameLine": False,
        "arrowParens": "avoid",
    }
    return ConfigArtifact(relative_path=".prettierrc", content=dump_json(config))


def editor_settings(variables: TemplateVars) -> ConfigArtifact:
    """``.vscode/settings.json``: format on save with Prettier, lint on type."""
    settings = {
        "editor.formatOnSave": True,
        "editor.defaultFormatter": "esbenp.prettier-vscode",
        "eslint.validate": [
            "javascript",
            "javascriptreact",
            "typescript",
            "typescriptreact",
        ],
        "eslint.alwaysShowStatus": True,
        "eslint.format.enable": True,
        "eslint.run": "onType",
    }
    return ConfigArtifact(relative_path=".vscode/settings.json", content=dump_json(settings))


# ---------------------------------------------------------------------------
# Git hooks
# ---------------------------------------------------------------------------


def lint_staged_config(variables: TemplateVars) -> ConfigArtifact:
    """``.lintstagedrc.json``: what the pre-commit hook runs on staged files."""
    config = {
        "*.{ts,tsx}": ["eslint --fix", "prettier --write"],
        "*.{js,jsx,json,css,md}": ["prettier --write"],
    }
    return ConfigArtifact(relative_path=".lintstagedrc.json", content=dump_json(config))


def pre_commit_hook(variables: TemplateVars) -> ConfigArtifact:
    """``.husky/pre-commit``."""
    content = _renderer.render("pre-commit.j2", {"runner": variables.runner})
    return ConfigArtifact(relative_path=".husky/pre-commit", content=content, executable=True)


# ---------------------------------------------------------------------------
# Test framework
# ---------------------------------------------------------------------------


def jest_config(variables: TemplateVars) -> ConfigArtifact:
    """``jest.config.js`` as an ES module (the Vite template sets ``"type": "module"``).

    Style-sheet imports resolve to ``identity-obj-proxy`` and the
    ``<alias>/`` prefix maps onto the source directory.
    """
    source = variables.source_dir
    extensions = "|".join(variables.style_extensions)
    context = {
        "roots": f"<rootDir>/{source}",
        "setup_file": f"<rootDir>/{source}/setupTests.ts",
        "style_pattern": rf"\.({extensions})$",
        "alias_pattern": f"^{variables.path_alias}/(.*)$",
        "alias_target": f"<rootDir>/{source}/$1",
        "tsconfig": variables.app_tsconfig_path,
    }
    content = _renderer.render("jest.config.js.j2", context)
    return ConfigArtifact(relative_path="jest.config.js", content=content)


def jest_setup(variables: TemplateVars) -> ConfigArtifact:
    """``<source>/setupTests.ts``."""
    content = _renderer.render("setupTests.ts.j2", {})
    return ConfigArtifact(relative_path=f"{variables.source_dir}/setupTests.ts", content=content)


def sample_test(variables: TemplateVars) -> ConfigArtifact:
    """``<source>/__tests__/sample.test.tsx``."""
    content = _renderer.render("sample.test.tsx.j2", {"project_name": variables.project_name})
    return ConfigArtifact(
        relative_path=f"{variables.source_dir}/__tests__/sample.test.tsx",
        content=content,
    )


# Artifacts written together by a single step.
GIT_HOOK_ARTIFACTS = (pre_commit_hook, lint_staged_config)
EDITOR_ARTIFACTS = (editor_settings,)
