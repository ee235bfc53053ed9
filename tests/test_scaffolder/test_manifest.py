"""Unit tests for the package.json script patcher (frontstrap.scaffolder.manifest)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from frontstrap.errors import ManifestMalformed, ManifestNotFound, ManifestUnreadable
from frontstrap.models import ManifestPatch
from frontstrap.scaffolder.manifest import ScriptPatcher

pytestmark = pytest.mark.unit


def write_manifest(path: Path, document) -> Path:
    path.write_text(json.dumps(document, indent=2), encoding="utf-8")
    return path


class TestScriptPatcher:
    def test_merge_keeps_existing_scripts(self, tmp_path: Path):
        manifest = write_manifest(tmp_path / "package.json", {"name": "demo", "scripts": {"build": "x"}})

        result = ScriptPatcher().patch(manifest, ManifestPatch(scripts_to_add={"lint": "y"}))

        assert result["scripts"] == {"build": "x", "lint": "y"}
        assert json.loads(manifest.read_text())["scripts"] == {"build": "x", "lint": "y"}

    def test_patch_overrides_named_keys_only(self, tmp_path: Path):
        manifest = write_manifest(
            tmp_path / "package.json",
            {"scripts": {"dev": "vite", "lint": "old", "build": "vite build"}},
        )

        ScriptPatcher().patch(manifest, ManifestPatch(scripts_to_add={"lint": "new"}))

        scripts = json.loads(manifest.read_text())["scripts"]
        assert list(scripts) == ["dev", "lint", "build"]
        assert scripts["lint"] == "new"

    def test_other_fields_untouched(self, tmp_path: Path):
        original = {
            "name": "demo",
            "version": "0.0.0",
            "type": "module",
            "scripts": {},
            "devDependencies": {"vite": "^5.0.0"},
        }
        manifest = write_manifest(tmp_path / "package.json", original)

        ScriptPatcher().patch(manifest, ManifestPatch(scripts_to_add={"test": "jest"}))

        document = json.loads(manifest.read_text())
        assert list(document) == list(original)
        assert document["devDependencies"] == {"vite": "^5.0.0"}

    def test_missing_scripts_table_is_created(self, tmp_path: Path):
        manifest = write_manifest(tmp_path / "package.json", {"name": "demo"})

        ScriptPatcher().patch(manifest, ManifestPatch(scripts_to_add={"format": "prettier --write ."}))

        assert json.loads(manifest.read_text())["scripts"] == {"format": "prettier --write ."}

    def test_patch_is_idempotent(self, tmp_path: Path):
        manifest = write_manifest(tmp_path / "package.json", {"scripts": {"dev": "vite"}})
        patch = ManifestPatch(scripts_to_add={"lint": "eslint ."})

        ScriptPatcher().patch(manifest, patch)
        first = manifest.read_text()
        ScriptPatcher().patch(manifest, patch)

        assert manifest.read_text() == first

    def test_missing_manifest(self, tmp_path: Path):
        with pytest.raises(ManifestNotFound):
            ScriptPatcher().patch(tmp_path / "package.json", ManifestPatch(scripts_to_add={"a": "b"}))
        assert not (tmp_path / "package.json").exists()

    @pytest.mark.parametrize(
        "raw",
        [
            "{not json",
            "[]",
            '{"scripts": []}',
            '{"scripts": {"build": 1}}',
        ],
    )
    def test_malformed_manifest_is_not_written(self, tmp_path: Path, raw: str):
        manifest = tmp_path / "package.json"
        manifest.write_text(raw, encoding="utf-8")

        with pytest.raises(ManifestMalformed):
            ScriptPatcher().patch(manifest, ManifestPatch(scripts_to_add={"lint": "y"}))

        assert manifest.read_text(encoding="utf-8") == raw

    def test_invalid_utf8_is_malformed(self, tmp_path: Path):
        manifest = tmp_path / "package.json"
        raw = b'{"name": "\xff\xfe"}'
        manifest.write_bytes(raw)

        with pytest.raises(ManifestMalformed) as exc_info:
            ScriptPatcher().patch(manifest, ManifestPatch(scripts_to_add={"lint": "y"}))

        assert "UTF-8" in str(exc_info.value)
        assert manifest.read_bytes() == raw

    def test_unreadable_manifest(self, tmp_path: Path):
        manifest = tmp_path / "package.json"
        manifest.mkdir()

        with pytest.raises(ManifestUnreadable) as exc_info:
            ScriptPatcher().patch(manifest, ManifestPatch(scripts_to_add={"lint": "y"}))

        assert exc_info.value.path == manifest
        assert isinstance(exc_info.value.cause, OSError)
        assert manifest.is_dir()
