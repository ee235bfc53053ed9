"""Merges command aliases into ``package.json``.

Unlike generated artifacts, the manifest already holds content written by
the base template and the package manager, so it is patched rather than
overwritten: only the ``scripts`` keys named in the patch change.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..errors import ArtifactWriteError, ManifestMalformed, ManifestNotFound, ManifestUnreadable
from ..models import ManifestPatch
from ..utils import dump_json
from .emitter import write_text_atomic

MANIFEST_NAME = "package.json"


class ScriptPatcher:
    """Read, validate, merge and write back a manifest's ``scripts`` table."""

    def read(self, manifest_path: Path) -> dict[str, Any]:
        """Parse *manifest_path* and check its shape.

        Raises:
            ManifestNotFound: If the file does not exist.
            ManifestUnreadable: If it exists but cannot be read.
            ManifestMalformed: If it is not UTF-8, not a JSON object, or
                ``scripts`` is not an object.
        """
        try:
            raw = manifest_path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise ManifestNotFound(manifest_path) from exc
        except UnicodeDecodeError as exc:
            raise ManifestMalformed(manifest_path, "not valid UTF-8") from exc
        except OSError as exc:
            raise ManifestUnreadable(manifest_path, exc) from exc

        try:
            document = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ManifestMalformed(manifest_path, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc

        if not isinstance(document, dict):
            raise ManifestMalformed(manifest_path, "top-level value must be an object")
        scripts = document.get("scripts", {})
        if not isinstance(scripts, dict):
            raise ManifestMalformed(manifest_path, "'scripts' must be an object")
        if not all(isinstance(value, str) for value in scripts.values()):
            raise ManifestMalformed(manifest_path, "every script must be a string")
        return document

    def patch(self, manifest_path: str | Path, patch: ManifestPatch) -> dict[str, Any]:
        """Merge ``patch.scripts_to_add`` into the manifest at *manifest_path*.

        Keys listed in the patch are overwritten; every other key, in
        ``scripts`` and elsewhere, keeps its value and position.  Nothing is
        written if the manifest cannot be read or validated.

        Returns:
            The merged manifest document.
        """
        path = Path(manifest_path)
        document = self.read(path)

        scripts = dict(document.get("scripts", {}))
        scripts.update(patch.scripts_to_add)
        document["scripts"] = scripts

        try:
            write_text_atomic(path, dump_json(document))
        except OSError as exc:
            raise ArtifactWriteError(path, exc) from exc
        return document
