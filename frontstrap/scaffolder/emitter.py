"""Atomic artifact writer.

Artifacts are derived purely from the templates and the project context, so
each emit unconditionally replaces whatever is at the target path.  The write
goes to a temp file in the same directory which is then renamed over the
target: readers see either the old file or the complete new one, never a
partial write.
"""

from __future__ import annotations

import os
import uuid
from pathlib import Path

from ..errors import ArtifactWriteError
from ..models import ConfigArtifact

_FILE_MODE = 0o666
_EXECUTABLE_MODE = 0o777


def write_text_atomic(path: Path, content: str, *, executable: bool = False) -> None:
    """Write *content* to *path* via a sibling temp file and ``os.replace``.

    The temp file is created with ``os.open`` so the process umask applies to
    its mode exactly as it would for a plain ``open``.

    Raises:
        OSError: If any part of the write fails.  The temp file is removed and
            the existing target, if any, is left untouched.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")
    mode = _EXECUTABLE_MODE if executable else _FILE_MODE
    fd = os.open(temp_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, mode)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_path, path)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise


class ConfigTemplateEmitter:
    """Writes rendered artifacts beneath a project root."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def target_for(self, artifact: ConfigArtifact) -> Path:
        return self.root.joinpath(*artifact.path.parts)

    def emit(self, artifact: ConfigArtifact) -> Path:
        """Write *artifact*, replacing any existing file, and return its path.

        Raises:
            ArtifactWriteError: If the file cannot be written.
        """
        target = self.target_for(artifact)
        try:
            write_text_atomic(target, artifact.content, executable=artifact.executable)
        except OSError as exc:
            raise ArtifactWriteError(target, exc) from exc
        return target
