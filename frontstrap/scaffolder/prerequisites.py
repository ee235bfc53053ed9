"""Checks that the external executables a run depends on are installed."""

from __future__ import annotations

import shutil
from typing import Callable, Iterable, Optional

from ..errors import MissingPrerequisite

ExecutableLookup = Callable[[str], Optional[str]]


class PrerequisiteChecker:
    """Looks up required tools on ``PATH``.

    The lookup defaults to :func:`shutil.which` and has no side effects.
    """

    def __init__(self, lookup: ExecutableLookup | None = None) -> None:
        self.lookup = lookup or shutil.which

    def is_available(self, tool: str) -> bool:
        return self.lookup(tool) is not None

    def check(self, tools: Iterable[str]) -> None:
        """Raise for the first tool in *tools* that is not installed.

        Tools after the first missing one are not looked up.

        Raises:
            MissingPrerequisite: Naming the first missing tool.
        """
        for tool in tools:
            if not self.is_available(tool):
                raise MissingPrerequisite(tool)

    def missing(self, tools: Iterable[str]) -> list[str]:
        """Return every tool in *tools* that is not installed, in order."""
        return [tool for tool in tools if not self.is_available(tool)]
