"""Helper utilities for constructing temporary JavaScript projects in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import List, Mapping

from proofreader.models import SourceFile
from proofreader.repo_scanner import ProjectScanner


def sources(files: Mapping[str, str]) -> List[SourceFile]:
    """Return in-memory source files with dedented contents."""
    return [
        SourceFile(path=path, text=textwrap.dedent(content).lstrip("\n"))
        for path, content in files.items()
    ]


class ProjectBuilder:
    """Utility for writing files into a throwaway project and rescanning it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "project"
        self.root.mkdir()
        self._scanner = ProjectScanner()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def scan(self) -> List[SourceFile]:
        """Return a fresh enumeration of the project's module files."""
        return self._scanner.scan(str(self.root))

    def path(self) -> Path:
        """Return the project root path."""
        return self.root


__all__ = ["ProjectBuilder", "sources"]
