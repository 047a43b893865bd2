"""Source file discovery."""

from __future__ import annotations

import fnmatch
import logging
from pathlib import Path

from dependency_explorer.models import DEFAULT_SKIP_DIRS

logger = logging.getLogger(__name__)


class SourceScanner:
    """Finds and reads source files below a directory."""

    def __init__(
        self,
        pattern: str = "*.rb",
        skip_dirs: list[str] | None = None,
        recursive: bool = True,
    ):
        self.pattern = pattern
        self.recursive = recursive
        self.skip_dirs = list(DEFAULT_SKIP_DIRS) if skip_dirs is None else skip_dirs

    def iter_files(self, directory: Path) -> list[Path]:
        walker = directory.rglob(self.pattern) if self.recursive else directory.glob(self.pattern)
        files: list[Path] = []
        for path in sorted(walker):
            if path.is_dir():
                continue
            if self._should_skip(path.relative_to(directory)):
                continue
            files.append(path)
        return files

    def read_sources(self, directory: Path) -> dict[str, str]:
        """Map each file's path relative to ``directory`` to its source text."""
        sources: dict[str, str] = {}
        for path in self.iter_files(directory):
            try:
                sources[str(path.relative_to(directory))] = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Skipping unreadable file %s: %s", path, e)
                continue
        return sources

    def _should_skip(self, path: Path) -> bool:
        for part in path.parts[:-1]:
            for pattern in self.skip_dirs:
                if fnmatch.fnmatch(part, pattern):
                    return True
        return False
