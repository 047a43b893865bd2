"""Source file scanning."""

from __future__ import annotations

from pathlib import Path

from dependency_explorer.scanner.base import SourceScanner


def scan_directory(
    directory: Path,
    pattern: str = "*.rb",
    skip_dirs: list[str] | None = None,
    recursive: bool = True,
) -> dict[str, str]:
    """Read every matching source file under ``directory``."""
    scanner = SourceScanner(pattern=pattern, skip_dirs=skip_dirs, recursive=recursive)
    return scanner.read_sources(directory)


__all__ = [
    "SourceScanner",
    "scan_directory",
]
