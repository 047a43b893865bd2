"""Analysis pipeline: scan -> parse -> extract -> merge -> AnalysisResult."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from dependency_explorer.analysis.result import AnalysisResult
from dependency_explorer.models import AnalysisConfig
from dependency_explorer.parsing.accumulator import DependencyAccumulator
from dependency_explorer.parsing.dependency_parser import DependencyParser
from dependency_explorer.scanner import scan_directory

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


def parse_code(source: str, config: AnalysisConfig | None = None) -> dict:
    """Per-class dependency map for a single source text."""
    return DependencyParser(source, config).parse()


def merge_dependency_maps(maps) -> dict[str, list[dict[str, list[str]]]]:
    """Merge per-file maps; a class defined in several files keeps one entry."""
    accumulators: dict[str, DependencyAccumulator] = {}
    for dependency_map in maps:
        for class_name, groups in dependency_map.items():
            accumulator = accumulators.setdefault(class_name, DependencyAccumulator())
            accumulator.record_all(groups)
    return {name: acc.to_grouped_list() for name, acc in accumulators.items()}


def analyze_code(source: str, config: AnalysisConfig | None = None) -> AnalysisResult:
    return AnalysisResult(parse_code(source, config), config)


def analyze_files(
    files: dict[str, str],
    config: AnalysisConfig | None = None,
    progress: ProgressCallback | None = None,
) -> AnalysisResult:
    """Analyze ``{filename: source}`` as one codebase."""
    maps = []
    total = len(files)
    for i, (filename, source) in enumerate(files.items()):
        if progress:
            progress("Parsing", i, total)
        dependency_map = parse_code(source, config)
        if not dependency_map:
            logger.debug("No classes extracted from %s", filename)
        maps.append(dependency_map)

    if progress:
        progress("Parsing", total, total)

    return AnalysisResult(merge_dependency_maps(maps), config)


def analyze_directory(
    config: AnalysisConfig,
    progress: ProgressCallback | None = None,
) -> AnalysisResult:
    """Scan ``config.source_dir`` and analyze every matching file."""
    source_dir = Path(config.source_dir)
    if not source_dir.is_dir():
        raise ValueError(f"Not a directory: {source_dir}")

    if progress:
        progress("Scanning", 0, 1)
    files = scan_directory(
        source_dir,
        pattern=config.pattern,
        skip_dirs=config.skip_dirs,
        recursive=config.recursive,
    )
    if progress:
        progress("Scanning", 1, 1)

    logger.info("Analyzing %d file(s) under %s", len(files), source_dir)
    return analyze_files(files, config, progress=progress)
