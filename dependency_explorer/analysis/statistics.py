"""Dependency statistics: counts and most used dependency."""

from __future__ import annotations

from collections import Counter

from dependency_explorer.analysis.graph_builder import iter_groups, validate_dependency_data


def calculate_statistics(dependency_data) -> dict:
    """Summarise a dependency map.

    Returns: {total_classes, total_dependencies, most_used_dependency, dependency_counts}
    """
    validate_dependency_data(dependency_data)

    counts: Counter[str] = Counter()
    for groups in dependency_data.values():
        for target, _members in iter_groups(groups):
            counts[target] += 1

    most_used = counts.most_common(1)
    return {
        "total_classes": len(dependency_data),
        "total_dependencies": len(counts),
        "most_used_dependency": most_used[0][0] if most_used else None,
        "dependency_counts": dict(counts),
    }
