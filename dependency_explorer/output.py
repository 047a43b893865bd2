"""Renderers for analysis results: console text, JSON and Graphviz DOT."""

from __future__ import annotations

import json

import click

from dependency_explorer.analysis.cycles import find_cycles
from dependency_explorer.analysis.result import AnalysisResult

_SEVERITY_COLORS = {"high": "red", "medium": "yellow", "low": "white"}


def to_json(result: AnalysisResult, indent: int = 2) -> str:
    return json.dumps(result.to_dict(), indent=indent)


def _dot_id(name: str) -> str:
    return '"' + name.replace("\\", "\\\\").replace('"', '\\"') + '"'


def to_dot(result: AnalysisResult, rails: bool = False) -> str:
    graph = result.rails_graph if rails else result.graph
    if graph is result.graph:
        cycles = result.circular_dependencies
    else:
        cycles = find_cycles(graph, normalize=result.config.normalize_cycles)
    cycle_edges = set()
    for cycle in cycles:
        cycle_edges.update(zip(cycle, cycle[1:]))

    lines = ["digraph dependencies {", "  rankdir=LR;", "  node [shape=box];"]
    for node in graph.nodes:
        lines.append(f"  {_dot_id(node)};")
    for edge in graph.edges:
        attrs = " [color=red]" if (edge.source, edge.target) in cycle_edges else ""
        lines.append(f"  {_dot_id(edge.source)} -> {_dot_id(edge.target)}{attrs};")
    lines.append("}")
    return "\n".join(lines) + "\n"


def to_console(result: AnalysisResult, color: bool = True) -> str:
    def style(text: str, **kwargs) -> str:
        return click.style(text, **kwargs) if color else text

    lines: list[str] = []
    stats = result.statistics

    lines.append(style("Dependencies", bold=True))
    if not result.dependency_data:
        lines.append("  No classes found.")
    for class_name, groups in result.dependency_data.items():
        lines.append(f"  {style(class_name, fg='cyan')}")
        for group in groups:
            for target, members in group.items():
                suffix = f" ({', '.join(members)})" if members else ""
                lines.append(f"    -> {target}{suffix}")
    lines.append("")

    lines.append(style("Statistics", bold=True))
    lines.append(f"  classes: {stats['total_classes']}")
    lines.append(f"  dependencies: {stats['total_dependencies']}")
    if stats["most_used_dependency"]:
        lines.append(f"  most used: {stats['most_used_dependency']}")
    lines.append("")

    cycles = result.circular_dependencies
    lines.append(style(f"Circular dependencies ({len(cycles)})", bold=True))
    for cycle in cycles:
        lines.append(f"  {style(' -> '.join(cycle), fg='red')}")
    lines.append("")

    cross = result.cross_namespace_cycles
    if cross:
        lines.append(style(f"Cross-namespace cycles ({len(cross)})", bold=True))
        for item in cross:
            sev = item.severity.value
            lines.append(
                f"  [{style(sev, fg=_SEVERITY_COLORS[sev])}] "
                f"{' -> '.join(item.cycle)}  ({', '.join(ns or '<root>' for ns in item.namespaces)})"
            )
        lines.append("")

    depths = result.dependency_depth
    if depths:
        lines.append(style("Dependency depth", bold=True))
        for name, depth in sorted(depths.items(), key=lambda kv: (-kv[1], kv[0])):
            lines.append(f"  {depth:>3}  {name}")
        lines.append("")

    lines.append(f"Namespace boundary health: {result.boundary_health_score:.1f}/10")
    return "\n".join(lines) + "\n"


FORMATTERS = {
    "console": to_console,
    "json": to_json,
    "dot": to_dot,
}
