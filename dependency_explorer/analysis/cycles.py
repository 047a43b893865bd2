"""Circular dependency detection via depth-first search."""

from __future__ import annotations

from dependency_explorer.analysis.graph_builder import DependencyGraphBuilder
from dependency_explorer.analysis.graph_models import DependencyGraph


class DfsState:
    """Visited set, recursion stack and collected cycles for one search."""

    def __init__(self):
        self.visited: set[str] = set()
        self.on_stack: set[str] = set()
        self.path: list[str] = []
        self.cycles: list[list[str]] = []

    def enter(self, node: str) -> None:
        self.visited.add(node)
        self.on_stack.add(node)
        self.path.append(node)

    def leave(self, node: str) -> None:
        # Stays visited: each node roots at most one exploration
        self.on_stack.discard(node)
        self.path.pop()

    def record_cycle(self, neighbor: str) -> None:
        start = self.path.index(neighbor)
        cycle = self.path[start:] + [neighbor]
        if cycle not in self.cycles:
            self.cycles.append(cycle)


def normalize_cycle(cycle: list[str]) -> list[str]:
    """Rotate a closed cycle to start at its smallest member."""
    body = cycle[:-1]
    if not body:
        return list(cycle)
    pivot = body.index(min(body))
    rotated = body[pivot:] + body[:pivot]
    return rotated + [rotated[0]]


def find_cycles(graph: DependencyGraph, *, normalize: bool = False) -> list[list[str]]:
    """Detect cycles in the graph using DFS.

    The walk keeps an explicit stack of ``(node, neighbor iterator)`` frames
    so arbitrarily long dependency chains are handled. Cycles are
    deduplicated by exact sequence; with ``normalize`` each cycle is first
    rotated so rotations of the same loop collapse into one.
    """
    state = DfsState()

    for root in graph.nodes:
        if root in state.visited:
            continue
        state.enter(root)
        stack = [(root, iter(graph.forward.get(root, [])))]
        while stack:
            node, neighbors = stack[-1]
            for neighbor in neighbors:
                if neighbor not in state.visited:
                    state.enter(neighbor)
                    stack.append((neighbor, iter(graph.forward.get(neighbor, []))))
                    break
                if neighbor in state.on_stack:
                    state.record_cycle(neighbor)
            else:
                state.leave(node)
                stack.pop()

    if not normalize:
        return state.cycles

    unique: list[list[str]] = []
    for cycle in state.cycles:
        rotated = normalize_cycle(cycle)
        if rotated not in unique:
            unique.append(rotated)
    return unique


class CircularDependencyAnalyzer:
    """Finds cycles directly from per-class dependency data."""

    def __init__(self, dependency_data, graph_builder: DependencyGraphBuilder | None = None,
                 normalize: bool = False):
        self.graph = (graph_builder or DependencyGraphBuilder()).build(dependency_data)
        self.normalize = normalize

    def find_cycles(self) -> list[list[str]]:
        return find_cycles(self.graph, normalize=self.normalize)
