"""Dependency depth: longest chain of dependents ending at each node."""

from __future__ import annotations

from dependency_explorer.analysis.graph_builder import DependencyGraphBuilder
from dependency_explorer.analysis.graph_models import DependencyGraph


class DepthCalculationState:
    """Memoised depth evaluation over a reverse adjacency map.

    A dependent that is still being evaluated further up the walk
    (i.e. the node sits on a cycle) is ignored, so evaluation always
    terminates. Depths of nodes on a cycle therefore depend on the order
    in which nodes are evaluated; acyclic regions are exact.
    """

    def __init__(self, reverse_graph: dict[str, list[str]]):
        self.reverse_graph = reverse_graph
        self.memo: dict[str, int] = {}
        self._in_progress: set[str] = set()

    def calculate_node_depth(self, node: str) -> int:
        if node in self.memo:
            return self.memo[node]

        # Post-order walk; each frame is [node, dependent iterator, best depth so far]
        self._in_progress.add(node)
        stack = [[node, iter(self.reverse_graph.get(node, [])), 0]]
        while stack:
            frame = stack[-1]
            for dependent in frame[1]:
                if dependent in self._in_progress:
                    continue
                if dependent in self.memo:
                    frame[2] = max(frame[2], self.memo[dependent] + 1)
                    continue
                self._in_progress.add(dependent)
                stack.append([dependent, iter(self.reverse_graph.get(dependent, [])), 0])
                break
            else:
                stack.pop()
                current, _, depth = frame
                self._in_progress.discard(current)
                self.memo[current] = depth
                if stack:
                    stack[-1][2] = max(stack[-1][2], depth + 1)

        return self.memo[node]



def calculate_depth(graph: DependencyGraph) -> dict[str, int]:
    """Depth for every node: 0 without dependents, else 1 + max(dependent depth)."""
    state = DepthCalculationState(graph.reverse)
    return {node: state.calculate_node_depth(node) for node in graph.nodes}


class DependencyDepthAnalyzer:
    """Computes depths directly from per-class dependency data."""

    def __init__(self, dependency_data, graph_builder: DependencyGraphBuilder | None = None):
        self.graph = (graph_builder or DependencyGraphBuilder()).build(dependency_data)

    def calculate_depth(self) -> dict[str, int]:
        return calculate_depth(self.graph)
