"""Data models for the dependency graph."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DependencyEdge:
    source: str
    target: str


@dataclass
class DependencyGraph:
    nodes: list[str] = field(default_factory=list)
    edges: list[DependencyEdge] = field(default_factory=list)
    forward: dict[str, list[str]] = field(default_factory=dict)  # source -> [targets]
    reverse: dict[str, list[str]] = field(default_factory=dict)  # target -> [sources]

    def add_node(self, name: str) -> None:
        if name in self.forward:
            return
        self.nodes.append(name)
        self.forward[name] = []
        self.reverse[name] = []

    def add_edge(self, source: str, target: str) -> None:
        self.add_node(source)
        self.add_node(target)
        # Avoid duplicate edges
        if target in self.forward[source]:
            return
        self.edges.append(DependencyEdge(source, target))
        self.forward[source].append(target)
        self.reverse[target].append(source)

    def has_edge(self, source: str, target: str) -> bool:
        return target in self.forward.get(source, [])

    def to_dict(self) -> dict:
        return {
            "nodes": list(self.nodes),
            "edges": [[e.source, e.target] for e in self.edges],
        }

    @classmethod
    def from_edges(cls, edges, nodes=()) -> DependencyGraph:
        graph = cls()
        for node in nodes:
            graph.add_node(node)
        for source, target in edges:
            graph.add_edge(source, target)
        return graph
