"""Dependency graph builders: per-class dependency map -> adjacency graph."""

from __future__ import annotations

from collections.abc import Mapping

from dependency_explorer.analysis.graph_models import DependencyGraph


def validate_dependency_data(dependency_data) -> None:
    """Fail fast on data that is not ``{class: [{target: [members]}, ...]}``."""
    if not isinstance(dependency_data, Mapping):
        raise TypeError(
            "dependency data must be a mapping of class name to dependency groups, "
            f"got {type(dependency_data).__name__}"
        )
    for class_name, groups in dependency_data.items():
        if not isinstance(groups, (list, tuple)):
            raise TypeError(
                f"dependencies of {class_name!r} must be a list of groups, "
                f"got {type(groups).__name__}"
            )


def iter_groups(groups):
    """Yield ``(target, members)`` from a class's dependency groups."""
    for group in groups:
        if isinstance(group, Mapping):
            for target, members in group.items():
                yield target, list(members)
        elif isinstance(group, str):
            yield group, []


class DependencyGraphBuilder:
    """Build a dependency graph from per-class dependency data."""

    def build(self, dependency_data) -> DependencyGraph:
        validate_dependency_data(dependency_data)
        graph = DependencyGraph()

        for class_name, groups in dependency_data.items():
            graph.add_node(class_name)
            for target, members in iter_groups(groups):
                self._add_dependency(graph, class_name, target, members)

        return graph

    def _add_dependency(self, graph: DependencyGraph, source: str, target: str, members: list[str]) -> None:
        graph.add_edge(source, target)


class RailsAwareGraphBuilder(DependencyGraphBuilder):
    """Graph builder that resolves relationship macros to model edges.

    ``{"Relationship::has_many": ["Post"]}`` becomes an edge to ``Post``
    instead of an edge to the synthetic relationship node.
    """

    def __init__(self, relationship_prefix: str = "Relationship::"):
        self.relationship_prefix = relationship_prefix

    def _add_dependency(self, graph: DependencyGraph, source: str, target: str, members: list[str]) -> None:
        if not target.startswith(self.relationship_prefix):
            graph.add_edge(source, target)
            return
        for model in members:
            graph.add_edge(source, model)


def build_graph(dependency_data, *, rails_aware: bool = False,
                relationship_prefix: str = "Relationship::") -> DependencyGraph:
    if rails_aware:
        return RailsAwareGraphBuilder(relationship_prefix).build(dependency_data)
    return DependencyGraphBuilder().build(dependency_data)
