"""AnalysisResult: one object giving access to every analysis of a dependency map."""

from __future__ import annotations

from dependency_explorer.analysis.cycles import find_cycles
from dependency_explorer.analysis.depth import calculate_depth
from dependency_explorer.analysis.graph_builder import (
    DependencyGraphBuilder,
    RailsAwareGraphBuilder,
    validate_dependency_data,
)
from dependency_explorer.analysis.graph_models import DependencyGraph
from dependency_explorer.analysis.namespaces import NamespaceBoundaryAnalyzer, classify_cycles
from dependency_explorer.analysis.relationships import ComponentCategorizer, RelationshipAnalyzer
from dependency_explorer.analysis.statistics import calculate_statistics
from dependency_explorer.models import AnalysisConfig, BoundaryViolation, NamespaceCycle


class AnalysisResult:
    """Lazily runs analyzers over a ``{class: [{target: [members]}]}`` map.

    The graph used by cycle, depth and namespace analysis is the plain graph
    unless ``config.rails_aware`` is set, in which case relationship macros
    are resolved to model-to-model edges.
    """

    def __init__(self, dependency_data, config: AnalysisConfig | None = None):
        validate_dependency_data(dependency_data)
        self.dependency_data = dependency_data
        self.config = config or AnalysisConfig()
        self._graph: DependencyGraph | None = None
        self._rails_graph: DependencyGraph | None = None
        self._cycles: list[list[str]] | None = None
        self._depth: dict[str, int] | None = None
        self._statistics: dict | None = None
        self._boundary: NamespaceBoundaryAnalyzer | None = None

    @property
    def graph(self) -> DependencyGraph:
        if self.config.rails_aware:
            return self.rails_graph
        if self._graph is None:
            self._graph = DependencyGraphBuilder().build(self.dependency_data)
        return self._graph

    @property
    def rails_graph(self) -> DependencyGraph:
        if self._rails_graph is None:
            builder = RailsAwareGraphBuilder(self.config.relationship_prefix)
            self._rails_graph = builder.build(self.dependency_data)
        return self._rails_graph

    def to_graph(self) -> dict:
        return self.graph.to_dict()

    def to_rails_graph(self) -> dict:
        return self.rails_graph.to_dict()

    @property
    def circular_dependencies(self) -> list[list[str]]:
        if self._cycles is None:
            self._cycles = find_cycles(self.graph, normalize=self.config.normalize_cycles)
        return self._cycles

    @property
    def dependency_depth(self) -> dict[str, int]:
        if self._depth is None:
            self._depth = calculate_depth(self.graph)
        return self._depth

    @property
    def cross_namespace_cycles(self) -> list[NamespaceCycle]:
        return classify_cycles(
            self.circular_dependencies,
            external_prefix=self.config.external_prefix,
        )

    @property
    def statistics(self) -> dict:
        if self._statistics is None:
            self._statistics = calculate_statistics(self.dependency_data)
        return self._statistics

    @property
    def relationships(self) -> dict[str, dict[str, list[str]]]:
        analyzer = RelationshipAnalyzer(
            self.dependency_data,
            relationship_prefix=self.config.relationship_prefix,
            macros=self.config.relationship_macros,
        )
        return analyzer.analyze_relationships()

    @property
    def components(self) -> dict[str, list[str]]:
        return ComponentCategorizer(
            self.dependency_data, self.config.relationship_prefix,
        ).categorize_components()

    @property
    def boundary_analyzer(self) -> NamespaceBoundaryAnalyzer:
        if self._boundary is None:
            self._boundary = NamespaceBoundaryAnalyzer(
                self.dependency_data,
                external_prefix=self.config.external_prefix,
                relationship_prefix=self.config.relationship_prefix,
            )
        return self._boundary

    @property
    def boundary_violations(self) -> list[BoundaryViolation]:
        return self.boundary_analyzer.analyze()

    @property
    def boundary_health_score(self) -> float:
        return self.boundary_analyzer.boundary_health_score()

    def to_dict(self) -> dict:
        return {
            "dependencies": self.dependency_data,
            "graph": self.to_graph(),
            "statistics": self.statistics,
            "circular_dependencies": self.circular_dependencies,
            "dependency_depth": self.dependency_depth,
            "cross_namespace_cycles": [c.to_dict() for c in self.cross_namespace_cycles],
            "boundary_violations": [v.to_dict() for v in self.boundary_violations],
            "boundary_health_score": self.boundary_health_score,
            "relationships": self.relationships,
            "components": self.components,
        }
