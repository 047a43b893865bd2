"""Graph analyses over per-class dependency maps."""

from __future__ import annotations

from dependency_explorer.analysis.cycles import CircularDependencyAnalyzer, find_cycles
from dependency_explorer.analysis.depth import DependencyDepthAnalyzer, calculate_depth
from dependency_explorer.analysis.graph_builder import (
    DependencyGraphBuilder,
    RailsAwareGraphBuilder,
    build_graph,
)
from dependency_explorer.analysis.graph_models import DependencyEdge, DependencyGraph
from dependency_explorer.analysis.namespaces import (
    CrossNamespaceCycleAnalyzer,
    NamespaceBoundaryAnalyzer,
    classify_cycles,
    namespace_of,
)
from dependency_explorer.analysis.result import AnalysisResult

__all__ = [
    "AnalysisResult",
    "CircularDependencyAnalyzer",
    "CrossNamespaceCycleAnalyzer",
    "DependencyDepthAnalyzer",
    "DependencyEdge",
    "DependencyGraph",
    "DependencyGraphBuilder",
    "NamespaceBoundaryAnalyzer",
    "RailsAwareGraphBuilder",
    "build_graph",
    "calculate_depth",
    "classify_cycles",
    "find_cycles",
    "namespace_of",
]
