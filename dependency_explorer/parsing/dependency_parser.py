"""Ruby source -> per-class dependency map."""

from __future__ import annotations

from dependency_explorer.models import AnalysisConfig
from dependency_explorer.parsing.classifier import NodeClassifier
from dependency_explorer.parsing.discovery import discover, extract_dependencies
from dependency_explorer.parsing.ruby_parser import parse_ruby
from dependency_explorer.parsing.visitor import DependencyVisitor


class DependencyParser:
    """Parses one Ruby source and extracts its class dependencies."""

    def __init__(self, source: str | bytes, config: AnalysisConfig | None = None):
        self.source = source
        self.config = config or AnalysisConfig()

    def parse(self) -> dict[str, list[dict[str, list[str]]]]:
        tree = parse_ruby(self.source)
        if tree is None:
            return {}
        return extract_dependencies(tree, self._build_visitor())

    def classes(self):
        return discover(parse_ruby(self.source))

    def _build_visitor(self) -> DependencyVisitor:
        classifier = NodeClassifier(
            relationship_macros=self.config.relationship_macros,
            relationship_prefix=self.config.relationship_prefix,
        )
        return DependencyVisitor(classifier)


def parse_dependencies(source: str | bytes, config: AnalysisConfig | None = None) -> dict:
    return DependencyParser(source, config).parse()
