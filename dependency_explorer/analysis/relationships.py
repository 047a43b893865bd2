"""Rails-flavoured analyzers: association macros and component categories."""

from __future__ import annotations

from dependency_explorer.analysis.graph_builder import iter_groups, validate_dependency_data
from dependency_explorer.models import RELATIONSHIP_MACROS


class RelationshipAnalyzer:
    """Collects the models each class associates with via relationship macros."""

    def __init__(self, dependency_data, relationship_prefix: str = "Relationship::",
                 macros=RELATIONSHIP_MACROS):
        validate_dependency_data(dependency_data)
        self.dependency_data = dependency_data
        self.relationship_prefix = relationship_prefix
        self.macros = tuple(macros)

    def analyze_relationships(self) -> dict[str, dict[str, list[str]]]:
        return {
            class_name: self._relationships_for(groups)
            for class_name, groups in self.dependency_data.items()
        }

    def _relationships_for(self, groups) -> dict[str, list[str]]:
        relationships: dict[str, list[str]] = {macro: [] for macro in self.macros}
        for target, models in iter_groups(groups):
            if not target.startswith(self.relationship_prefix):
                continue
            macro = target[len(self.relationship_prefix):]
            if macro in relationships:
                relationships[macro].extend(models)
        return relationships


class ComponentCategorizer:
    """Sorts classes into models, controllers, services and everything else.

    Declared classes are categorised by their superclass and name; classes
    that are only referenced can be categorised by name alone.
    """

    CATEGORIES = ("models", "controllers", "services", "other")

    def __init__(self, dependency_data, relationship_prefix: str = "Relationship::"):
        validate_dependency_data(dependency_data)
        self.dependency_data = dependency_data
        self.relationship_prefix = relationship_prefix

    def categorize_components(self) -> dict[str, list[str]]:
        components: dict[str, list[str]] = {category: [] for category in self.CATEGORIES}
        seen: set[str] = set()

        for class_name, groups in self.dependency_data.items():
            targets = {target for target, _ in iter_groups(groups)}
            components[self._category(class_name, targets)].append(class_name)
            seen.add(class_name)

        for groups in self.dependency_data.values():
            for target, _ in iter_groups(groups):
                if target in seen or target.startswith(self.relationship_prefix):
                    continue
                seen.add(target)
                components[self._category_by_name(target)].append(target)

        return components

    def _category(self, class_name: str, targets: set[str]) -> str:
        if "ApplicationRecord" in targets:
            return "models"
        if "ApplicationController" in targets or class_name.endswith("Controller"):
            return "controllers"
        if class_name.endswith("Service"):
            return "services"
        return "other"

    def _category_by_name(self, class_name: str) -> str:
        if class_name.endswith("Controller"):
            return "controllers"
        if class_name.endswith("Service"):
            return "services"
        if class_name in ("ApplicationRecord", "ActiveRecord"):
            return "models"
        return "other"
