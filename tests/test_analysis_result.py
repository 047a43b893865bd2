"""Tests for statistics, relationship analysis, component categories and AnalysisResult."""

import json

import pytest

from dependency_explorer.analysis.relationships import ComponentCategorizer, RelationshipAnalyzer
from dependency_explorer.analysis.result import AnalysisResult
from dependency_explorer.analysis.statistics import calculate_statistics
from dependency_explorer.models import AnalysisConfig
from dependency_explorer.output import to_console, to_dot, to_json


def _rails_data():
    return {
        "User": [
            {"ApplicationRecord": []},
            {"Relationship::belongs_to": ["Account"]},
            {"Relationship::has_many": ["Post"]},
        ],
        "Post": [
            {"ApplicationRecord": []},
            {"Relationship::belongs_to": ["User"]},
        ],
        "UsersController": [
            {"ApplicationController": []},
            {"User": ["find"]},
        ],
        "Billing::InvoiceService": [
            {"User": ["find"]},
        ],
    }


class TestStatistics:
    def test_empty(self):
        assert calculate_statistics({}) == {
            "total_classes": 0,
            "total_dependencies": 0,
            "most_used_dependency": None,
            "dependency_counts": {},
        }

    def test_counts(self):
        stats = calculate_statistics(_rails_data())
        assert stats["total_classes"] == 4
        assert stats["most_used_dependency"] in ("ApplicationRecord", "User", "Relationship::belongs_to")
        assert stats["dependency_counts"]["User"] == 2
        assert stats["dependency_counts"]["ApplicationController"] == 1
        assert stats["total_dependencies"] == 5


class TestRelationshipAnalyzer:
    def test_collects_models_per_macro(self):
        result = RelationshipAnalyzer(_rails_data()).analyze_relationships()
        assert result["User"] == {
            "belongs_to": ["Account"],
            "has_many": ["Post"],
            "has_one": [],
            "has_and_belongs_to_many": [],
        }
        assert result["UsersController"]["belongs_to"] == []

    def test_rejects_non_mapping(self):
        with pytest.raises(TypeError):
            RelationshipAnalyzer("User")


class TestComponentCategorizer:
    def test_categories(self):
        components = ComponentCategorizer(_rails_data()).categorize_components()
        assert components["models"] == ["User", "Post", "ApplicationRecord"]
        assert components["controllers"] == ["UsersController", "ApplicationController"]
        assert components["services"] == ["Billing::InvoiceService"]
        assert not any(name.startswith("Relationship::") for names in components.values() for name in names)


class TestAnalysisResult:
    def test_rejects_invalid_input(self):
        with pytest.raises(TypeError):
            AnalysisResult(None)

    def test_plain_graph_by_default(self):
        result = AnalysisResult(_rails_data())
        assert result.circular_dependencies == []
        assert result.graph.has_edge("User", "Relationship::has_many")

    def test_rails_aware_config(self):
        result = AnalysisResult(_rails_data(), AnalysisConfig(rails_aware=True))
        assert result.circular_dependencies == [["User", "Post", "User"]]
        assert result.to_graph() == result.to_rails_graph()

    def test_end_to_end_player(self):
        result = AnalysisResult({"Player": [{"Enemy": ["health"]}]})
        assert result.to_graph() == {"nodes": ["Player", "Enemy"], "edges": [["Player", "Enemy"]]}
        assert result.circular_dependencies == []
        assert result.dependency_depth == {"Player": 0, "Enemy": 1}
        assert result.cross_namespace_cycles == []
        assert result.boundary_health_score == 10.0

    def test_cross_namespace_cycles(self):
        data = {
            "App::Models::User": [{"Services::UserService": ["call"]}],
            "Services::UserService": [{"App::Models::User": ["find"]}],
        }
        result = AnalysisResult(data)
        assert [c.to_dict() for c in result.cross_namespace_cycles] == [{
            "cycle": ["App::Models::User", "Services::UserService", "App::Models::User"],
            "namespaces": ["App::Models", "Services"],
            "severity": "medium",
        }]
        assert len(result.boundary_violations) == 2

    def test_depth_and_statistics_are_cached(self):
        result = AnalysisResult(_rails_data())
        assert result.dependency_depth is result.dependency_depth
        assert result.statistics is result.statistics
        assert result.to_dict()["dependency_depth"] is result.dependency_depth

    def test_normalized_cycles(self):
        data = {"C": [{"A": []}], "A": [{"B": []}], "B": [{"C": []}]}
        result = AnalysisResult(data, AnalysisConfig(normalize_cycles=True))
        assert result.circular_dependencies == [["A", "B", "C", "A"]]

    def test_to_dict_is_json_serialisable(self):
        payload = json.loads(to_json(AnalysisResult(_rails_data())))
        assert set(payload) == {
            "dependencies", "graph", "statistics", "circular_dependencies",
            "dependency_depth", "cross_namespace_cycles", "boundary_violations",
            "boundary_health_score", "relationships", "components",
        }
        assert payload["dependencies"]["Post"] == [
            {"ApplicationRecord": []},
            {"Relationship::belongs_to": ["User"]},
        ]


class TestOutput:
    def test_dot_marks_cycle_edges(self):
        result = AnalysisResult({"A": [{"B": []}], "B": [{"A": []}, {"C": []}]})
        dot = to_dot(result)
        assert dot.startswith("digraph dependencies {")
        assert '"A" -> "B" [color=red];' in dot
        assert '"B" -> "C";' in dot

    def test_rails_dot_uses_model_edges(self):
        dot = to_dot(AnalysisResult(_rails_data()), rails=True)
        assert '"User" -> "Post"' in dot
        assert "Relationship::" not in dot

    def test_rails_dot_marks_model_cycle_edges(self):
        dot = to_dot(AnalysisResult(_rails_data()), rails=True)
        assert '"User" -> "Post" [color=red];' in dot
        assert '"Post" -> "User" [color=red];' in dot
        assert '"User" -> "Account";' in dot

    def test_console_without_color(self):
        text = to_console(AnalysisResult({"Player": [{"Enemy": ["health"]}]}), color=False)
        assert "Player" in text
        assert "-> Enemy (health)" in text
        assert "Circular dependencies (0)" in text
        assert "Namespace boundary health: 10.0/10" in text
        assert "\x1b[" not in text
