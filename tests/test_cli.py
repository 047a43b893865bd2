"""Tests for the command-line interface."""

import json

import pytest
from pathlib import Path

from click.testing import CliRunner

FIXTURES = Path(__file__).parent / "fixtures"
APP = FIXTURES / "app"

# Only run if tree-sitter is installed
try:
    from dependency_explorer.cli import cli
    HAS_TREESITTER = True
except ImportError:
    HAS_TREESITTER = False

pytestmark = pytest.mark.skipif(not HAS_TREESITTER, reason="tree-sitter not installed")


@pytest.fixture
def runner():
    return CliRunner()


def test_version(runner):
    res = runner.invoke(cli, ["--version"])
    assert res.exit_code == 0
    assert "0.1.0" in res.output


def test_analyze_console(runner):
    res = runner.invoke(cli, ["analyze", str(APP)])
    assert res.exit_code == 0, res.output
    assert "Dependencies" in res.output
    assert "Billing::Invoice -> Payments::Gateway -> Billing::Invoice" in res.output
    assert "Namespace boundary health" in res.output


def test_analyze_json(runner):
    res = runner.invoke(cli, ["analyze", str(FIXTURES / "game.rb"), "--format", "json"])
    assert res.exit_code == 0, res.output
    payload = json.loads(res.output)
    assert payload["dependencies"]["Player"][0] == {"Enemy": ["take_damage", "health"]}
    assert payload["dependency_depth"]["Player"] == 0


def test_analyze_dot_to_file(runner, tmp_path):
    out = tmp_path / "graph.dot"
    res = runner.invoke(cli, ["analyze", str(APP), "-f", "dot", "-o", str(out)])
    assert res.exit_code == 0, res.output
    text = out.read_text()
    assert text.startswith("digraph dependencies {")
    assert '"Billing::Invoice" -> "Payments::Gateway" [color=red];' in text


def test_analyze_rails_dot(runner):
    res = runner.invoke(cli, ["analyze", str(APP), "-f", "rails-dot"])
    assert res.exit_code == 0, res.output
    assert '"User" -> "Post"' in res.output


def test_cycles(runner):
    res = runner.invoke(cli, ["cycles", str(APP), "--json"])
    assert res.exit_code == 0, res.output
    assert json.loads(res.output) == [["Billing::Invoice", "Payments::Gateway", "Billing::Invoice"]]


def test_cycles_rails_aware(runner):
    res = runner.invoke(cli, ["cycles", str(APP), "--rails-aware"])
    assert res.exit_code == 0, res.output
    assert "User -> Post -> User" in res.output


def test_cycles_none_found(runner):
    res = runner.invoke(cli, ["cycles", str(FIXTURES / "game.rb")])
    assert res.exit_code == 0
    assert "No circular dependencies found." in res.output


def test_cross_namespace_cycles(runner):
    res = runner.invoke(cli, ["cycles", str(APP), "--cross-namespace", "--json"])
    assert res.exit_code == 0, res.output
    assert json.loads(res.output) == [{
        "cycle": ["Billing::Invoice", "Payments::Gateway", "Billing::Invoice"],
        "namespaces": ["Billing", "Payments"],
        "severity": "medium",
    }]


def test_depth(runner):
    res = runner.invoke(cli, ["depth", str(FIXTURES / "game.rb"), "--json"])
    assert res.exit_code == 0, res.output
    assert json.loads(res.output) == {
        "Player": 0, "Enemy": 1, "GameState": 1, "Config": 1, "Logger": 1,
    }


def test_missing_path(runner):
    res = runner.invoke(cli, ["analyze", "/nonexistent/path"])
    assert res.exit_code != 0


@pytest.mark.parametrize("command", ["analyze", "cycles", "depth"])
def test_pattern_with_file_path_is_rejected(runner, command):
    res = runner.invoke(cli, [command, str(FIXTURES / "game.rb"), "--pattern", "*.rake"])
    assert res.exit_code == 2
    assert "--pattern applies to directories only" in res.output


def test_pattern_with_directory_is_accepted(runner):
    res = runner.invoke(cli, ["cycles", str(APP), "--pattern", "*.rake"])
    assert res.exit_code == 0
