"""Tests for the web API."""

import pytest
from pathlib import Path

# Only run if fastapi/httpx and tree-sitter are installed
try:
    from fastapi.testclient import TestClient
    from dependency_explorer.web import api, create_app
    from dependency_explorer.web.state import state
    HAS_WEB = True
except ImportError:
    HAS_WEB = False

pytestmark = pytest.mark.skipif(not HAS_WEB, reason="web dependencies not installed")

FIXTURES = Path(__file__).parent / "fixtures"

PLAYER = "class Player\n  def attack\n    Enemy.health -= 10\n  end\nend\n"


@pytest.fixture
def client():
    state.clear()
    return TestClient(create_app())


def test_health(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"


def test_analyze_source(client):
    res = client.post("/api/analysis", json={"source": PLAYER})
    assert res.status_code == 200
    data = res.json()
    assert data["source"] == "inline"
    assert data["classes"] == 1
    assert data["result"]["dependencies"] == {"Player": [{"Enemy": ["health"]}]}
    assert data["result"]["graph"] == {"nodes": ["Player", "Enemy"], "edges": [["Player", "Enemy"]]}


def test_analyze_files(client):
    res = client.post("/api/analysis", json={
        "files": {
            "a.rb": "class A\n  def run\n    B.call\n  end\nend\n",
            "b.rb": "class B\n  def run\n    A.call\n  end\nend\n",
        },
    })
    assert res.status_code == 200
    data = res.json()
    assert data["file_count"] == 2
    assert data["result"]["circular_dependencies"] == [["A", "B", "A"]]


def test_analyze_requires_input(client):
    res = client.post("/api/analysis", json={})
    assert res.status_code == 400


def test_analyze_directory(client):
    res = client.post("/api/analysis/directory", json={"path": str(FIXTURES / "app"), "rails_aware": True})
    assert res.status_code == 200
    cycles = res.json()["result"]["circular_dependencies"]
    assert ["User", "Post", "User"] in cycles


def test_analyze_directory_not_found(client):
    res = client.post("/api/analysis/directory", json={"path": "/nonexistent/path"})
    assert res.status_code == 400


def test_session_lookup(client):
    analysis_id = client.post("/api/analysis", json={"source": PLAYER}).json()["id"]

    assert client.get(f"/api/analysis/{analysis_id}").status_code == 200
    assert client.get(f"/api/analysis/{analysis_id}/depth").json() == {
        "dependency_depth": {"Player": 0, "Enemy": 1},
    }
    assert client.get(f"/api/analysis/{analysis_id}/cycles").json() == {
        "circular_dependencies": [],
        "cross_namespace_cycles": [],
    }
    boundaries = client.get(f"/api/analysis/{analysis_id}/boundaries").json()
    assert boundaries == {"violations": [], "health_score": 10.0}

    listed = client.get("/api/analysis").json()["analyses"]
    assert [a["id"] for a in listed] == [analysis_id]


def test_delete_session(client):
    analysis_id = client.post("/api/analysis", json={"source": PLAYER}).json()["id"]
    assert client.delete(f"/api/analysis/{analysis_id}").status_code == 200
    assert client.get(f"/api/analysis/{analysis_id}").status_code == 404
    assert client.delete(f"/api/analysis/{analysis_id}").status_code == 404


def test_payloads_are_built_off_the_event_loop(client, monkeypatch):
    analysis_id = client.post("/api/analysis", json={"source": PLAYER}).json()["id"]

    original = api.asyncio.to_thread
    calls = []

    async def recording(func, *args, **kwargs):
        calls.append(func.__name__)
        return await original(func, *args, **kwargs)

    monkeypatch.setattr(api.asyncio, "to_thread", recording)

    assert client.get(f"/api/analysis/{analysis_id}").status_code == 200
    assert client.get(f"/api/analysis/{analysis_id}/depth").status_code == 200
    assert client.get(f"/api/analysis/{analysis_id}/cycles").status_code == 200
    assert client.get(f"/api/analysis/{analysis_id}/boundaries").status_code == 200
    assert calls == ["_response", "_depth_payload", "_cycles_payload", "_boundaries_payload"]
