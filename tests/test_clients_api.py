"""Management API under /api/v1/clients."""

import pytest

from agree_disagree_api.app.core.config import Settings


def test_open_list_and_close_client(client):
    assert client.get("/api/v1/clients/").json() == []

    resp = client.post("/api/v1/clients/", json={"name": "demo"})
    assert resp.status_code == 201
    assert resp.json() == {
        "name": "demo",
        "paths": ["/demo", "/demo/q", "/demo/u"],
        "questions": 0,
        "users": 0,
    }
    assert client.get("/demo").status_code == 200

    client.post("/demo/q?text=Why%3F")
    client.post("/demo/u?uid=adam")
    info = client.get("/api/v1/clients/demo").json()
    assert info["questions"] == 1
    assert info["users"] == 1
    assert [c["name"] for c in client.get("/api/v1/clients/").json()] == ["demo"]

    assert client.delete("/api/v1/clients/demo").status_code == 204
    assert client.get("/demo").status_code == 404
    assert client.get("/api/v1/clients/demo").status_code == 404


def test_duplicate_client_conflict(client):
    client.post("/api/v1/clients/", json={"name": "demo"})
    resp = client.post("/api/v1/clients/", json={"name": "demo"})
    assert resp.status_code == 409


def test_close_unknown_client(client):
    assert client.delete("/api/v1/clients/nobody").status_code == 404


@pytest.mark.parametrize("name", ["", "a/b", " padded ", "{x}", "{x}:path", "..", "a?b"])
def test_invalid_client_name(client, name):
    assert client.post("/api/v1/clients/", json={"name": name}).status_code == 422


@pytest.mark.parametrize("settings", [Settings(default_clients=["alpha", "beta"])])
def test_default_clients_opened_at_startup(client, app):
    assert client.get("/alpha").status_code == 200
    assert client.get("/beta").status_code == 200
    assert app.state.client_service.names() == ["alpha", "beta"]


@pytest.mark.parametrize("settings", [Settings(default_clients=["alpha"])])
def test_shutdown_closes_clients(app):
    from fastapi.testclient import TestClient

    with TestClient(app) as c:
        assert c.get("/alpha").status_code == 200
    assert app.state.client_service.names() == []
    assert not app.state.route_registry.is_registered("/alpha")


@pytest.mark.parametrize("name", ["docs", "redoc", "openapi.json"])
def test_client_cannot_shadow_framework_routes(client, name):
    before = client.get("/" + name)
    assert client.post("/api/v1/clients/", json={"name": name}).status_code == 409
    after = client.get("/" + name)
    assert after.status_code == before.status_code
    assert after.text == before.text
    assert client.get("/api/v1/clients/").json() == []


def test_closed_client_paths_stay_closed(client):
    client.post("/api/v1/clients/", json={"name": "a"})
    client.post("/api/v1/clients/", json={"name": "b"})
    client.post("/b/q?text=Why%3F")
    assert client.delete("/api/v1/clients/b").status_code == 204
    assert client.get("/b/q?qid=1").status_code == 404
    assert client.get("/a/q?qid=1").status_code == 404
