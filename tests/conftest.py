"""
pytest configuration (fixtures).

Every test gets a freshly built application so that stores, routes and
their data never leak between tests.  ``live_server`` additionally runs
that application under uvicorn on a free local port for tests that go
through real HTTP.
"""

import socket
import threading
import time

import pytest
import uvicorn
from fastapi.testclient import TestClient

from agree_disagree_api.app.core.config import Settings
from agree_disagree_api.app.main import create_app


@pytest.fixture
def settings() -> Settings:
    return Settings(default_clients=[])


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def router(app):
    return app.state.route_registry


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture
def live_server(app):
    """Serve ``app`` on a local port and yield its base URL."""
    port = _free_port()
    server = uvicorn.Server(uvicorn.Config(app, host="127.0.0.1", port=port, log_level="warning"))
    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()
    deadline = time.monotonic() + 10
    while not server.started:
        if time.monotonic() > deadline:
            pytest.fail("uvicorn did not start in time")
        time.sleep(0.05)
    yield f"http://127.0.0.1:{port}"
    server.should_exit = True
    thread.join(timeout=10)
