"""
Pytest fixtures for CybORG Viz tests.
"""

import pytest
from fastapi.testclient import TestClient

from ..api.schemas import GraphSnapshot
from ..session.controller import SessionController
from ..session.state import Session
from ..transport.client import SessionTransport
from .fake_server import FakeGameServer, make_snapshot_payload


BASE_URL = "http://testserver"


@pytest.fixture
def fake_server() -> FakeGameServer:
    """Fresh in-memory game server."""
    return FakeGameServer()


@pytest.fixture
def http_client(fake_server: FakeGameServer):
    """Test client routed to the fake server."""
    with TestClient(fake_server.app, base_url=BASE_URL) as client:
        yield client


@pytest.fixture
def transport(http_client) -> SessionTransport:
    """Transport talking to the fake server."""
    return SessionTransport(BASE_URL, timeout=5, http=http_client)


@pytest.fixture
def controller(transport: SessionTransport) -> SessionController:
    """Controller configured like the default AR client."""
    session = Session(max_steps=10, red_agent="B_lineAgent", blue_agent="BlueRemove")
    return SessionController(transport, session=session)


@pytest.fixture
def snapshot_factory():
    """Build decoded snapshots for a given step."""
    def build(step: int) -> GraphSnapshot:
        return GraphSnapshot.model_validate(make_snapshot_payload(step))
    return build
