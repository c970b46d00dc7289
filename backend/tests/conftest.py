import pytest
from fastapi.testclient import TestClient

from splitledger.main import app
from splitledger.services.entity_store import EntityStore
from splitledger.session import get_store


@pytest.fixture
def store():
    return EntityStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def users(client):
    for name in ["Asha", "Ben", "Chen"]:
        client.post("/api/users", json={"name": name})
    return ["Asha", "Ben", "Chen"]
