import pytest
from fastapi.testclient import TestClient

from user_records_api.app.main import create_app
from user_records_api.app.store import InMemoryUserStore


@pytest.fixture
def store():
    return InMemoryUserStore()


@pytest.fixture
def client(store):
    return TestClient(create_app(store))


@pytest.fixture
def john(client):
    response = client.post(
        "/users",
        json={"name": "John Doe", "email": "johndoe@example.com", "password": "1234"},
    )
    assert response.status_code == 200
    return response.json()
