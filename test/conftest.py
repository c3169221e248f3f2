import mongomock
import pytest
from fastapi.testclient import TestClient

from main import create_app


@pytest.fixture
def db():
    return mongomock.MongoClient()["usersdb"]


@pytest.fixture
def client(db):
    app = create_app(database=db)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def bob(client):
    resp = client.post("/users", json={"name": "Bob", "email": "bob@x.com", "password": "pw"})
    assert resp.status_code == 201
    return resp.json()
