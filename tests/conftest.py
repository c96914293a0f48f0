import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from database import get_db
from main import app


@pytest.fixture
def db():
    return AsyncMongoMockClient()["course_management_test"]


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def math_course(client):
    response = client.post("/api/courses", json={"title": "Math 101"})
    assert response.status_code == 201
    return response.json()
