from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from ecocycle.api.main import create_app
from ecocycle.boundary.db import get_async_db


@pytest.fixture
def db_session() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def client(db_session):
    app = create_app()

    async def override_db():
        yield db_session

    app.dependency_overrides[get_async_db] = override_db
    return TestClient(app)


def test_health_check(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}


def test_health_check_db(client):
    response = client.get("/api/v1/health/db")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Database connection OK"}


def test_health_check_db_unreachable(client, db_session):
    db_session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))

    response = client.get("/api/v1/health/db")

    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"


def test_correlation_id_echoed(client):
    response = client.get("/api/v1/health", headers={"X-Correlation-ID": "abc-123"})
    assert response.headers["X-Correlation-ID"] == "abc-123"
