"""API test fixtures — FastAPI test client over an in-memory SQLite store.

Invariants:
    - get_db dependency overridden to use the test session factory
    - db_manager patched so the readiness probe sees the test engine
    - get_session_authority overridden with the fake-clock authority
"""

import pytest
from httpx import ASGITransport, AsyncClient

import courier.infrastructure.database as db_module
from courier.api.dependencies import get_session_authority
from courier.infrastructure.database import DatabaseSessionManager, get_db
from courier.main import app


@pytest.fixture
async def client(test_engine, test_session_factory, authority):
    """FastAPI test client with DB and authority dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_authority] = lambda: authority

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def register(client):
    async def _register(username: str, password: str) -> int:
        res = await client.post(
            "/api/v1/users", json={"username": username, "password": password},
        )
        assert res.status_code == 201
        return res.json()["id"]
    return _register


@pytest.fixture
def login(client):
    async def _login(username: str, password: str) -> str:
        res = await client.post(
            "/api/v1/login", json={"username": username, "password": password},
        )
        assert res.status_code == 202
        return res.json()["token"]
    return _login
