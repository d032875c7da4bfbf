"""Global error handlers — every failure rendered as a CourierError envelope.

Tests cover:
    - a missing x-access-token header → 400 MISSING_ACCESS_TOKEN
    - other validation failures → 400 VALIDATION_ERROR with field details
    - unexpected exceptions → 500 INTERNAL_ERROR without internal details
"""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from courier.api.dependencies import AccessToken
from courier.api.error_handlers import register_error_handlers


class Payload(BaseModel):
    count: int


def _app() -> FastAPI:
    app = FastAPI()

    @app.get("/guarded")
    async def guarded(token: AccessToken):
        return {"token": token}

    @app.post("/payload")
    async def payload(body: Payload):
        return body

    @app.get("/explode")
    async def explode():
        raise RuntimeError("secret connection string")

    register_error_handlers(app)
    return app


@pytest.fixture
async def bare_client():
    transport = ASGITransport(app=_app(), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def test_missing_access_token_has_its_own_code(bare_client):
    res = await bare_client.get("/guarded")
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "MISSING_ACCESS_TOKEN"
    assert "details" not in error


async def test_present_access_token_passes_through(bare_client):
    res = await bare_client.get("/guarded", headers={"x-access-token": "abc"})
    assert res.json() == {"token": "abc"}


async def test_body_validation_lists_fields(bare_client):
    res = await bare_client.post("/payload", json={"count": "many"})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["category"] == "validation"
    assert [d["field"] for d in error["details"]] == ["body.count"]


async def test_unexpected_error_is_opaque_500(bare_client):
    res = await bare_client.get("/explode")
    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "INTERNAL_ERROR"
    assert error["severity"] == "critical"
    assert "secret" not in res.text
