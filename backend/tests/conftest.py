"""Root conftest — shared test configuration."""

import os
from datetime import datetime, timedelta, timezone

import pytest

# Settings() refuses to load without a signing secret
TEST_JWT_SECRET = "test-signing-secret-0123456789abcdef0123456789abcdef0123456789abcdef"
os.environ.setdefault("JWT_SECRET", TEST_JWT_SECRET)
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)

from courier.core.session_authority import SessionAuthority  # noqa: E402


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime.now(timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def authority(clock):
    """SessionAuthority on the test secret, driven by the fake clock."""
    return SessionAuthority(TEST_JWT_SECRET, clock=clock)


@pytest.fixture
def bearer():
    def _bearer(token: str) -> str:
        return f"Bearer {token}"
    return _bearer


# ─── Database ────────────────────────────────────────────────────

from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from courier.db.base import Base  # noqa: E402
import courier.models  # noqa: E402,F401


@pytest.fixture
async def test_engine():
    """Fresh in-memory SQLite shared by every session of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session
