"""Settings — required JWT secret and URL normalization."""

import pytest
from pydantic import ValidationError

from courier.config import Settings, normalize_database_url


def test_missing_secret_fails(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_blank_secret_fails(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "   ")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_postgres_url_rewritten_for_asyncpg(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "s")
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@h:5432/d")
    settings = Settings(_env_file=None)
    assert settings.database_url == "postgresql+asyncpg://u:p@h:5432/d"


def test_token_defaults(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "s")
    settings = Settings(_env_file=None)
    assert settings.token_ttl_seconds == 86_400
    assert settings.token_algorithm == "HS512"


@pytest.mark.parametrize("url", [
    "postgresql+asyncpg://u:p@h/d",
    "sqlite+aiosqlite:///courier.db",
])
def test_driver_qualified_urls_are_left_alone(url):
    assert normalize_database_url(url) == url
