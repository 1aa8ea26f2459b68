"""Settings — environment parsing and URL normalization."""

from taskboard.config import Settings
from taskboard.core.domain_types import StorageBackend


def test_storage_backend_from_env(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "sql")
    assert Settings().storage_backend is StorageBackend.SQL


def test_postgres_url_rewritten_for_asyncpg(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/boards")
    assert Settings().database_url == "postgresql+asyncpg://u:p@db:5432/boards"


def test_session_defaults():
    settings = Settings()
    assert settings.session_cookie_name == "auth-token"
    assert settings.session_cookie_secure is True
    assert settings.session_ttl_seconds == 7 * 24 * 3600
