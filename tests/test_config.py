"""Settings — environment-driven configuration."""

from cruder.config import Settings


def test_postgres_url_rewritten_for_asyncpg():
    settings = Settings(database_url="postgresql://u:p@host:5432/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/db"


def test_async_url_left_untouched():
    url = "sqlite+aiosqlite:///:memory:"
    assert Settings(database_url=url).database_url == url


def test_api_key_read_from_environment(monkeypatch):
    monkeypatch.setenv("X_API_KEY", "from-env")
    assert Settings().x_api_key == "from-env"


def test_health_paths_ignored_by_default():
    settings = Settings()
    assert "/healthz" in settings.api_key_ignored_paths
    assert "/api/v1/health" in settings.api_key_ignored_paths
