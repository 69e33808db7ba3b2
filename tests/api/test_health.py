"""Health & Readiness — liveness and DB-backed readiness probes.

Tests cover:
    - /healthz returns 200 {"status": "ok"} without an API key
    - readiness is 503 when no database manager exists
    - readiness is 200 when the database answers SELECT 1
"""

from cruder.infrastructure import database as db_module
from cruder.infrastructure.database import DatabaseSessionManager


async def test_liveness(anonymous_client):
    res = await anonymous_client.get("/healthz")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


async def test_readiness_without_database(anonymous_client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    res = await anonymous_client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


async def test_readiness_with_database(
    anonymous_client, monkeypatch, test_engine, test_session_factory,
):
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    monkeypatch.setattr(db_module, "db_manager", fake_manager)

    res = await anonymous_client.get("/api/v1/health/ready")

    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"
