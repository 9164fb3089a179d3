import asyncio

import pytest
from pydantic import ValidationError
from fastapi.testclient import TestClient

from storefront.config import Settings, settings
from storefront.db.database import Database
from storefront.main import app
from storefront.services.category_service import CategoryService

FRONTEND_ORIGIN = "http://localhost:5173"


def test_preflight_from_frontend_origin_is_allowed(client):
    response = client.options("/api/category", headers={
        "Origin": FRONTEND_ORIGIN,
        "Access-Control-Request-Method": "POST",
        "Access-Control-Request-Headers": "Content-Type",
    })

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == FRONTEND_ORIGIN
    allowed = {m.strip() for m in response.headers["access-control-allow-methods"].split(",")}
    assert {"GET", "HEAD", "PUT", "POST", "DELETE"} <= allowed
    assert "PATCH" not in allowed


def test_preflight_with_unlisted_method_is_rejected(client):
    response = client.options("/api/product/1", headers={
        "Origin": FRONTEND_ORIGIN,
        "Access-Control-Request-Method": "PATCH",
    })

    assert response.status_code == 400


def test_preflight_from_other_origin_is_rejected(client):
    response = client.options("/api/category", headers={
        "Origin": "http://evil.example",
        "Access-Control-Request-Method": "GET",
    })

    assert response.status_code == 400
    assert "access-control-allow-origin" not in response.headers


def test_simple_request_from_frontend_origin_gets_cors_header(client):
    response = client.get("/api/category", headers={"Origin": FRONTEND_ORIGIN})

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == FRONTEND_ORIGIN


def test_simple_request_from_other_origin_gets_no_cors_header(client):
    response = client.get("/api/category", headers={"Origin": "http://evil.example"})

    assert response.status_code == 200
    assert "access-control-allow-origin" not in response.headers


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "service": settings.app_name,
        "version": "1.0.0",
        "database": "ok",
    }


def test_health_reports_unreachable_database(client, monkeypatch):
    def refuse(self):
        raise ConnectionError("connection refused")

    monkeypatch.setattr(Database, "ping", refuse)

    response = client.get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "degraded"
    assert response.json()["database"] == "unavailable"


def test_root_banner(client):
    assert client.get("/").json()["service"] == settings.app_name


def test_store_failure_surfaces_as_500(database, monkeypatch):
    def broken(self):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(CategoryService, "list_categories", broken)
    app.state.db = database
    try:
        response = TestClient(app, raise_server_exceptions=False).get("/api/category")
    finally:
        del app.state.db

    assert response.status_code == 500
    assert response.json() == {
        "detail": "Internal server error",
        "error_type": "RuntimeError",
        "message": "connection reset",
    }


def test_lifespan_opens_and_disposes_store(monkeypatch):
    monkeypatch.setattr(settings, "database_url", "sqlite://")
    monkeypatch.setattr(settings, "db_connect_retries", 1)

    with TestClient(app) as client:
        assert isinstance(app.state.db, Database)
        assert client.get("/health").status_code == 200

    del app.state.db


def test_settings_defaults(monkeypatch):
    for name in ("PORT", "CORS_ALLOW_ORIGINS", "CORS_ALLOW_METHODS"):
        monkeypatch.delenv(name, raising=False)

    defaults = Settings(_env_file=None)

    assert defaults.port == 8000
    assert defaults.cors_allow_origins == [FRONTEND_ORIGIN]
    assert defaults.cors_allow_methods == ["GET", "HEAD", "PUT", "POST", "DELETE"]


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./shop.db")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", '["https://shop.example"]')

    configured = Settings(_env_file=None)

    assert configured.port == 9000
    assert configured.database_url == "sqlite:///./shop.db"
    assert configured.cors_allow_origins == ["https://shop.example"]


def test_database_wait_until_ready(database):
    assert asyncio.run(database.wait_until_ready(max_retries=1, retry_delay=0)) is True


def test_database_wait_gives_up_after_retries(tmp_path):
    unreachable = Database(f"sqlite:///{tmp_path}/missing/dir/store.db")

    with pytest.raises(Exception):
        asyncio.run(unreachable.wait_until_ready(max_retries=2, retry_delay=0))

    unreachable.dispose()


def test_lifespan_refuses_to_start_when_database_never_answers(monkeypatch):
    async def never_ready(self, max_retries=30, retry_delay=2):
        return False

    monkeypatch.setattr(settings, "database_url", "sqlite://")
    monkeypatch.setattr(Database, "wait_until_ready", never_ready)

    with pytest.raises(RuntimeError, match="never reached"):
        with TestClient(app):
            pass


def test_settings_require_at_least_one_connect_attempt(monkeypatch):
    monkeypatch.setenv("DB_CONNECT_RETRIES", "0")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
