"""Tests for probes, error envelopes, configuration and shared service helpers."""

import logging

import pytest
from sqlalchemy.exc import OperationalError

from studyhub.config import AuthMode, Settings
from studyhub.exceptions import ConfigurationError, DatabaseError, PayloadTooLargeError
from studyhub.services import notes as note_service
from studyhub.services.base import ensure_content_size, storage_guard


# =============================================================================
# PROBES
# =============================================================================


async def test_health_check(client) -> None:
    response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["status"] == "healthy"


async def test_public_route_needs_no_auth(client) -> None:
    response = await client.get("/api/public")

    assert response.status_code == 200
    assert response.json()["success"] is True


async def test_root_reports_mode(client) -> None:
    response = await client.get("/")

    assert response.json()["mode"] == "test"
    assert response.json()["authDisabled"] is False


# =============================================================================
# ERROR ENVELOPES
# =============================================================================


async def test_unknown_path_is_enveloped_404(client) -> None:
    response = await client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "API endpoint not found"}


async def test_wrong_method_keeps_status(client) -> None:
    response = await client.delete("/api/health")

    assert response.status_code == 405
    assert response.json()["success"] is False


async def test_malformed_json_is_400(client, alice) -> None:
    response = await client.post(
        "/api/notes",
        content=b"{not json",
        headers={**alice.headers, "Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["success"] is False


async def test_unhandled_error_is_generic_500(client, alice, monkeypatch) -> None:
    async def explode(*args, **kwargs):
        raise RuntimeError("database password is hunter2")

    monkeypatch.setattr(note_service, "list_notes", explode)

    response = await client.get("/api/notes", headers=alice.headers)

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Internal Server Error"}


async def test_unhandled_error_keeps_cors_headers_and_is_logged(client, alice, settings, monkeypatch, caplog) -> None:
    async def explode(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(note_service, "list_notes", explode)
    origin = settings.allowed_origins[0]

    with caplog.at_level(logging.ERROR, logger="studyhub.access"):
        response = await client.get("/api/notes", headers={**alice.headers, "Origin": origin})

    assert response.status_code == 500
    assert response.json()["success"] is False
    assert response.headers["access-control-allow-origin"] == origin
    assert any("GET /api/notes 500" in record.getMessage() for record in caplog.records)


async def test_store_failure_is_generic_500(client, alice, monkeypatch) -> None:
    async def unavailable(*args, **kwargs):
        with storage_guard("list notes"):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(note_service, "list_notes", unavailable)

    response = await client.get("/api/notes", headers=alice.headers)

    assert response.status_code == 500
    assert response.json()["success"] is False
    assert "connection refused" not in response.json()["message"]


# =============================================================================
# SERVICE HELPERS
# =============================================================================


def test_storage_guard_wraps_sqlalchemy_errors() -> None:
    with pytest.raises(DatabaseError) as exc_info:
        with storage_guard("load note"):
            raise OperationalError("SELECT 1", {}, Exception("gone"))

    assert exc_info.value.context == {"action": "load note"}
    assert isinstance(exc_info.value.__cause__, OperationalError)


def test_storage_guard_leaves_other_errors_alone() -> None:
    with pytest.raises(KeyError):
        with storage_guard("load note"):
            raise KeyError("x")


def test_ensure_content_size_counts_bytes() -> None:
    ensure_content_size("ab", "content", limit=2)
    ensure_content_size(None, "content", limit=0)

    with pytest.raises(PayloadTooLargeError) as exc_info:
        ensure_content_size("é", "content", limit=1)

    assert exc_info.value.status_code == 413
    assert exc_info.value.field == "content"


# =============================================================================
# CONFIGURATION
# =============================================================================


def _settings(**overrides) -> Settings:
    values = {
        "environment": "development",
        "jwt_secret": "s3cret",
        "database_url": "postgresql://u:p@db:5432/studyhub",
        "disable_auth": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_production_requires_secret_and_database_url() -> None:
    settings = _settings(environment="production", jwt_secret=None, database_url=None)

    with pytest.raises(ConfigurationError) as exc_info:
        settings.validate_required()

    assert "JWT_SECRET" in exc_info.value.message
    assert "DATABASE_URL" in exc_info.value.message


def test_production_refuses_bypass_mode() -> None:
    settings = _settings(environment="production", disable_auth=True)

    with pytest.raises(ConfigurationError):
        settings.validate_required()


def test_development_tolerates_missing_secret() -> None:
    _settings(jwt_secret=None, database_url=None).validate_required()


def test_auth_mode_follows_disable_auth() -> None:
    assert _settings().auth_mode is AuthMode.JWT
    assert _settings(disable_auth=True).auth_mode is AuthMode.BYPASS


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("postgres://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
        ("postgresql://u:p@db/app?sslmode=require", "postgresql+asyncpg://u:p@db/app"),
        ("sqlite+aiosqlite:///./local.db", "sqlite+aiosqlite:///./local.db"),
        (None, "sqlite+aiosqlite:///./studyhub.db"),
    ],
)
def test_database_url_normalization(raw: str | None, expected: str) -> None:
    assert _settings(database_url=raw).database_url == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("http://a.com, http://b.com", ["http://a.com", "http://b.com"]),
        ('["http://a.com"]', ["http://a.com"]),
    ],
)
def test_allowed_origins_parsing(raw: str, expected: list[str]) -> None:
    assert _settings(allowed_origins=raw).allowed_origins == expected


def test_node_env_alias(monkeypatch) -> None:
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    monkeypatch.setenv("NODE_ENV", "production")

    assert Settings(_env_file=None).environment == "production"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("staging", "staging"), (" Production ", "production"), ("", "development")],
)
def test_environment_accepts_any_name(monkeypatch, raw: str, expected: str) -> None:
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    monkeypatch.setenv("NODE_ENV", raw)

    assert Settings(_env_file=None).environment == expected


def test_unknown_environment_is_not_production() -> None:
    settings = _settings(environment="staging", jwt_secret=None, database_url=None)

    assert settings.is_production is False
    settings.validate_required()
