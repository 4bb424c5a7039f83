"""Tests for sitecontent.config and the app factory."""

from __future__ import annotations

import pytest

from sitecontent import create_app
from sitecontent.config import DevelopmentConfig, TestingConfig, config_by_name, env_flag


class TestEnvFlag:
    @pytest.mark.parametrize("raw", ["1", "true", "TRUE", "yes", " on "])
    def test_truthy(self, monkeypatch, raw) -> None:
        monkeypatch.setenv("SITE_FLAG", raw)
        assert env_flag("SITE_FLAG") is True

    @pytest.mark.parametrize("raw", ["0", "false", "no", ""])
    def test_falsy(self, monkeypatch, raw) -> None:
        monkeypatch.setenv("SITE_FLAG", raw)
        assert env_flag("SITE_FLAG", default=True) is False

    def test_default_when_unset(self, monkeypatch) -> None:
        monkeypatch.delenv("SITE_FLAG", raising=False)
        assert env_flag("SITE_FLAG", default=True) is True


class TestConfigClasses:
    def test_registered_names(self) -> None:
        assert set(config_by_name) == {"development", "production", "testing"}

    def test_safety_maximizing_defaults(self) -> None:
        assert TestingConfig.CONTENT_RECORD_ID == "main"
        assert TestingConfig.DEFAULT_DETECTION_FALLBACK == "strict"
        assert TestingConfig.TRUST_STORED_DEFAULT is False
        assert TestingConfig.RESET_PERSISTS is False


class TestCreateApp:
    def test_testing_app(self) -> None:
        app = create_app("testing")
        assert app.config["TESTING"] is True
        assert "v1" in app.blueprints

    def test_app_without_database(self, monkeypatch) -> None:
        monkeypatch.setattr(DevelopmentConfig, "SQLALCHEMY_DATABASE_URI", None)

        app = create_app("development")

        assert "sqlalchemy" not in app.extensions
        response = app.test_client().get("/api/v1/health")
        assert response.status_code == 200
        assert response.get_json()["store"] == "not_configured"

    def test_init_db_command(self) -> None:
        app = create_app("testing")

        result = app.test_cli_runner().invoke(args=["init-db"])

        assert result.exit_code == 0
        assert "site_content table ready" in result.output

    def test_init_db_without_database(self, monkeypatch) -> None:
        monkeypatch.setattr(DevelopmentConfig, "SQLALCHEMY_DATABASE_URI", None)
        app = create_app("development")

        result = app.test_cli_runner().invoke(args=["init-db"])

        assert result.exit_code != 0
        assert "Database URI not set" in result.output
        assert "site_content table ready" not in result.output
