"""Tests for configuration helpers."""

from pathlib import Path

import pytest

from delivery_bot.config import (
    DEFAULT_DB_PATH,
    DEFAULT_MODEL_PATH,
    DEFAULT_ORDER_STATUS_URL,
    PROJECT_ROOT,
    Settings,
    resolve_db_path,
    resolve_model_path,
)


class TestResolvePaths:
    """Tests for path resolution."""

    def test_db_default(self):
        """Test that an empty value falls back to the default database."""
        assert resolve_db_path(None) == DEFAULT_DB_PATH
        assert resolve_db_path("") == DEFAULT_DB_PATH

    def test_db_memory(self):
        """Test that :memory: is passed through."""
        assert resolve_db_path(":memory:") == ":memory:"

    def test_relative_paths_are_project_relative(self):
        """Test that relative paths resolve against the project root."""
        assert resolve_db_path("data/x.db") == PROJECT_ROOT / "data/x.db"
        assert resolve_model_path("m/model.joblib") == PROJECT_ROOT / "m/model.joblib"

    def test_absolute_paths_are_kept(self, tmp_path):
        """Test that absolute paths are returned unchanged."""
        assert resolve_model_path(tmp_path / "m.joblib") == tmp_path / "m.joblib"
        assert resolve_model_path(None) == DEFAULT_MODEL_PATH


class TestSettingsFromEnv:
    """Tests for Settings.from_env()."""

    def test_defaults(self, monkeypatch):
        """Test defaults when no variables are set."""
        for name in [
            "DATABASE_URL",
            "MODEL_PATH",
            "MODEL_READY_TIMEOUT",
            "ORDER_STATUS_URL",
            "RESOLVER_TIMEOUT",
            "RECORD_TIMEOUT",
            "API_HOST",
            "API_PORT",
            "LOG_LEVEL",
        ]:
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        assert settings.db_path == DEFAULT_DB_PATH
        assert settings.order_status_url == DEFAULT_ORDER_STATUS_URL
        assert settings.resolver_timeout == 3.0
        assert settings.model_ready_timeout == 2.0
        assert settings.api_port == 3000

    def test_overrides(self, monkeypatch):
        """Test that environment variables override defaults."""
        monkeypatch.setenv("DATABASE_URL", ":memory:")
        monkeypatch.setenv("RESOLVER_TIMEOUT", "1.5")
        monkeypatch.setenv("ORDER_STATUS_URL", "http://status.local/o/{order_id}")
        monkeypatch.setenv("API_PORT", "8080")

        settings = Settings.from_env()

        assert settings.db_path == ":memory:"
        assert settings.resolver_timeout == 1.5
        assert settings.order_status_url == "http://status.local/o/{order_id}"
        assert settings.api_port == 8080

    @pytest.mark.parametrize("value", ["abc", "0", "-1"])
    def test_invalid_timeout(self, monkeypatch, value):
        """Test that non-positive or non-numeric timeouts are rejected."""
        monkeypatch.setenv("RECORD_TIMEOUT", value)

        with pytest.raises(ValueError):
            Settings.from_env()

    def test_url_requires_placeholder(self):
        """Test that the status URL must contain {order_id}."""
        with pytest.raises(ValueError):
            Settings(order_status_url="https://api.delivery.com/orders/")
