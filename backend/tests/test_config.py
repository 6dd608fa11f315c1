"""
ITR API: Configuration and Entrypoint Tests
===========================================

What we test:
    ✅ DB_URL / POSTGRES_URL are both accepted; libpq URLs get the asyncpg driver
    ✅ Missing DB URL or PORT fails validation
    ✅ The entrypoint exits with status 1 on missing configuration
    ✅ The entrypoint serves the app on the configured port
"""

import sys
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from itr_api.config import Settings


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("DB_URL", "POSTGRES_URL", "DATABASE_URL", "PORT"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:

    def test_db_url_normalized_to_asyncpg(self, clean_env):
        clean_env.setenv("DB_URL", "postgres://itr:secret@db:5432/itr")
        clean_env.setenv("PORT", "8000")

        settings = Settings(_env_file=None)

        assert settings.database_url == "postgresql+asyncpg://itr:secret@db:5432/itr"
        assert settings.port == 8000

    def test_postgres_url_fallback(self, clean_env):
        clean_env.setenv("POSTGRES_URL", "postgresql://itr@localhost/itr")
        clean_env.setenv("PORT", "9000")

        settings = Settings(_env_file=None)

        assert settings.database_url == "postgresql+asyncpg://itr@localhost/itr"

    def test_explicit_driver_left_untouched(self, clean_env):
        clean_env.setenv("DB_URL", "sqlite+aiosqlite:///./local.db")
        clean_env.setenv("PORT", "9000")

        settings = Settings(_env_file=None)

        assert settings.database_url == "sqlite+aiosqlite:///./local.db"
        assert settings.is_sqlite

    def test_missing_database_url_fails(self, clean_env):
        clean_env.setenv("PORT", "8000")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_missing_port_fails(self, clean_env):
        clean_env.setenv("DB_URL", "postgres://localhost/itr")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_invalid_log_level_fails(self, clean_env):
        clean_env.setenv("DB_URL", "postgres://localhost/itr")
        clean_env.setenv("PORT", "8000")
        clean_env.setenv("LOG_LEVEL", "chatty")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_cors_defaults(self, clean_env):
        clean_env.setenv("DB_URL", "postgres://localhost/itr")
        clean_env.setenv("PORT", "8000")
        clean_env.delenv("CORS_ORIGINS", raising=False)

        settings = Settings(_env_file=None)

        assert settings.cors_origins_list == ["*"]
        assert settings.cors_max_age == 300


class TestEntrypoint:

    def test_missing_configuration_exits_with_status_1(self, clean_env):
        from itr_api.__main__ import main

        clean_env.setenv("DB_URL", "postgres://localhost/itr")
        # Force the config module to be re-imported (and re-validated)
        clean_env.delitem(sys.modules, "itr_api.config")

        with patch("itr_api.__main__.uvicorn.run") as run:
            assert main() == 1
        run.assert_not_called()

    def test_serves_app_on_configured_port(self):
        from itr_api.__main__ import main
        from itr_api.main import app

        with patch("itr_api.__main__.uvicorn.run") as run:
            assert main() == 0

        run.assert_called_once()
        args, kwargs = run.call_args
        assert args[0] is app
        assert kwargs["port"] == 8080
