"""Tests for aicalendar/core/config.py

Database URL assembly from either a full URL or PostgreSQL components.
"""

import pytest

from aicalendar.core.config import Settings
from aicalendar.core.exceptions import ConfigurationException
from aicalendar.main import uvicorn_options


def make_settings(**overrides) -> Settings:
    values = {
        "database_url": None,
        "db_username": "calendar",
        "db_password": "secret",
        "db_host": None,
        "db_port": 5432,
        "db_name": "aicalendar",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestDatabaseUrl:
    def test_direct_url_wins(self):
        settings = make_settings(database_url="sqlite:///calendar.db", db_host="db")

        assert settings.get_database_url() == "sqlite:///calendar.db"

    def test_built_from_components(self):
        settings = make_settings(db_host="db", db_name="events")

        assert settings.get_database_url() == "postgresql://calendar:secret@db:5432/events"

    def test_missing_host(self):
        with pytest.raises(ConfigurationException) as exc_info:
            make_settings().get_database_url()

        assert "DB_HOST" in exc_info.value.message

    def test_missing_password(self):
        with pytest.raises(ConfigurationException):
            make_settings(db_host="db", db_password=None).get_database_url()

    def test_safe_url_masks_password(self):
        safe = make_settings(db_host="db").get_safe_database_url()

        assert "secret" not in safe
        assert "***" in safe


class TestDefaults:
    def test_api_settings(self):
        settings = make_settings()

        assert settings.api_prefix == "/api/v1"
        assert settings.user_id_header == "X-User-Id"


class TestEnvironment:
    def test_production_runs_workers(self):
        settings = make_settings(environment="Production")

        assert uvicorn_options(settings.environment) == {"workers": 4}

    def test_development_reloads(self):
        assert uvicorn_options(make_settings(environment="development").environment) == {"reload": True}
