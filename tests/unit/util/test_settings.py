"""Unit tests for settings and observability configuration."""

import pytest

from usergroup.config import AccountSettings, Settings
from usergroup.util.error import ConfigurationError
from usergroup.util.observability import configure_logfire


class TestAccountSettings:
    """Tests for account reconciliation settings."""

    def test_defaults(self):
        settings = AccountSettings()

        assert settings.create_retries == 1
        assert settings.admin_nicknames == []

    def test_blank_admin_nicknames_dropped(self):
        settings = AccountSettings(admin_nicknames=["phoet", "", "klaus"])

        assert settings.admin_nicknames == ["phoet", "klaus"]

    def test_retries_bounded(self):
        with pytest.raises(ValueError):
            AccountSettings(create_retries=-1)

    def test_nested_environment_variables(self, monkeypatch):
        monkeypatch.setenv("ACCOUNTS__ADMIN_NICKNAMES", '["phoet"]')
        monkeypatch.setenv("ACCOUNTS__CREATE_RETRIES", "3")
        monkeypatch.setenv("DATABASE__URL", "postgresql+asyncpg://u:p@db:5432/ug")

        settings = Settings(_env_file=None)

        assert settings.accounts.admin_nicknames == ["phoet"]
        assert settings.accounts.create_retries == 3
        assert settings.database_url == "postgresql+asyncpg://u:p@db:5432/ug"


class TestConfigureLogfire:
    """Tests for configure_logfire."""

    def test_forced_send_without_token_in_production(self):
        settings = Settings(
            _env_file=None,
            environment="production",
            observability={"send_to_logfire": True, "logfire_token": None},
        )

        with pytest.raises(ConfigurationError):
            configure_logfire(settings)
