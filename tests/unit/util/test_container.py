"""Unit tests for the production container."""

import pytest

from usergroup.config import AccountSettings, Settings
from usergroup.util.di.container import create_container


class TestCreateContainer:
    """Tests for create_container."""

    @pytest.mark.asyncio
    async def test_provides_settings(self, monkeypatch):
        monkeypatch.setenv("ACCOUNTS__CREATE_RETRIES", "2")
        container = create_container()

        try:
            settings = await container.get(Settings)
            account_settings = await container.get(AccountSettings)
        finally:
            await container.close()

        assert account_settings is settings.accounts
        assert account_settings.create_retries == 2
