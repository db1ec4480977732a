"""Unit tests for SignInUseCase."""

from dishka import AsyncContainer
import pytest

from usergroup.adapter.error import UnsupportedProviderError
from usergroup.application.usecase.auth import SignInRequest, SignInUseCase
from usergroup.domain.error import DuplicateNickname
from usergroup.domain.repository import AccountLinkageRepository, AccountRepository
from usergroup.domain.value import AuthProvider
from tests.auth_hashes import GITHUB_AUTH_HASH, TWITTER_AUTH_HASH
from tests.harness import create_env_fixture

# Unit test fixture - in-memory repositories
unit_env = create_env_fixture()


class TestSignInUseCase:
    """Tests for SignInUseCase."""

    @pytest.mark.asyncio
    async def test_first_sign_in_creates_account(self, unit_env: AsyncContainer):
        """First sign-in creates the account and records the linkage."""
        # Arrange
        use_case = await unit_env.get(SignInUseCase)
        account_repo = await unit_env.get(AccountRepository)
        linkage_repo = await unit_env.get(AccountLinkageRepository)

        # Act
        response = await use_case.execute(SignInRequest(payload=TWITTER_AUTH_HASH))

        # Assert
        assert response.is_new_account
        assert response.nickname == "phoet"
        assert not response.is_admin
        assert await account_repo.count() == 1

        linkage = await linkage_repo.find_by_provider(AuthProvider.TWITTER, "14339524")
        assert str(linkage.account_id) == response.account_id

    @pytest.mark.asyncio
    async def test_repeated_sign_in_returns_same_account(
        self, unit_env: AsyncContainer
    ):
        # Arrange
        use_case = await unit_env.get(SignInUseCase)
        account_repo = await unit_env.get(AccountRepository)
        first = await use_case.execute(SignInRequest(payload=GITHUB_AUTH_HASH))

        # Act
        second = await use_case.execute(SignInRequest(payload=GITHUB_AUTH_HASH))

        # Assert
        assert not second.is_new_account
        assert second.account_id == first.account_id
        assert await account_repo.count() == 1

    @pytest.mark.asyncio
    async def test_nickname_taken_by_other_provider(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(SignInUseCase)
        account_repo = await unit_env.get(AccountRepository)
        await use_case.execute(SignInRequest(payload=TWITTER_AUTH_HASH))

        with pytest.raises(DuplicateNickname):
            await use_case.execute(SignInRequest(payload=GITHUB_AUTH_HASH))

        assert await account_repo.count() == 1

    @pytest.mark.asyncio
    async def test_provider_override(self, unit_env: AsyncContainer):
        """The request's provider wins over the hash's provider field."""
        use_case = await unit_env.get(SignInUseCase)
        payload = {**GITHUB_AUTH_HASH, "provider": None}

        response = await use_case.execute(
            SignInRequest(payload=payload, provider=AuthProvider.GITHUB)
        )

        assert response.is_new_account

    @pytest.mark.asyncio
    async def test_unsupported_provider(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(SignInUseCase)
        account_repo = await unit_env.get(AccountRepository)

        with pytest.raises(UnsupportedProviderError):
            await use_case.execute(
                SignInRequest(payload={**GITHUB_AUTH_HASH, "provider": "facebook"})
            )

        assert await account_repo.count() == 0
