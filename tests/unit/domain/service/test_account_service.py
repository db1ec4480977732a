"""Unit tests for AccountService."""

from uuid import uuid4

import pytest

from usergroup.adapter.omniauth import normalize
from usergroup.domain.error import NotFoundError, ValidationError
from usergroup.domain.value import AccountId, AuthProvider
from tests.auth_hashes import TWITTER_AUTH_HASH
from tests.conftest import make_account


class TestGetAccount:
    """Tests for account lookups."""

    @pytest.mark.asyncio
    async def test_get_by_id(self, account_service, account_repo):
        account = await account_repo.create(make_account("klaus"))

        result = await account_service.get_by_id(account.id)

        assert result == account

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self, account_service):
        with pytest.raises(NotFoundError):
            await account_service.get_by_id(AccountId(uuid4()))

    @pytest.mark.asyncio
    async def test_get_by_nickname(self, account_service, account_repo):
        account = await account_repo.create(make_account("klaus"))

        assert await account_service.get_by_nickname("klaus") == account
        assert await account_service.get_by_nickname("Klaus") is None


class TestCommit:
    """Tests for the validated commit."""

    @pytest.mark.asyncio
    async def test_commit_rejects_broken_email(self, account_service, account_repo):
        # Arrange
        account = await account_repo.create(make_account("klaus"))

        # Act & Assert
        with pytest.raises(ValidationError) as exc_info:
            await account_service.commit(account.revise(email="broken email"))

        assert exc_info.value.errors_on("email")
        stored = await account_repo.find_by_id(account.id)
        assert stored.email is None

    @pytest.mark.asyncio
    async def test_commit_saves_valid_account(self, account_service, account_repo):
        account = await account_repo.create(make_account("klaus"))

        committed = await account_service.commit(
            account.revise(email="klaus@googlemail.com")
        )

        stored = await account_repo.find_by_id(account.id)
        assert stored == committed
        assert stored.email == "klaus@googlemail.com"

    @pytest.mark.asyncio
    async def test_commit_unknown_account(self, account_service):
        with pytest.raises(NotFoundError):
            await account_service.commit(make_account("klaus"))


class TestLinkedProviders:
    """Tests for linked_providers method."""

    @pytest.mark.asyncio
    async def test_no_providers(self, account_service, account_repo):
        account = await account_repo.create(make_account("klaus"))

        assert await account_service.linked_providers(account) == set()

    @pytest.mark.asyncio
    async def test_handle_alone_is_not_a_linkage(self, account_service, account_repo):
        account = await account_repo.create(make_account("klaus", github="klaus"))

        assert await account_service.linked_providers(account) == set()

    @pytest.mark.asyncio
    async def test_recorded_linkage(self, account_service, reconciler):
        account = await reconciler.find_or_create(normalize(TWITTER_AUTH_HASH))
        # Handle cleared, the recorded linkage remains
        account = account.revise(twitter=None)

        assert await account_service.linked_providers(account) == {
            AuthProvider.TWITTER
        }


class TestVouchesFor:
    """Tests for vouches_for method."""

    @pytest.mark.asyncio
    async def test_matching_handle(self, account_service, account_repo):
        account = await account_repo.create(make_account("phoet", github="phoet"))

        assert await account_service.vouches_for(
            account, AuthProvider.GITHUB, "phoet"
        )

    @pytest.mark.asyncio
    async def test_different_handle(self, account_service, account_repo):
        account = await account_repo.create(
            make_account("phoet", github="someoneelse")
        )

        assert not await account_service.vouches_for(
            account, AuthProvider.GITHUB, "phoet"
        )

    @pytest.mark.asyncio
    async def test_empty_nickname_never_vouched(self, account_service, account_repo):
        account = await account_repo.create(make_account("", github=""))

        assert not await account_service.vouches_for(account, AuthProvider.GITHUB, "")

    @pytest.mark.asyncio
    async def test_recorded_linkage(self, account_service, reconciler):
        account = await reconciler.find_or_create(normalize(TWITTER_AUTH_HASH))
        account = account.revise(twitter="someoneelse")

        assert await account_service.vouches_for(
            account, AuthProvider.TWITTER, "phoet"
        )


class TestListForSelection:
    """Tests for list_for_selection method."""

    @pytest.mark.asyncio
    async def test_ordered_by_name(self, account_service, account_repo):
        # Arrange
        for name in ["uschi", "klaus", "mauro"]:
            await account_repo.create(make_account(f"nick_{name}", name=name))

        # Act
        selection = await account_service.list_for_selection()

        # Assert
        assert [label for label, _ in selection] == [
            "klaus (nick_klaus)",
            "mauro (nick_mauro)",
            "uschi (nick_uschi)",
        ]

    @pytest.mark.asyncio
    async def test_pairs_carry_account_ids(self, account_service, account_repo):
        account = await account_repo.create(make_account("nick_klaus", name="klaus"))

        assert await account_service.list_for_selection() == [
            ("klaus (nick_klaus)", account.id)
        ]

    @pytest.mark.asyncio
    async def test_count(self, account_service, account_repo):
        assert await account_service.count() == 0

        await account_repo.create(make_account("klaus"))

        assert await account_service.count() == 1
