"""Account domain service."""

import logfire

from usergroup.domain.error import NotFoundError, ValidationError
from usergroup.domain.model import Account
from usergroup.domain.repository import AccountLinkageRepository, AccountRepository
from usergroup.domain.value import AccountId, AuthProvider

from .base import Service


class AccountService(Service):
    """Domain service for account lookups and validated commits."""

    def __init__(
        self,
        account_repository: AccountRepository,
        account_linkage_repository: AccountLinkageRepository,
    ) -> None:
        """Initialize account service.

        Args:
            account_repository: Account repository
            account_linkage_repository: Account linkage repository
        """
        self.account_repository = account_repository
        self.account_linkage_repository = account_linkage_repository

    async def get_by_id(self, account_id: AccountId) -> Account:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity

        Raises:
            NotFoundError: If account not found
        """
        with logfire.span("account_service.get_by_id", account_id=str(account_id)):
            account = await self.account_repository.find_by_id(account_id)
            if not account:
                logfire.warn("Account not found", account_id=str(account_id))
                raise NotFoundError("Account", str(account_id))
            return account

    async def get_by_nickname(self, nickname: str) -> Account | None:
        """Get account by nickname, or None."""
        with logfire.span("account_service.get_by_nickname", nickname=nickname):
            return await self.account_repository.find_by_nickname(nickname)

    async def count(self) -> int:
        return await self.account_repository.count()

    async def linked_providers(self, account: Account) -> set[AuthProvider]:
        """Providers with a recorded linkage to an account.

        Args:
            account: Account to inspect

        Returns:
            Set of linked providers
        """
        linkages = await self.account_linkage_repository.find_all_by_account_id(
            account.id
        )
        return {linkage.provider for linkage in linkages}

    async def vouches_for(
        self, account: Account, provider: AuthProvider, nickname: str
    ) -> bool:
        """Whether ``account`` may be claimed by ``nickname`` signing in via ``provider``.

        True when the provider has a recorded linkage, or when the account
        owner has set the provider's handle to exactly that nickname.

        Args:
            account: Account found by nickname
            provider: Provider of the sign-in
            nickname: Nickname of the sign-in

        Returns:
            Whether the sign-in is the same identity
        """
        if nickname and account.handle_for(provider) == nickname:
            return True
        return provider in await self.linked_providers(account)

    async def commit(self, account: Account) -> Account:
        """Persist an existing account after full validation.

        Unlike the save performed on sign-in, this rejects malformed email
        addresses. Nothing is written when validation fails.

        Args:
            account: Account to persist

        Returns:
            Persisted account

        Raises:
            ValidationError: If the account fails full validation
            NotFoundError: If the account does not exist
        """
        with logfire.span(
            "account_service.commit", account_id=str(account.id), nickname=account.nickname
        ):
            try:
                account.committable()
            except ValidationError as e:
                logfire.warn(
                    "Account rejected on commit",
                    account_id=str(account.id),
                    errors=e.errors,
                )
                raise
            saved = await self.account_repository.save(account)
            logfire.info("Account committed", account_id=str(saved.id))
            return saved

    async def list_for_selection(self) -> list[tuple[str, AccountId]]:
        """Accounts as ``("name (nickname)", id)`` pairs ordered by name.

        Returns:
            Selection pairs for account pickers
        """
        with logfire.span("account_service.list_for_selection"):
            accounts = await self.account_repository.find_all_ordered_by_name()
            logfire.info("Accounts listed for selection", count=len(accounts))
            return [(account.selection_label, account.id) for account in accounts]
