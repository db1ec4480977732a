"""In-memory account repository for testing."""

from typing import Optional

from usergroup.domain.error import NotFoundError, UniqueConstraintViolation
from usergroup.domain.model import Account
from usergroup.domain.repository import AccountRepository
from usergroup.domain.value import AccountId, AuthProvider
from usergroup.persistence.tables import NICKNAME_CONSTRAINT

from .account_linkage import InMemoryAccountLinkageRepository


class InMemoryAccountRepository(AccountRepository):
    """In-memory implementation of AccountRepository for testing.

    ``find_by_provider_linkage`` joins against the linkage repository it
    was given; without one no account is ever found by linkage.
    """

    def __init__(
        self, linkage_repository: InMemoryAccountLinkageRepository | None = None
    ) -> None:
        self._accounts: dict[AccountId, Account] = {}
        self._linkage_repository = linkage_repository

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID."""
        return self._accounts.get(account_id)

    async def find_by_nickname(self, nickname: str) -> Optional[Account]:
        """Find an account by nickname (case-sensitive)."""
        return self._find_by_nickname(nickname)

    async def find_by_provider_linkage(
        self, provider: AuthProvider, provider_uid: str
    ) -> Optional[Account]:
        """Find an account through its recorded linkage."""
        if self._linkage_repository is None:
            return None
        linkage = await self._linkage_repository.find_by_provider(
            provider, provider_uid
        )
        return self._accounts.get(linkage.account_id) if linkage else None

    async def create(self, account: Account) -> Account:
        """Insert an account.

        The uniqueness check and the insert happen without awaiting in
        between, so concurrent tasks cannot both claim a nickname.

        Raises:
            UniqueConstraintViolation: If the nickname is already taken
        """
        if self._find_by_nickname(account.nickname):
            raise UniqueConstraintViolation(NICKNAME_CONSTRAINT, account.nickname)
        self._accounts[account.id] = account
        return account

    async def save(self, account: Account) -> Account:
        """Update an existing account.

        Raises:
            NotFoundError: If the account was never created
        """
        if account.id not in self._accounts:
            raise NotFoundError("Account", str(account.id))
        self._accounts[account.id] = account
        return account

    async def count(self) -> int:
        return len(self._accounts)

    async def find_all_ordered_by_name(self) -> list[Account]:
        return sorted(self._accounts.values(), key=lambda a: (a.name, a.nickname))

    def _find_by_nickname(self, nickname: str) -> Optional[Account]:
        for account in self._accounts.values():
            if account.nickname == nickname:
                return account
        return None
