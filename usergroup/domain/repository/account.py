"""Account repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from usergroup.domain.model.account import Account
from usergroup.domain.value import AccountId, AuthProvider


class AccountRepository(ABC):
    """Repository for the Account aggregate.

    Implementations must back ``create`` with a unique index on nickname;
    the application-level nickname lookup is advisory only.
    """

    @abstractmethod
    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID.

        Args:
            account_id: The account's unique identifier

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_nickname(self, nickname: str) -> Optional[Account]:
        """Find an account by exact, case-sensitive nickname.

        Args:
            nickname: The nickname to look up

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_provider_linkage(
        self, provider: AuthProvider, provider_uid: str
    ) -> Optional[Account]:
        """Find the account linked to an external provider identity.

        Args:
            provider: The authentication provider
            provider_uid: The user's ID on that provider

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """Insert a new account.

        Args:
            account: The account to insert

        Returns:
            The inserted account

        Raises:
            UniqueConstraintViolation: If the nickname is already taken
        """
        pass

    @abstractmethod
    async def save(self, account: Account) -> Account:
        """Update an existing account.

        Args:
            account: The account to store

        Returns:
            The stored account

        Raises:
            NotFoundError: If the account does not exist
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Number of stored accounts."""
        pass

    @abstractmethod
    async def find_all_ordered_by_name(self) -> list[Account]:
        """All accounts ordered by name, then nickname."""
        pass
