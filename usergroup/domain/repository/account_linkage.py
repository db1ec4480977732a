"""Account linkage repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from usergroup.domain.model.account_linkage import AccountLinkage
from usergroup.domain.value import AccountId, AuthProvider


class AccountLinkageRepository(ABC):
    """Repository for AccountLinkage entities.

    Manages the relationship between accounts and the external provider
    identities that have signed in to them.
    """

    @abstractmethod
    async def find_by_provider(
        self, provider: AuthProvider, provider_uid: str
    ) -> Optional[AccountLinkage]:
        """Find a linkage by provider and provider user ID.

        Args:
            provider: The authentication provider
            provider_uid: The user's ID on that provider

        Returns:
            The linkage if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all_by_account_id(
        self, account_id: AccountId
    ) -> list[AccountLinkage]:
        """Get all linkages of an account, oldest first.

        Args:
            account_id: The account's unique identifier

        Returns:
            List of linkages (may be empty)
        """
        pass

    @abstractmethod
    async def create(self, linkage: AccountLinkage) -> AccountLinkage:
        """Insert a new linkage.

        Args:
            linkage: The linkage to insert

        Returns:
            The inserted linkage

        Raises:
            UniqueConstraintViolation: If (provider, provider_uid) is taken
        """
        pass

    @abstractmethod
    async def save(self, linkage: AccountLinkage) -> AccountLinkage:
        """Update an existing linkage.

        Args:
            linkage: The linkage to store

        Returns:
            The stored linkage
        """
        pass
