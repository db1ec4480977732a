"""In-memory account linkage repository for testing."""

from typing import Optional

from usergroup.domain.error import UniqueConstraintViolation
from usergroup.domain.model import AccountLinkage
from usergroup.domain.repository import AccountLinkageRepository
from usergroup.domain.value import AccountId, AuthProvider
from usergroup.persistence.tables import PROVIDER_UID_CONSTRAINT


class InMemoryAccountLinkageRepository(AccountLinkageRepository):
    """In-memory implementation of AccountLinkageRepository for testing."""

    def __init__(self) -> None:
        self._linkages: list[AccountLinkage] = []

    async def find_by_provider(
        self, provider: AuthProvider, provider_uid: str
    ) -> Optional[AccountLinkage]:
        """Find linkage by provider and provider user ID."""
        for linkage in self._linkages:
            if linkage.provider == provider and linkage.provider_uid == provider_uid:
                return linkage
        return None

    async def find_all_by_account_id(
        self, account_id: AccountId
    ) -> list[AccountLinkage]:
        """Find all linkages of an account."""
        matches = [
            linkage for linkage in self._linkages if linkage.account_id == account_id
        ]
        matches.sort(key=lambda linkage: linkage.created_at)
        return matches

    async def create(self, linkage: AccountLinkage) -> AccountLinkage:
        """Insert linkage.

        Raises:
            UniqueConstraintViolation: If (provider, provider_uid) is taken
        """
        if await self.find_by_provider(linkage.provider, linkage.provider_uid):
            raise UniqueConstraintViolation(
                PROVIDER_UID_CONSTRAINT,
                f"{linkage.provider.value}:{linkage.provider_uid}",
            )
        self._linkages.append(linkage)
        return linkage

    async def save(self, linkage: AccountLinkage) -> AccountLinkage:
        """Replace the stored linkage with the same ID."""
        for i, existing in enumerate(self._linkages):
            if existing.id == linkage.id:
                self._linkages[i] = linkage
                return linkage

        self._linkages.append(linkage)
        return linkage
