"""Mock persistence providers for testing."""

from dishka import Scope, provide

from usergroup.domain.repository import AccountLinkageRepository, AccountRepository
from usergroup.persistence.repository.inmemory import (
    InMemoryAccountLinkageRepository,
    InMemoryAccountRepository,
)
from usergroup.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses REQUEST scope to ensure test isolation - each test gets fresh
    repositories. The account repository shares the linkage repository so
    accounts can be found by linkage.
    """

    __is_mock__ = True

    @provide(scope=Scope.REQUEST)
    def get_inmemory_linkage_repository(self) -> InMemoryAccountLinkageRepository:
        """Provide the shared in-memory linkage store."""
        return InMemoryAccountLinkageRepository()

    @provide(scope=Scope.REQUEST)
    def get_account_linkage_repository(
        self, linkage_repository: InMemoryAccountLinkageRepository
    ) -> AccountLinkageRepository:
        """Provide in-memory account linkage repository."""
        return linkage_repository

    @provide(scope=Scope.REQUEST)
    def get_account_repository(
        self, linkage_repository: InMemoryAccountLinkageRepository
    ) -> AccountRepository:
        """Provide in-memory account repository."""
        return InMemoryAccountRepository(linkage_repository)
