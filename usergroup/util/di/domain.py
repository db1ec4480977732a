"""Domain layer DI providers."""

from dishka import Scope, provide

from usergroup.config import AccountSettings
from usergroup.domain.repository import AccountLinkageRepository, AccountRepository
from usergroup.domain.service import AccountService, IdentityReconciler
from usergroup.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each sign-in gets fresh service instances within a single transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_account_service(
        self,
        account_repository: AccountRepository,
        account_linkage_repository: AccountLinkageRepository,
    ) -> AccountService:
        """Provide account domain service."""
        return AccountService(
            account_repository=account_repository,
            account_linkage_repository=account_linkage_repository,
        )

    @provide
    def get_identity_reconciler(
        self,
        account_repository: AccountRepository,
        account_linkage_repository: AccountLinkageRepository,
        account_service: AccountService,
        account_settings: AccountSettings,
    ) -> IdentityReconciler:
        """Provide identity reconciliation domain service."""
        return IdentityReconciler(
            account_repository=account_repository,
            account_linkage_repository=account_linkage_repository,
            account_service=account_service,
            create_retries=account_settings.create_retries,
            admin_nicknames=account_settings.admin_nicknames,
        )
