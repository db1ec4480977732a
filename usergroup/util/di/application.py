"""Application layer DI providers."""

from dishka import Scope, provide

from usergroup.application.usecase.auth import SignInUseCase
from usergroup.domain.service import IdentityReconciler
from usergroup.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_sign_in_use_case(
        self, identity_reconciler: IdentityReconciler
    ) -> SignInUseCase:
        """Provide sign-in use case."""
        return SignInUseCase(identity_reconciler=identity_reconciler)
