"""Sign-in use case."""

from typing import Any

import logfire
from pydantic import BaseModel

from usergroup.adapter.omniauth import normalize
from usergroup.application.usecase.base import BaseUseCase
from usergroup.domain.error import DuplicateNickname
from usergroup.domain.service import IdentityReconciler
from usergroup.domain.value import AuthProvider


class SignInRequest(BaseModel):
    """Sign-in request carrying the provider's authentication hash.

    The hash is what the OAuth layer hands over after a successful
    callback; ``provider`` overrides the hash's own ``provider`` field.
    """

    payload: dict[str, Any]
    provider: AuthProvider | None = None


class SignInResponse(BaseModel):
    """Sign-in response."""

    account_id: str
    nickname: str
    is_new_account: bool
    is_admin: bool


class SignInUseCase(BaseUseCase):
    """Use case for signing in through GitHub or Twitter."""

    def __init__(self, identity_reconciler: IdentityReconciler) -> None:
        """Initialize sign-in use case.

        Args:
            identity_reconciler: Identity reconciliation domain service
        """
        self.identity_reconciler = identity_reconciler

    async def execute(self, request: SignInRequest) -> SignInResponse:
        """Execute the sign-in flow.

        Steps:
        1. Normalize the authentication hash into a canonical profile
        2. Reconcile the profile into an account (create or update)

        Args:
            request: Sign-in request with the authentication hash

        Returns:
            Sign-in response describing the resolved account

        Raises:
            DuplicateNickname: If the nickname is claimed through another
                provider; the caller must offer a manual merge
            UnsupportedProviderError: If the hash names an unknown provider
        """
        profile = normalize(request.payload, request.provider)

        with logfire.span(
            "sign_in",
            provider=profile.provider.value,
            provider_uid=profile.uid,
            nickname=profile.nickname,
        ):
            try:
                reconciliation = await self.identity_reconciler.reconcile(profile)
            except DuplicateNickname as e:
                logfire.warn(
                    "Sign-in rejected - nickname claimed by another provider",
                    nickname=e.nickname,
                    provider=e.provider,
                    account_id=e.account_id,
                )
                raise

            account = reconciliation.account
            logfire.info(
                "Signed in",
                account_id=str(account.id),
                provider=profile.provider.value,
                is_new_account=reconciliation.created,
            )

            return SignInResponse(
                account_id=str(account.id),
                nickname=account.nickname,
                is_new_account=reconciliation.created,
                is_admin=account.is_admin,
            )
