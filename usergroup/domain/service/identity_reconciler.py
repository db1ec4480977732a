"""Identity reconciliation domain service.

Turns a canonical profile from any provider into exactly one local
account: found through a provider linkage, found through its nickname,
or created. Nickname collisions between unlinked providers are rejected.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

import logfire

from usergroup.domain.error import DuplicateNickname, UniqueConstraintViolation
from usergroup.domain.model import Account, AccountLinkage
from usergroup.domain.repository import AccountLinkageRepository, AccountRepository
from usergroup.domain.value import (
    AccountId,
    AccountLinkageId,
    AuthProvider,
    CanonicalProfile,
)

from .account_service import AccountService
from .base import Service


@dataclass
class Reconciliation:
    """Outcome of reconciling one sign-in."""

    account: Account
    created: bool


class IdentityReconciler(Service):
    """Domain service that finds, creates or updates accounts on sign-in."""

    def __init__(
        self,
        account_repository: AccountRepository,
        account_linkage_repository: AccountLinkageRepository,
        account_service: AccountService,
        create_retries: int = 1,
        admin_nicknames: Iterable[str] = (),
    ) -> None:
        """Initialize identity reconciler.

        Args:
            account_repository: Account repository
            account_linkage_repository: Account linkage repository
            account_service: Account domain service
            create_retries: How often a lost creation race is re-evaluated
            admin_nicknames: Nicknames that get the admin flag on creation
        """
        self.account_repository = account_repository
        self.account_linkage_repository = account_linkage_repository
        self.account_service = account_service
        self.create_retries = create_retries
        self.admin_nicknames = frozenset(admin_nicknames)

    async def find_or_create(
        self, profile: CanonicalProfile, provider: AuthProvider | None = None
    ) -> Account:
        """Resolve a canonical profile to an account.

        See ``reconcile()``; this returns only the account.
        """
        reconciliation = await self.reconcile(profile, provider)
        return reconciliation.account

    async def reconcile(
        self, profile: CanonicalProfile, provider: AuthProvider | None = None
    ) -> Reconciliation:
        """Resolve a canonical profile to an account.

        Steps:
        1. Account linked to (provider, uid) -> update it
        2. Account with the same nickname -> update it if linked to the
           provider, otherwise reject
        3. No account -> create one and link it

        A creation that loses a race on the nickname index goes back to
        step 2, at most ``create_retries`` times.

        Args:
            profile: Canonical profile from the normalizer
            provider: Provider the profile came from (defaults to profile.provider)

        Returns:
            The created or updated account and whether it was created

        Raises:
            DuplicateNickname: If the nickname belongs to an account that is
                not linked to this provider
            pydantic.ValidationError: If the nickname is not a valid handle
        """
        provider = provider or profile.provider

        with logfire.span(
            "identity_reconciler.reconcile",
            provider=provider.value,
            provider_uid=profile.uid,
            nickname=profile.nickname,
        ):
            if profile.uid:
                linked = await self.account_repository.find_by_provider_linkage(
                    provider, profile.uid
                )
                if linked:
                    logfire.info(
                        "Account found by linkage",
                        account_id=str(linked.id),
                        provider=provider.value,
                    )
                    account = await self.update_from_auth(linked, profile, provider)
                    return Reconciliation(account=account, created=False)

            attempt = 0
            while True:
                existing = await self.account_repository.find_by_nickname(
                    profile.nickname
                )
                if existing:
                    account = await self._claim(existing, profile, provider)
                    return Reconciliation(account=account, created=False)

                try:
                    account = await self._create(profile, provider)
                except UniqueConstraintViolation as e:
                    if attempt >= self.create_retries:
                        logfire.error(
                            "Account creation retries exhausted",
                            nickname=profile.nickname,
                            provider=provider.value,
                            constraint=e.constraint,
                        )
                        raise DuplicateNickname(
                            profile.nickname, provider.value
                        ) from e
                    attempt += 1
                    logfire.warn(
                        "Lost account creation race, re-evaluating",
                        nickname=profile.nickname,
                        provider=provider.value,
                        attempt=attempt,
                    )
                    continue

                await self._link(account, profile, provider)
                return Reconciliation(account=account, created=True)

    async def update_from_auth(
        self,
        account: Account,
        profile: CanonicalProfile,
        provider: AuthProvider | None = None,
    ) -> Account:
        """Overwrite an account's profile fields from a canonical profile.

        Name, provider handle, image, description, homepage and location are
        replaced. Email is only replaced when the profile carries one, so a
        provider without email access never erases an address. Calling this
        twice with the same profile leaves the account unchanged.

        Args:
            account: Account to update
            profile: Canonical profile from the normalizer
            provider: Provider the profile came from (defaults to profile.provider)

        Returns:
            The updated account

        Raises:
            pydantic.ValidationError: If the nickname is not a valid handle
        """
        provider = provider or profile.provider

        with logfire.span(
            "identity_reconciler.update_from_auth",
            account_id=str(account.id),
            provider=provider.value,
        ):
            changes = {
                "name": profile.name,
                provider.value: profile.nickname,
                "image": profile.image,
                "description": profile.description,
                "url": profile.url,
                "location": profile.location,
            }
            if profile.has_email:
                changes["email"] = profile.email

            changed = {
                field: value
                for field, value in changes.items()
                if getattr(account, field) != value
            }
            if changed:
                account = account.revise(
                    **changed, updated_at=datetime.now(timezone.utc)
                )
                account = await self.account_repository.save(account)
                logfire.info(
                    "Account updated from auth",
                    account_id=str(account.id),
                    provider=provider.value,
                    fields=sorted(changed),
                )
            else:
                logfire.info(
                    "Account unchanged by auth",
                    account_id=str(account.id),
                    provider=provider.value,
                )

            await self._link(account, profile, provider)
            return account

    async def _claim(
        self, existing: Account, profile: CanonicalProfile, provider: AuthProvider
    ) -> Account:
        """Update an account found by nickname, or reject the collision."""
        # An empty nickname never proves identity, only a linkage can.
        if profile.nickname:
            if await self.account_service.vouches_for(
                existing, provider, profile.nickname
            ):
                logfire.info(
                    "Account found by nickname",
                    account_id=str(existing.id),
                    provider=provider.value,
                )
                return await self.update_from_auth(existing, profile, provider)

        logfire.warn(
            "Duplicate nickname",
            nickname=profile.nickname,
            provider=provider.value,
            account_id=str(existing.id),
        )
        raise DuplicateNickname(profile.nickname, provider.value, str(existing.id))

    async def _create(self, profile: CanonicalProfile, provider: AuthProvider) -> Account:
        now = datetime.now(timezone.utc)
        account = Account(
            id=AccountId(uuid4()),
            nickname=profile.nickname,
            name=profile.name,
            email=profile.email,
            image=profile.image,
            description=profile.description,
            url=profile.url,
            location=profile.location,
            admin=profile.nickname in self.admin_nicknames,
            created_at=now,
            updated_at=now,
            **{provider.value: profile.nickname},
        )
        created = await self.account_repository.create(account)
        logfire.info(
            "Account created",
            account_id=str(created.id),
            nickname=created.nickname,
            provider=provider.value,
            admin=created.admin,
        )
        return created

    async def _link(
        self, account: Account, profile: CanonicalProfile, provider: AuthProvider
    ) -> None:
        """Record or refresh the (provider, uid) linkage of an account."""
        if not profile.uid:
            return

        now = datetime.now(timezone.utc)
        linkage = await self.account_linkage_repository.find_by_provider(
            provider, profile.uid
        )

        if linkage is None:
            linkage = AccountLinkage(
                id=AccountLinkageId(uuid4()),
                account_id=account.id,
                provider=provider,
                provider_uid=profile.uid,
                provider_handle=profile.nickname,
                created_at=now,
                last_login_at=now,
            )
            try:
                await self.account_linkage_repository.create(linkage)
            except UniqueConstraintViolation:
                # Same identity signing in twice at once
                linkage = await self.account_linkage_repository.find_by_provider(
                    provider, profile.uid
                )
                if linkage is None or linkage.account_id != account.id:
                    raise
            else:
                logfire.info(
                    "Linkage recorded",
                    account_id=str(account.id),
                    provider=provider.value,
                    provider_uid=profile.uid,
                )
                return

        if linkage.account_id != account.id:
            logfire.warn(
                "Provider identity already linked to another account",
                account_id=str(account.id),
                linked_account_id=str(linkage.account_id),
                provider=provider.value,
                provider_uid=profile.uid,
            )
            return

        await self.account_linkage_repository.save(
            linkage.revise(provider_handle=profile.nickname, last_login_at=now)
        )
