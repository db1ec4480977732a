"""Account linkage entity.

Records which external provider identities have signed in to an account.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from usergroup.domain.model.common import DomainModel
from usergroup.domain.value import AccountId, AccountLinkageId, AuthProvider


class AccountLinkage(DomainModel):
    """External provider identity linked to an account.

    ``(provider, provider_uid)`` is unique. An account may hold several
    linkages for the same provider when the provider renumbers its users.
    """

    id: AccountLinkageId
    account_id: AccountId
    provider: AuthProvider
    provider_uid: str  # Permanent ID on the provider side
    provider_handle: str = ""  # Nickname at the time of the last sign-in
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    last_login_at: Optional[datetime] = None
