"""Account aggregate root.

Accounts are created by signing in through GitHub or Twitter and are
identified by a nickname that is unique across all providers.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, field_validator, validate_email
from pydantic_core import PydanticCustomError

from usergroup.domain.error import ValidationError
from usergroup.domain.model.common import DomainModel
from usergroup.domain.value import AccountId, AuthProvider, check_handle


class Account(DomainModel):
    """Account aggregate root - provider-agnostic.

    Building an ``Account`` (or revising one) only checks the provider
    handles. Email format is checked by ``committable()``, which the
    validated commit runs before persisting.
    """

    id: AccountId
    nickname: str
    name: str = ""
    email: Optional[str] = None  # Not validated until an explicit commit
    github: Optional[str] = None
    twitter: Optional[str] = None
    image: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None  # Homepage
    location: Optional[str] = None
    admin: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("github", "twitter")
    @classmethod
    def validate_handle(cls, v: Optional[str]) -> Optional[str]:
        """Reject URL-shaped handles."""
        return check_handle(v)

    @property
    def is_admin(self) -> bool:
        return self.admin

    @property
    def selection_label(self) -> str:
        """Label used in account pickers, e.g. ``klaus (nick_klaus)``."""
        return f"{self.name} ({self.nickname})"

    def handle_for(self, provider: AuthProvider) -> Optional[str]:
        """Return the handle stored for ``provider``."""
        return getattr(self, provider.value)

    def has_handle_for(self, provider: AuthProvider) -> bool:
        return bool(self.handle_for(provider))

    def committable(self) -> "Account":
        """Run the full validation required before a validated commit.

        Returns:
            The account itself when it passes

        Raises:
            ValidationError: If the email is set but malformed
        """
        errors: dict[str, list[str]] = {}
        if self.email:
            try:
                validate_email(self.email)
            except PydanticCustomError:
                errors.setdefault("email", []).append("is not a valid email address")
        if errors:
            raise ValidationError(errors)
        return self
