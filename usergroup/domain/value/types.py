"""Domain value objects for user-group accounts.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules shared by the account entities.
"""

import re
from enum import Enum

from pydantic import field_validator

from usergroup.domain.value.common import ValueObject

HANDLE_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


class AuthProvider(str, Enum):
    """Supported authentication providers.

    The value doubles as the name of the handle field on ``Account``.
    """

    GITHUB = "github"
    TWITTER = "twitter"


def check_handle(value: str | None) -> str | None:
    """Validate a provider handle.

    Handles are bare usernames. Empty and missing handles are always
    accepted; anything that looks like a URL is rejected.

    Args:
        value: Handle to check

    Returns:
        The handle unchanged

    Raises:
        ValueError: If the handle is URL-shaped or contains other characters
    """
    if not value:
        return value
    if "://" in value or value.startswith("www."):
        raise ValueError("Handle must be a username, not a URL")
    if not HANDLE_PATTERN.match(value):
        raise ValueError(
            "Handle may only contain letters, digits, hyphens and underscores"
        )
    return value


class CanonicalProfile(ValueObject):
    """Provider-agnostic profile extracted from an authentication payload.

    Every attribute except ``provider`` is optional on the wire; missing
    strings come through as ``None`` and an absent nickname as ``""``.
    """

    provider: AuthProvider
    uid: str
    nickname: str = ""
    name: str = ""
    email: str | None = None
    image: str | None = None
    description: str | None = None
    url: str | None = None
    location: str | None = None

    @field_validator("uid", mode="before")
    @classmethod
    def coerce_uid(cls, v: object) -> str:
        """Accept numeric provider IDs (GitHub sends integers)."""
        return "" if v is None else str(v)

    @property
    def has_email(self) -> bool:
        return bool(self.email)
