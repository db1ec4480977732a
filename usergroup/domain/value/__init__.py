"""Domain value objects for user-group accounts."""

from usergroup.domain.value.identifiers import AccountId, AccountLinkageId
from usergroup.domain.value.types import (
    HANDLE_PATTERN,
    AuthProvider,
    CanonicalProfile,
    check_handle,
)

__all__ = [
    # Identifiers
    "AccountId",
    "AccountLinkageId",
    # Types
    "AuthProvider",
    "CanonicalProfile",
    "HANDLE_PATTERN",
    "check_handle",
]
