"""Repository interfaces for the account domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from usergroup.domain.repository.account import AccountRepository
from usergroup.domain.repository.account_linkage import AccountLinkageRepository

__all__ = [
    "AccountRepository",
    "AccountLinkageRepository",
]
