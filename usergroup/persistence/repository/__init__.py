"""PostgreSQL repository implementations."""

from usergroup.persistence.repository.account import PostgresAccountRepository
from usergroup.persistence.repository.account_linkage import (
    PostgresAccountLinkageRepository,
)

__all__ = [
    "PostgresAccountRepository",
    "PostgresAccountLinkageRepository",
]
