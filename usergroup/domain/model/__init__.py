"""Domain model entities for user-group accounts."""

from usergroup.domain.model.account import Account
from usergroup.domain.model.account_linkage import AccountLinkage

__all__ = [
    "Account",
    "AccountLinkage",
]
