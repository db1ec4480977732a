"""In-memory repository implementations for testing."""

from .account import InMemoryAccountRepository
from .account_linkage import InMemoryAccountLinkageRepository

__all__ = [
    "InMemoryAccountRepository",
    "InMemoryAccountLinkageRepository",
]
