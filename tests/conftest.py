"""Test configuration and fixtures."""

from uuid import uuid4

import pytest

from usergroup.domain.model import Account
from usergroup.domain.service import AccountService, IdentityReconciler
from usergroup.domain.value import AccountId
from usergroup.persistence.repository.inmemory import (
    InMemoryAccountLinkageRepository,
    InMemoryAccountRepository,
)


def make_account(nickname: str = "klaus", **fields) -> Account:
    """Helper to build an account the way the reconciler would.

    Args:
        nickname: Account nickname
        **fields: Any other Account field

    Returns:
        Unsaved Account
    """
    fields.setdefault("name", nickname)
    return Account(id=AccountId(uuid4()), nickname=nickname, **fields)


@pytest.fixture
def linkage_repo() -> InMemoryAccountLinkageRepository:
    return InMemoryAccountLinkageRepository()


@pytest.fixture
def account_repo(linkage_repo) -> InMemoryAccountRepository:
    return InMemoryAccountRepository(linkage_repo)


@pytest.fixture
def account_service(account_repo, linkage_repo) -> AccountService:
    return AccountService(account_repo, linkage_repo)


@pytest.fixture
def reconciler(account_repo, linkage_repo, account_service) -> IdentityReconciler:
    return IdentityReconciler(account_repo, linkage_repo, account_service)
