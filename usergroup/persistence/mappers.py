"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict
from uuid import UUID

from usergroup.domain.model import Account, AccountLinkage
from usergroup.domain.value import AccountId, AccountLinkageId, AuthProvider


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_account(row: Dict[str, Any]) -> Account:
    """Convert database row to Account domain model.

    Rows are trusted: handles were validated when they were written.

    Args:
        row: Database row as dict

    Returns:
        Account domain model
    """
    return Account.model_construct(
        id=AccountId(_uuid(row["id"])),
        nickname=row["nickname"],
        name=row.get("name") or "",
        email=row.get("email"),
        github=row.get("github"),
        twitter=row.get("twitter"),
        image=row.get("image"),
        description=row.get("description"),
        url=row.get("url"),
        location=row.get("location"),
        admin=row.get("admin", False),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def account_to_dict(account: Account) -> Dict[str, Any]:
    """Convert Account domain model to database dict.

    Args:
        account: Account domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return account.model_dump()


def row_to_account_linkage(row: Dict[str, Any]) -> AccountLinkage:
    """Convert database row to AccountLinkage domain model.

    Args:
        row: Database row as dict

    Returns:
        AccountLinkage domain model
    """
    return AccountLinkage(
        id=AccountLinkageId(_uuid(row["id"])),
        account_id=AccountId(_uuid(row["account_id"])),
        provider=AuthProvider(row["provider"]),
        provider_uid=row["provider_uid"],
        provider_handle=row.get("provider_handle") or "",
        created_at=row["created_at"],
        last_login_at=row.get("last_login_at"),
    )


def account_linkage_to_dict(linkage: AccountLinkage) -> Dict[str, Any]:
    """Convert AccountLinkage domain model to database dict.

    Args:
        linkage: AccountLinkage domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {**linkage.model_dump(), "provider": linkage.provider.value}
