"""AccountLinkage repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from usergroup.domain.error import UniqueConstraintViolation
from usergroup.domain.model import AccountLinkage
from usergroup.domain.repository import AccountLinkageRepository
from usergroup.domain.value import AccountId, AuthProvider
from usergroup.persistence.integrity import violated_constraint
from usergroup.persistence.mappers import (
    account_linkage_to_dict,
    row_to_account_linkage,
)
from usergroup.persistence.tables import (
    PROVIDER_UID_CONSTRAINT,
    account_linkages_table,
)


class PostgresAccountLinkageRepository(AccountLinkageRepository):
    """PostgreSQL implementation of AccountLinkageRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_provider(
        self, provider: AuthProvider, provider_uid: str
    ) -> Optional[AccountLinkage]:
        stmt = select(account_linkages_table).where(
            account_linkages_table.c.provider == provider.value,
            account_linkages_table.c.provider_uid == provider_uid,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_account_linkage(dict(row))

    async def find_all_by_account_id(
        self, account_id: AccountId
    ) -> list[AccountLinkage]:
        stmt = (
            select(account_linkages_table)
            .where(account_linkages_table.c.account_id == account_id)
            .order_by(account_linkages_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_account_linkage(dict(row)) for row in result.mappings().all()]

    async def create(self, linkage: AccountLinkage) -> AccountLinkage:
        """Insert a linkage inside a SAVEPOINT.

        Args:
            linkage: Linkage to insert

        Returns:
            Inserted linkage

        Raises:
            UniqueConstraintViolation: If (provider, provider_uid) is taken
        """
        stmt = account_linkages_table.insert().values(
            **account_linkage_to_dict(linkage)
        )
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            if violated_constraint(e) != PROVIDER_UID_CONSTRAINT:
                raise
            raise UniqueConstraintViolation(
                PROVIDER_UID_CONSTRAINT,
                f"{linkage.provider.value}:{linkage.provider_uid}",
            ) from e
        return linkage

    async def save(self, linkage: AccountLinkage) -> AccountLinkage:
        values = account_linkage_to_dict(linkage)
        values.pop("id")
        stmt = (
            account_linkages_table.update()
            .where(account_linkages_table.c.id == linkage.id)
            .values(**values)
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return linkage
