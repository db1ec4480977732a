"""PostgreSQL implementation of Account repository."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from usergroup.domain.error import NotFoundError, UniqueConstraintViolation
from usergroup.domain.model import Account
from usergroup.domain.repository import AccountRepository
from usergroup.domain.value import AccountId, AuthProvider
from usergroup.persistence.integrity import violated_constraint
from usergroup.persistence.mappers import account_to_dict, row_to_account
from usergroup.persistence.tables import (
    NICKNAME_CONSTRAINT,
    account_linkages_table,
    accounts_table,
)


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL implementation of AccountRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        stmt = select(accounts_table).where(accounts_table.c.id == account_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def find_by_nickname(self, nickname: str) -> Optional[Account]:
        """Find an account by nickname.

        Plain equality, so the match is case-sensitive.

        Args:
            nickname: Nickname to search for

        Returns:
            Account if found, None otherwise
        """
        stmt = select(accounts_table).where(accounts_table.c.nickname == nickname)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def find_by_provider_linkage(
        self, provider: AuthProvider, provider_uid: str
    ) -> Optional[Account]:
        """Find an account through the account_linkages table.

        Args:
            provider: The authentication provider
            provider_uid: The user's ID on that provider

        Returns:
            Account if found, None otherwise
        """
        stmt = (
            select(accounts_table)
            .select_from(
                accounts_table.join(
                    account_linkages_table,
                    accounts_table.c.id == account_linkages_table.c.account_id,
                )
            )
            .where(account_linkages_table.c.provider == provider.value)
            .where(account_linkages_table.c.provider_uid == provider_uid)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def create(self, account: Account) -> Account:
        """Insert an account inside a SAVEPOINT.

        A nickname collision only rolls back the savepoint, so the caller
        can look up the winning account in the same transaction.

        Args:
            account: Account to insert

        Returns:
            Inserted account

        Raises:
            UniqueConstraintViolation: If the nickname is already taken
        """
        stmt = accounts_table.insert().values(**account_to_dict(account))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            if violated_constraint(e) != NICKNAME_CONSTRAINT:
                raise
            raise UniqueConstraintViolation(NICKNAME_CONSTRAINT, account.nickname) from e
        return account

    async def save(self, account: Account) -> Account:
        """Update an existing account.

        Args:
            account: Account to update

        Returns:
            Updated account

        Raises:
            NotFoundError: If no row has the account's ID
        """
        values = account_to_dict(account)
        values.pop("id")
        stmt = (
            accounts_table.update()
            .where(accounts_table.c.id == account.id)
            .values(**values)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise NotFoundError("Account", str(account.id))
        await self.session.flush()
        return account

    async def count(self) -> int:
        stmt = select(func.count()).select_from(accounts_table)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def find_all_ordered_by_name(self) -> list[Account]:
        stmt = select(accounts_table).order_by(
            accounts_table.c.name, accounts_table.c.nickname
        )
        result = await self.session.execute(stmt)
        return [row_to_account(dict(row)) for row in result.mappings().all()]
