"""PostgreSQL implementation of Account repository."""

from typing import Optional

from sqlalchemy import and_, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from callbridge.domain.model import Account
from callbridge.domain.repository import AccountRepository
from callbridge.domain.value import AccountId, EmailAddress
from callbridge.persistence.mappers import account_to_dict, row_to_account
from callbridge.persistence.tables import accounts_table


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

    async def find_by_email(self, email: EmailAddress) -> Optional[Account]:
        stmt = select(accounts_table).where(accounts_table.c.email == email.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def save(self, account: Account) -> Account:
        """Save an account (create or update).

        Runs inside a savepoint so a unique violation does not poison the
        surrounding request transaction.

        Raises:
            IntegrityError: If another account already uses the email
        """
        account_dict = account_to_dict(account)
        existing = await self.find_by_id(account.id)

        async with self.session.begin_nested():
            if existing:
                stmt = (
                    update(accounts_table)
                    .where(accounts_table.c.id == account.id)
                    .values(**account_dict)
                )
            else:
                stmt = insert(accounts_table).values(**account_dict)
            await self.session.execute(stmt)

        return account

    async def debit_credit(self, account_id: AccountId) -> bool:
        """Decrement call credits where the balance is positive.

        Single conditional UPDATE; the row count tells whether it applied.
        """
        stmt = (
            update(accounts_table)
            .where(
                and_(
                    accounts_table.c.id == account_id,
                    accounts_table.c.call_credits > 0,
                )
            )
            .values(
                call_credits=accounts_table.c.call_credits - 1,
                updated_at=func.now(),
            )
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def credit(self, account_id: AccountId, amount: int = 1) -> None:
        stmt = (
            update(accounts_table)
            .where(accounts_table.c.id == account_id)
            .values(
                call_credits=accounts_table.c.call_credits + amount,
                updated_at=func.now(),
            )
        )
        await self.session.execute(stmt)
