"""In-memory account repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from callbridge.domain.model import Account
from callbridge.domain.repository.account import AccountRepository
from callbridge.domain.value import AccountId, EmailAddress, utc_now


class InMemoryAccountRepository(AccountRepository):
    """In-memory implementation of AccountRepository for testing."""

    def __init__(self) -> None:
        self._accounts: dict[AccountId, Account] = {}

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        return self._accounts.get(account_id)

    async def find_by_email(self, email: EmailAddress) -> Optional[Account]:
        for account in self._accounts.values():
            if account.email == email:
                return account
        return None

    async def save(self, account: Account) -> Account:
        """Save an account (create or update).

        Raises:
            IntegrityError: If another account already uses the email
        """
        existing = await self.find_by_email(account.email)
        if existing and existing.id != account.id:
            raise IntegrityError("Duplicate account email", None, Exception())

        self._accounts[account.id] = account
        return account

    async def debit_credit(self, account_id: AccountId) -> bool:
        account = self._accounts.get(account_id)
        if not account or account.call_credits <= 0:
            return False
        self._accounts[account_id] = account.model_copy(
            update={"call_credits": account.call_credits - 1, "updated_at": utc_now()}
        )
        return True

    async def credit(self, account_id: AccountId, amount: int = 1) -> None:
        account = self._accounts.get(account_id)
        if not account:
            return
        self._accounts[account_id] = account.model_copy(
            update={
                "call_credits": account.call_credits + amount,
                "updated_at": utc_now(),
            }
        )
