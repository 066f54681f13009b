"""Account repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from callbridge.domain.model.account import Account
from callbridge.domain.value import AccountId, EmailAddress


class AccountRepository(ABC):
    """Repository for Account entity.

    Defines the contract for account persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID.

        Args:
            account_id: The account's unique identifier

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: EmailAddress) -> Optional[Account]:
        """Find an account by its (normalized) email.

        Args:
            email: The account's email address

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, account: Account) -> Account:
        """Save an account (create or update).

        Args:
            account: The account to save

        Returns:
            The saved account

        Raises:
            IntegrityError: If another account already uses the email
        """
        pass

    @abstractmethod
    async def debit_credit(self, account_id: AccountId) -> bool:
        """Atomically decrement call credits by 1 if the balance is positive.

        Args:
            account_id: The account's unique identifier

        Returns:
            True if a credit was taken, False if the balance was already 0
            or the account does not exist
        """
        pass

    @abstractmethod
    async def credit(self, account_id: AccountId, amount: int = 1) -> None:
        """Atomically increment call credits.

        Args:
            account_id: The account's unique identifier
            amount: Number of credits to add
        """
        pass
