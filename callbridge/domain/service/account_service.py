"""Account domain service.

Owns the credit balance operations. They are invoked by the call
scheduler only and are never exposed directly to API callers.
"""

from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

from callbridge.domain.error import (
    ConflictError,
    NotFoundError,
    QuotaExceededError,
    ValidationError,
)
from callbridge.domain.model import Account
from callbridge.domain.repository import AccountRepository
from callbridge.domain.value import AccountId, AccountRole, EmailAddress

from .base import Clock, Service


class AccountService(Service):
    """Domain service for account lookups and credit accounting."""

    def __init__(
        self, account_repository: AccountRepository, clock: Clock | None = None
    ) -> None:
        """Initialize account service.

        Args:
            account_repository: Account repository
            clock: Optional time source
        """
        super().__init__(clock)
        self.account_repository = account_repository

    async def get_by_id(self, account_id: AccountId) -> Account:
        """Get account by ID.

        Raises:
            NotFoundError: If account not found
        """
        with logfire.span("account_service.get_by_id", account_id=str(account_id)):
            account = await self.account_repository.find_by_id(account_id)
            if not account:
                logfire.warn("Account not found", account_id=str(account_id))
                raise NotFoundError("Account", str(account_id))
            return account

    async def find_by_id(self, account_id: AccountId) -> Account | None:
        return await self.account_repository.find_by_id(account_id)

    async def find_by_email(self, email: EmailAddress) -> Account | None:
        return await self.account_repository.find_by_email(email)

    async def create_responder(
        self,
        email: EmailAddress,
        name: str,
        company: str | None = None,
        job_title: str | None = None,
        account_id: AccountId | None = None,
    ) -> Account:
        """Create a responder account (invitation acceptance path).

        Args:
            email: Email the invitation was sent to
            name: Display name chosen at registration
            company: Optional company
            job_title: Optional job title
            account_id: Pre-allocated ID, if the caller already linked it

        Returns:
            Created account

        Raises:
            ValidationError: If the registration data is invalid
            ConflictError: If an account with that email already exists
        """
        with logfire.span("account_service.create_responder", email=email.root):
            now = self.now()
            try:
                account = Account(
                    id=account_id or AccountId(uuid4()),
                    role=AccountRole.RESPONDER,
                    email=email,
                    name=name,
                    company=company,
                    job_title=job_title,
                    created_at=now,
                    updated_at=now,
                )
            except PydanticValidationError as e:
                raise ValidationError(str(e)) from e
            try:
                saved = await self.account_repository.save(account)
            except IntegrityError:
                logfire.warn("Account email already registered", email=email.root)
                raise ConflictError(f"An account already exists for {email}")
            logfire.info(
                "Responder account created", account_id=str(saved.id), email=email.root
            )
            return saved

    async def debit(self, account_id: AccountId) -> None:
        """Take one call credit from the account.

        The check and the decrement are a single conditional update, so two
        concurrent debits can never drive the balance below zero.

        Raises:
            QuotaExceededError: If the balance is already 0
        """
        with logfire.span("account_service.debit", account_id=str(account_id)):
            applied = await self.account_repository.debit_credit(account_id)
            if not applied:
                logfire.warn("Credit debit refused", account_id=str(account_id))
                raise QuotaExceededError("Insufficient call credits")
            logfire.info("Call credit debited", account_id=str(account_id))

    async def credit(self, account_id: AccountId) -> None:
        """Give one call credit back to the account (refund path)."""
        with logfire.span("account_service.credit", account_id=str(account_id)):
            await self.account_repository.credit(account_id, 1)
            logfire.info("Call credit refunded", account_id=str(account_id))
