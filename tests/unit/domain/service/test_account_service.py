"""Unit tests for AccountService credit accounting."""

import asyncio
from uuid import uuid4

import pytest

from callbridge.domain.error import ConflictError, NotFoundError, QuotaExceededError
from callbridge.domain.repository import AccountRepository
from callbridge.domain.service import AccountService
from callbridge.domain.value import AccountId, AccountRole, EmailAddress
from tests.conftest import make_account
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCredits:
    """Tests for debit and credit."""

    @pytest.mark.asyncio
    async def test_debit_takes_one_credit(self, unit_env):
        account_service = await unit_env.get(AccountService)
        account_repo = await unit_env.get(AccountRepository)
        account = await account_repo.save(
            make_account(AccountRole.REQUESTER, call_credits=2)
        )

        await account_service.debit(account.id)

        assert (await account_repo.find_by_id(account.id)).call_credits == 1

    @pytest.mark.asyncio
    async def test_debit_at_zero_is_refused(self, unit_env):
        account_service = await unit_env.get(AccountService)
        account_repo = await unit_env.get(AccountRepository)
        account = await account_repo.save(
            make_account(AccountRole.REQUESTER, call_credits=0)
        )

        with pytest.raises(QuotaExceededError):
            await account_service.debit(account.id)

        assert (await account_repo.find_by_id(account.id)).call_credits == 0

    @pytest.mark.asyncio
    async def test_concurrent_debits_never_go_negative(self, unit_env):
        """Two debits racing for the last credit: exactly one wins."""
        account_service = await unit_env.get(AccountService)
        account_repo = await unit_env.get(AccountRepository)
        account = await account_repo.save(
            make_account(AccountRole.REQUESTER, call_credits=1)
        )

        results = await asyncio.gather(
            account_service.debit(account.id),
            account_service.debit(account.id),
            return_exceptions=True,
        )

        assert sum(isinstance(r, QuotaExceededError) for r in results) == 1
        assert (await account_repo.find_by_id(account.id)).call_credits == 0

    @pytest.mark.asyncio
    async def test_credit_adds_one(self, unit_env):
        account_service = await unit_env.get(AccountService)
        account_repo = await unit_env.get(AccountRepository)
        account = await account_repo.save(
            make_account(AccountRole.REQUESTER, call_credits=0)
        )

        await account_service.credit(account.id)

        assert (await account_repo.find_by_id(account.id)).call_credits == 1


class TestAccounts:
    """Tests for lookups and responder creation."""

    @pytest.mark.asyncio
    async def test_get_by_id_unknown_raises(self, unit_env):
        account_service = await unit_env.get(AccountService)

        with pytest.raises(NotFoundError):
            await account_service.get_by_id(AccountId(uuid4()))

    @pytest.mark.asyncio
    async def test_create_responder(self, unit_env):
        account_service = await unit_env.get(AccountService)

        account = await account_service.create_responder(
            EmailAddress("r@example.com"), "Responder", job_title="CTO"
        )

        assert account.role == AccountRole.RESPONDER
        assert account.call_credits == 0
        assert account.job_title == "CTO"

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, unit_env):
        account_service = await unit_env.get(AccountService)
        await account_service.create_responder(EmailAddress("r@example.com"), "One")

        with pytest.raises(ConflictError):
            await account_service.create_responder(
                EmailAddress("R@example.com"), "Two"
            )
