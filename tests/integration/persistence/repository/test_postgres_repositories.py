"""Integration tests for the PostgreSQL repositories.

Need a migrated database at DATABASE__URL (``python scripts/run_migrations.py``).
"""

import os
from datetime import timedelta
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from callbridge.domain.repository import (
    AccountRepository,
    CallRepository,
    InvitationRepository,
)
from callbridge.domain.value import (
    AccountRole,
    CallOutcome,
    CallStatus,
    EmailAddress,
    InvitationStatus,
    utc_now,
)
from tests.conftest import make_account, make_call, make_invitation
from tests.harness import create_env_fixture

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        "DATABASE__URL" not in os.environ, reason="DATABASE__URL not set"
    ),
]

# Integration test fixture - real persistence
integration_env = create_env_fixture(unmock={"persistence"})


class TestAccountRepositoryIntegration:
    @pytest.mark.asyncio
    async def test_debit_is_conditional(self, integration_env):
        account_repo = await integration_env.get(AccountRepository)
        account = await account_repo.save(make_account(call_credits=1))

        assert await account_repo.debit_credit(account.id) is True
        assert await account_repo.debit_credit(account.id) is False
        assert (await account_repo.find_by_id(account.id)).call_credits == 0

    @pytest.mark.asyncio
    async def test_duplicate_email_raises_integrity_error(self, integration_env):
        account_repo = await integration_env.get(AccountRepository)
        first = await account_repo.save(make_account())

        with pytest.raises(IntegrityError):
            await account_repo.save(make_account(email=first.email.root))

        # The savepoint keeps the session usable
        assert await account_repo.find_by_id(first.id) is not None


class TestInvitationRepositoryIntegration:
    @pytest.mark.asyncio
    async def test_token_round_trip_and_compare_and_set(self, integration_env):
        account_repo = await integration_env.get(AccountRepository)
        invitation_repo = await integration_env.get(InvitationRepository)
        requester = await account_repo.save(make_account(AccountRole.REQUESTER))
        invitation = await invitation_repo.save(make_invitation(requester.id))

        found = await invitation_repo.find_by_token(invitation.token)
        assert found is not None
        assert found.token == invitation.token

        accepted = found.model_copy(update={"status": InvitationStatus.ACCEPTED})
        assert await invitation_repo.save_if_status(accepted, InvitationStatus.PENDING)
        assert not await invitation_repo.save_if_status(
            accepted, InvitationStatus.PENDING
        )

    @pytest.mark.asyncio
    async def test_second_pending_for_same_email_is_refused(self, integration_env):
        account_repo = await integration_env.get(AccountRepository)
        invitation_repo = await integration_env.get(InvitationRepository)
        requester = await account_repo.save(make_account(AccountRole.REQUESTER))
        first = await invitation_repo.save(
            make_invitation(requester.id, "dup@example.com")
        )
        found = await invitation_repo.find_pending(
            requester.id, EmailAddress("dup@example.com")
        )
        assert found is not None and found.id == first.id

        with pytest.raises(IntegrityError):
            await invitation_repo.save(
                make_invitation(requester.id, "dup@example.com")
            )

    @pytest.mark.asyncio
    async def test_count_by_status_covers_every_status(self, integration_env):
        account_repo = await integration_env.get(AccountRepository)
        invitation_repo = await integration_env.get(InvitationRepository)
        requester = await account_repo.save(make_account(AccountRole.REQUESTER))
        await invitation_repo.save(make_invitation(requester.id))

        counts = await invitation_repo.count_by_status(requester.id)

        assert set(counts) == set(InvitationStatus)
        assert counts[InvitationStatus.PENDING] == 1


class TestCallRepositoryIntegration:
    @pytest.mark.asyncio
    async def test_scheduled_slot_is_unique(self, integration_env):
        account_repo = await integration_env.get(AccountRepository)
        call_repo = await integration_env.get(CallRepository)
        requester = await account_repo.save(make_account(AccountRole.REQUESTER))
        responder = await account_repo.save(make_account(AccountRole.RESPONDER))
        when = utc_now() + timedelta(days=1)
        await call_repo.save(make_call(requester.id, responder.id, when))

        assert await call_repo.exists_scheduled_conflict(
            requester.id, responder.id, when
        )
        with pytest.raises(IntegrityError):
            await call_repo.save(make_call(requester.id, responder.id, when))

    @pytest.mark.asyncio
    async def test_deal_value_sum(self, integration_env):
        account_repo = await integration_env.get(AccountRepository)
        call_repo = await integration_env.get(CallRepository)
        requester = await account_repo.save(make_account(AccountRole.REQUESTER))
        responder = await account_repo.save(make_account(AccountRole.RESPONDER))
        before = await call_repo.sum_deal_value(CallOutcome.CLOSED_DEAL)
        await call_repo.save(
            make_call(
                requester.id,
                responder.id,
                status=CallStatus.COMPLETED,
                outcome=CallOutcome.CLOSED_DEAL,
                deal_value=Decimal("10.25"),
            )
        )

        after = await call_repo.sum_deal_value(CallOutcome.CLOSED_DEAL)

        assert after - before == Decimal("10.25")
