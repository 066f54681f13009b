"""In-memory repositories mirror the storage constraints."""

from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from callbridge.domain.value import AccountRole, CallStatus, InvitationStatus, utc_now
from callbridge.persistence.repository.inmemory import (
    InMemoryAccountRepository,
    InMemoryCallRepository,
    InMemoryInvitationRepository,
)
from tests.conftest import make_account, make_call, make_invitation


class TestAccountConstraints:
    @pytest.mark.asyncio
    async def test_email_is_unique(self):
        repo = InMemoryAccountRepository()
        await repo.save(make_account(email="same@example.com"))

        with pytest.raises(IntegrityError):
            await repo.save(make_account(email="same@example.com"))

    @pytest.mark.asyncio
    async def test_debit_stops_at_zero(self):
        repo = InMemoryAccountRepository()
        account = await repo.save(make_account(call_credits=1))

        assert await repo.debit_credit(account.id) is True
        assert await repo.debit_credit(account.id) is False
        assert (await repo.find_by_id(account.id)).call_credits == 0


class TestInvitationConstraints:
    @pytest.mark.asyncio
    async def test_token_is_unique(self):
        repo = InMemoryInvitationRepository()
        requester = make_account(AccountRole.REQUESTER)
        await repo.save(make_invitation(requester.id, "a@example.com", token="t1"))

        with pytest.raises(IntegrityError):
            await repo.save(make_invitation(requester.id, "b@example.com", token="t1"))

    @pytest.mark.asyncio
    async def test_one_pending_per_requester_and_email(self):
        repo = InMemoryInvitationRepository()
        requester = make_account(AccountRole.REQUESTER)
        await repo.save(make_invitation(requester.id, "a@example.com"))

        with pytest.raises(IntegrityError):
            await repo.save(make_invitation(requester.id, "a@example.com"))

        other = make_account(AccountRole.REQUESTER)
        await repo.save(make_invitation(other.id, "a@example.com"))
        await repo.save(
            make_invitation(
                requester.id, "a@example.com", status=InvitationStatus.EXPIRED
            )
        )

    @pytest.mark.asyncio
    async def test_save_if_status_is_compare_and_set(self):
        repo = InMemoryInvitationRepository()
        requester = make_account(AccountRole.REQUESTER)
        invitation = await repo.save(make_invitation(requester.id))
        accepted = invitation.model_copy(update={"status": InvitationStatus.ACCEPTED})
        rejected = invitation.model_copy(update={"status": InvitationStatus.REJECTED})

        assert await repo.save_if_status(accepted, InvitationStatus.PENDING) is True
        assert await repo.save_if_status(rejected, InvitationStatus.PENDING) is False
        assert (await repo.find_by_id(invitation.id)).status == (
            InvitationStatus.ACCEPTED
        )


class TestCallConstraints:
    @pytest.mark.asyncio
    async def test_scheduled_slot_is_unique_per_participant(self):
        repo = InMemoryCallRepository()
        requester = make_account(AccountRole.REQUESTER)
        responder = make_account(AccountRole.RESPONDER)
        other_responder = make_account(AccountRole.RESPONDER)
        when = utc_now() + timedelta(days=1)
        await repo.save(make_call(requester.id, responder.id, when))

        with pytest.raises(IntegrityError):
            await repo.save(make_call(requester.id, other_responder.id, when))

        # Non-scheduled calls never hold a slot
        await repo.save(
            make_call(requester.id, responder.id, when, status=CallStatus.CANCELLED)
        )

    @pytest.mark.asyncio
    async def test_conflict_check_is_exact_timestamp(self):
        repo = InMemoryCallRepository()
        requester = make_account(AccountRole.REQUESTER)
        responder = make_account(AccountRole.RESPONDER)
        when = utc_now() + timedelta(days=1)
        await repo.save(make_call(requester.id, responder.id, when))

        assert await repo.exists_scheduled_conflict(
            make_account(AccountRole.REQUESTER).id, responder.id, when
        )
        assert not await repo.exists_scheduled_conflict(
            requester.id, responder.id, when + timedelta(seconds=1)
        )
