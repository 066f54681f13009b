"""Unit tests for the invitation expiry job."""

from datetime import timedelta

import pytest
import pytest_asyncio

from callbridge.domain.repository import AccountRepository, InvitationRepository
from callbridge.domain.value import AccountRole, InvitationStatus, utc_now
from scripts.expire_invitations import expire_invitations
from tests.conftest import make_account, make_invitation
from tests.di import build_test_container


@pytest_asyncio.fixture
async def container():
    container = build_test_container()
    yield container
    await container.close()


@pytest.mark.asyncio
async def test_job_expires_overdue_pending_invitations(container):
    async with container() as request_container:
        account_repo = await request_container.get(AccountRepository)
        invitation_repo = await request_container.get(InvitationRepository)
        requester = await account_repo.save(make_account(AccountRole.REQUESTER))
        overdue = await invitation_repo.save(
            make_invitation(
                requester.id,
                "late@example.com",
                issued_at=utc_now() - timedelta(days=9),
                expires_at=utc_now() - timedelta(days=2),
            )
        )
        live = await invitation_repo.save(
            make_invitation(requester.id, "live@example.com")
        )

    expired = await expire_invitations(container)

    assert expired == 1
    async with container() as request_container:
        invitation_repo = await request_container.get(InvitationRepository)
        assert (await invitation_repo.find_by_id(overdue.id)).status == (
            InvitationStatus.EXPIRED
        )
        assert (await invitation_repo.find_by_id(live.id)).status == (
            InvitationStatus.PENDING
        )
