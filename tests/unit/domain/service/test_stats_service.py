"""Unit tests for StatsService."""

from uuid import uuid4

import pytest

from callbridge.domain.error import NotFoundError
from callbridge.domain.repository import AccountRepository, InvitationRepository
from callbridge.domain.service import StatsService
from callbridge.domain.value import AccountId, AccountRole, InvitationStatus
from tests.conftest import make_account, make_invitation
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestDashboard:
    """Tests for StatsService.dashboard."""

    @pytest.mark.asyncio
    async def test_requester_dashboard_includes_invitations(self, unit_env):
        stats_service = await unit_env.get(StatsService)
        account_repo = await unit_env.get(AccountRepository)
        invitation_repo = await unit_env.get(InvitationRepository)
        requester = await account_repo.save(
            make_account(
                AccountRole.REQUESTER, call_credits=4, monthly_invitation_limit=5
            )
        )
        await invitation_repo.save(make_invitation(requester.id, "a@example.com"))
        await invitation_repo.save(
            make_invitation(
                requester.id, "b@example.com", status=InvitationStatus.ACCEPTED
            )
        )

        dashboard = await stats_service.dashboard(requester.id)

        assert dashboard.role == AccountRole.REQUESTER
        assert dashboard.call_credits == 4
        assert dashboard.calls.total == 0
        assert dashboard.invitations.total == 2
        assert dashboard.invitations.acceptance_rate == 50.0
        assert dashboard.remaining_monthly_invitations == 3

    @pytest.mark.asyncio
    async def test_responder_dashboard_has_no_invitation_figures(self, unit_env):
        stats_service = await unit_env.get(StatsService)
        account_repo = await unit_env.get(AccountRepository)
        responder = await account_repo.save(make_account(AccountRole.RESPONDER))

        dashboard = await stats_service.dashboard(responder.id)

        assert dashboard.role == AccountRole.RESPONDER
        assert dashboard.invitations is None
        assert dashboard.remaining_monthly_invitations is None

    @pytest.mark.asyncio
    async def test_unknown_account_raises_not_found(self, unit_env):
        stats_service = await unit_env.get(StatsService)

        with pytest.raises(NotFoundError):
            await stats_service.dashboard(AccountId(uuid4()))


class TestPlatform:
    """Tests for StatsService.platform."""

    @pytest.mark.asyncio
    async def test_empty_platform_is_all_zero(self, unit_env):
        stats_service = await unit_env.get(StatsService)

        stats = await stats_service.platform()

        assert stats.invitations.total == 0
        assert stats.invitations.acceptance_rate == 0.0
        assert stats.calls.total == 0
        assert stats.calls.completion_rate == 0.0
