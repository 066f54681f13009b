"""Unit tests for invitation use cases."""

from datetime import timedelta

import pytest

from callbridge.application.usecase.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationUseCase,
    CreateInvitationRequest,
    CreateInvitationUseCase,
    GetInvitationRequest,
    GetInvitationUseCase,
    ListInvitationsRequest,
    ListInvitationsUseCase,
)
from callbridge.domain.error import ValidationError
from callbridge.domain.repository import AccountRepository, InvitationRepository
from callbridge.domain.value import AccountRole, InvitationStatus, utc_now
from tests.conftest import make_account, make_invitation
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreateInvitationUseCase:
    @pytest.mark.asyncio
    async def test_response_carries_link_and_token(self, unit_env):
        use_case = await unit_env.get(CreateInvitationUseCase)
        account_repo = await unit_env.get(AccountRepository)
        requester = await account_repo.save(
            make_account(AccountRole.REQUESTER, monthly_invitation_limit=1)
        )

        response = await use_case.execute(
            CreateInvitationRequest(
                requester_id=str(requester.id),
                responder_email="guest@example.com",
                responder_name="Guest",
            )
        )

        assert response.status == InvitationStatus.PENDING
        assert response.invitation_url.endswith(f"/invitations/{response.token}")
        assert response.responder_email == "guest@example.com"


class TestGetInvitationUseCase:
    @pytest.mark.asyncio
    async def test_expired_flag_without_state_change(self, unit_env):
        use_case = await unit_env.get(GetInvitationUseCase)
        account_repo = await unit_env.get(AccountRepository)
        invitation_repo = await unit_env.get(InvitationRepository)
        requester = await account_repo.save(make_account(AccountRole.REQUESTER))
        stale = await invitation_repo.save(
            make_invitation(
                requester.id,
                issued_at=utc_now() - timedelta(days=8),
                expires_at=utc_now() - timedelta(days=1),
            )
        )

        response = await use_case.execute(GetInvitationRequest(token=stale.token.root))

        assert response.is_expired is True
        assert response.invitation.status == InvitationStatus.PENDING
        assert "token" not in response.model_dump()["invitation"]


class TestAcceptInvitationUseCase:
    @pytest.mark.asyncio
    async def test_blank_name_is_a_validation_error(self, unit_env):
        use_case = await unit_env.get(AcceptInvitationUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(AcceptInvitationRequest(token="whatever", name=""))

    @pytest.mark.asyncio
    async def test_accept_returns_account_and_token(self, unit_env):
        use_case = await unit_env.get(AcceptInvitationUseCase)
        account_repo = await unit_env.get(AccountRepository)
        invitation_repo = await unit_env.get(InvitationRepository)
        requester = await account_repo.save(make_account(AccountRole.REQUESTER))
        invitation = await invitation_repo.save(
            make_invitation(requester.id, "join@example.com")
        )

        response = await use_case.execute(
            AcceptInvitationRequest(token=invitation.token.root, name="Joiner")
        )

        assert response.account.role == AccountRole.RESPONDER
        assert response.account.email == "join@example.com"
        assert response.invitation.status == InvitationStatus.ACCEPTED
        assert response.access_token


class TestListInvitationsUseCase:
    @pytest.mark.asyncio
    async def test_lists_with_pagination(self, unit_env):
        use_case = await unit_env.get(ListInvitationsUseCase)
        account_repo = await unit_env.get(AccountRepository)
        invitation_repo = await unit_env.get(InvitationRepository)
        requester = await account_repo.save(make_account(AccountRole.REQUESTER))
        for i in range(3):
            await invitation_repo.save(
                make_invitation(requester.id, f"p{i}@example.com")
            )

        response = await use_case.execute(
            ListInvitationsRequest(requester_id=str(requester.id), limit=2)
        )

        assert len(response.invitations) == 2
        assert response.pagination.total_items == 3
        assert response.pagination.total_pages == 2
