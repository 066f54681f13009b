"""Invitation routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query, status
from pydantic import BaseModel

from callbridge.application.usecase.common import InvitationItem
from callbridge.application.usecase.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    CancelInvitationRequest,
    CancelInvitationUseCase,
    CreateInvitationRequest,
    CreateInvitationResponse,
    CreateInvitationUseCase,
    GetInvitationRequest,
    GetInvitationResponse,
    GetInvitationStatsRequest,
    GetInvitationStatsUseCase,
    GetInvitationUseCase,
    ListAllInvitationsRequest,
    ListAllInvitationsUseCase,
    ListInvitationsRequest,
    ListInvitationsResponse,
    ListInvitationsUseCase,
    RejectInvitationRequest,
    RejectInvitationUseCase,
)
from callbridge.domain.model.stats import InvitationStats
from callbridge.domain.service import JWTService
from callbridge.domain.value import InvitationStatus
from callbridge.interface.api.auth import authenticate

router = APIRouter(
    prefix="/invitations", tags=["invitations"], route_class=DishkaRoute
)


class CreateInvitationAPIRequest(BaseModel):
    """API request for creating an invitation."""

    responder_email: str
    responder_name: str
    message: str | None = None


class AcceptInvitationAPIRequest(BaseModel):
    """API request for accepting an invitation."""

    name: str
    company: str | None = None
    job_title: str | None = None


@router.post(
    "", response_model=CreateInvitationResponse, status_code=status.HTTP_201_CREATED
)
async def create_invitation(
    request: CreateInvitationAPIRequest,
    create_invitation_use_case: FromDishka[CreateInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CreateInvitationResponse:
    """Issue an invitation as the current requester."""
    principal = authenticate(jwt_service, auth_token, authorization)
    return await create_invitation_use_case.execute(
        CreateInvitationRequest(
            requester_id=principal.account_id,
            responder_email=request.responder_email,
            responder_name=request.responder_name,
            message=request.message,
        )
    )


@router.get("", response_model=ListInvitationsResponse)
async def list_invitations(
    list_invitations_use_case: FromDishka[ListInvitationsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
    status_filter: InvitationStatus | None = Query(default=None, alias="status"),
    active_only: bool = Query(default=False),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> ListInvitationsResponse:
    """List invitations issued by the current requester, newest first."""
    principal = authenticate(jwt_service, auth_token, authorization)
    return await list_invitations_use_case.execute(
        ListInvitationsRequest(
            requester_id=principal.account_id,
            page=page,
            limit=limit,
            status=status_filter,
            active_only=active_only,
        )
    )


@router.get("/all", response_model=ListInvitationsResponse)
async def list_all_invitations(
    list_all_invitations_use_case: FromDishka[ListAllInvitationsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
    status_filter: InvitationStatus | None = Query(default=None, alias="status"),
    search: str | None = Query(default=None, max_length=100),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> ListInvitationsResponse:
    """List invitations across the platform. Requires an authenticated caller."""
    authenticate(jwt_service, auth_token, authorization)
    return await list_all_invitations_use_case.execute(
        ListAllInvitationsRequest(
            page=page, limit=limit, status=status_filter, search=search
        )
    )


@router.get("/stats", response_model=InvitationStats)
async def invitation_stats(
    invitation_stats_use_case: FromDishka[GetInvitationStatsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> InvitationStats:
    """Invitation statistics of the current requester."""
    principal = authenticate(jwt_service, auth_token, authorization)
    return await invitation_stats_use_case.execute(
        GetInvitationStatsRequest(requester_id=principal.account_id)
    )


@router.get("/token/{token}", response_model=GetInvitationResponse)
async def get_invitation(
    token: str,
    get_invitation_use_case: FromDishka[GetInvitationUseCase],
) -> GetInvitationResponse:
    """Look up an invitation by token (public, for the invitee)."""
    return await get_invitation_use_case.execute(GetInvitationRequest(token=token))


@router.post("/token/{token}/accept", response_model=AcceptInvitationResponse)
async def accept_invitation(
    token: str,
    request: AcceptInvitationAPIRequest,
    accept_invitation_use_case: FromDishka[AcceptInvitationUseCase],
) -> AcceptInvitationResponse:
    """Accept an invitation, creating the responder account."""
    return await accept_invitation_use_case.execute(
        AcceptInvitationRequest(
            token=token,
            name=request.name,
            company=request.company,
            job_title=request.job_title,
        )
    )


@router.post("/token/{token}/reject", response_model=InvitationItem)
async def reject_invitation(
    token: str,
    reject_invitation_use_case: FromDishka[RejectInvitationUseCase],
) -> InvitationItem:
    """Reject an invitation."""
    return await reject_invitation_use_case.execute(
        RejectInvitationRequest(token=token)
    )


@router.post("/{invitation_id}/cancel", response_model=InvitationItem)
async def cancel_invitation(
    invitation_id: UUID,
    cancel_invitation_use_case: FromDishka[CancelInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> InvitationItem:
    """Withdraw a pending invitation issued by the current requester."""
    principal = authenticate(jwt_service, auth_token, authorization)
    return await cancel_invitation_use_case.execute(
        CancelInvitationRequest(
            invitation_id=str(invitation_id), requester_id=principal.account_id
        )
    )
