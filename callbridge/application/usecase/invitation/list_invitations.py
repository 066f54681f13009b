"""List invitations use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from callbridge.application.usecase.base import BaseUseCase
from callbridge.application.usecase.common import InvitationItem, PaginationItem
from callbridge.domain.service import InvitationService
from callbridge.domain.value import AccountId, InvitationStatus


class ListInvitationsRequest(BaseModel):
    """Request for a requester's invitations."""

    requester_id: str
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)
    status: InvitationStatus | None = None
    active_only: bool = False


class ListInvitationsResponse(BaseModel):
    """Page of invitations."""

    invitations: list[InvitationItem]
    pagination: PaginationItem


class ListInvitationsUseCase(BaseUseCase[ListInvitationsRequest, ListInvitationsResponse]):
    """Use case for listing invitations issued by the current requester."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(self, request: ListInvitationsRequest) -> ListInvitationsResponse:
        invitations, pagination = await self.invitation_service.list_for_requester(
            requester_id=AccountId(UUID(request.requester_id)),
            page=request.page,
            limit=request.limit,
            status=request.status,
            active_only=request.active_only,
        )
        return ListInvitationsResponse(
            invitations=[InvitationItem.from_domain(i) for i in invitations],
            pagination=PaginationItem.from_domain(pagination),
        )
