"""List all invitations use case (platform-wide)."""

from pydantic import BaseModel, Field

from callbridge.application.usecase.base import BaseUseCase
from callbridge.application.usecase.common import InvitationItem, PaginationItem
from callbridge.application.usecase.invitation.list_invitations import (
    ListInvitationsResponse,
)
from callbridge.domain.service import InvitationService
from callbridge.domain.value import InvitationStatus


class ListAllInvitationsRequest(BaseModel):
    """Filters for the platform-wide invitation listing.

    ``search`` matches responder email or name, case-insensitively.
    """

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)
    status: InvitationStatus | None = None
    search: str | None = Field(default=None, max_length=100)


class ListAllInvitationsUseCase(
    BaseUseCase[ListAllInvitationsRequest, ListInvitationsResponse]
):
    """Use case for listing every invitation, newest first."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(
        self, request: ListAllInvitationsRequest
    ) -> ListInvitationsResponse:
        invitations, pagination = await self.invitation_service.list_all(
            page=request.page,
            limit=request.limit,
            status=request.status,
            search=request.search or None,
        )
        return ListInvitationsResponse(
            invitations=[InvitationItem.from_domain(i) for i in invitations],
            pagination=PaginationItem.from_domain(pagination),
        )
