"""Get invitation by token use case."""

from pydantic import BaseModel

from callbridge.application.usecase.base import BaseUseCase
from callbridge.application.usecase.common import InvitationItem
from callbridge.domain.model.invitation import is_expired
from callbridge.domain.service import InvitationService


class GetInvitationRequest(BaseModel):
    """Request to look up an invitation by token."""

    token: str


class GetInvitationResponse(BaseModel):
    """Invitation as seen by the invitee."""

    invitation: InvitationItem
    is_expired: bool


class GetInvitationUseCase(BaseUseCase[GetInvitationRequest, GetInvitationResponse]):
    """Use case for the invitee landing page.

    Reading does not change the invitation, expired or not.
    """

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(self, request: GetInvitationRequest) -> GetInvitationResponse:
        invitation = await self.invitation_service.get_by_token(request.token)
        return GetInvitationResponse(
            invitation=InvitationItem.from_domain(invitation),
            is_expired=is_expired(invitation, self.invitation_service.now()),
        )
