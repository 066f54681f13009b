"""Cancel invitation use case."""

from uuid import UUID

from pydantic import BaseModel

from callbridge.application.usecase.base import BaseUseCase
from callbridge.application.usecase.common import InvitationItem
from callbridge.domain.service import InvitationService
from callbridge.domain.value import AccountId, InvitationId


class CancelInvitationRequest(BaseModel):
    """Request to withdraw a pending invitation."""

    invitation_id: str
    requester_id: str


class CancelInvitationUseCase(BaseUseCase[CancelInvitationRequest, InvitationItem]):
    """Use case for withdrawing a pending invitation."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(self, request: CancelInvitationRequest) -> InvitationItem:
        invitation = await self.invitation_service.cancel(
            InvitationId(UUID(request.invitation_id)),
            AccountId(UUID(request.requester_id)),
        )
        return InvitationItem.from_domain(invitation)
