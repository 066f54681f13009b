"""Invitation stats use case."""

from uuid import UUID

from pydantic import BaseModel

from callbridge.application.usecase.base import BaseUseCase
from callbridge.domain.model.stats import InvitationStats
from callbridge.domain.service import InvitationService
from callbridge.domain.value import AccountId


class GetInvitationStatsRequest(BaseModel):
    requester_id: str


class GetInvitationStatsUseCase(BaseUseCase[GetInvitationStatsRequest, InvitationStats]):
    """Use case for the current requester's invitation statistics."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(self, request: GetInvitationStatsRequest) -> InvitationStats:
        return await self.invitation_service.stats(
            AccountId(UUID(request.requester_id))
        )
