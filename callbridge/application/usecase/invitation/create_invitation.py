"""Create invitation use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from callbridge.application.usecase.base import BaseUseCase
from callbridge.config import Settings
from callbridge.domain.service import InvitationService
from callbridge.domain.value import AccountId, InvitationStatus


class CreateInvitationRequest(BaseModel):
    """Request to create an invitation."""

    requester_id: str
    responder_email: str
    responder_name: str
    message: str | None = None


class CreateInvitationResponse(BaseModel):
    """Created invitation.

    The only response that carries the token, for hand-off to the
    notification layer.
    """

    invitation_id: str
    invitation_url: str
    token: str
    responder_email: str
    responder_name: str
    status: InvitationStatus
    expires_at: datetime


class CreateInvitationUseCase(BaseUseCase[CreateInvitationRequest, CreateInvitationResponse]):
    """Use case for issuing an invitation."""

    def __init__(
        self, invitation_service: InvitationService, settings: Settings
    ) -> None:
        """Initialize use case.

        Args:
            invitation_service: Invitation domain service
            settings: Application settings
        """
        self.invitation_service = invitation_service
        self.settings = settings

    async def execute(
        self, request: CreateInvitationRequest
    ) -> CreateInvitationResponse:
        """Execute create invitation use case.

        Raises:
            ValidationError: If the caller is not a requester
            ConflictError: If the email is already registered or invited
            QuotaExceededError: If the monthly limit is reached
        """
        requester_id = AccountId(UUID(request.requester_id))

        invitation = await self.invitation_service.create(
            requester_id=requester_id,
            responder_email=request.responder_email,
            responder_name=request.responder_name,
            message=request.message,
        )

        token = invitation.token.root
        logfire.info(
            "Invitation link issued",
            invitation_id=str(invitation.id),
            token=invitation.token.masked(),
        )
        return CreateInvitationResponse(
            invitation_id=str(invitation.id),
            invitation_url=f"{self.settings.api.frontend_url}/invitations/{token}",
            token=token,
            responder_email=invitation.responder_email.root,
            responder_name=invitation.responder_name,
            status=invitation.status,
            expires_at=invitation.expires_at,
        )
