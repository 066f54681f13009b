"""Accept and reject invitation use cases."""

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from callbridge.application.usecase.base import BaseUseCase
from callbridge.application.usecase.common import AccountItem, InvitationItem
from callbridge.domain.error import ValidationError
from callbridge.domain.service import InvitationService, ResponderRegistration


class AcceptInvitationRequest(BaseModel):
    """Invitee registration submitted with the token."""

    token: str
    name: str
    company: str | None = None
    job_title: str | None = None


class AcceptInvitationResponse(BaseModel):
    """New responder account and its access token."""

    account: AccountItem
    invitation: InvitationItem
    access_token: str


class AcceptInvitationUseCase(BaseUseCase[AcceptInvitationRequest, AcceptInvitationResponse]):
    """Use case for accepting an invitation."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(
        self, request: AcceptInvitationRequest
    ) -> AcceptInvitationResponse:
        """Execute accept invitation use case.

        Raises:
            NotFoundError: If the token is unknown or no longer pending
            ValidationError: If the registration data is invalid
            ExpiredError: If the invitation expired
            ConflictError: If an account already exists for the email
        """
        try:
            registration = ResponderRegistration(
                name=request.name,
                company=request.company,
                job_title=request.job_title,
            )
        except PydanticValidationError as e:
            raise ValidationError(str(e)) from e
        accepted = await self.invitation_service.accept(request.token, registration)
        return AcceptInvitationResponse(
            account=AccountItem.from_domain(accepted.account),
            invitation=InvitationItem.from_domain(accepted.invitation),
            access_token=accepted.access_token,
        )


class RejectInvitationRequest(BaseModel):
    """Request to reject an invitation."""

    token: str


class RejectInvitationUseCase(BaseUseCase[RejectInvitationRequest, InvitationItem]):
    """Use case for rejecting an invitation."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(self, request: RejectInvitationRequest) -> InvitationItem:
        invitation = await self.invitation_service.reject(request.token)
        return InvitationItem.from_domain(invitation)
