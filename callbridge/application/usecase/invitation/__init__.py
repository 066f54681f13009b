"""Invitation use cases."""

from callbridge.application.usecase.invitation.cancel_invitation import (
    CancelInvitationRequest,
    CancelInvitationUseCase,
)
from callbridge.application.usecase.invitation.create_invitation import (
    CreateInvitationRequest,
    CreateInvitationResponse,
    CreateInvitationUseCase,
)
from callbridge.application.usecase.invitation.get_invitation import (
    GetInvitationRequest,
    GetInvitationResponse,
    GetInvitationUseCase,
)
from callbridge.application.usecase.invitation.invitation_stats import (
    GetInvitationStatsRequest,
    GetInvitationStatsUseCase,
)
from callbridge.application.usecase.invitation.list_all_invitations import (
    ListAllInvitationsRequest,
    ListAllInvitationsUseCase,
)
from callbridge.application.usecase.invitation.list_invitations import (
    ListInvitationsRequest,
    ListInvitationsResponse,
    ListInvitationsUseCase,
)
from callbridge.application.usecase.invitation.respond_invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    RejectInvitationRequest,
    RejectInvitationUseCase,
)

__all__ = [
    "AcceptInvitationRequest",
    "AcceptInvitationResponse",
    "AcceptInvitationUseCase",
    "CancelInvitationRequest",
    "CancelInvitationUseCase",
    "CreateInvitationRequest",
    "CreateInvitationResponse",
    "CreateInvitationUseCase",
    "GetInvitationRequest",
    "GetInvitationResponse",
    "GetInvitationUseCase",
    "GetInvitationStatsRequest",
    "GetInvitationStatsUseCase",
    "ListAllInvitationsRequest",
    "ListAllInvitationsUseCase",
    "ListInvitationsRequest",
    "ListInvitationsResponse",
    "ListInvitationsUseCase",
    "RejectInvitationRequest",
    "RejectInvitationUseCase",
]
