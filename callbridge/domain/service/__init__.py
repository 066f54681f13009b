"""Domain services."""

from .account_service import AccountService
from .base import Clock, Service
from .call_service import CallCancellation, CallService
from .feedback_service import FeedbackService
from .invitation_service import (
    AcceptedInvitation,
    InvitationService,
    ResponderRegistration,
)
from .jwt_service import JWTService
from .stats_service import StatsService

__all__ = [
    "AcceptedInvitation",
    "AccountService",
    "CallCancellation",
    "CallService",
    "Clock",
    "FeedbackService",
    "InvitationService",
    "JWTService",
    "ResponderRegistration",
    "Service",
    "StatsService",
]
