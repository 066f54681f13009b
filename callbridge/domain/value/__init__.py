"""Domain value objects for Call Bridge."""

from callbridge.domain.value.common import ensure_utc, start_of_month, utc_now
from callbridge.domain.value.identifiers import AccountId, CallId, InvitationId
from callbridge.domain.value.pagination import Pagination, calculate_pagination
from callbridge.domain.value.types import (
    AccountRole,
    CallOutcome,
    CallStatus,
    ConnectionQuality,
    EmailAddress,
    InvitationStatus,
    InvitationToken,
)

__all__ = [
    # Identifiers
    "AccountId",
    "InvitationId",
    "CallId",
    # Types
    "AccountRole",
    "InvitationStatus",
    "CallStatus",
    "CallOutcome",
    "ConnectionQuality",
    "EmailAddress",
    "InvitationToken",
    # Pagination
    "Pagination",
    "calculate_pagination",
    # Time helpers
    "utc_now",
    "ensure_utc",
    "start_of_month",
]
