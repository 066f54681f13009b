"""Call entity and status state machine."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from callbridge.domain.model.common import DomainModel
from callbridge.domain.value import (
    AccountId,
    CallId,
    CallOutcome,
    CallStatus,
    ConnectionQuality,
    ensure_utc,
    utc_now,
)

CALL_STATUS_TRANSITIONS: dict[CallStatus, frozenset[CallStatus]] = {
    CallStatus.SCHEDULED: frozenset(
        {CallStatus.IN_PROGRESS, CallStatus.CANCELLED, CallStatus.NO_SHOW}
    ),
    CallStatus.IN_PROGRESS: frozenset({CallStatus.COMPLETED}),
    CallStatus.COMPLETED: frozenset(),
    CallStatus.CANCELLED: frozenset(),
    CallStatus.NO_SHOW: frozenset(),
}


class Call(DomainModel):
    """Scheduled meeting between a requester and a responder.

    Business rules:
    - At most one SCHEDULED call per participant per exact scheduled_at
    - Status changes follow CALL_STATUS_TRANSITIONS
    - Feedback fields are only written once the call is COMPLETED
    """

    id: CallId
    requester_id: AccountId
    responder_id: AccountId
    scheduled_at: datetime
    duration: int = Field(default=30, ge=1, le=480)  # Minutes
    status: CallStatus = CallStatus.SCHEDULED
    notes: Optional[str] = Field(default=None, max_length=1000)
    meeting_link: Optional[str] = None
    actual_start_time: Optional[datetime] = None
    actual_end_time: Optional[datetime] = None
    connection_quality: Optional[ConnectionQuality] = None
    requester_rating: Optional[int] = Field(default=None, ge=1, le=5)
    responder_rating: Optional[int] = Field(default=None, ge=1, le=5)
    requester_feedback: Optional[str] = Field(default=None, max_length=500)
    responder_feedback: Optional[str] = Field(default=None, max_length=500)
    outcome: CallOutcome = CallOutcome.NO_DECISION
    follow_up_date: Optional[datetime] = None
    deal_value: Optional[Decimal] = Field(default=None, ge=0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def is_participant(self, account_id: AccountId) -> bool:
        return account_id in (self.requester_id, self.responder_id)


def can_transition(from_status: CallStatus, to_status: CallStatus) -> bool:
    """Whether the state machine allows ``from_status -> to_status``."""
    return to_status in CALL_STATUS_TRANSITIONS[from_status]


def actual_duration(call: Call) -> Optional[int]:
    """Minutes between actual start and end, rounded; None if unknown."""
    if call.actual_start_time is None or call.actual_end_time is None:
        return None
    delta = ensure_utc(call.actual_end_time) - ensure_utc(call.actual_start_time)
    return round(delta.total_seconds() / 60)


def average_rating(call: Call) -> Optional[float]:
    """Mean of both participants' ratings, only when both are present."""
    if call.requester_rating is None or call.responder_rating is None:
        return None
    return (call.requester_rating + call.responder_rating) / 2


class CallFeedback(DomainModel):
    """Post-call feedback payload. Every field is optional.

    Which fields are applied depends on the submitting participant: the
    requester may set all of them, the responder only rating and feedback.
    """

    rating: Optional[int] = Field(default=None, ge=1, le=5)
    feedback: Optional[str] = Field(default=None, max_length=500)
    outcome: Optional[CallOutcome] = None
    follow_up_date: Optional[datetime] = None
    deal_value: Optional[Decimal] = Field(default=None, ge=0)
