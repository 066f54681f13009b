"""Response items shared by use cases.

Invitation items never carry the token; only the create response does.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from callbridge.domain.model import Account, Call, Invitation
from callbridge.domain.model.call import actual_duration, average_rating
from callbridge.domain.value import (
    AccountRole,
    CallOutcome,
    CallStatus,
    ConnectionQuality,
    InvitationStatus,
    Pagination,
)


class PaginationItem(BaseModel):
    """Page metadata in responses."""

    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def from_domain(cls, pagination: Pagination) -> "PaginationItem":
        return cls(**pagination.model_dump())


class AccountItem(BaseModel):
    """Account in responses."""

    account_id: str
    role: AccountRole
    email: str
    name: str
    company: str | None
    job_title: str | None
    call_credits: int

    @classmethod
    def from_domain(cls, account: Account) -> "AccountItem":
        return cls(
            account_id=str(account.id),
            role=account.role,
            email=account.email.root,
            name=account.name,
            company=account.company,
            job_title=account.job_title,
            call_credits=account.call_credits,
        )


class InvitationItem(BaseModel):
    """Invitation in responses (token omitted)."""

    invitation_id: str
    requester_id: str
    responder_email: str
    responder_name: str
    message: str | None
    status: InvitationStatus
    issued_at: datetime
    expires_at: datetime
    accepted_at: datetime | None
    rejected_at: datetime | None

    @classmethod
    def from_domain(cls, invitation: Invitation) -> "InvitationItem":
        return cls(
            invitation_id=str(invitation.id),
            requester_id=str(invitation.requester_id),
            responder_email=invitation.responder_email.root,
            responder_name=invitation.responder_name,
            message=invitation.message,
            status=invitation.status,
            issued_at=invitation.issued_at,
            expires_at=invitation.expires_at,
            accepted_at=invitation.accepted_at,
            rejected_at=invitation.rejected_at,
        )


class CallItem(BaseModel):
    """Call in responses, with derived duration and rating."""

    call_id: str
    requester_id: str
    responder_id: str
    scheduled_at: datetime
    duration: int
    status: CallStatus
    notes: str | None
    meeting_link: str | None
    actual_start_time: datetime | None
    actual_end_time: datetime | None
    actual_duration: int | None
    connection_quality: ConnectionQuality | None
    requester_rating: int | None
    responder_rating: int | None
    average_rating: float | None
    requester_feedback: str | None
    responder_feedback: str | None
    outcome: CallOutcome
    follow_up_date: datetime | None
    deal_value: Decimal | None
    created_at: datetime

    @classmethod
    def from_domain(cls, call: Call) -> "CallItem":
        return cls(
            call_id=str(call.id),
            requester_id=str(call.requester_id),
            responder_id=str(call.responder_id),
            scheduled_at=call.scheduled_at,
            duration=call.duration,
            status=call.status,
            notes=call.notes,
            meeting_link=call.meeting_link,
            actual_start_time=call.actual_start_time,
            actual_end_time=call.actual_end_time,
            actual_duration=actual_duration(call),
            connection_quality=call.connection_quality,
            requester_rating=call.requester_rating,
            responder_rating=call.responder_rating,
            average_rating=average_rating(call),
            requester_feedback=call.requester_feedback,
            responder_feedback=call.responder_feedback,
            outcome=call.outcome,
            follow_up_date=call.follow_up_date,
            deal_value=call.deal_value,
            created_at=call.created_at,
        )
