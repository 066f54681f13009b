"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from decimal import Decimal
from uuid import uuid4

import logfire

from callbridge.domain.model import Account, Call, Invitation
from callbridge.domain.value import (
    AccountId,
    AccountRole,
    CallId,
    CallOutcome,
    CallStatus,
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    utc_now,
)


def pytest_configure(config):
    """Keep logfire local and quiet during tests."""
    logfire.configure(send_to_logfire=False, console=False)


def make_account(
    role: AccountRole = AccountRole.REQUESTER,
    email: str | None = None,
    call_credits: int = 0,
    monthly_invitation_limit: int = 0,
    name: str = "Test Account",
) -> Account:
    """Helper to build an account with a unique email."""
    return Account(
        id=AccountId(uuid4()),
        role=role,
        email=EmailAddress(email or f"user-{uuid4().hex[:8]}@example.com"),
        name=name,
        call_credits=call_credits,
        monthly_invitation_limit=monthly_invitation_limit,
    )


def make_invitation(
    requester_id: AccountId,
    responder_email: str = "invitee@example.com",
    responder_name: str = "Invitee",
    status: InvitationStatus = InvitationStatus.PENDING,
    issued_at: datetime | None = None,
    expires_at: datetime | None = None,
    token: str | None = None,
) -> Invitation:
    """Helper to build an invitation; valid for 7 days unless told otherwise."""
    issued_at = issued_at or utc_now()
    return Invitation(
        id=InvitationId(uuid4()),
        requester_id=requester_id,
        responder_email=EmailAddress(responder_email),
        responder_name=responder_name,
        token=InvitationToken(token or uuid4().hex),
        status=status,
        issued_at=issued_at,
        expires_at=expires_at or issued_at + timedelta(days=7),
    )


def make_call(
    requester_id: AccountId,
    responder_id: AccountId,
    scheduled_at: datetime | None = None,
    status: CallStatus = CallStatus.SCHEDULED,
    requester_rating: int | None = None,
    responder_rating: int | None = None,
    outcome: CallOutcome = CallOutcome.NO_DECISION,
    deal_value: Decimal | None = None,
) -> Call:
    """Helper to build a call, by default scheduled two days ahead."""
    return Call(
        id=CallId(uuid4()),
        requester_id=requester_id,
        responder_id=responder_id,
        scheduled_at=scheduled_at or utc_now() + timedelta(days=2),
        status=status,
        requester_rating=requester_rating,
        responder_rating=responder_rating,
        outcome=outcome,
        deal_value=deal_value,
    )
