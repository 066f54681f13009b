"""Invitation entity.

An invitation is a time-boxed, single-use offer from a requester to a
prospective responder, identified by an opaque token.

Business rules:
- Tokens are globally unique and never re-issued
- Only PENDING invitations can change status; every other status is final
- Expiry is enforced when the token is used, not when it is read
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from callbridge.domain.model.common import DomainModel
from callbridge.domain.value import (
    AccountId,
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    ensure_utc,
    utc_now,
)


class Invitation(DomainModel):
    """Invitation entity.

    The token is excluded from serialization so that default reads never
    leak it; persistence adds it back explicitly.
    """

    id: InvitationId
    requester_id: AccountId
    responder_email: EmailAddress
    responder_name: str = Field(min_length=1, max_length=100)
    message: Optional[str] = Field(default=None, max_length=500)
    token: InvitationToken = Field(exclude=True, repr=False)
    status: InvitationStatus = InvitationStatus.PENDING
    issued_at: datetime = Field(default_factory=utc_now)
    expires_at: datetime
    accepted_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None
    accepted_by_account_id: Optional[AccountId] = None


def is_expired(invitation: Invitation, now: datetime) -> bool:
    """Whether the validity window of the invitation has passed."""
    return ensure_utc(invitation.expires_at) < ensure_utc(now)
