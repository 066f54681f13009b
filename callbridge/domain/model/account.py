"""Account entity.

Accounts are created by onboarding (outside this core) or by accepting
an invitation. The credit balance lives on the account itself.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from callbridge.domain.model.common import DomainModel
from callbridge.domain.value import AccountId, AccountRole, EmailAddress, utc_now


class Account(DomainModel):
    """Requester or responder profile with a non-negative credit balance."""

    id: AccountId
    role: AccountRole
    email: EmailAddress
    name: str = Field(min_length=1, max_length=50)
    company: Optional[str] = None
    job_title: Optional[str] = None
    call_credits: int = Field(default=0, ge=0)
    monthly_invitation_limit: int = Field(default=0, ge=0)  # Requesters only
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_requester(self) -> bool:
        return self.role == AccountRole.REQUESTER

    @property
    def is_responder(self) -> bool:
        return self.role == AccountRole.RESPONDER
