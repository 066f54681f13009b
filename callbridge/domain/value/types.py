"""Domain value objects for Call Bridge.

The enum values are part of the public contract: UI and reporting
consumers depend on the literal strings.
"""

import re
from enum import Enum

from pydantic import field_validator

from callbridge.domain.value.common import RootValueObject

_EMAIL_PATTERN = re.compile(r"^\w+([.+-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,})+$")


class AccountRole(str, Enum):
    """Party type of an account."""

    REQUESTER = "requester"
    RESPONDER = "responder"


class InvitationStatus(str, Enum):
    """Status of an invitation. Everything except PENDING is terminal."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class CallStatus(str, Enum):
    """Status of a scheduled call."""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class CallOutcome(str, Enum):
    """Requester-recorded business result of a completed call."""

    INTERESTED = "interested"
    NOT_INTERESTED = "not_interested"
    FOLLOW_UP_NEEDED = "follow_up_needed"
    CLOSED_DEAL = "closed_deal"
    NO_DECISION = "no_decision"


class ConnectionQuality(str, Enum):
    """Self-reported quality of the call connection."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class EmailAddress(RootValueObject[str]):
    """Email address, normalized to lowercase."""

    @field_validator("root")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Validate and normalize the address."""
        v = v.strip().lower()
        if len(v) > 255 or not _EMAIL_PATTERN.match(v):
            raise ValueError("Please enter a valid email")
        return v


class InvitationToken(RootValueObject[str]):
    """Opaque, URL-safe invitation token."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is not empty."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        return v

    def masked(self) -> str:
        """Loggable prefix of the token."""
        return self.root[:8] + "..."
