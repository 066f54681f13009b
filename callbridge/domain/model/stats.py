"""Read-side rollups over invitations and calls.

These are plain snapshots; the helpers below are pure so they can be
used (and tested) without any storage.
"""

from decimal import Decimal
from typing import Optional

from pydantic import Field

from callbridge.domain.model.common import DomainModel
from callbridge.domain.value import AccountId, AccountRole, CallOutcome, CallStatus


def percentage(part: int, total: int) -> float:
    """``part / total * 100`` rounded to 1 decimal, 0 when total is 0."""
    if total == 0:
        return 0.0
    return round(part / total * 100, 1)


def rounded_rating(mean: Optional[float]) -> float:
    """Average rating rounded to 1 decimal, 0 when there is none."""
    if mean is None:
        return 0.0
    return round(mean, 1)


class InvitationStats(DomainModel):
    """Invitation counts for one requester or the whole platform."""

    total: int = 0
    pending: int = 0
    accepted: int = 0
    rejected: int = 0
    expired: int = 0
    cancelled: int = 0
    monthly: int = 0  # Issued in the current calendar month
    acceptance_rate: float = 0.0


class CallStats(DomainModel):
    """Call counts for one participant."""

    total: int = 0
    completed: int = 0
    cancelled: int = 0
    no_show: int = 0
    upcoming: int = 0
    monthly: int = 0  # Created in the current calendar month
    average_rating: float = 0.0  # Given by the counterparty
    completion_rate: float = 0.0


class PlatformCallStats(DomainModel):
    """Call rollup across all accounts."""

    total: int = 0
    by_status: dict[CallStatus, int] = Field(default_factory=dict)
    completion_rate: float = 0.0
    outcomes: dict[CallOutcome, int] = Field(default_factory=dict)
    closed_deal_value: Decimal = Decimal("0")
    average_requester_rating: float = 0.0
    average_responder_rating: float = 0.0


class PlatformStats(DomainModel):
    """Platform-wide dashboard."""

    invitations: InvitationStats
    calls: PlatformCallStats


class Dashboard(DomainModel):
    """Per-account dashboard."""

    account_id: AccountId
    role: AccountRole
    call_credits: int
    calls: CallStats
    invitations: Optional[InvitationStats] = None  # Requesters only
    remaining_monthly_invitations: Optional[int] = None  # Requesters only
