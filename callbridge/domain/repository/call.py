"""Call repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Optional

from callbridge.domain.model.call import Call
from callbridge.domain.value import (
    AccountId,
    AccountRole,
    CallId,
    CallOutcome,
    CallStatus,
)


class CallRepository(ABC):
    """Repository for Call entity.

    Participant filters take an account ID and the role the account plays
    in the call (REQUESTER matches requester_id, RESPONDER responder_id).
    """

    @abstractmethod
    async def find_by_id(self, call_id: CallId) -> Optional[Call]:
        """Find a call by ID."""
        pass

    @abstractmethod
    async def find_for_participant(
        self, call_id: CallId, account_id: AccountId
    ) -> Optional[Call]:
        """Find a call by ID only if the account takes part in it.

        Args:
            call_id: The call's unique identifier
            account_id: Requester or responder of the call

        Returns:
            The call if found and the account participates, None otherwise
        """
        pass

    @abstractmethod
    async def exists_scheduled_conflict(
        self,
        requester_id: AccountId,
        responder_id: AccountId,
        scheduled_at: datetime,
    ) -> bool:
        """Check for a SCHEDULED call at exactly scheduled_at for either party.

        This is an exact-timestamp comparison, not an interval overlap.
        """
        pass

    @abstractmethod
    async def find_by_participant(
        self,
        account_id: AccountId,
        role: AccountRole,
        status: CallStatus | None = None,
        scheduled_after: datetime | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Call]:
        """Find calls of a participant, latest scheduled_at first.

        Args:
            account_id: The participant
            role: Which side of the call the participant is on
            status: Optional status filter
            scheduled_after: Only calls scheduled strictly after this time
            limit: Maximum number of results
            offset: Number of results to skip
        """
        pass

    @abstractmethod
    async def count_by_participant(
        self,
        account_id: AccountId,
        role: AccountRole,
        status: CallStatus | None = None,
        scheduled_after: datetime | None = None,
        created_since: datetime | None = None,
    ) -> int:
        """Count calls of a participant matching the filters."""
        pass

    @abstractmethod
    async def count_by_status(
        self,
        account_id: AccountId | None = None,
        role: AccountRole | None = None,
    ) -> dict[CallStatus, int]:
        """Count calls grouped by status, for one participant or the platform.

        Returns:
            Mapping with an entry for every status (zero if none)
        """
        pass

    @abstractmethod
    async def count_by_outcome(self) -> dict[CallOutcome, int]:
        """Count completed calls grouped by outcome (platform-wide)."""
        pass

    @abstractmethod
    async def sum_deal_value(self, outcome: CallOutcome) -> Decimal:
        """Total deal value of completed calls with the given outcome."""
        pass

    @abstractmethod
    async def average_rating(
        self,
        rated_by: AccountRole,
        account_id: AccountId | None = None,
        role: AccountRole | None = None,
    ) -> float | None:
        """Mean rating given by one side on completed calls.

        Args:
            rated_by: REQUESTER averages requester_rating, RESPONDER
                averages responder_rating
            account_id: Optional participant filter
            role: Side of the call the participant is on

        Returns:
            The mean, or None when there are no ratings
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        status: CallStatus | None = None,
        outcome: CallOutcome | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Call]:
        """Find calls across the platform, latest scheduled_at first."""
        pass

    @abstractmethod
    async def count_all(
        self, status: CallStatus | None = None, outcome: CallOutcome | None = None
    ) -> int:
        """Count calls matching the find_all filters."""
        pass

    @abstractmethod
    async def save(self, call: Call) -> Call:
        """Save a call (create or update).

        Raises:
            IntegrityError: If either participant already has a SCHEDULED
                call at the same scheduled_at
        """
        pass

    @abstractmethod
    async def save_if_status(self, call: Call, expected_status: CallStatus) -> bool:
        """Update a call only if its stored status is still expected_status.

        Returns:
            True if the update was applied, False otherwise
        """
        pass
