"""Invitation repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from callbridge.domain.model.invitation import Invitation
from callbridge.domain.value import (
    AccountId,
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
)


class InvitationRepository(ABC):
    """Repository for Invitation entity.

    Generic lookups never filter on expiry; callers that want only live
    invitations use find_active/count_active explicitly.
    """

    @abstractmethod
    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        """Find an invitation by ID, regardless of status or expiry."""
        pass

    @abstractmethod
    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        """Find an invitation by token, regardless of status or expiry."""
        pass

    @abstractmethod
    async def find_pending(
        self, requester_id: AccountId, responder_email: EmailAddress
    ) -> Optional[Invitation]:
        """Find the requester's pending invitation for the email.

        Expiry is not applied: an overdue invitation that was never swept
        is still returned.

        Args:
            requester_id: The issuing requester
            responder_email: The invitee's email

        Returns:
            The pending invitation if one exists, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_requester(
        self,
        requester_id: AccountId,
        status: InvitationStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invitation]:
        """Find invitations issued by a requester, newest first.

        Args:
            requester_id: The issuing requester
            status: Optional status filter
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of invitations
        """
        pass

    @abstractmethod
    async def count_by_requester(
        self,
        requester_id: AccountId,
        status: InvitationStatus | None = None,
        issued_since: datetime | None = None,
        exclude_status: InvitationStatus | None = None,
    ) -> int:
        """Count invitations issued by a requester.

        Used for quota checking and statistics.

        Args:
            requester_id: The issuing requester
            status: Only count this status
            issued_since: Only count invitations issued at or after this time
            exclude_status: Do not count this status

        Returns:
            Number of invitations
        """
        pass

    @abstractmethod
    async def find_active(
        self,
        requester_id: AccountId,
        now: datetime,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invitation]:
        """Find pending invitations of a requester that have not expired yet."""
        pass

    @abstractmethod
    async def count_active(self, requester_id: AccountId, now: datetime) -> int:
        """Count pending invitations of a requester that have not expired yet."""
        pass

    @abstractmethod
    async def find_pending_expired(self, now: datetime) -> list[Invitation]:
        """Find pending invitations whose validity window has passed."""
        pass

    @abstractmethod
    async def count_by_status(
        self, requester_id: AccountId | None = None
    ) -> dict[InvitationStatus, int]:
        """Count invitations grouped by status.

        Args:
            requester_id: Restrict to one requester; None for the whole platform

        Returns:
            Mapping with an entry for every status (zero if none)
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        status: InvitationStatus | None = None,
        search: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invitation]:
        """Find invitations across the platform, newest first.

        Args:
            status: Optional status filter
            search: Case-insensitive substring of responder email or name
            limit: Maximum number of results
            offset: Number of results to skip
        """
        pass

    @abstractmethod
    async def count_all(
        self,
        status: InvitationStatus | None = None,
        search: str | None = None,
        issued_since: datetime | None = None,
    ) -> int:
        """Count invitations matching the find_all filters.

        Args:
            status: Optional status filter
            search: Case-insensitive substring of responder email or name
            issued_since: Only count invitations issued at or after this time
        """
        pass

    @abstractmethod
    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Raises:
            IntegrityError: If the token is already used, or the requester
                already has a pending invitation for the same email
        """
        pass

    @abstractmethod
    async def save_if_status(
        self, invitation: Invitation, expected_status: InvitationStatus
    ) -> bool:
        """Update an invitation only if its stored status is still expected_status.

        Returns:
            True if the update was applied, False if the stored record had
            already moved on (or does not exist)
        """
        pass
