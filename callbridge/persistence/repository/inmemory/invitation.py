"""In-memory invitation repository for testing."""

from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError

from callbridge.domain.model import Invitation
from callbridge.domain.model.invitation import is_expired
from callbridge.domain.repository.invitation import InvitationRepository
from callbridge.domain.value import (
    AccountId,
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    ensure_utc,
)


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing."""

    def __init__(self) -> None:
        self._invitations: list[Invitation] = []

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        for invitation in self._invitations:
            if invitation.id == invitation_id:
                return invitation
        return None

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        for invitation in self._invitations:
            if invitation.token == token:
                return invitation
        return None

    async def find_pending(
        self, requester_id: AccountId, responder_email: EmailAddress
    ) -> Optional[Invitation]:
        for invitation in self._invitations:
            if (
                invitation.requester_id == requester_id
                and invitation.responder_email == responder_email
                and invitation.status == InvitationStatus.PENDING
            ):
                return invitation
        return None

    async def find_by_requester(
        self,
        requester_id: AccountId,
        status: InvitationStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invitation]:
        matching = [
            invitation
            for invitation in self._invitations
            if invitation.requester_id == requester_id
            and (status is None or invitation.status == status)
        ]
        return self._page(matching, limit, offset)

    async def count_by_requester(
        self,
        requester_id: AccountId,
        status: InvitationStatus | None = None,
        issued_since: datetime | None = None,
        exclude_status: InvitationStatus | None = None,
    ) -> int:
        return sum(
            1
            for invitation in self._invitations
            if invitation.requester_id == requester_id
            and (status is None or invitation.status == status)
            and (
                issued_since is None
                or ensure_utc(invitation.issued_at) >= ensure_utc(issued_since)
            )
            and (exclude_status is None or invitation.status != exclude_status)
        )

    async def find_active(
        self,
        requester_id: AccountId,
        now: datetime,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invitation]:
        return self._page(self._active(requester_id, now), limit, offset)

    async def count_active(self, requester_id: AccountId, now: datetime) -> int:
        return len(self._active(requester_id, now))

    async def find_pending_expired(self, now: datetime) -> list[Invitation]:
        return [
            invitation
            for invitation in self._invitations
            if invitation.status == InvitationStatus.PENDING
            and is_expired(invitation, now)
        ]

    async def count_by_status(
        self, requester_id: AccountId | None = None
    ) -> dict[InvitationStatus, int]:
        counts = {status: 0 for status in InvitationStatus}
        for invitation in self._invitations:
            if requester_id is None or invitation.requester_id == requester_id:
                counts[invitation.status] += 1
        return counts

    async def find_all(
        self,
        status: InvitationStatus | None = None,
        search: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invitation]:
        return self._page(self._filter_all(status, search), limit, offset)

    async def count_all(
        self,
        status: InvitationStatus | None = None,
        search: str | None = None,
        issued_since: datetime | None = None,
    ) -> int:
        return sum(
            1
            for invitation in self._filter_all(status, search)
            if issued_since is None
            or ensure_utc(invitation.issued_at) >= ensure_utc(issued_since)
        )

    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Raises:
            IntegrityError: On a duplicate token or a second pending
                invitation for the same requester and email
        """
        for i, existing in enumerate(self._invitations):
            if existing.id == invitation.id:
                self._invitations[i] = invitation
                return invitation

        if await self.find_by_token(invitation.token):
            raise IntegrityError("Duplicate invitation token", None, Exception())
        if (
            invitation.status == InvitationStatus.PENDING
            and await self.find_pending(
                invitation.requester_id, invitation.responder_email
            )
            is not None
        ):
            raise IntegrityError("Duplicate pending invitation", None, Exception())

        self._invitations.append(invitation)
        return invitation

    async def save_if_status(
        self, invitation: Invitation, expected_status: InvitationStatus
    ) -> bool:
        for i, existing in enumerate(self._invitations):
            if existing.id == invitation.id:
                if existing.status != expected_status:
                    return False
                self._invitations[i] = invitation
                return True
        return False

    def _active(self, requester_id: AccountId, now: datetime) -> list[Invitation]:
        return [
            invitation
            for invitation in self._invitations
            if invitation.requester_id == requester_id
            and invitation.status == InvitationStatus.PENDING
            and not is_expired(invitation, now)
        ]

    def _filter_all(
        self, status: InvitationStatus | None, search: str | None
    ) -> list[Invitation]:
        needle = search.strip().lower() if search else None
        return [
            invitation
            for invitation in self._invitations
            if (status is None or invitation.status == status)
            and (
                needle is None
                or needle in invitation.responder_email.root
                or needle in invitation.responder_name.lower()
            )
        ]

    @staticmethod
    def _page(
        invitations: list[Invitation], limit: int, offset: int
    ) -> list[Invitation]:
        ordered = sorted(
            invitations, key=lambda i: ensure_utc(i.issued_at), reverse=True
        )
        return ordered[offset : offset + limit]
