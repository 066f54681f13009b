"""PostgreSQL implementation of Invitation repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import Select, and_, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from callbridge.domain.model import Invitation
from callbridge.domain.repository import InvitationRepository
from callbridge.domain.value import (
    AccountId,
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
)
from callbridge.persistence.mappers import invitation_to_dict, row_to_invitation
from callbridge.persistence.tables import invitations_table


class PostgresInvitationRepository(InvitationRepository):
    """PostgreSQL implementation of InvitationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        stmt = select(invitations_table).where(invitations_table.c.id == invitation_id)
        return await self._first(stmt)

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        stmt = select(invitations_table).where(invitations_table.c.token == token.root)
        return await self._first(stmt)

    async def find_pending(
        self, requester_id: AccountId, responder_email: EmailAddress
    ) -> Optional[Invitation]:
        """Find the pending invitation for requester and email.

        The partial unique index guarantees at most one row.
        """
        stmt = select(invitations_table).where(
            and_(
                invitations_table.c.requester_id == requester_id,
                invitations_table.c.responder_email == responder_email.root,
                invitations_table.c.status == InvitationStatus.PENDING.value,
            )
        )
        return await self._first(stmt)

    async def find_by_requester(
        self,
        requester_id: AccountId,
        status: InvitationStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invitation]:
        stmt = select(invitations_table).where(
            invitations_table.c.requester_id == requester_id
        )
        if status:
            stmt = stmt.where(invitations_table.c.status == status.value)
        return await self._page(stmt, limit, offset)

    async def count_by_requester(
        self,
        requester_id: AccountId,
        status: InvitationStatus | None = None,
        issued_since: datetime | None = None,
        exclude_status: InvitationStatus | None = None,
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(invitations_table)
            .where(invitations_table.c.requester_id == requester_id)
        )
        if status:
            stmt = stmt.where(invitations_table.c.status == status.value)
        if issued_since:
            stmt = stmt.where(invitations_table.c.issued_at >= issued_since)
        if exclude_status:
            stmt = stmt.where(invitations_table.c.status != exclude_status.value)

        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_active(
        self,
        requester_id: AccountId,
        now: datetime,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invitation]:
        stmt = select(invitations_table).where(self._active(requester_id, now))
        return await self._page(stmt, limit, offset)

    async def count_active(self, requester_id: AccountId, now: datetime) -> int:
        stmt = (
            select(func.count())
            .select_from(invitations_table)
            .where(self._active(requester_id, now))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_pending_expired(self, now: datetime) -> list[Invitation]:
        stmt = select(invitations_table).where(
            and_(
                invitations_table.c.status == InvitationStatus.PENDING.value,
                invitations_table.c.expires_at < now,
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_invitation(dict(row)) for row in result.mappings().all()]

    async def count_by_status(
        self, requester_id: AccountId | None = None
    ) -> dict[InvitationStatus, int]:
        stmt = select(invitations_table.c.status, func.count()).group_by(
            invitations_table.c.status
        )
        if requester_id:
            stmt = stmt.where(invitations_table.c.requester_id == requester_id)

        result = await self.session.execute(stmt)
        counts = {status: 0 for status in InvitationStatus}
        for status, count in result.all():
            counts[InvitationStatus(status)] = count
        return counts

    async def find_all(
        self,
        status: InvitationStatus | None = None,
        search: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invitation]:
        stmt = self._filter_all(select(invitations_table), status, search)
        return await self._page(stmt, limit, offset)

    async def count_all(
        self,
        status: InvitationStatus | None = None,
        search: str | None = None,
        issued_since: datetime | None = None,
    ) -> int:
        stmt = self._filter_all(
            select(func.count()).select_from(invitations_table), status, search
        )
        if issued_since:
            stmt = stmt.where(invitations_table.c.issued_at >= issued_since)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Raises:
            IntegrityError: On a duplicate token or a second pending
                invitation for the same requester and email
        """
        invitation_dict = invitation_to_dict(invitation)
        existing = await self.find_by_id(invitation.id)

        async with self.session.begin_nested():
            if existing:
                stmt = (
                    update(invitations_table)
                    .where(invitations_table.c.id == invitation.id)
                    .values(**invitation_dict)
                )
            else:
                stmt = insert(invitations_table).values(**invitation_dict)
            await self.session.execute(stmt)

        return invitation

    async def save_if_status(
        self, invitation: Invitation, expected_status: InvitationStatus
    ) -> bool:
        """Compare-and-set update keyed on the stored status."""
        stmt = (
            update(invitations_table)
            .where(
                and_(
                    invitations_table.c.id == invitation.id,
                    invitations_table.c.status == expected_status.value,
                )
            )
            .values(**invitation_to_dict(invitation))
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def _first(self, stmt: Select) -> Optional[Invitation]:
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def _page(self, stmt: Select, limit: int, offset: int) -> list[Invitation]:
        stmt = (
            stmt.order_by(invitations_table.c.issued_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_invitation(dict(row)) for row in result.mappings().all()]

    @staticmethod
    def _active(requester_id: AccountId, now: datetime):
        return and_(
            invitations_table.c.requester_id == requester_id,
            invitations_table.c.status == InvitationStatus.PENDING.value,
            invitations_table.c.expires_at >= now,
        )

    @staticmethod
    def _filter_all(
        stmt: Select, status: InvitationStatus | None, search: str | None
    ) -> Select:
        if status:
            stmt = stmt.where(invitations_table.c.status == status.value)
        if search:
            pattern = f"%{search.strip()}%"
            stmt = stmt.where(
                or_(
                    invitations_table.c.responder_email.ilike(pattern),
                    invitations_table.c.responder_name.ilike(pattern),
                )
            )
        return stmt
