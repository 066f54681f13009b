"""PostgreSQL implementation of Call repository."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Column, Select, and_, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from callbridge.domain.model import Call
from callbridge.domain.repository import CallRepository
from callbridge.domain.value import (
    AccountId,
    AccountRole,
    CallId,
    CallOutcome,
    CallStatus,
)
from callbridge.persistence.mappers import call_to_dict, row_to_call
from callbridge.persistence.tables import calls_table


def _participant_column(role: AccountRole) -> Column:
    if role == AccountRole.REQUESTER:
        return calls_table.c.requester_id
    return calls_table.c.responder_id


def _rating_column(rated_by: AccountRole) -> Column:
    if rated_by == AccountRole.REQUESTER:
        return calls_table.c.requester_rating
    return calls_table.c.responder_rating


class PostgresCallRepository(CallRepository):
    """PostgreSQL implementation of CallRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, call_id: CallId) -> Optional[Call]:
        stmt = select(calls_table).where(calls_table.c.id == call_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_call(dict(row)) if row else None

    async def find_for_participant(
        self, call_id: CallId, account_id: AccountId
    ) -> Optional[Call]:
        stmt = select(calls_table).where(
            and_(
                calls_table.c.id == call_id,
                or_(
                    calls_table.c.requester_id == account_id,
                    calls_table.c.responder_id == account_id,
                ),
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_call(dict(row)) if row else None

    async def exists_scheduled_conflict(
        self,
        requester_id: AccountId,
        responder_id: AccountId,
        scheduled_at: datetime,
    ) -> bool:
        stmt = select(calls_table.c.id).where(
            and_(
                calls_table.c.status == CallStatus.SCHEDULED.value,
                calls_table.c.scheduled_at == scheduled_at,
                or_(
                    calls_table.c.requester_id == requester_id,
                    calls_table.c.responder_id == responder_id,
                ),
            )
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def find_by_participant(
        self,
        account_id: AccountId,
        role: AccountRole,
        status: CallStatus | None = None,
        scheduled_after: datetime | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Call]:
        stmt = self._filter_participant(
            select(calls_table), account_id, role, status, scheduled_after
        )
        return await self._page(stmt, limit, offset)

    async def count_by_participant(
        self,
        account_id: AccountId,
        role: AccountRole,
        status: CallStatus | None = None,
        scheduled_after: datetime | None = None,
        created_since: datetime | None = None,
    ) -> int:
        stmt = self._filter_participant(
            select(func.count()).select_from(calls_table),
            account_id,
            role,
            status,
            scheduled_after,
        )
        if created_since:
            stmt = stmt.where(calls_table.c.created_at >= created_since)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_by_status(
        self,
        account_id: AccountId | None = None,
        role: AccountRole | None = None,
    ) -> dict[CallStatus, int]:
        stmt = select(calls_table.c.status, func.count()).group_by(
            calls_table.c.status
        )
        if account_id and role:
            stmt = stmt.where(_participant_column(role) == account_id)

        result = await self.session.execute(stmt)
        counts = {status: 0 for status in CallStatus}
        for status, count in result.all():
            counts[CallStatus(status)] = count
        return counts

    async def count_by_outcome(self) -> dict[CallOutcome, int]:
        stmt = (
            select(calls_table.c.outcome, func.count())
            .where(calls_table.c.status == CallStatus.COMPLETED.value)
            .group_by(calls_table.c.outcome)
        )
        result = await self.session.execute(stmt)
        counts = {outcome: 0 for outcome in CallOutcome}
        for outcome, count in result.all():
            counts[CallOutcome(outcome)] = count
        return counts

    async def sum_deal_value(self, outcome: CallOutcome) -> Decimal:
        stmt = select(func.coalesce(func.sum(calls_table.c.deal_value), 0)).where(
            and_(
                calls_table.c.status == CallStatus.COMPLETED.value,
                calls_table.c.outcome == outcome.value,
            )
        )
        result = await self.session.execute(stmt)
        return Decimal(result.scalar() or 0)

    async def average_rating(
        self,
        rated_by: AccountRole,
        account_id: AccountId | None = None,
        role: AccountRole | None = None,
    ) -> float | None:
        rating = _rating_column(rated_by)
        stmt = select(func.avg(rating)).where(
            and_(
                calls_table.c.status == CallStatus.COMPLETED.value,
                rating.is_not(None),
            )
        )
        if account_id and role:
            stmt = stmt.where(_participant_column(role) == account_id)

        result = await self.session.execute(stmt)
        mean = result.scalar()
        return float(mean) if mean is not None else None

    async def find_all(
        self,
        status: CallStatus | None = None,
        outcome: CallOutcome | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Call]:
        stmt = self._filter_all(select(calls_table), status, outcome)
        return await self._page(stmt, limit, offset)

    async def count_all(
        self, status: CallStatus | None = None, outcome: CallOutcome | None = None
    ) -> int:
        stmt = self._filter_all(
            select(func.count()).select_from(calls_table), status, outcome
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, call: Call) -> Call:
        """Save a call (create or update).

        Runs inside a savepoint: losing a slot to a concurrent booking
        raises here while the request transaction stays usable for the
        compensating credit.

        Raises:
            IntegrityError: If either participant already has a scheduled
                call at the same scheduled_at
        """
        call_dict = call_to_dict(call)
        existing = await self.find_by_id(call.id)

        async with self.session.begin_nested():
            if existing:
                stmt = (
                    update(calls_table)
                    .where(calls_table.c.id == call.id)
                    .values(**call_dict)
                )
            else:
                stmt = insert(calls_table).values(**call_dict)
            await self.session.execute(stmt)

        return call

    async def save_if_status(self, call: Call, expected_status: CallStatus) -> bool:
        """Compare-and-set update keyed on the stored status."""
        stmt = (
            update(calls_table)
            .where(
                and_(
                    calls_table.c.id == call.id,
                    calls_table.c.status == expected_status.value,
                )
            )
            .values(**call_to_dict(call))
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def _page(self, stmt: Select, limit: int, offset: int) -> list[Call]:
        stmt = (
            stmt.order_by(calls_table.c.scheduled_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_call(dict(row)) for row in result.mappings().all()]

    @staticmethod
    def _filter_participant(
        stmt: Select,
        account_id: AccountId,
        role: AccountRole,
        status: CallStatus | None,
        scheduled_after: datetime | None,
    ) -> Select:
        stmt = stmt.where(_participant_column(role) == account_id)
        if status:
            stmt = stmt.where(calls_table.c.status == status.value)
        if scheduled_after:
            stmt = stmt.where(calls_table.c.scheduled_at > scheduled_after)
        return stmt

    @staticmethod
    def _filter_all(
        stmt: Select, status: CallStatus | None, outcome: CallOutcome | None
    ) -> Select:
        if status:
            stmt = stmt.where(calls_table.c.status == status.value)
        if outcome:
            stmt = stmt.where(calls_table.c.outcome == outcome.value)
        return stmt
