"""In-memory call repository for testing."""

from datetime import datetime
from decimal import Decimal
from statistics import mean
from typing import Optional

from sqlalchemy.exc import IntegrityError

from callbridge.domain.model import Call
from callbridge.domain.repository.call import CallRepository
from callbridge.domain.value import (
    AccountId,
    AccountRole,
    CallId,
    CallOutcome,
    CallStatus,
    ensure_utc,
)


def _participant(call: Call, role: AccountRole) -> AccountId:
    return call.requester_id if role == AccountRole.REQUESTER else call.responder_id


class InMemoryCallRepository(CallRepository):
    """In-memory implementation of CallRepository for testing.

    Mirrors the partial unique indexes on scheduled slots.
    """

    def __init__(self) -> None:
        self._calls: dict[CallId, Call] = {}

    async def find_by_id(self, call_id: CallId) -> Optional[Call]:
        return self._calls.get(call_id)

    async def find_for_participant(
        self, call_id: CallId, account_id: AccountId
    ) -> Optional[Call]:
        call = self._calls.get(call_id)
        if call and call.is_participant(account_id):
            return call
        return None

    async def exists_scheduled_conflict(
        self,
        requester_id: AccountId,
        responder_id: AccountId,
        scheduled_at: datetime,
    ) -> bool:
        return any(
            self._same_slot(call, scheduled_at)
            and (call.requester_id == requester_id or call.responder_id == responder_id)
            for call in self._calls.values()
        )

    async def find_by_participant(
        self,
        account_id: AccountId,
        role: AccountRole,
        status: CallStatus | None = None,
        scheduled_after: datetime | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Call]:
        matching = self._filter_participant(account_id, role, status, scheduled_after)
        return self._page(matching, limit, offset)

    async def count_by_participant(
        self,
        account_id: AccountId,
        role: AccountRole,
        status: CallStatus | None = None,
        scheduled_after: datetime | None = None,
        created_since: datetime | None = None,
    ) -> int:
        return sum(
            1
            for call in self._filter_participant(
                account_id, role, status, scheduled_after
            )
            if created_since is None
            or ensure_utc(call.created_at) >= ensure_utc(created_since)
        )

    async def count_by_status(
        self,
        account_id: AccountId | None = None,
        role: AccountRole | None = None,
    ) -> dict[CallStatus, int]:
        counts = {status: 0 for status in CallStatus}
        for call in self._calls.values():
            if account_id and role and _participant(call, role) != account_id:
                continue
            counts[call.status] += 1
        return counts

    async def count_by_outcome(self) -> dict[CallOutcome, int]:
        counts = {outcome: 0 for outcome in CallOutcome}
        for call in self._calls.values():
            if call.status == CallStatus.COMPLETED:
                counts[call.outcome] += 1
        return counts

    async def sum_deal_value(self, outcome: CallOutcome) -> Decimal:
        return sum(
            (
                call.deal_value
                for call in self._calls.values()
                if call.status == CallStatus.COMPLETED
                and call.outcome == outcome
                and call.deal_value is not None
            ),
            Decimal("0"),
        )

    async def average_rating(
        self,
        rated_by: AccountRole,
        account_id: AccountId | None = None,
        role: AccountRole | None = None,
    ) -> float | None:
        ratings = []
        for call in self._calls.values():
            if call.status != CallStatus.COMPLETED:
                continue
            if account_id and role and _participant(call, role) != account_id:
                continue
            rating = (
                call.requester_rating
                if rated_by == AccountRole.REQUESTER
                else call.responder_rating
            )
            if rating is not None:
                ratings.append(rating)
        return mean(ratings) if ratings else None

    async def find_all(
        self,
        status: CallStatus | None = None,
        outcome: CallOutcome | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Call]:
        return self._page(self._filter_all(status, outcome), limit, offset)

    async def count_all(
        self, status: CallStatus | None = None, outcome: CallOutcome | None = None
    ) -> int:
        return len(self._filter_all(status, outcome))

    async def save(self, call: Call) -> Call:
        """Save a call (create or update).

        Raises:
            IntegrityError: If either participant already has a scheduled
                call at the same scheduled_at
        """
        self._check_slot(call)
        self._calls[call.id] = call
        return call

    async def save_if_status(self, call: Call, expected_status: CallStatus) -> bool:
        existing = self._calls.get(call.id)
        if not existing or existing.status != expected_status:
            return False
        self._check_slot(call)
        self._calls[call.id] = call
        return True

    def _check_slot(self, call: Call) -> None:
        if call.status != CallStatus.SCHEDULED:
            return
        for other in self._calls.values():
            if other.id == call.id or not self._same_slot(other, call.scheduled_at):
                continue
            if (
                other.requester_id == call.requester_id
                or other.responder_id == call.responder_id
            ):
                raise IntegrityError("Scheduled slot already taken", None, Exception())

    @staticmethod
    def _same_slot(call: Call, scheduled_at: datetime) -> bool:
        return call.status == CallStatus.SCHEDULED and ensure_utc(
            call.scheduled_at
        ) == ensure_utc(scheduled_at)

    def _filter_participant(
        self,
        account_id: AccountId,
        role: AccountRole,
        status: CallStatus | None,
        scheduled_after: datetime | None,
    ) -> list[Call]:
        return [
            call
            for call in self._calls.values()
            if _participant(call, role) == account_id
            and (status is None or call.status == status)
            and (
                scheduled_after is None
                or ensure_utc(call.scheduled_at) > ensure_utc(scheduled_after)
            )
        ]

    def _filter_all(
        self, status: CallStatus | None, outcome: CallOutcome | None
    ) -> list[Call]:
        return [
            call
            for call in self._calls.values()
            if (status is None or call.status == status)
            and (outcome is None or call.outcome == outcome)
        ]

    @staticmethod
    def _page(calls: list[Call], limit: int, offset: int) -> list[Call]:
        ordered = sorted(calls, key=lambda c: ensure_utc(c.scheduled_at), reverse=True)
        return ordered[offset : offset + limit]
