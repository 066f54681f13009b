"""Call domain service (the call scheduler)."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

from callbridge.config import CallSettings
from callbridge.domain.error import (
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    QuotaExceededError,
    ValidationError,
)
from callbridge.domain.model import Call
from callbridge.domain.model.call import can_transition
from callbridge.domain.model.stats import (
    CallStats,
    PlatformCallStats,
    percentage,
    rounded_rating,
)
from callbridge.domain.repository import CallRepository
from callbridge.domain.value import (
    AccountId,
    AccountRole,
    CallId,
    CallOutcome,
    CallStatus,
    ConnectionQuality,
    Pagination,
    calculate_pagination,
    ensure_utc,
    start_of_month,
)

from .account_service import AccountService
from .base import Clock, Service


@dataclass
class CallCancellation:
    """Cancelled call and whether its credit went back to the requester."""

    call: Call
    credit_refunded: bool


class CallService(Service):
    """Schedules calls and drives the call status state machine.

    Scheduling consumes one credit from the requester. The debit is a
    conditional update and slot uniqueness is a storage constraint, so
    neither can be raced past by concurrent requests.
    """

    def __init__(
        self,
        call_repository: CallRepository,
        account_service: AccountService,
        settings: CallSettings,
        clock: Clock | None = None,
    ) -> None:
        """Initialize call service.

        Args:
            call_repository: Call repository
            account_service: Account domain service
            settings: Call settings
            clock: Optional time source
        """
        super().__init__(clock)
        self.call_repository = call_repository
        self.account_service = account_service
        self.settings = settings

    async def schedule(
        self,
        requester_id: AccountId,
        responder_id: AccountId,
        scheduled_at: datetime,
        duration: int | None = None,
        notes: str | None = None,
        meeting_link: str | None = None,
    ) -> Call:
        """Schedule a call and consume one of the requester's credits.

        Args:
            requester_id: Requester booking the call
            responder_id: Responder being booked
            scheduled_at: Start of the call, must be in the future
            duration: Length in minutes (defaults from settings)
            notes: Optional notes (max 1000 chars)
            meeting_link: Optional meeting URL

        Returns:
            The scheduled call

        Raises:
            ValidationError: If either party is missing or has the wrong
                role, or scheduled_at is not in the future
            QuotaExceededError: If the requester has no credits left
            ConflictError: If either party already has a scheduled call at
                exactly scheduled_at
        """
        with logfire.span(
            "call_service.schedule",
            requester_id=str(requester_id),
            responder_id=str(responder_id),
        ):
            requester = await self.account_service.find_by_id(requester_id)
            if not requester or not requester.is_requester:
                logfire.warn("Schedule by non-requester", account_id=str(requester_id))
                raise ValidationError("Invalid requester")

            responder = await self.account_service.find_by_id(responder_id)
            if not responder or not responder.is_responder:
                logfire.warn("Schedule with non-responder", account_id=str(responder_id))
                raise ValidationError("Invalid responder")

            if requester.call_credits <= 0:
                logfire.warn("No call credits left", requester_id=str(requester_id))
                raise QuotaExceededError("Insufficient call credits")

            now = self.now()
            scheduled_at = ensure_utc(scheduled_at)
            if scheduled_at <= now:
                raise ValidationError("Call must be scheduled in the future")

            if await self.call_repository.exists_scheduled_conflict(
                requester_id, responder_id, scheduled_at
            ):
                logfire.warn(
                    "Time slot already booked",
                    requester_id=str(requester_id),
                    responder_id=str(responder_id),
                    scheduled_at=scheduled_at.isoformat(),
                )
                raise ConflictError("Time slot already booked")

            try:
                call = Call(
                    id=CallId(uuid4()),
                    requester_id=requester_id,
                    responder_id=responder_id,
                    scheduled_at=scheduled_at,
                    duration=(
                        self.settings.default_duration_minutes
                        if duration is None
                        else duration
                    ),
                    status=CallStatus.SCHEDULED,
                    notes=notes,
                    meeting_link=meeting_link,
                    created_at=now,
                    updated_at=now,
                )
            except PydanticValidationError as e:
                raise ValidationError(str(e)) from e

            await self.account_service.debit(requester_id)
            try:
                saved = await self.call_repository.save(call)
            except IntegrityError:
                # Lost the slot to a concurrent booking
                await self.account_service.credit(requester_id)
                logfire.warn(
                    "Time slot taken on save",
                    requester_id=str(requester_id),
                    scheduled_at=scheduled_at.isoformat(),
                )
                raise ConflictError("Time slot already booked")

            logfire.info(
                "Call scheduled",
                call_id=str(saved.id),
                requester_id=str(requester_id),
                responder_id=str(responder_id),
                scheduled_at=scheduled_at.isoformat(),
            )
            return saved

    async def get_by_id(self, call_id: CallId, user_id: AccountId) -> Call:
        """Get a call the user takes part in.

        Raises:
            NotFoundError: If the call does not exist or the user is not a
                participant
        """
        with logfire.span(
            "call_service.get_by_id", call_id=str(call_id), user_id=str(user_id)
        ):
            call = await self.call_repository.find_for_participant(call_id, user_id)
            if not call:
                logfire.warn("Call not found for user", call_id=str(call_id))
                raise NotFoundError("Call", str(call_id))
            return call

    async def get_for_user(
        self,
        user_id: AccountId,
        role: AccountRole,
        page: int = 1,
        limit: int | None = None,
        status: CallStatus | None = None,
        upcoming: bool = False,
    ) -> tuple[list[Call], Pagination]:
        """List a participant's calls, latest scheduled_at first.

        Args:
            user_id: The participant
            role: Side of the call the participant is on
            page: 1-based page number
            limit: Page size (capped at the configured maximum)
            status: Optional status filter
            upcoming: Only scheduled calls starting after now

        Returns:
            Calls on the page and pagination metadata
        """
        limit = min(
            limit or self.settings.default_page_size, self.settings.max_page_size
        )
        with logfire.span(
            "call_service.get_for_user",
            user_id=str(user_id),
            role=role.value,
            page=page,
            limit=limit,
            upcoming=upcoming,
        ):
            scheduled_after = None
            if upcoming:
                scheduled_after = self.now()
                status = CallStatus.SCHEDULED

            total = await self.call_repository.count_by_participant(
                user_id, role, status=status, scheduled_after=scheduled_after
            )
            pagination = calculate_pagination(page, limit, total)
            calls = await self.call_repository.find_by_participant(
                user_id,
                role,
                status=status,
                scheduled_after=scheduled_after,
                limit=limit,
                offset=pagination.offset,
            )
            return calls, pagination

    async def list_all(
        self,
        page: int = 1,
        limit: int | None = None,
        status: CallStatus | None = None,
        outcome: CallOutcome | None = None,
    ) -> tuple[list[Call], Pagination]:
        """List calls across the platform, latest scheduled_at first."""
        limit = min(
            limit or self.settings.default_page_size, self.settings.max_page_size
        )
        with logfire.span("call_service.list_all", page=page, limit=limit):
            total = await self.call_repository.count_all(status, outcome)
            pagination = calculate_pagination(page, limit, total)
            calls = await self.call_repository.find_all(
                status=status, outcome=outcome, limit=limit, offset=pagination.offset
            )
            return calls, pagination

    async def update_status(
        self,
        call_id: CallId,
        user_id: AccountId,
        status: CallStatus,
        actual_start_time: datetime | None = None,
        actual_end_time: datetime | None = None,
        connection_quality: ConnectionQuality | None = None,
    ) -> Call:
        """Move a call along the status state machine.

        Args:
            call_id: Call to update
            user_id: Participant performing the update
            status: Target status
            actual_start_time: Optional actual start time
            actual_end_time: Optional actual end time
            connection_quality: Optional connection quality

        Returns:
            Updated call

        Raises:
            NotFoundError: If the call does not exist or the user is not a
                participant
            InvalidTransitionError: If the transition is not allowed; the
                stored call is left unchanged
        """
        with logfire.span(
            "call_service.update_status",
            call_id=str(call_id),
            user_id=str(user_id),
            status=status.value,
        ):
            call = await self.get_by_id(call_id, user_id)
            if not can_transition(call.status, status):
                logfire.warn(
                    "Invalid call status transition",
                    call_id=str(call_id),
                    from_status=call.status.value,
                    to_status=status.value,
                )
                raise InvalidTransitionError(call.status.value, status.value)

            update: dict = {"status": status, "updated_at": self.now()}
            if actual_start_time is not None:
                update["actual_start_time"] = ensure_utc(actual_start_time)
            if actual_end_time is not None:
                update["actual_end_time"] = ensure_utc(actual_end_time)
            if connection_quality is not None:
                update["connection_quality"] = connection_quality
            updated = call.model_copy(update=update)

            if not await self.call_repository.save_if_status(updated, call.status):
                current = await self.get_by_id(call_id, user_id)
                logfire.warn(
                    "Call status changed concurrently",
                    call_id=str(call_id),
                    current_status=current.status.value,
                )
                raise InvalidTransitionError(current.status.value, status.value)

            logfire.info(
                "Call status updated",
                call_id=str(call_id),
                from_status=call.status.value,
                to_status=status.value,
            )
            return updated

    async def cancel(self, call_id: CallId, user_id: AccountId) -> CallCancellation:
        """Cancel a scheduled call, refunding the credit on enough notice.

        Raises:
            NotFoundError: If the call does not exist, the user is not a
                participant, or the call is no longer scheduled
        """
        with logfire.span(
            "call_service.cancel", call_id=str(call_id), user_id=str(user_id)
        ):
            call = await self.call_repository.find_for_participant(call_id, user_id)
            if not call or call.status != CallStatus.SCHEDULED:
                logfire.warn("Call cannot be cancelled", call_id=str(call_id))
                raise NotFoundError("Call", str(call_id))

            now = self.now()
            cancelled = call.model_copy(
                update={"status": CallStatus.CANCELLED, "updated_at": now}
            )
            if not await self.call_repository.save_if_status(
                cancelled, CallStatus.SCHEDULED
            ):
                raise NotFoundError("Call", str(call_id))

            notice = ensure_utc(call.scheduled_at) - now
            refund = notice >= timedelta(hours=self.settings.refund_notice_hours)
            if refund:
                await self.account_service.credit(call.requester_id)

            logfire.info(
                "Call cancelled",
                call_id=str(call_id),
                notice_hours=round(notice.total_seconds() / 3600, 1),
                credit_refunded=refund,
            )
            return CallCancellation(call=cancelled, credit_refunded=refund)

    async def stats(self, user_id: AccountId, role: AccountRole) -> CallStats:
        """Call statistics for one participant.

        The average rating is the one given by the counterparty.
        """
        with logfire.span(
            "call_service.stats", user_id=str(user_id), role=role.value
        ):
            now = self.now()
            by_status = await self.call_repository.count_by_status(user_id, role)
            total = sum(by_status.values())
            completed = by_status.get(CallStatus.COMPLETED, 0)
            upcoming = await self.call_repository.count_by_participant(
                user_id, role, status=CallStatus.SCHEDULED, scheduled_after=now
            )
            monthly = await self.call_repository.count_by_participant(
                user_id, role, created_since=start_of_month(now)
            )
            counterparty = (
                AccountRole.RESPONDER
                if role == AccountRole.REQUESTER
                else AccountRole.REQUESTER
            )
            mean = await self.call_repository.average_rating(
                counterparty, account_id=user_id, role=role
            )
            return CallStats(
                total=total,
                completed=completed,
                cancelled=by_status.get(CallStatus.CANCELLED, 0),
                no_show=by_status.get(CallStatus.NO_SHOW, 0),
                upcoming=upcoming,
                monthly=monthly,
                average_rating=rounded_rating(mean),
                completion_rate=percentage(completed, total),
            )

    async def platform_stats(self) -> PlatformCallStats:
        """Call rollup across all accounts."""
        with logfire.span("call_service.platform_stats"):
            by_status = await self.call_repository.count_by_status()
            total = sum(by_status.values())
            completed = by_status.get(CallStatus.COMPLETED, 0)
            outcomes = await self.call_repository.count_by_outcome()
            closed = await self.call_repository.sum_deal_value(CallOutcome.CLOSED_DEAL)
            requester_mean = await self.call_repository.average_rating(
                AccountRole.REQUESTER
            )
            responder_mean = await self.call_repository.average_rating(
                AccountRole.RESPONDER
            )
            return PlatformCallStats(
                total=total,
                by_status=by_status,
                completion_rate=percentage(completed, total),
                outcomes=outcomes,
                closed_deal_value=closed,
                average_requester_rating=rounded_rating(requester_mean),
                average_responder_rating=rounded_rating(responder_mean),
            )
