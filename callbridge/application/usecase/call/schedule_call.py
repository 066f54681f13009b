"""Schedule call use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from callbridge.application.usecase.base import BaseUseCase
from callbridge.application.usecase.common import CallItem
from callbridge.domain.service import CallService
from callbridge.domain.value import AccountId


class ScheduleCallRequest(BaseModel):
    """Request to book a call with a responder."""

    requester_id: str
    responder_id: str
    scheduled_at: datetime
    duration: int | None = None
    notes: str | None = None
    meeting_link: str | None = None


class ScheduleCallUseCase(BaseUseCase[ScheduleCallRequest, CallItem]):
    """Use case for scheduling a call, consuming one credit."""

    def __init__(self, call_service: CallService) -> None:
        self.call_service = call_service

    async def execute(self, request: ScheduleCallRequest) -> CallItem:
        """Execute schedule call use case.

        Raises:
            ValidationError: If a party is invalid or the time is in the past
            QuotaExceededError: If the requester has no credits left
            ConflictError: If the slot is already booked
        """
        call = await self.call_service.schedule(
            requester_id=AccountId(UUID(request.requester_id)),
            responder_id=AccountId(UUID(request.responder_id)),
            scheduled_at=request.scheduled_at,
            duration=request.duration,
            notes=request.notes,
            meeting_link=request.meeting_link,
        )
        return CallItem.from_domain(call)
