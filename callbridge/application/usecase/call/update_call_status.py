"""Update call status use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from callbridge.application.usecase.base import BaseUseCase
from callbridge.application.usecase.common import CallItem
from callbridge.domain.service import CallService
from callbridge.domain.value import AccountId, CallId, CallStatus, ConnectionQuality


class UpdateCallStatusRequest(BaseModel):
    """Request to move a call along its state machine."""

    call_id: str
    user_id: str
    status: CallStatus
    actual_start_time: datetime | None = None
    actual_end_time: datetime | None = None
    connection_quality: ConnectionQuality | None = None


class UpdateCallStatusUseCase(BaseUseCase[UpdateCallStatusRequest, CallItem]):
    """Use case for changing a call's status."""

    def __init__(self, call_service: CallService) -> None:
        self.call_service = call_service

    async def execute(self, request: UpdateCallStatusRequest) -> CallItem:
        """Execute update call status use case.

        Raises:
            NotFoundError: If the call is missing or the user is not a participant
            InvalidTransitionError: If the transition is not allowed
        """
        call = await self.call_service.update_status(
            call_id=CallId(UUID(request.call_id)),
            user_id=AccountId(UUID(request.user_id)),
            status=request.status,
            actual_start_time=request.actual_start_time,
            actual_end_time=request.actual_end_time,
            connection_quality=request.connection_quality,
        )
        return CallItem.from_domain(call)
