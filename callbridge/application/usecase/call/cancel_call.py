"""Cancel call use case."""

from uuid import UUID

from pydantic import BaseModel

from callbridge.application.usecase.base import BaseUseCase
from callbridge.application.usecase.common import CallItem
from callbridge.domain.service import CallService
from callbridge.domain.value import AccountId, CallId


class CancelCallRequest(BaseModel):
    call_id: str
    user_id: str


class CancelCallResponse(BaseModel):
    """Cancelled call and refund outcome."""

    call: CallItem
    credit_refunded: bool


class CancelCallUseCase(BaseUseCase[CancelCallRequest, CancelCallResponse]):
    """Use case for cancelling a scheduled call."""

    def __init__(self, call_service: CallService) -> None:
        self.call_service = call_service

    async def execute(self, request: CancelCallRequest) -> CancelCallResponse:
        cancellation = await self.call_service.cancel(
            CallId(UUID(request.call_id)), AccountId(UUID(request.user_id))
        )
        return CancelCallResponse(
            call=CallItem.from_domain(cancellation.call),
            credit_refunded=cancellation.credit_refunded,
        )
