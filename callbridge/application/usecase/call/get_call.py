"""Get call use case."""

from uuid import UUID

from pydantic import BaseModel

from callbridge.application.usecase.base import BaseUseCase
from callbridge.application.usecase.common import CallItem
from callbridge.domain.service import CallService
from callbridge.domain.value import AccountId, CallId


class GetCallRequest(BaseModel):
    call_id: str
    user_id: str


class GetCallUseCase(BaseUseCase[GetCallRequest, CallItem]):
    """Use case for reading one call as a participant."""

    def __init__(self, call_service: CallService) -> None:
        self.call_service = call_service

    async def execute(self, request: GetCallRequest) -> CallItem:
        call = await self.call_service.get_by_id(
            CallId(UUID(request.call_id)), AccountId(UUID(request.user_id))
        )
        return CallItem.from_domain(call)
