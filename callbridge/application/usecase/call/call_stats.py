"""Call stats use case."""

from uuid import UUID

from pydantic import BaseModel

from callbridge.application.usecase.base import BaseUseCase
from callbridge.application.usecase.call.list_calls import parse_role
from callbridge.domain.model.stats import CallStats
from callbridge.domain.service import CallService
from callbridge.domain.value import AccountId


class GetCallStatsRequest(BaseModel):
    user_id: str
    role: str


class GetCallStatsUseCase(BaseUseCase[GetCallStatsRequest, CallStats]):
    """Use case for the current participant's call statistics."""

    def __init__(self, call_service: CallService) -> None:
        self.call_service = call_service

    async def execute(self, request: GetCallStatsRequest) -> CallStats:
        return await self.call_service.stats(
            AccountId(UUID(request.user_id)), parse_role(request.role)
        )
