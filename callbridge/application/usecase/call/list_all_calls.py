"""List all calls use case (platform-wide)."""

from pydantic import BaseModel, Field

from callbridge.application.usecase.base import BaseUseCase
from callbridge.application.usecase.call.list_calls import ListCallsResponse
from callbridge.application.usecase.common import CallItem, PaginationItem
from callbridge.domain.service import CallService
from callbridge.domain.value import CallOutcome, CallStatus


class ListAllCallsRequest(BaseModel):
    """Filters for the platform-wide call listing."""

    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1)
    status: CallStatus | None = None
    outcome: CallOutcome | None = None


class ListAllCallsUseCase(BaseUseCase[ListAllCallsRequest, ListCallsResponse]):
    """Use case for listing every call, latest first."""

    def __init__(self, call_service: CallService) -> None:
        self.call_service = call_service

    async def execute(self, request: ListAllCallsRequest) -> ListCallsResponse:
        calls, pagination = await self.call_service.list_all(
            page=request.page,
            limit=request.limit,
            status=request.status,
            outcome=request.outcome,
        )
        return ListCallsResponse(
            calls=[CallItem.from_domain(c) for c in calls],
            pagination=PaginationItem.from_domain(pagination),
        )
