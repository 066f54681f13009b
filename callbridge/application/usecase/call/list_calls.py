"""List calls use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from callbridge.application.usecase.base import BaseUseCase
from callbridge.application.usecase.common import CallItem, PaginationItem
from callbridge.domain.error import ValidationError
from callbridge.domain.service import CallService
from callbridge.domain.value import AccountId, AccountRole, CallStatus


class ListCallsRequest(BaseModel):
    """Request for the current participant's calls."""

    user_id: str
    role: str
    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1)
    status: CallStatus | None = None
    upcoming: bool = False


class ListCallsResponse(BaseModel):
    """Page of calls."""

    calls: list[CallItem]
    pagination: PaginationItem


def parse_role(role: str) -> AccountRole:
    """Parse a principal's role.

    Raises:
        ValidationError: If the role is unknown
    """
    try:
        return AccountRole(role)
    except ValueError as e:
        raise ValidationError(f"Invalid role: {role}") from e


class ListCallsUseCase(BaseUseCase[ListCallsRequest, ListCallsResponse]):
    """Use case for listing calls, latest first."""

    def __init__(self, call_service: CallService) -> None:
        self.call_service = call_service

    async def execute(self, request: ListCallsRequest) -> ListCallsResponse:
        calls, pagination = await self.call_service.get_for_user(
            user_id=AccountId(UUID(request.user_id)),
            role=parse_role(request.role),
            page=request.page,
            limit=request.limit,
            status=request.status,
            upcoming=request.upcoming,
        )
        return ListCallsResponse(
            calls=[CallItem.from_domain(c) for c in calls],
            pagination=PaginationItem.from_domain(pagination),
        )
