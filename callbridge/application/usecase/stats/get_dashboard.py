"""Dashboard use case."""

from uuid import UUID

from pydantic import BaseModel

from callbridge.application.usecase.base import BaseUseCase
from callbridge.domain.model.stats import Dashboard
from callbridge.domain.service import StatsService
from callbridge.domain.value import AccountId


class GetDashboardRequest(BaseModel):
    account_id: str


class GetDashboardUseCase(BaseUseCase[GetDashboardRequest, Dashboard]):
    """Use case for the current account's dashboard."""

    def __init__(self, stats_service: StatsService) -> None:
        self.stats_service = stats_service

    async def execute(self, request: GetDashboardRequest) -> Dashboard:
        return await self.stats_service.dashboard(AccountId(UUID(request.account_id)))
