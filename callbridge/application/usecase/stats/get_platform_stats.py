"""Platform stats use case."""

from callbridge.application.usecase.base import BaseUseCase
from callbridge.domain.model.stats import PlatformStats
from callbridge.domain.service import StatsService


class GetPlatformStatsUseCase(BaseUseCase[None, PlatformStats]):
    """Use case for the platform-wide rollup."""

    def __init__(self, stats_service: StatsService) -> None:
        self.stats_service = stats_service

    async def execute(self, request: None = None) -> PlatformStats:
        return await self.stats_service.platform()
