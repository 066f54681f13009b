"""Stats use cases."""

from callbridge.application.usecase.stats.get_dashboard import (
    GetDashboardRequest,
    GetDashboardUseCase,
)
from callbridge.application.usecase.stats.get_platform_stats import (
    GetPlatformStatsUseCase,
)

__all__ = [
    "GetDashboardRequest",
    "GetDashboardUseCase",
    "GetPlatformStatsUseCase",
]
