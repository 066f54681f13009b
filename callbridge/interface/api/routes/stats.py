"""Stats routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header

from callbridge.application.usecase.stats import (
    GetDashboardRequest,
    GetDashboardUseCase,
    GetPlatformStatsUseCase,
)
from callbridge.domain.model.stats import Dashboard, PlatformStats
from callbridge.domain.service import JWTService
from callbridge.interface.api.auth import authenticate

router = APIRouter(prefix="/stats", tags=["stats"], route_class=DishkaRoute)


@router.get("/dashboard", response_model=Dashboard)
async def dashboard(
    dashboard_use_case: FromDishka[GetDashboardUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> Dashboard:
    """Dashboard of the current account."""
    principal = authenticate(jwt_service, auth_token, authorization)
    return await dashboard_use_case.execute(
        GetDashboardRequest(account_id=principal.account_id)
    )


@router.get("/platform", response_model=PlatformStats)
async def platform_stats(
    platform_stats_use_case: FromDishka[GetPlatformStatsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> PlatformStats:
    """Platform-wide rollup. Requires an authenticated caller."""
    authenticate(jwt_service, auth_token, authorization)
    return await platform_stats_use_case.execute()
