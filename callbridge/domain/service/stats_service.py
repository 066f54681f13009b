"""Stats domain service (read-side rollups)."""

import logfire

from callbridge.domain.model.stats import Dashboard, PlatformStats
from callbridge.domain.value import AccountId

from .account_service import AccountService
from .call_service import CallService
from .invitation_service import InvitationService


class StatsService:
    """Composes invitation and call statistics. Holds no state."""

    def __init__(
        self,
        invitation_service: InvitationService,
        call_service: CallService,
        account_service: AccountService,
    ) -> None:
        self.invitation_service = invitation_service
        self.call_service = call_service
        self.account_service = account_service

    async def dashboard(self, account_id: AccountId) -> Dashboard:
        """Dashboard for one account.

        Invitation figures are only present for requesters.

        Raises:
            NotFoundError: If the account does not exist
        """
        with logfire.span("stats_service.dashboard", account_id=str(account_id)):
            account = await self.account_service.get_by_id(account_id)
            calls = await self.call_service.stats(account.id, account.role)

            if not account.is_requester:
                return Dashboard(
                    account_id=account.id,
                    role=account.role,
                    call_credits=account.call_credits,
                    calls=calls,
                )

            return Dashboard(
                account_id=account.id,
                role=account.role,
                call_credits=account.call_credits,
                calls=calls,
                invitations=await self.invitation_service.stats(account.id),
                remaining_monthly_invitations=(
                    await self.invitation_service.remaining_monthly_quota(account)
                ),
            )

    async def platform(self) -> PlatformStats:
        """Platform-wide rollup."""
        with logfire.span("stats_service.platform"):
            return PlatformStats(
                invitations=await self.invitation_service.platform_stats(),
                calls=await self.call_service.platform_stats(),
            )
