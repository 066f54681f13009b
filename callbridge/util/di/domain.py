"""Domain layer DI providers."""

from dishka import Scope, provide

from callbridge.config import AuthSettings, CallSettings, InvitationSettings
from callbridge.domain.repository import (
    AccountRepository,
    CallRepository,
    InvitationRepository,
)
from callbridge.domain.service import (
    AccountService,
    CallService,
    FeedbackService,
    InvitationService,
    JWTService,
    StatsService,
)
from callbridge.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_account_service(
        self, account_repository: AccountRepository
    ) -> AccountService:
        """Provide account domain service."""
        return AccountService(account_repository=account_repository)

    @provide
    def get_invitation_service(
        self,
        invitation_repository: InvitationRepository,
        account_service: AccountService,
        jwt_service: JWTService,
        settings: InvitationSettings,
    ) -> InvitationService:
        """Provide invitation domain service."""
        return InvitationService(
            invitation_repository=invitation_repository,
            account_service=account_service,
            jwt_service=jwt_service,
            settings=settings,
        )

    @provide
    def get_call_service(
        self,
        call_repository: CallRepository,
        account_service: AccountService,
        settings: CallSettings,
    ) -> CallService:
        """Provide call domain service."""
        return CallService(
            call_repository=call_repository,
            account_service=account_service,
            settings=settings,
        )

    @provide
    def get_feedback_service(
        self,
        call_repository: CallRepository,
        account_service: AccountService,
    ) -> FeedbackService:
        """Provide feedback domain service."""
        return FeedbackService(
            call_repository=call_repository,
            account_service=account_service,
        )

    @provide
    def get_stats_service(
        self,
        invitation_service: InvitationService,
        call_service: CallService,
        account_service: AccountService,
    ) -> StatsService:
        """Provide stats domain service."""
        return StatsService(
            invitation_service=invitation_service,
            call_service=call_service,
            account_service=account_service,
        )
