"""Application layer DI providers."""

from dishka import Scope, provide

from callbridge.application.usecase.call import (
    CancelCallUseCase,
    GetCallStatsUseCase,
    GetCallUseCase,
    ListAllCallsUseCase,
    ListCallsUseCase,
    ScheduleCallUseCase,
    SubmitFeedbackUseCase,
    UpdateCallStatusUseCase,
)
from callbridge.application.usecase.invitation import (
    AcceptInvitationUseCase,
    CancelInvitationUseCase,
    CreateInvitationUseCase,
    GetInvitationStatsUseCase,
    GetInvitationUseCase,
    ListAllInvitationsUseCase,
    ListInvitationsUseCase,
    RejectInvitationUseCase,
)
from callbridge.application.usecase.stats import (
    GetDashboardUseCase,
    GetPlatformStatsUseCase,
)
from callbridge.config import Settings
from callbridge.domain.service import (
    CallService,
    FeedbackService,
    InvitationService,
    StatsService,
)
from callbridge.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Invitation use cases
    @provide(scope=Scope.REQUEST)
    def get_create_invitation_use_case(
        self, invitation_service: InvitationService, settings: Settings
    ) -> CreateInvitationUseCase:
        """Provide create invitation use case."""
        return CreateInvitationUseCase(
            invitation_service=invitation_service, settings=settings
        )

    @provide(scope=Scope.REQUEST)
    def get_list_invitations_use_case(
        self, invitation_service: InvitationService
    ) -> ListInvitationsUseCase:
        """Provide list invitations use case."""
        return ListInvitationsUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_list_all_invitations_use_case(
        self, invitation_service: InvitationService
    ) -> ListAllInvitationsUseCase:
        """Provide platform-wide list invitations use case."""
        return ListAllInvitationsUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_get_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> GetInvitationUseCase:
        """Provide get invitation use case."""
        return GetInvitationUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_accept_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> AcceptInvitationUseCase:
        """Provide accept invitation use case."""
        return AcceptInvitationUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_reject_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> RejectInvitationUseCase:
        """Provide reject invitation use case."""
        return RejectInvitationUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_cancel_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> CancelInvitationUseCase:
        """Provide cancel invitation use case."""
        return CancelInvitationUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_invitation_stats_use_case(
        self, invitation_service: InvitationService
    ) -> GetInvitationStatsUseCase:
        """Provide invitation stats use case."""
        return GetInvitationStatsUseCase(invitation_service=invitation_service)

    # Call use cases
    @provide(scope=Scope.REQUEST)
    def get_schedule_call_use_case(
        self, call_service: CallService
    ) -> ScheduleCallUseCase:
        """Provide schedule call use case."""
        return ScheduleCallUseCase(call_service=call_service)

    @provide(scope=Scope.REQUEST)
    def get_list_calls_use_case(self, call_service: CallService) -> ListCallsUseCase:
        """Provide list calls use case."""
        return ListCallsUseCase(call_service=call_service)

    @provide(scope=Scope.REQUEST)
    def get_list_all_calls_use_case(
        self, call_service: CallService
    ) -> ListAllCallsUseCase:
        """Provide platform-wide list calls use case."""
        return ListAllCallsUseCase(call_service=call_service)

    @provide(scope=Scope.REQUEST)
    def get_get_call_use_case(self, call_service: CallService) -> GetCallUseCase:
        """Provide get call use case."""
        return GetCallUseCase(call_service=call_service)

    @provide(scope=Scope.REQUEST)
    def get_update_call_status_use_case(
        self, call_service: CallService
    ) -> UpdateCallStatusUseCase:
        """Provide update call status use case."""
        return UpdateCallStatusUseCase(call_service=call_service)

    @provide(scope=Scope.REQUEST)
    def get_cancel_call_use_case(self, call_service: CallService) -> CancelCallUseCase:
        """Provide cancel call use case."""
        return CancelCallUseCase(call_service=call_service)

    @provide(scope=Scope.REQUEST)
    def get_call_stats_use_case(
        self, call_service: CallService
    ) -> GetCallStatsUseCase:
        """Provide call stats use case."""
        return GetCallStatsUseCase(call_service=call_service)

    @provide(scope=Scope.REQUEST)
    def get_submit_feedback_use_case(
        self, feedback_service: FeedbackService
    ) -> SubmitFeedbackUseCase:
        """Provide submit feedback use case."""
        return SubmitFeedbackUseCase(feedback_service=feedback_service)

    # Stats use cases
    @provide(scope=Scope.REQUEST)
    def get_dashboard_use_case(
        self, stats_service: StatsService
    ) -> GetDashboardUseCase:
        """Provide dashboard use case."""
        return GetDashboardUseCase(stats_service=stats_service)

    @provide(scope=Scope.REQUEST)
    def get_platform_stats_use_case(
        self, stats_service: StatsService
    ) -> GetPlatformStatsUseCase:
        """Provide platform stats use case."""
        return GetPlatformStatsUseCase(stats_service=stats_service)
