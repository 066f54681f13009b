"""Call use cases."""

from callbridge.application.usecase.call.call_stats import (
    GetCallStatsRequest,
    GetCallStatsUseCase,
)
from callbridge.application.usecase.call.cancel_call import (
    CancelCallRequest,
    CancelCallResponse,
    CancelCallUseCase,
)
from callbridge.application.usecase.call.get_call import GetCallRequest, GetCallUseCase
from callbridge.application.usecase.call.list_all_calls import (
    ListAllCallsRequest,
    ListAllCallsUseCase,
)
from callbridge.application.usecase.call.list_calls import (
    ListCallsRequest,
    ListCallsResponse,
    ListCallsUseCase,
)
from callbridge.application.usecase.call.schedule_call import (
    ScheduleCallRequest,
    ScheduleCallUseCase,
)
from callbridge.application.usecase.call.submit_feedback import (
    SubmitFeedbackRequest,
    SubmitFeedbackUseCase,
)
from callbridge.application.usecase.call.update_call_status import (
    UpdateCallStatusRequest,
    UpdateCallStatusUseCase,
)

__all__ = [
    "CancelCallRequest",
    "CancelCallResponse",
    "CancelCallUseCase",
    "GetCallRequest",
    "GetCallStatsRequest",
    "GetCallStatsUseCase",
    "GetCallUseCase",
    "ListAllCallsRequest",
    "ListAllCallsUseCase",
    "ListCallsRequest",
    "ListCallsResponse",
    "ListCallsUseCase",
    "ScheduleCallRequest",
    "ScheduleCallUseCase",
    "SubmitFeedbackRequest",
    "SubmitFeedbackUseCase",
    "UpdateCallStatusRequest",
    "UpdateCallStatusUseCase",
]
