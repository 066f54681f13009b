"""Call routes."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query, status
from pydantic import BaseModel

from callbridge.application.usecase.call import (
    CancelCallRequest,
    CancelCallResponse,
    CancelCallUseCase,
    GetCallRequest,
    GetCallStatsRequest,
    GetCallStatsUseCase,
    GetCallUseCase,
    ListAllCallsRequest,
    ListAllCallsUseCase,
    ListCallsRequest,
    ListCallsResponse,
    ListCallsUseCase,
    ScheduleCallRequest,
    ScheduleCallUseCase,
    SubmitFeedbackRequest,
    SubmitFeedbackUseCase,
    UpdateCallStatusRequest,
    UpdateCallStatusUseCase,
)
from callbridge.application.usecase.common import CallItem
from callbridge.domain.model.stats import CallStats
from callbridge.domain.service import JWTService
from callbridge.domain.value import CallOutcome, CallStatus, ConnectionQuality
from callbridge.interface.api.auth import authenticate

router = APIRouter(prefix="/calls", tags=["calls"], route_class=DishkaRoute)


class ScheduleCallAPIRequest(BaseModel):
    """API request for scheduling a call."""

    responder_id: UUID
    scheduled_at: datetime
    duration: int | None = None
    notes: str | None = None
    meeting_link: str | None = None


class UpdateCallStatusAPIRequest(BaseModel):
    """API request for a status change."""

    status: CallStatus
    actual_start_time: datetime | None = None
    actual_end_time: datetime | None = None
    connection_quality: ConnectionQuality | None = None


class SubmitFeedbackAPIRequest(BaseModel):
    """API request for post-call feedback. Every field is optional."""

    rating: int | None = None
    feedback: str | None = None
    outcome: CallOutcome | None = None
    follow_up_date: datetime | None = None
    deal_value: Decimal | None = None


@router.post("", response_model=CallItem, status_code=status.HTTP_201_CREATED)
async def schedule_call(
    request: ScheduleCallAPIRequest,
    schedule_call_use_case: FromDishka[ScheduleCallUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CallItem:
    """Schedule a call with a responder, consuming one credit."""
    principal = authenticate(jwt_service, auth_token, authorization)
    return await schedule_call_use_case.execute(
        ScheduleCallRequest(
            requester_id=principal.account_id,
            responder_id=str(request.responder_id),
            scheduled_at=request.scheduled_at,
            duration=request.duration,
            notes=request.notes,
            meeting_link=request.meeting_link,
        )
    )


@router.get("", response_model=ListCallsResponse)
async def list_calls(
    list_calls_use_case: FromDishka[ListCallsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
    status_filter: CallStatus | None = Query(default=None, alias="status"),
    upcoming: bool = Query(default=False),
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1, le=100),
) -> ListCallsResponse:
    """List the current participant's calls, latest first."""
    principal = authenticate(jwt_service, auth_token, authorization)
    return await list_calls_use_case.execute(
        ListCallsRequest(
            user_id=principal.account_id,
            role=principal.role,
            page=page,
            limit=limit,
            status=status_filter,
            upcoming=upcoming,
        )
    )


@router.get("/all", response_model=ListCallsResponse)
async def list_all_calls(
    list_all_calls_use_case: FromDishka[ListAllCallsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
    status_filter: CallStatus | None = Query(default=None, alias="status"),
    outcome: CallOutcome | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1, le=100),
) -> ListCallsResponse:
    """List calls across the platform. Requires an authenticated caller."""
    authenticate(jwt_service, auth_token, authorization)
    return await list_all_calls_use_case.execute(
        ListAllCallsRequest(
            page=page, limit=limit, status=status_filter, outcome=outcome
        )
    )

@router.get("/stats", response_model=CallStats)
async def call_stats(
    call_stats_use_case: FromDishka[GetCallStatsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CallStats:
    """Call statistics of the current participant."""
    principal = authenticate(jwt_service, auth_token, authorization)
    return await call_stats_use_case.execute(
        GetCallStatsRequest(user_id=principal.account_id, role=principal.role)
    )


@router.get("/{call_id}", response_model=CallItem)
async def get_call(
    call_id: UUID,
    get_call_use_case: FromDishka[GetCallUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CallItem:
    """Get a call the current account takes part in."""
    principal = authenticate(jwt_service, auth_token, authorization)
    return await get_call_use_case.execute(
        GetCallRequest(call_id=str(call_id), user_id=principal.account_id)
    )


@router.patch("/{call_id}/status", response_model=CallItem)
async def update_call_status(
    call_id: UUID,
    request: UpdateCallStatusAPIRequest,
    update_call_status_use_case: FromDishka[UpdateCallStatusUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CallItem:
    """Move a call along its status state machine."""
    principal = authenticate(jwt_service, auth_token, authorization)
    return await update_call_status_use_case.execute(
        UpdateCallStatusRequest(
            call_id=str(call_id),
            user_id=principal.account_id,
            status=request.status,
            actual_start_time=request.actual_start_time,
            actual_end_time=request.actual_end_time,
            connection_quality=request.connection_quality,
        )
    )


@router.post("/{call_id}/cancel", response_model=CancelCallResponse)
async def cancel_call(
    call_id: UUID,
    cancel_call_use_case: FromDishka[CancelCallUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CancelCallResponse:
    """Cancel a scheduled call; the credit is refunded on enough notice."""
    principal = authenticate(jwt_service, auth_token, authorization)
    return await cancel_call_use_case.execute(
        CancelCallRequest(call_id=str(call_id), user_id=principal.account_id)
    )


@router.post("/{call_id}/feedback", response_model=CallItem)
async def submit_feedback(
    call_id: UUID,
    request: SubmitFeedbackAPIRequest,
    submit_feedback_use_case: FromDishka[SubmitFeedbackUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CallItem:
    """Record feedback on a completed call."""
    principal = authenticate(jwt_service, auth_token, authorization)
    return await submit_feedback_use_case.execute(
        SubmitFeedbackRequest(
            call_id=str(call_id),
            user_id=principal.account_id,
            **request.model_dump(),
        )
    )
