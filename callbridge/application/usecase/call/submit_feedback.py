"""Submit call feedback use case."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from callbridge.application.usecase.base import BaseUseCase
from callbridge.application.usecase.common import CallItem
from callbridge.domain.error import ValidationError
from callbridge.domain.model import CallFeedback
from callbridge.domain.service import FeedbackService
from callbridge.domain.value import AccountId, CallId, CallOutcome


class SubmitFeedbackRequest(BaseModel):
    """Partial feedback payload; unset fields are left untouched."""

    call_id: str
    user_id: str
    rating: int | None = None
    feedback: str | None = None
    outcome: CallOutcome | None = None
    follow_up_date: datetime | None = None
    deal_value: Decimal | None = None


class SubmitFeedbackUseCase(BaseUseCase[SubmitFeedbackRequest, CallItem]):
    """Use case for recording feedback on a completed call."""

    def __init__(self, feedback_service: FeedbackService) -> None:
        self.feedback_service = feedback_service

    async def execute(self, request: SubmitFeedbackRequest) -> CallItem:
        """Execute submit feedback use case.

        Raises:
            ValidationError: If the payload is out of range or the role
                does not match the caller's side of the call
            NotFoundError: If the call is not completed or the caller is
                not a participant
        """
        try:
            feedback = CallFeedback(
                rating=request.rating,
                feedback=request.feedback,
                outcome=request.outcome,
                follow_up_date=request.follow_up_date,
                deal_value=request.deal_value,
            )
        except PydanticValidationError as e:
            raise ValidationError(str(e)) from e

        call = await self.feedback_service.submit(
            CallId(UUID(request.call_id)), AccountId(UUID(request.user_id)), feedback
        )
        return CallItem.from_domain(call)
