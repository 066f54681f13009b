"""Feedback domain service (post-call feedback recorder)."""

import logfire

from callbridge.domain.error import NotFoundError, ValidationError
from callbridge.domain.model import Call, CallFeedback
from callbridge.domain.repository import CallRepository
from callbridge.domain.value import AccountId, CallId, CallStatus, ensure_utc

from .account_service import AccountService
from .base import Clock, Service


class FeedbackService(Service):
    """Records feedback on completed calls.

    The requester may write rating, feedback, outcome, follow-up date and
    deal value; the responder only rating and feedback. Fields left unset
    in the payload are not touched.
    """

    def __init__(
        self,
        call_repository: CallRepository,
        account_service: AccountService,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(clock)
        self.call_repository = call_repository
        self.account_service = account_service

    async def submit(
        self, call_id: CallId, user_id: AccountId, feedback: CallFeedback
    ) -> Call:
        """Apply a participant's feedback to a completed call.

        Args:
            call_id: The call
            user_id: Participant submitting feedback
            feedback: Partial feedback payload

        Returns:
            Updated call

        Raises:
            NotFoundError: If the call does not exist, is not completed, or
                the user is not a participant
            ValidationError: If the user's role does not match their side
                of the call
        """
        with logfire.span(
            "feedback_service.submit", call_id=str(call_id), user_id=str(user_id)
        ):
            call = await self.call_repository.find_for_participant(call_id, user_id)
            if not call or call.status != CallStatus.COMPLETED:
                logfire.warn("No completed call for feedback", call_id=str(call_id))
                raise NotFoundError("Call", str(call_id))

            account = await self.account_service.get_by_id(user_id)
            if account.is_requester and call.requester_id == user_id:
                update = self._requester_update(feedback)
            elif account.is_responder and call.responder_id == user_id:
                update = self._responder_update(feedback)
            else:
                logfire.warn(
                    "Feedback role mismatch",
                    call_id=str(call_id),
                    role=account.role.value,
                )
                raise ValidationError("Account role cannot submit feedback for this call")

            update["updated_at"] = self.now()
            updated = call.model_copy(update=update)
            if not await self.call_repository.save_if_status(
                updated, CallStatus.COMPLETED
            ):
                raise NotFoundError("Call", str(call_id))

            logfire.info(
                "Feedback recorded",
                call_id=str(call_id),
                role=account.role.value,
                fields=sorted(k for k in update if k != "updated_at"),
            )
            return updated

    @staticmethod
    def _requester_update(feedback: CallFeedback) -> dict:
        update: dict = {}
        if feedback.rating is not None:
            update["requester_rating"] = feedback.rating
        if feedback.feedback is not None:
            update["requester_feedback"] = feedback.feedback
        if feedback.outcome is not None:
            update["outcome"] = feedback.outcome
        if feedback.follow_up_date is not None:
            update["follow_up_date"] = ensure_utc(feedback.follow_up_date)
        if feedback.deal_value is not None:
            update["deal_value"] = feedback.deal_value
        return update

    @staticmethod
    def _responder_update(feedback: CallFeedback) -> dict:
        update: dict = {}
        if feedback.rating is not None:
            update["responder_rating"] = feedback.rating
        if feedback.feedback is not None:
            update["responder_feedback"] = feedback.feedback
        return update
