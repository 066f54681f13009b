"""Domain model entities for Call Bridge."""

from callbridge.domain.model.account import Account
from callbridge.domain.model.call import CALL_STATUS_TRANSITIONS, Call, CallFeedback
from callbridge.domain.model.invitation import Invitation

__all__ = [
    "Account",
    "Invitation",
    "Call",
    "CallFeedback",
    "CALL_STATUS_TRANSITIONS",
]
