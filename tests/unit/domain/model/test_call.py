"""Unit tests for the call state machine and derived values."""

from datetime import timedelta
from uuid import uuid4

import pytest

from callbridge.domain.model.call import (
    actual_duration,
    average_rating,
    can_transition,
)
from callbridge.domain.value import AccountId, CallStatus, utc_now
from tests.conftest import make_call


def _call(**kwargs):
    return make_call(AccountId(uuid4()), AccountId(uuid4()), **kwargs)


class TestCanTransition:
    """The transition table, edge by edge."""

    @pytest.mark.parametrize(
        "from_status,to_status",
        [
            (CallStatus.SCHEDULED, CallStatus.IN_PROGRESS),
            (CallStatus.SCHEDULED, CallStatus.CANCELLED),
            (CallStatus.SCHEDULED, CallStatus.NO_SHOW),
            (CallStatus.IN_PROGRESS, CallStatus.COMPLETED),
        ],
    )
    def test_allowed(self, from_status, to_status):
        assert can_transition(from_status, to_status)

    @pytest.mark.parametrize(
        "from_status,to_status",
        [
            (CallStatus.SCHEDULED, CallStatus.COMPLETED),
            (CallStatus.SCHEDULED, CallStatus.SCHEDULED),
            (CallStatus.IN_PROGRESS, CallStatus.CANCELLED),
            (CallStatus.IN_PROGRESS, CallStatus.NO_SHOW),
            (CallStatus.COMPLETED, CallStatus.IN_PROGRESS),
            (CallStatus.CANCELLED, CallStatus.SCHEDULED),
            (CallStatus.NO_SHOW, CallStatus.COMPLETED),
        ],
    )
    def test_refused(self, from_status, to_status):
        assert not can_transition(from_status, to_status)


class TestDerivedValues:
    """Pure helpers computed from a call."""

    def test_actual_duration_rounds_to_minutes(self):
        start = utc_now()
        call = _call().model_copy(
            update={
                "actual_start_time": start,
                "actual_end_time": start + timedelta(minutes=44, seconds=40),
            }
        )

        assert actual_duration(call) == 45

    def test_actual_duration_needs_both_ends(self):
        call = _call().model_copy(update={"actual_start_time": utc_now()})

        assert actual_duration(call) is None

    def test_average_rating_needs_both_ratings(self):
        assert average_rating(_call(requester_rating=4, responder_rating=5)) == 4.5
        assert average_rating(_call(requester_rating=4)) is None

    def test_participants(self):
        call = _call()

        assert call.is_participant(call.requester_id)
        assert call.is_participant(call.responder_id)
        assert not call.is_participant(AccountId(uuid4()))
