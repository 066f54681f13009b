"""Unit tests for the domain error to HTTP status mapping."""

import pytest

from callbridge.domain.error import (
    ConflictError,
    DomainError,
    ExpiredError,
    InvalidTransitionError,
    NotFoundError,
    QuotaExceededError,
    ValidationError,
)
from callbridge.interface.api.error_handlers import status_for


@pytest.mark.parametrize(
    "error,expected",
    [
        (ValidationError("bad"), 422),
        (NotFoundError("Call", "x"), 404),
        (ConflictError("taken"), 409),
        (InvalidTransitionError("scheduled", "completed"), 409),
        (QuotaExceededError("none left"), 403),
        (ExpiredError("late"), 410),
        (DomainError("unknown"), 500),
    ],
)
def test_status_for(error, expected):
    assert status_for(error) == expected
