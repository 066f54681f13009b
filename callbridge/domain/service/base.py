"""Base service class for domain services."""

from datetime import datetime
from typing import Callable

from callbridge.domain.value import utc_now

Clock = Callable[[], datetime]


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates. They hold
    no state of their own beyond injected collaborators.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or utc_now

    def now(self) -> datetime:
        """Current time according to the injected clock."""
        return self._clock()
