"""Domain layer errors.

Errors are raised at the point of detection and surfaced unchanged to
the caller. NotFoundError doubles as the access-denied error so that the
existence of a record is never revealed to non-participants.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Malformed input or role mismatch."""

    pass


class NotFoundError(DomainError):
    """Raised when a resource is missing or the caller may not see it."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """State-machine violation, scheduling conflict or duplicate record."""

    pass


class InvalidTransitionError(ConflictError):
    """Raised when a call status change is not in the transition table."""

    def __init__(self, from_status: str, to_status: str):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(f"Cannot change status from {from_status} to {to_status}")


class QuotaExceededError(DomainError):
    """Monthly invitation limit reached or no call credits left."""

    pass


class ExpiredError(DomainError):
    """Raised when a token is used past its validity window."""

    pass
