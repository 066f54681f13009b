"""Base model for accounts, invitations and calls."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for domain entities.

    Entities are frozen; state changes go through ``model_copy(update=...)``
    and are persisted explicitly by the owning service.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,  # InvitationToken, EmailAddress
    )
