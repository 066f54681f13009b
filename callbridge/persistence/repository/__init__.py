"""PostgreSQL repository implementations."""

from callbridge.persistence.repository.account import PostgresAccountRepository
from callbridge.persistence.repository.call import PostgresCallRepository
from callbridge.persistence.repository.invitation import PostgresInvitationRepository

__all__ = [
    "PostgresAccountRepository",
    "PostgresInvitationRepository",
    "PostgresCallRepository",
]
