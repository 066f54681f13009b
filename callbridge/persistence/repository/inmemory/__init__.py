"""In-memory repository implementations for testing."""

from .account import InMemoryAccountRepository
from .call import InMemoryCallRepository
from .invitation import InMemoryInvitationRepository

__all__ = [
    "InMemoryAccountRepository",
    "InMemoryCallRepository",
    "InMemoryInvitationRepository",
]
