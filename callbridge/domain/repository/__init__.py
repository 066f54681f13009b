"""Repository interfaces for Call Bridge domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from callbridge.domain.repository.account import AccountRepository
from callbridge.domain.repository.call import CallRepository
from callbridge.domain.repository.invitation import InvitationRepository

__all__ = [
    "AccountRepository",
    "InvitationRepository",
    "CallRepository",
]
