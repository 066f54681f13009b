"""Strongly typed identifiers for Call Bridge domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

AccountId = NewType("AccountId", UUID)
InvitationId = NewType("InvitationId", UUID)
CallId = NewType("CallId", UUID)
