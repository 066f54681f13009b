"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from callbridge.domain.model import Account, Call, Invitation
from callbridge.domain.value import (
    AccountId,
    AccountRole,
    CallId,
    CallOutcome,
    CallStatus,
    ConnectionQuality,
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_account_id(value: Any) -> Optional[AccountId]:
    return AccountId(_uuid(value)) if value else None


def row_to_account(row: Dict[str, Any]) -> Account:
    """Convert database row to Account domain model.

    Args:
        row: Database row as dict

    Returns:
        Account domain model
    """
    return Account(
        id=AccountId(_uuid(row["id"])),
        role=AccountRole(row["role"]),
        email=EmailAddress(row["email"]),
        name=row["name"],
        company=row.get("company"),
        job_title=row.get("job_title"),
        call_credits=row["call_credits"],
        monthly_invitation_limit=row.get("monthly_invitation_limit", 0),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def account_to_dict(account: Account) -> Dict[str, Any]:
    """Convert Account domain model to database dict."""
    data = account.model_dump()
    data["role"] = account.role.value
    data["email"] = account.email.root
    return data


def row_to_invitation(row: Dict[str, Any]) -> Invitation:
    """Convert database row to Invitation domain model.

    Args:
        row: Database row as dict

    Returns:
        Invitation domain model
    """
    return Invitation(
        id=InvitationId(_uuid(row["id"])),
        requester_id=AccountId(_uuid(row["requester_id"])),
        responder_email=EmailAddress(row["responder_email"]),
        responder_name=row["responder_name"],
        message=row.get("message"),
        token=InvitationToken(row["token"]),
        status=InvitationStatus(row["status"]),
        issued_at=row["issued_at"],
        expires_at=row["expires_at"],
        accepted_at=row.get("accepted_at"),
        rejected_at=row.get("rejected_at"),
        accepted_by_account_id=_optional_account_id(row.get("accepted_by_account_id")),
    )


def invitation_to_dict(invitation: Invitation) -> Dict[str, Any]:
    """Convert Invitation domain model to database dict.

    The token is excluded from model_dump() so it is added explicitly.
    """
    data = invitation.model_dump()
    data["responder_email"] = invitation.responder_email.root
    data["status"] = invitation.status.value
    data["token"] = invitation.token.root
    return data


def row_to_call(row: Dict[str, Any]) -> Call:
    """Convert database row to Call domain model.

    Args:
        row: Database row as dict

    Returns:
        Call domain model
    """
    quality = row.get("connection_quality")
    return Call(
        id=CallId(_uuid(row["id"])),
        requester_id=AccountId(_uuid(row["requester_id"])),
        responder_id=AccountId(_uuid(row["responder_id"])),
        scheduled_at=row["scheduled_at"],
        duration=row["duration"],
        status=CallStatus(row["status"]),
        notes=row.get("notes"),
        meeting_link=row.get("meeting_link"),
        actual_start_time=row.get("actual_start_time"),
        actual_end_time=row.get("actual_end_time"),
        connection_quality=ConnectionQuality(quality) if quality else None,
        requester_rating=row.get("requester_rating"),
        responder_rating=row.get("responder_rating"),
        requester_feedback=row.get("requester_feedback"),
        responder_feedback=row.get("responder_feedback"),
        outcome=CallOutcome(row.get("outcome") or CallOutcome.NO_DECISION.value),
        follow_up_date=row.get("follow_up_date"),
        deal_value=row.get("deal_value"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def call_to_dict(call: Call) -> Dict[str, Any]:
    """Convert Call domain model to database dict."""
    data = call.model_dump()
    data["status"] = call.status.value
    data["outcome"] = call.outcome.value
    data["connection_quality"] = (
        call.connection_quality.value if call.connection_quality else None
    )
    return data
