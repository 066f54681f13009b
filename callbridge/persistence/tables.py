"""SQLAlchemy table definitions for CallBridge.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# ACCOUNTS TABLE
# ============================================================================
accounts_table = Table(
    "accounts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "role",
        Enum("requester", "responder", name="account_role", create_type=False),
        nullable=False,
    ),
    Column("email", String(255), nullable=False, unique=True),  # Lowercased
    Column("name", String(50), nullable=False),
    Column("company", String(255), nullable=True),
    Column("job_title", String(255), nullable=True),
    Column("call_credits", Integer, nullable=False, server_default="0"),
    Column("monthly_invitation_limit", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("call_credits >= 0", name="call_credits_non_negative"),
    CheckConstraint(
        "monthly_invitation_limit >= 0", name="monthly_invitation_limit_non_negative"
    ),
)

Index("idx_accounts_role", accounts_table.c.role)

# ============================================================================
# INVITATIONS TABLE
# ============================================================================
invitations_table = Table(
    "invitations",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "requester_id",
        UUID,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("responder_email", String(255), nullable=False),
    Column("responder_name", String(100), nullable=False),
    Column("message", String(500), nullable=True),
    Column("token", String(255), nullable=False, unique=True),  # URL-safe token
    Column(
        "status",
        Enum(
            "pending",
            "accepted",
            "rejected",
            "expired",
            "cancelled",
            name="invitation_status",
            create_type=False,
        ),
        nullable=False,
        server_default="pending",
    ),
    Column(
        "issued_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
    Column("rejected_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "accepted_by_account_id",
        UUID,
        ForeignKey("accounts.id", ondelete="SET NULL"),
        nullable=True,
    ),
)

Index(
    "idx_invitations_requester_issued",
    invitations_table.c.requester_id,
    invitations_table.c.issued_at,
)
Index(
    "idx_invitations_status_expires",
    invitations_table.c.status,
    invitations_table.c.expires_at,
)

# Only one pending invitation per requester and email
Index(
    "idx_invitations_unique_pending_email",
    invitations_table.c.requester_id,
    invitations_table.c.responder_email,
    unique=True,
    postgresql_where=invitations_table.c.status == "pending",
)

# ============================================================================
# CALLS TABLE
# ============================================================================
calls_table = Table(
    "calls",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "requester_id",
        UUID,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "responder_id",
        UUID,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("scheduled_at", TIMESTAMP(timezone=True), nullable=False),
    Column("duration", Integer, nullable=False, server_default="30"),  # Minutes
    Column(
        "status",
        Enum(
            "scheduled",
            "in_progress",
            "completed",
            "cancelled",
            "no_show",
            name="call_status",
            create_type=False,
        ),
        nullable=False,
        server_default="scheduled",
    ),
    Column("notes", String(1000), nullable=True),
    Column("meeting_link", Text, nullable=True),
    Column("actual_start_time", TIMESTAMP(timezone=True), nullable=True),
    Column("actual_end_time", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "connection_quality",
        Enum(
            "excellent",
            "good",
            "fair",
            "poor",
            name="connection_quality",
            create_type=False,
        ),
        nullable=True,
    ),
    Column("requester_rating", Integer, nullable=True),
    Column("responder_rating", Integer, nullable=True),
    Column("requester_feedback", String(500), nullable=True),
    Column("responder_feedback", String(500), nullable=True),
    Column(
        "outcome",
        Enum(
            "interested",
            "not_interested",
            "follow_up_needed",
            "closed_deal",
            "no_decision",
            name="call_outcome",
            create_type=False,
        ),
        nullable=False,
        server_default="no_decision",
    ),
    Column("follow_up_date", TIMESTAMP(timezone=True), nullable=True),
    Column("deal_value", Numeric(12, 2), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("duration BETWEEN 1 AND 480", name="duration_range"),
    CheckConstraint(
        "requester_rating IS NULL OR requester_rating BETWEEN 1 AND 5",
        name="requester_rating_range",
    ),
    CheckConstraint(
        "responder_rating IS NULL OR responder_rating BETWEEN 1 AND 5",
        name="responder_rating_range",
    ),
    CheckConstraint("deal_value IS NULL OR deal_value >= 0", name="deal_value_non_negative"),
)

Index(
    "idx_calls_requester_scheduled",
    calls_table.c.requester_id,
    calls_table.c.scheduled_at,
)
Index(
    "idx_calls_responder_scheduled",
    calls_table.c.responder_id,
    calls_table.c.scheduled_at,
)
Index("idx_calls_status", calls_table.c.status)

# A participant can hold at most one scheduled call per exact start time
Index(
    "idx_calls_unique_requester_slot",
    calls_table.c.requester_id,
    calls_table.c.scheduled_at,
    unique=True,
    postgresql_where=calls_table.c.status == "scheduled",
)
Index(
    "idx_calls_unique_responder_slot",
    calls_table.c.responder_id,
    calls_table.c.scheduled_at,
    unique=True,
    postgresql_where=calls_table.c.status == "scheduled",
)
