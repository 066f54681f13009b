"""initial_schema

Create the foundational schema for CallBridge:
- Accounts (requesters and responders, call credit balance)
- Invitations (time-boxed, single-use tokens)
- Calls (scheduled meetings with status, feedback and outcome)

Revision ID: 3c1f0a9d2e47
Revises:
Create Date: 2026-10-18 14:02:11.412087

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d2e47"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ENUM_TYPES = {
    "account_role": ("requester", "responder"),
    "invitation_status": ("pending", "accepted", "rejected", "expired", "cancelled"),
    "call_status": ("scheduled", "in_progress", "completed", "cancelled", "no_show"),
    "call_outcome": (
        "interested",
        "not_interested",
        "follow_up_needed",
        "closed_deal",
        "no_decision",
    ),
    "connection_quality": ("excellent", "good", "fair", "poor"),
}


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUM_TYPES[name], name=name, create_type=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    for name, values in ENUM_TYPES.items():
        labels = ", ".join(f"'{value}'" for value in values)
        op.execute(f"""
            DO $$ BEGIN
                CREATE TYPE {name} AS ENUM ({labels});
            EXCEPTION
                WHEN duplicate_object THEN null;
            END $$;
        """)

    # ========================================================================
    # ACCOUNTS table
    # ========================================================================
    op.create_table(
        "accounts",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("role", _enum("account_role"), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("company", sa.String(255), nullable=True),
        sa.Column("job_title", sa.String(255), nullable=True),
        sa.Column("call_credits", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "monthly_invitation_limit",
            sa.Integer(),
            nullable=False,
            server_default="0",
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
        sa.CheckConstraint("call_credits >= 0", name="call_credits_non_negative"),
        sa.CheckConstraint(
            "monthly_invitation_limit >= 0",
            name="monthly_invitation_limit_non_negative",
        ),
    )
    op.create_index("idx_accounts_role", "accounts", ["role"])

    # ========================================================================
    # INVITATIONS table
    # ========================================================================
    op.create_table(
        "invitations",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("requester_id", sa.UUID(), nullable=False),
        sa.Column("responder_email", sa.String(255), nullable=False),
        sa.Column("responder_name", sa.String(100), nullable=False),
        sa.Column("message", sa.String(500), nullable=True),
        sa.Column("token", sa.String(255), nullable=False),
        sa.Column(
            "status",
            _enum("invitation_status"),
            nullable=False,
            server_default="pending",
        ),
        sa.Column(
            "issued_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("accepted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("rejected_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("accepted_by_account_id", sa.UUID(), nullable=True),
        sa.ForeignKeyConstraint(["requester_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["accepted_by_account_id"], ["accounts.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("token"),
    )
    op.create_index(
        "idx_invitations_requester_issued",
        "invitations",
        ["requester_id", "issued_at"],
    )
    op.create_index(
        "idx_invitations_status_expires", "invitations", ["status", "expires_at"]
    )

    # Partial unique constraint: one pending invitation per requester and email
    op.execute("""
        CREATE UNIQUE INDEX idx_invitations_unique_pending_email
        ON invitations (requester_id, responder_email)
        WHERE status = 'pending'
    """)

    # ========================================================================
    # CALLS table
    # ========================================================================
    op.create_table(
        "calls",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("requester_id", sa.UUID(), nullable=False),
        sa.Column("responder_id", sa.UUID(), nullable=False),
        sa.Column("scheduled_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False, server_default="30"),
        sa.Column(
            "status", _enum("call_status"), nullable=False, server_default="scheduled"
        ),
        sa.Column("notes", sa.String(1000), nullable=True),
        sa.Column("meeting_link", sa.Text(), nullable=True),
        sa.Column("actual_start_time", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("actual_end_time", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("connection_quality", _enum("connection_quality"), nullable=True),
        sa.Column("requester_rating", sa.Integer(), nullable=True),
        sa.Column("responder_rating", sa.Integer(), nullable=True),
        sa.Column("requester_feedback", sa.String(500), nullable=True),
        sa.Column("responder_feedback", sa.String(500), nullable=True),
        sa.Column(
            "outcome",
            _enum("call_outcome"),
            nullable=False,
            server_default="no_decision",
        ),
        sa.Column("follow_up_date", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("deal_value", sa.Numeric(12, 2), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["requester_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["responder_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("duration BETWEEN 1 AND 480", name="duration_range"),
        sa.CheckConstraint(
            "requester_rating IS NULL OR requester_rating BETWEEN 1 AND 5",
            name="requester_rating_range",
        ),
        sa.CheckConstraint(
            "responder_rating IS NULL OR responder_rating BETWEEN 1 AND 5",
            name="responder_rating_range",
        ),
        sa.CheckConstraint(
            "deal_value IS NULL OR deal_value >= 0", name="deal_value_non_negative"
        ),
    )
    op.create_index(
        "idx_calls_requester_scheduled", "calls", ["requester_id", "scheduled_at"]
    )
    op.create_index(
        "idx_calls_responder_scheduled", "calls", ["responder_id", "scheduled_at"]
    )
    op.create_index("idx_calls_status", "calls", ["status"])

    # A participant holds at most one scheduled call per exact start time
    op.execute("""
        CREATE UNIQUE INDEX idx_calls_unique_requester_slot
        ON calls (requester_id, scheduled_at)
        WHERE status = 'scheduled'
    """)
    op.execute("""
        CREATE UNIQUE INDEX idx_calls_unique_responder_slot
        ON calls (responder_id, scheduled_at)
        WHERE status = 'scheduled'
    """)

    # ========================================================================
    # TRIGGERS
    # ========================================================================
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql
    """)
    for table in ("accounts", "calls"):
        op.execute(f"""
            CREATE TRIGGER update_{table}_updated_at
            BEFORE UPDATE ON {table}
            FOR EACH ROW EXECUTE FUNCTION update_updated_at_column()
        """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DROP TRIGGER IF EXISTS update_calls_updated_at ON calls")
    op.execute("DROP TRIGGER IF EXISTS update_accounts_updated_at ON accounts")
    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")

    # Drop tables (in reverse order of dependencies)
    op.drop_table("calls")
    op.drop_table("invitations")
    op.drop_table("accounts")

    for name in reversed(list(ENUM_TYPES)):
        op.execute(f"DROP TYPE IF EXISTS {name}")
