"""core initial schema: members, sessions, audit log, outbox

Revision ID: 20261019_core_initial
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "20261019_core_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "member",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(length=64), nullable=False),
        sa.Column("matric_no", sa.String(length=16), unique=True),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=32)),
        sa.Column("department", sa.String(length=128)),
        sa.Column("level", sa.String(length=16)),
        sa.Column("gender", sa.String(length=16)),
        sa.Column("bio", sa.Text()),
        sa.Column("github_username", sa.String(length=64)),
        sa.Column("linkedin_url", sa.String(length=255)),
        sa.Column("skills", sa.Text()),
        sa.Column("role", sa.String(length=16), nullable=False, server_default="member"),
        sa.Column("membership_status", sa.String(length=16), nullable=False, server_default="pending"),
        sa.Column("is_approved", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("approved_by", sa.Integer(), sa.ForeignKey("member.id", ondelete="SET NULL")),
        sa.Column("approval_date", sa.DateTime()),
        sa.Column("registration_date", sa.Date(), nullable=False),
        sa.Column("password_hash", sa.String(length=255)),
        sa.Column("last_login", sa.DateTime()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_member_username", "member", ["username"], unique=True)
    op.create_index("ix_member_email", "member", ["email"], unique=True)
    op.create_index("ix_member_status_approved", "member", ["membership_status", "is_approved"])
    op.create_index("ix_member_department_level", "member", ["department", "level"])

    op.create_table(
        "auth_session",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("session_id", sa.String(length=128), nullable=False),
        sa.Column("member_id", sa.Integer(), sa.ForeignKey("member.id", ondelete="SET NULL")),
        sa.Column("data", sa.JSON(), nullable=False, server_default=sa.text("'{}'")),
        sa.Column("lifecycle_state", sa.String(length=32), nullable=False, server_default="active"),
        sa.Column("last_activity_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("invalidated_at", sa.DateTime()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("session_id", name="uq_auth_session_session_id"),
    )
    op.create_index("ix_auth_session_member", "auth_session", ["member_id"])
    op.create_index(
        "ix_auth_session_state_activity", "auth_session", ["lifecycle_state", "last_activity_at"]
    )

    op.create_table(
        "security_event",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("event", sa.String(length=64), nullable=False),
        sa.Column("level", sa.String(length=16), nullable=False, server_default="info"),
        sa.Column("outcome", sa.String(length=32), nullable=False),
        sa.Column("actor_id", sa.Integer()),
        sa.Column("actor_name", sa.String(length=255)),
        sa.Column("subject", sa.String(length=255)),
        sa.Column("remote_addr", sa.String(length=64)),
        sa.Column("details", sa.JSON(), nullable=False, server_default=sa.text("'{}'")),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_security_event_created_at", "security_event", ["created_at"])
    op.create_index("ix_security_event_event_created_at", "security_event", ["event", "created_at"])
    op.create_index("ix_security_event_actor", "security_event", ["actor_id"])

    op.create_table(
        "platform_outbox",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("member_id", sa.Integer(), sa.ForeignKey("member.id", ondelete="SET NULL")),
        sa.Column("event_type", sa.String(length=128), nullable=False),
        sa.Column("recipient", sa.String(length=255)),
        sa.Column("payload", sa.JSON(), nullable=False, server_default=sa.text("'{}'")),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="pending"),
        sa.Column("attempts", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("available_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("sent_at", sa.DateTime()),
        sa.Column("last_error", sa.Text()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_platform_outbox_member_id", "platform_outbox", ["member_id"])
    op.create_index("ix_platform_outbox_event_type", "platform_outbox", ["event_type"])
    op.create_index(
        "ix_platform_outbox_status_available_at", "platform_outbox", ["status", "available_at"]
    )


def downgrade():
    op.drop_index("ix_platform_outbox_status_available_at", table_name="platform_outbox")
    op.drop_index("ix_platform_outbox_event_type", table_name="platform_outbox")
    op.drop_index("ix_platform_outbox_member_id", table_name="platform_outbox")
    op.drop_table("platform_outbox")
    op.drop_index("ix_security_event_actor", table_name="security_event")
    op.drop_index("ix_security_event_event_created_at", table_name="security_event")
    op.drop_index("ix_security_event_created_at", table_name="security_event")
    op.drop_table("security_event")
    op.drop_index("ix_auth_session_state_activity", table_name="auth_session")
    op.drop_index("ix_auth_session_member", table_name="auth_session")
    op.drop_table("auth_session")
    op.drop_index("ix_member_department_level", table_name="member")
    op.drop_index("ix_member_status_approved", table_name="member")
    op.drop_index("ix_member_email", table_name="member")
    op.drop_index("ix_member_username", table_name="member")
    op.drop_table("member")
