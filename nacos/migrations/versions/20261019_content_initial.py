"""content tables: projects, resources, partners

Revision ID: 20261019_content_initial
Revises: 20261019_core_initial
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "20261019_content_initial"
down_revision = "20261019_core_initial"
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "project",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("project_status", sa.String(length=32), nullable=False, server_default="ideation"),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("completion_date", sa.Date()),
        sa.Column("repository_link", sa.String(length=512)),
        sa.Column("tech_stack", sa.JSON(), nullable=False, server_default=sa.text("'{}'")),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_project_status_start_date", "project", ["project_status", "start_date"])

    op.create_table(
        "project_member",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("project.id", ondelete="CASCADE"), nullable=False),
        sa.Column("member_id", sa.Integer(), sa.ForeignKey("member.id", ondelete="CASCADE"), nullable=False),
        sa.Column("join_date", sa.Date(), nullable=False),
        sa.UniqueConstraint("project_id", "member_id", name="uq_project_member"),
    )
    op.create_index("ix_project_member_project_id", "project_member", ["project_id"])
    op.create_index("ix_project_member_member_id", "project_member", ["member_id"])

    op.create_table(
        "resource",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("resource_type", sa.String(length=32), nullable=False),
        sa.Column("level", sa.String(length=16), nullable=False),
        sa.Column("course_code", sa.String(length=32)),
        sa.Column("tags", sa.String(length=512)),
        sa.Column("external_link", sa.String(length=512)),
        sa.Column("file_path", sa.String(length=512)),
        sa.Column("file_name", sa.String(length=255)),
        sa.Column("file_size", sa.Integer()),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("uploaded_by", sa.Integer(), sa.ForeignKey("member.id", ondelete="SET NULL")),
        sa.Column("upload_date", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_resource_type_level", "resource", ["resource_type", "level"])
    op.create_index("ix_resource_upload_date", "resource", ["upload_date"])

    op.create_table(
        "partner",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("partner_type", sa.String(length=32), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="active"),
        sa.Column("logo_path", sa.String(length=512)),
        sa.Column("website_url", sa.String(length=512)),
        sa.Column("contact_email", sa.String(length=255)),
        sa.Column("contact_phone", sa.String(length=32)),
        sa.Column("partnership_since", sa.Date()),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_partner_featured_order", "partner", ["is_featured", "display_order"])

    op.create_table(
        "partner_request",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("company_name", sa.String(length=255), nullable=False),
        sa.Column("contact_name", sa.String(length=255), nullable=False),
        sa.Column("contact_email", sa.String(length=255), nullable=False),
        sa.Column("website_url", sa.String(length=512)),
        sa.Column("message", sa.Text()),
        sa.Column("remote_addr", sa.String(length=64)),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_partner_request_created_at", "partner_request", ["created_at"])


def downgrade():
    op.drop_index("ix_partner_request_created_at", table_name="partner_request")
    op.drop_table("partner_request")
    op.drop_index("ix_partner_featured_order", table_name="partner")
    op.drop_table("partner")
    op.drop_index("ix_resource_upload_date", table_name="resource")
    op.drop_index("ix_resource_type_level", table_name="resource")
    op.drop_table("resource")
    op.drop_index("ix_project_member_member_id", table_name="project_member")
    op.drop_index("ix_project_member_project_id", table_name="project_member")
    op.drop_table("project_member")
    op.drop_index("ix_project_status_start_date", table_name="project")
    op.drop_table("project")
