"""documents table

Revision ID: 20261019_documents
Revises: 20261019_content_initial
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "20261019_documents"
down_revision = "20261019_content_initial"
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "document",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("doc_type", sa.String(length=32), nullable=False),
        sa.Column("visibility", sa.String(length=16), nullable=False, server_default="admin"),
        sa.Column("document_date", sa.Date()),
        sa.Column("academic_session", sa.String(length=16)),
        sa.Column("tags", sa.String(length=512)),
        sa.Column("file_path", sa.String(length=512), nullable=False),
        sa.Column("file_name", sa.String(length=255), nullable=False),
        sa.Column("file_size", sa.Integer(), nullable=False),
        sa.Column("download_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_archived", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("uploaded_by", sa.Integer(), sa.ForeignKey("member.id", ondelete="SET NULL")),
        sa.Column("upload_date", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_document_type_visibility", "document", ["doc_type", "visibility"])
    op.create_index("ix_document_upload_date", "document", ["upload_date"])


def downgrade():
    op.drop_index("ix_document_upload_date", table_name="document")
    op.drop_index("ix_document_type_visibility", table_name="document")
    op.drop_table("document")
