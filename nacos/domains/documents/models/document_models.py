"""Official association documents (minutes, reports, constitution)."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy.orm import Mapped, mapped_column

from nacos.extensions import db

DOCUMENT_TYPES = (
    "meeting_minutes",
    "financial_report",
    "constitution",
    "policy",
    "annual_report",
    "event_report",
    "proposal",
    "correspondence",
    "handover",
    "other",
)

VISIBILITY_LEVELS = ("admin", "members", "public")


class Document(db.Model):
    __tablename__ = "document"
    __table_args__ = (
        db.Index("ix_document_type_visibility", "doc_type", "visibility"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(db.String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(db.Text)
    doc_type: Mapped[str] = mapped_column(db.String(32), nullable=False)
    visibility: Mapped[str] = mapped_column(db.String(16), nullable=False, default="admin")
    document_date: Mapped[date | None] = mapped_column(db.Date)
    academic_session: Mapped[str | None] = mapped_column(db.String(16))
    tags: Mapped[str | None] = mapped_column(db.String(512))
    file_path: Mapped[str] = mapped_column(db.String(512), nullable=False)
    file_name: Mapped[str] = mapped_column(db.String(255), nullable=False)
    file_size: Mapped[int] = mapped_column(db.Integer, nullable=False)
    download_count: Mapped[int] = mapped_column(default=0)
    is_archived: Mapped[bool] = mapped_column(default=False)
    uploaded_by: Mapped[int | None] = mapped_column(db.ForeignKey("member.id", ondelete="SET NULL"))
    upload_date: Mapped[datetime] = mapped_column(default=datetime.utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)
