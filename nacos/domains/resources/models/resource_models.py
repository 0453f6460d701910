"""Learning resource models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from nacos.extensions import db

RESOURCE_TYPES = (
    "pdf",
    "video",
    "link",
    "code_sample",
    "past_question",
    "study_guide",
    "tutorial",
    "general",
    "other",
)


class Resource(db.Model):
    __tablename__ = "resource"
    __table_args__ = (
        db.Index("ix_resource_type_level", "resource_type", "level"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(db.String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(db.Text)
    resource_type: Mapped[str] = mapped_column(db.String(32), nullable=False)
    level: Mapped[str] = mapped_column(db.String(16), nullable=False)
    course_code: Mapped[str | None] = mapped_column(db.String(32))
    tags: Mapped[str | None] = mapped_column(db.String(512))
    external_link: Mapped[str | None] = mapped_column(db.String(512))
    file_path: Mapped[str | None] = mapped_column(db.String(512))
    file_name: Mapped[str | None] = mapped_column(db.String(255))
    file_size: Mapped[int | None] = mapped_column(db.Integer)
    is_featured: Mapped[bool] = mapped_column(default=False)
    uploaded_by: Mapped[int | None] = mapped_column(db.ForeignKey("member.id", ondelete="SET NULL"))
    upload_date: Mapped[datetime] = mapped_column(default=datetime.utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)
