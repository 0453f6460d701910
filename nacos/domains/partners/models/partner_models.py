"""Partner and partnership request models."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy.orm import Mapped, mapped_column

from nacos.extensions import db

PARTNER_TYPES = ("sponsor", "collaborator", "affiliate", "industry", "academic", "other")
PARTNER_STATUSES = ("active", "pending", "inactive", "former")


class Partner(db.Model):
    __tablename__ = "partner"
    __table_args__ = (
        db.Index("ix_partner_featured_order", "is_featured", "display_order"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(db.String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(db.Text)
    partner_type: Mapped[str] = mapped_column(db.String(32), nullable=False)
    status: Mapped[str] = mapped_column(db.String(16), nullable=False, default="active")
    logo_path: Mapped[str | None] = mapped_column(db.String(512))
    website_url: Mapped[str | None] = mapped_column(db.String(512))
    contact_email: Mapped[str | None] = mapped_column(db.String(255))
    contact_phone: Mapped[str | None] = mapped_column(db.String(32))
    partnership_since: Mapped[date | None] = mapped_column(db.Date)
    display_order: Mapped[int] = mapped_column(default=0)
    is_featured: Mapped[bool] = mapped_column(default=False)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)


class PartnerRequest(db.Model):
    __tablename__ = "partner_request"

    id: Mapped[int] = mapped_column(primary_key=True)
    company_name: Mapped[str] = mapped_column(db.String(255), nullable=False)
    contact_name: Mapped[str] = mapped_column(db.String(255), nullable=False)
    contact_email: Mapped[str] = mapped_column(db.String(255), nullable=False)
    website_url: Mapped[str | None] = mapped_column(db.String(512))
    message: Mapped[str | None] = mapped_column(db.Text)
    remote_addr: Mapped[str | None] = mapped_column(db.String(64))
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, index=True)
