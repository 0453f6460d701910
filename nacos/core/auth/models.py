"""Session persistence and security audit models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from nacos.core.auth.constants import SESSION_STATE_ACTIVE
from nacos.extensions import db


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)


class AuthSession(db.Model, TimestampMixin):
    __tablename__ = "auth_session"
    __table_args__ = (
        db.UniqueConstraint("session_id", name="uq_auth_session_session_id"),
        db.Index("ix_auth_session_member", "member_id"),
        db.Index("ix_auth_session_state_activity", "lifecycle_state", "last_activity_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    session_id: Mapped[str] = mapped_column(db.String(128), nullable=False)
    member_id: Mapped[int | None] = mapped_column(db.ForeignKey("member.id", ondelete="SET NULL"), nullable=True)
    data: Mapped[dict] = mapped_column(db.JSON, nullable=False, default=dict)
    lifecycle_state: Mapped[str] = mapped_column(db.String(32), nullable=False, default=SESSION_STATE_ACTIVE)
    last_activity_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    invalidated_at: Mapped[datetime | None] = mapped_column(nullable=True)


class SecurityEvent(db.Model):
    __tablename__ = "security_event"
    __table_args__ = (
        db.Index("ix_security_event_event_created_at", "event", "created_at"),
        db.Index("ix_security_event_actor", "actor_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    event: Mapped[str] = mapped_column(db.String(64), nullable=False)
    level: Mapped[str] = mapped_column(db.String(16), nullable=False, default="info")
    outcome: Mapped[str] = mapped_column(db.String(32), nullable=False)
    actor_id: Mapped[int | None] = mapped_column(nullable=True)
    actor_name: Mapped[str | None] = mapped_column(db.String(255))
    subject: Mapped[str | None] = mapped_column(db.String(255))
    remote_addr: Mapped[str | None] = mapped_column(db.String(64))
    details: Mapped[dict] = mapped_column(db.JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, index=True)


__all__ = ["AuthSession", "SecurityEvent", "TimestampMixin"]
