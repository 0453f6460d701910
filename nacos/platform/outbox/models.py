"""Member notifications staged for delivery."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from nacos.extensions import db


class OutboxMessage(db.Model):
    """One notification. ``status`` moves pending -> sending -> sent, or retry/dead."""

    __tablename__ = "platform_outbox"
    __table_args__ = (
        db.Index("ix_platform_outbox_status_available_at", "status", "available_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    member_id: Mapped[int | None] = mapped_column(db.ForeignKey("member.id", ondelete="SET NULL"), index=True)
    event_type: Mapped[str] = mapped_column(db.String(128), nullable=False, index=True)
    recipient: Mapped[str | None] = mapped_column(db.String(255))
    payload: Mapped[dict] = mapped_column(db.JSON, nullable=False, default=dict)
    status: Mapped[str] = mapped_column(db.String(32), nullable=False, default="pending")
    attempts: Mapped[int] = mapped_column(default=0)
    available_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    sent_at: Mapped[datetime | None] = mapped_column()
    last_error: Mapped[str | None] = mapped_column(db.Text)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<OutboxMessage {self.id} {self.event_type} {self.status}>"
