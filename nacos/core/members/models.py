"""Member account model (the persistent identity store)."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy.orm import Mapped, mapped_column

from nacos.core.auth.constants import MEMBERSHIP_ACTIVE, MEMBERSHIP_PENDING, Role
from nacos.core.auth.models import TimestampMixin
from nacos.extensions import db


class Member(db.Model, TimestampMixin):
    __tablename__ = "member"
    __table_args__ = (
        db.Index("ix_member_status_approved", "membership_status", "is_approved"),
        db.Index("ix_member_department_level", "department", "level"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(db.String(64), unique=True, nullable=False, index=True)
    matric_no: Mapped[str | None] = mapped_column(db.String(16), unique=True)
    full_name: Mapped[str] = mapped_column(db.String(255), nullable=False)
    email: Mapped[str] = mapped_column(db.String(255), unique=True, nullable=False, index=True)
    phone: Mapped[str | None] = mapped_column(db.String(32))
    department: Mapped[str | None] = mapped_column(db.String(128))
    level: Mapped[str | None] = mapped_column(db.String(16))
    gender: Mapped[str | None] = mapped_column(db.String(16))
    bio: Mapped[str | None] = mapped_column(db.Text)
    github_username: Mapped[str | None] = mapped_column(db.String(64))
    linkedin_url: Mapped[str | None] = mapped_column(db.String(255))
    skills: Mapped[str | None] = mapped_column(db.Text)

    role: Mapped[str] = mapped_column(db.String(16), nullable=False, default=Role.MEMBER.value)
    membership_status: Mapped[str] = mapped_column(db.String(16), nullable=False, default=MEMBERSHIP_PENDING)
    is_approved: Mapped[bool] = mapped_column(default=False)
    approved_by: Mapped[int | None] = mapped_column(db.ForeignKey("member.id", ondelete="SET NULL"))
    approval_date: Mapped[datetime | None] = mapped_column(nullable=True)
    registration_date: Mapped[date] = mapped_column(db.Date, default=date.today)

    password_hash: Mapped[str | None] = mapped_column(db.String(255))
    last_login: Mapped[datetime | None] = mapped_column(nullable=True)

    @property
    def role_enum(self) -> Role | None:
        return Role.parse(self.role)

    @property
    def is_active_account(self) -> bool:
        return self.membership_status == MEMBERSHIP_ACTIVE

    def __repr__(self) -> str:
        return f"<Member {self.id} {self.username} role={self.role}>"


__all__ = ["Member"]
