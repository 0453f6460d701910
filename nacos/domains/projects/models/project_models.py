"""Project domain models."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy.orm import Mapped, mapped_column, relationship

from nacos.extensions import db

PROJECT_STATUSES = ("ideation", "in_progress", "completed", "archived")

# Legacy form values still submitted by older pages
STATUS_ALIASES = {
    "planned": "ideation",
    "in-progress": "in_progress",
    "on-hold": "archived",
}


class Project(db.Model):
    __tablename__ = "project"
    __table_args__ = (
        db.Index("ix_project_status_start_date", "project_status", "start_date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(db.String(255), nullable=False)
    description: Mapped[str] = mapped_column(db.Text, nullable=False)
    project_status: Mapped[str] = mapped_column(db.String(32), default="ideation", nullable=False)
    start_date: Mapped[date] = mapped_column(db.Date, nullable=False)
    completion_date: Mapped[date | None] = mapped_column(db.Date)
    repository_link: Mapped[str | None] = mapped_column(db.String(512))
    tech_stack: Mapped[dict] = mapped_column(db.JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

    memberships: Mapped[list["ProjectMember"]] = relationship(
        "ProjectMember", back_populates="project", cascade="all, delete-orphan"
    )

    @property
    def technologies(self) -> list[str]:
        return list((self.tech_stack or {}).get("technologies") or [])

    @property
    def features(self) -> list[str]:
        return list((self.tech_stack or {}).get("features") or [])

    @property
    def member_ids(self) -> list[int]:
        return [m.member_id for m in self.memberships]


class ProjectMember(db.Model):
    __tablename__ = "project_member"
    __table_args__ = (
        db.UniqueConstraint("project_id", "member_id", name="uq_project_member"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    project_id: Mapped[int] = mapped_column(
        db.ForeignKey("project.id", ondelete="CASCADE"), index=True, nullable=False
    )
    member_id: Mapped[int] = mapped_column(
        db.ForeignKey("member.id", ondelete="CASCADE"), index=True, nullable=False
    )
    join_date: Mapped[date] = mapped_column(db.Date, default=date.today)

    project: Mapped[Project] = relationship("Project", back_populates="memberships")
