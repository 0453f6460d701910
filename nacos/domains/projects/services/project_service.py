"""Project service layer."""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import or_

from nacos.core.auth.constants import MEMBERSHIP_ACTIVE
from nacos.core.members.models import Member
from nacos.core.utils.pagination import paginate
from nacos.domains.projects.models.project_models import Project, ProjectMember
from nacos.domains.projects.schemas.project_schemas import ProjectForm, ProjectListFilter
from nacos.extensions import db

logger = logging.getLogger(__name__)


def list_projects(filters: ProjectListFilter) -> dict:
    query = Project.query
    if filters.search:
        term = f"%{filters.search.strip()}%"
        query = query.filter(or_(Project.title.ilike(term), Project.description.ilike(term)))
    if filters.status:
        query = query.filter(Project.project_status == filters.status)
    query = query.order_by(Project.start_date.desc(), Project.id.desc())
    return paginate(query, page=filters.page, per_page=filters.per_page)


def get_project(project_id: int) -> Optional[Project]:
    return db.session.get(Project, project_id)


def assignable_members() -> List[Member]:
    return (
        Member.query.filter(Member.membership_status == MEMBERSHIP_ACTIVE)
        .order_by(Member.full_name.asc())
        .all()
    )


def project_members(project: Project) -> List[Member]:
    ids = project.member_ids
    if not ids:
        return []
    return Member.query.filter(Member.id.in_(ids)).order_by(Member.full_name.asc()).all()


def _require_members(member_ids: List[int]) -> None:
    wanted = set(member_ids)
    if not wanted:
        return
    known = {row[0] for row in db.session.query(Member.id).filter(Member.id.in_(wanted)).all()}
    if known != wanted:
        raise ValueError("unknown_member")


def _sync_members(project: Project, member_ids: List[int]) -> None:
    wanted = set(member_ids)
    for membership in list(project.memberships):
        if membership.member_id not in wanted:
            project.memberships.remove(membership)
    existing = set(project.member_ids)
    today = date.today()
    for member_id in member_ids:
        if member_id not in existing:
            project.memberships.append(ProjectMember(member_id=member_id, join_date=today))


def create_project(data: ProjectForm) -> Project:
    _require_members(data.members)
    project = Project(
        title=data.title,
        description=data.description,
        project_status=data.project_status,
        start_date=data.start_date,
        completion_date=data.completion_date,
        repository_link=data.repository_link,
        tech_stack=data.tech_stack,
    )
    db.session.add(project)
    _sync_members(project, data.members)
    db.session.commit()
    logger.info("Project %s created", project.id)
    return project


def update_project(project_id: int, data: ProjectForm) -> Project:
    project = get_project(project_id)
    if project is None:
        raise ValueError("not_found")
    _require_members(data.members)
    project.title = data.title
    project.description = data.description
    project.project_status = data.project_status
    project.start_date = data.start_date
    project.completion_date = data.completion_date
    project.repository_link = data.repository_link
    project.tech_stack = data.tech_stack
    _sync_members(project, data.members)
    db.session.commit()
    return project


def delete_project(project_id: int) -> bool:
    project = get_project(project_id)
    if project is None:
        return False
    db.session.delete(project)
    db.session.commit()
    logger.info("Project %s deleted", project_id)
    return True


def active_project_count() -> int:
    return Project.query.filter(Project.project_status != "archived").count()
