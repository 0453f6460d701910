"""Member management service layer."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, or_

from nacos.core.auth.audit import record_security_event
from nacos.core.auth.constants import (
    MEMBERSHIP_ACTIVE,
    MEMBERSHIP_INACTIVE,
    MEMBERSHIP_PENDING,
    Role,
)
from nacos.core.auth.errors import FORBIDDEN_CHANGE, AuthorizationFailure
from nacos.core.auth.events import (
    MEMBER_APPROVED,
    MEMBER_DEACTIVATED,
    MEMBER_DELETED,
    MEMBER_EDIT_REFUSED,
    MEMBER_REJECTED,
    MEMBER_ROLE_CHANGED,
    MEMBER_SELF_DEMOTION_BLOCKED,
    NOTIFY_MEMBER_APPROVED,
    NOTIFY_MEMBER_REJECTED,
    OUTCOME_DENIED,
    OUTCOME_SUCCESS,
)
from nacos.core.auth.password import hash_password
from nacos.core.auth.session_models import Identity
from nacos.core.members.models import Member
from nacos.core.utils.pagination import paginate
from nacos.domains.members.schemas.member_schemas import MemberForm, MemberListFilter
from nacos.domains.projects.models.project_models import ProjectMember
from nacos.extensions import db
from nacos.platform.outbox import enqueue as enqueue_outbox

logger = logging.getLogger(__name__)


def list_members(filters: MemberListFilter) -> dict:
    query = Member.query
    if filters.search:
        term = f"%{filters.search.strip()}%"
        query = query.filter(
            or_(
                Member.full_name.ilike(term),
                Member.matric_no.ilike(term),
                Member.email.ilike(term),
            )
        )
    if filters.department:
        query = query.filter(Member.department == filters.department)
    if filters.level:
        query = query.filter(Member.level == filters.level)
    if filters.status:
        query = query.filter(Member.membership_status == filters.status)
    if filters.approval == "pending":
        query = query.filter(Member.is_approved.is_(False))
    elif filters.approval == "approved":
        query = query.filter(Member.is_approved.is_(True))

    column = getattr(Member, filters.sort)
    query = query.order_by(column.asc() if filters.order == "asc" else column.desc(), Member.id.desc())
    return paginate(query, page=filters.page, per_page=filters.per_page)


def department_choices() -> List[str]:
    rows = (
        db.session.query(Member.department)
        .filter(Member.department.isnot(None))
        .distinct()
        .order_by(Member.department)
        .all()
    )
    return [row[0] for row in rows]


def get_member(member_id: int) -> Optional[Member]:
    return db.session.get(Member, member_id)


def _ensure_unique(data: MemberForm, member_id: Optional[int] = None) -> None:
    def _taken(*criteria) -> bool:
        query = Member.query.filter(*criteria)
        if member_id is not None:
            query = query.filter(Member.id != member_id)
        return query.first() is not None

    if _taken(Member.matric_no == data.matric_no):
        raise ValueError("duplicate_matric_no")
    if _taken(func.lower(Member.email) == data.email):
        raise ValueError("duplicate_email")
    if data.username and _taken(func.lower(Member.username) == data.login_name):
        raise ValueError("duplicate_username")


_PROFILE_FIELDS = (
    "matric_no",
    "full_name",
    "email",
    "department",
    "level",
    "registration_date",
    "phone",
    "gender",
    "membership_status",
    "bio",
    "github_username",
    "linkedin_url",
    "skills",
)


def create_member(data: MemberForm, actor: Identity) -> Member:
    _ensure_unique(data)
    if Member.query.filter(func.lower(Member.username) == data.login_name).first():
        raise ValueError("duplicate_username")
    member = Member(username=data.login_name, role=Role.MEMBER.value)
    for field in _PROFILE_FIELDS:
        setattr(member, field, getattr(data, field))
    if data.membership_status == MEMBERSHIP_ACTIVE:
        member.is_approved = True
        member.approved_by = actor.id
        member.approval_date = datetime.utcnow()
    if data.password:
        member.password_hash = hash_password(data.password)
    db.session.add(member)
    db.session.commit()
    logger.info("Member %s created by %s", member.id, actor.id)
    return member


def outranks(member: Member, actor: Identity) -> bool:
    """True when the account holds a role the actor does not have."""
    role = member.role_enum
    return role is None or not actor.role.satisfies(role)


def _changes_credentials(member: Member, data: MemberForm) -> bool:
    return bool(data.password) or bool(data.username and data.login_name != member.username)


def update_member(member_id: int, data: MemberForm, actor: Identity) -> Member:
    """Apply a profile edit.

    Accounts that outrank the actor are read-only to them, and only admins may
    set another account's username or password. Both refusals happen before any
    field changes and raise ``AuthorizationFailure``.
    """
    member = get_member(member_id)
    if member is None:
        raise ValueError("not_found")
    if outranks(member, actor) or (actor.role is not Role.ADMIN and _changes_credentials(member, data)):
        record_security_event(
            MEMBER_EDIT_REFUSED,
            outcome=OUTCOME_DENIED,
            actor=actor,
            subject=f"member:{member.id}",
            level="warning",
            details={"target_role": member.role},
        )
        raise AuthorizationFailure(FORBIDDEN_CHANGE)
    _ensure_unique(data, member_id=member_id)
    for field in _PROFILE_FIELDS:
        setattr(member, field, getattr(data, field))
    if data.username:
        member.username = data.login_name
    if data.password:
        member.password_hash = hash_password(data.password)
    db.session.commit()
    logger.info("Member %s updated by %s", member.id, actor.id)
    return member


def approve_member(member_id: int, actor: Identity) -> Member:
    member = get_member(member_id)
    if member is None:
        raise ValueError("not_found")
    now = datetime.utcnow()
    member.membership_status = MEMBERSHIP_ACTIVE
    member.is_approved = True
    member.approved_by = actor.id
    member.approval_date = now
    enqueue_outbox(
        NOTIFY_MEMBER_APPROVED,
        {
            "member_id": member.id,
            "email": member.email,
            "full_name": member.full_name,
            "approved_by": actor.id,
            "approved_at": now.isoformat(),
        },
        member_id=member.id,
    )
    record_security_event(
        MEMBER_APPROVED, outcome=OUTCOME_SUCCESS, actor=actor, subject=f"member:{member.id}", commit=False
    )
    db.session.commit()
    return member


def reject_member(member_id: int, actor: Identity) -> Member:
    member = get_member(member_id)
    if member is None:
        raise ValueError("not_found")
    if outranks(member, actor):
        raise AuthorizationFailure(FORBIDDEN_CHANGE)
    member.membership_status = MEMBERSHIP_INACTIVE
    member.is_approved = False
    enqueue_outbox(
        NOTIFY_MEMBER_REJECTED,
        {
            "member_id": member.id,
            "email": member.email,
            "full_name": member.full_name,
            "rejected_by": actor.id,
        },
        member_id=member.id,
    )
    record_security_event(
        MEMBER_REJECTED, outcome=OUTCOME_SUCCESS, actor=actor, subject=f"member:{member.id}", commit=False
    )
    db.session.commit()
    return member


def change_member_role(actor: Identity, member_id: int, new_role) -> Tuple[Member, bool]:
    """Set a member's role. Returns (member, changed).

    An admin can never take admin away from their own account; that request is
    refused before the member row is read.
    """
    role = Role.parse(new_role)
    if role is None:
        raise ValueError("invalid_role")
    if actor.id == member_id and role is not Role.ADMIN:
        record_security_event(
            MEMBER_SELF_DEMOTION_BLOCKED,
            outcome=OUTCOME_DENIED,
            actor=actor,
            subject=f"member:{member_id}",
            level="warning",
            details={"requested_role": role.value},
        )
        raise ValueError("self_demotion")

    member = get_member(member_id)
    if member is None:
        raise ValueError("not_found")
    if member.role == role.value:
        return member, False

    previous = member.role
    member.role = role.value
    record_security_event(
        MEMBER_ROLE_CHANGED,
        outcome=OUTCOME_SUCCESS,
        actor=actor,
        subject=f"member:{member.id}",
        details={"from": previous, "to": role.value},
        commit=False,
    )
    db.session.commit()
    return member, True


def deactivate_member(member_id: int, actor: Identity) -> Member:
    if actor.id == member_id:
        raise ValueError("self_action")
    member = get_member(member_id)
    if member is None:
        raise ValueError("not_found")
    if outranks(member, actor):
        raise AuthorizationFailure(FORBIDDEN_CHANGE)
    member.membership_status = MEMBERSHIP_INACTIVE
    record_security_event(
        MEMBER_DEACTIVATED, outcome=OUTCOME_SUCCESS, actor=actor, subject=f"member:{member.id}", commit=False
    )
    db.session.commit()
    return member


def delete_member(member_id: int, actor: Identity) -> str:
    """Delete the member and their project memberships. Returns the deleted name."""
    if actor.id == member_id:
        raise ValueError("self_action")
    member = get_member(member_id)
    if member is None:
        raise ValueError("not_found")
    name = member.full_name
    ProjectMember.query.filter_by(member_id=member_id).delete(synchronize_session=False)
    db.session.delete(member)
    record_security_event(
        MEMBER_DELETED,
        outcome=OUTCOME_SUCCESS,
        actor=actor,
        subject=f"member:{member_id}",
        details={"full_name": name},
        commit=False,
    )
    db.session.commit()
    return name


def membership_counts() -> Dict[str, int]:
    rows = db.session.query(Member.membership_status, func.count(Member.id)).group_by(Member.membership_status)
    counts = {status: 0 for status in (MEMBERSHIP_ACTIVE, MEMBERSHIP_PENDING, MEMBERSHIP_INACTIVE)}
    counts.update({status: total for status, total in rows})
    return counts


def project_count_for(member_id: int) -> int:
    return ProjectMember.query.filter_by(member_id=member_id).count()
