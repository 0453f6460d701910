"""Admin dashboard and security log pages."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from nacos.core.auth.constants import MEMBERSHIP_PENDING, Role
from nacos.core.auth.context import PageContext
from nacos.core.auth.models import SecurityEvent
from nacos.core.auth.responses import Render
from nacos.core.members.models import Member
from nacos.core.utils.decorators import require_role
from nacos.core.utils.pagination import page_arg, paginate
from nacos.domains.members.services import membership_counts
from nacos.domains.partners.models import PartnerRequest
from nacos.domains.partners.services import active_partner_count
from nacos.domains.projects.models import Project
from nacos.domains.projects.services import active_project_count
from nacos.extensions import db

admin_pages_bp = Blueprint("admin_pages", __name__)

RECENT_LIMIT = 5


def dashboard_stats() -> dict:
    counts = membership_counts()
    departments = (
        db.session.query(Member.department, db.func.count(Member.id))
        .filter(Member.department.isnot(None))
        .group_by(Member.department)
        .order_by(db.func.count(Member.id).desc())
        .all()
    )
    return {
        "active_members": counts.get("active", 0),
        "pending_members": counts.get(MEMBERSHIP_PENDING, 0),
        "active_projects": active_project_count(),
        "active_partners": active_partner_count(),
        "partner_requests": PartnerRequest.query.count(),
        "departments": departments,
    }


@admin_pages_bp.get("/")
@require_role(Role.EXECUTIVE)
def dashboard(ctx: PageContext):
    pending = (
        Member.query.filter(Member.membership_status == MEMBERSHIP_PENDING)
        .order_by(Member.registration_date.desc(), Member.id.desc())
        .limit(RECENT_LIMIT)
        .all()
    )
    projects = Project.query.order_by(Project.created_at.desc()).limit(RECENT_LIMIT).all()
    return Render(
        "admin/dashboard.html",
        {"stats": dashboard_stats(), "pending": pending, "projects": projects, "identity": ctx.identity},
    )


@admin_pages_bp.get("/security-events")
@require_role(Role.ADMIN)
def security_events(ctx: PageContext):
    query = SecurityEvent.query.order_by(SecurityEvent.created_at.desc(), SecurityEvent.id.desc())
    page = paginate(
        query,
        page=page_arg(request.args.get("page")),
        per_page=current_app.config.get("ITEMS_PER_PAGE", 20),
    )
    return Render("admin/security_events.html", {"page": page})
