"""Project HTML pages."""

from __future__ import annotations

from flask import Blueprint, request, url_for
from pydantic import ValidationError

from nacos.core.auth.constants import Role, Severity
from nacos.core.auth.context import PageContext
from nacos.core.auth.errors import NotFound
from nacos.core.auth.responses import Render
from nacos.core.utils.decorators import csrf_protected, require_role
from nacos.core.utils.validation import form_errors
from nacos.domains.projects.models.project_models import PROJECT_STATUSES
from nacos.domains.projects.schemas import ProjectForm, ProjectListFilter
from nacos.domains.projects.services import (
    assignable_members,
    create_project,
    delete_project,
    get_project,
    list_projects,
    project_members,
    update_project,
)

project_pages_bp = Blueprint("project_pages", __name__)

NOT_FOUND = "Project not found."
UNKNOWN_MEMBER = "One or more selected members do not exist."


def _form_payload() -> dict:
    payload = request.form.to_dict()
    payload["members"] = request.form.getlist("members")
    return payload


def _form_page(values, errors=None, project=None) -> Render:
    return Render(
        "projects/form.html",
        {
            "values": values,
            "errors": errors or [],
            "project": project,
            "statuses": PROJECT_STATUSES,
            "members": assignable_members(),
            "selected": {str(v) for v in (values.get("members") or [])},
        },
    )


@project_pages_bp.get("/")
@require_role(Role.EXECUTIVE)
def projects_home(ctx: PageContext):
    try:
        filters = ProjectListFilter.model_validate(request.args.to_dict())
    except ValidationError:
        filters = ProjectListFilter()
    return Render(
        "projects/list.html",
        {"page": list_projects(filters), "filters": filters, "statuses": PROJECT_STATUSES},
    )


@project_pages_bp.get("/<int:project_id>")
@require_role(Role.EXECUTIVE)
def view_project(ctx: PageContext, project_id: int):
    project = get_project(project_id)
    if project is None:
        raise NotFound(NOT_FOUND, target=url_for("project_pages.projects_home"))
    return Render("projects/view.html", {"project": project, "members": project_members(project)})


@project_pages_bp.route("/new", methods=["GET", "POST"])
@require_role(Role.EXECUTIVE)
@csrf_protected
def add_project(ctx: PageContext):
    if request.method == "GET":
        return _form_page({})
    payload = _form_payload()
    try:
        data = ProjectForm.model_validate(payload)
    except ValidationError as exc:
        return _form_page(payload, form_errors(exc))
    try:
        create_project(data)
    except ValueError:
        return _form_page(payload, [UNKNOWN_MEMBER])
    return ctx.redirect_with_message(
        url_for("project_pages.projects_home"), "Project created successfully!", Severity.SUCCESS
    )


@project_pages_bp.route("/<int:project_id>/edit", methods=["GET", "POST"])
@require_role(Role.EXECUTIVE)
@csrf_protected
def edit_project(ctx: PageContext, project_id: int):
    project = get_project(project_id)
    if project is None:
        raise NotFound(NOT_FOUND, target=url_for("project_pages.projects_home"))
    if request.method == "GET":
        values = {
            "title": project.title,
            "description": project.description,
            "project_status": project.project_status,
            "start_date": project.start_date,
            "completion_date": project.completion_date,
            "repository_link": project.repository_link,
            "technologies": ", ".join(project.technologies),
            "key_features": "\n".join(project.features),
            "members": project.member_ids,
        }
        return _form_page(values, project=project)
    payload = _form_payload()
    try:
        data = ProjectForm.model_validate(payload)
    except ValidationError as exc:
        return _form_page(payload, form_errors(exc), project)
    try:
        update_project(project_id, data)
    except ValueError as exc:
        message = NOT_FOUND if str(exc) == "not_found" else UNKNOWN_MEMBER
        return _form_page(payload, [message], project)
    return ctx.redirect_with_message(
        url_for("project_pages.view_project", project_id=project_id),
        "Project updated successfully!",
        Severity.SUCCESS,
    )


@project_pages_bp.post("/<int:project_id>/delete")
@require_role(Role.EXECUTIVE)
@csrf_protected
def remove_project(ctx: PageContext, project_id: int):
    target = url_for("project_pages.projects_home")
    if not delete_project(project_id):
        return ctx.redirect_with_message(target, NOT_FOUND, Severity.ERROR)
    return ctx.redirect_with_message(target, "Project deleted successfully.", Severity.SUCCESS)
