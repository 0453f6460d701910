"""Member management pages."""

from __future__ import annotations

from flask import Blueprint, request, url_for
from pydantic import ValidationError

from nacos.core.auth.constants import MEMBERSHIP_STATUSES, Role, Severity
from nacos.core.auth.context import PageContext
from nacos.core.auth.errors import FORBIDDEN_CHANGE, AuthorizationFailure, NotFound
from nacos.core.auth.responses import Render
from nacos.core.utils.decorators import csrf_protected, require_role
from nacos.core.utils.validation import form_errors
from nacos.domains.members.schemas import LEVELS, SORTABLE_COLUMNS, MemberForm, MemberListFilter
from nacos.domains.members.services import (
    approve_member,
    change_member_role,
    create_member,
    deactivate_member,
    delete_member,
    department_choices,
    get_member,
    list_members as search_members,
    outranks,
    project_count_for,
    reject_member,
    update_member,
)

member_pages_bp = Blueprint("member_pages", __name__)

ERROR_MESSAGES = {
    "not_found": "Member not found.",
    "duplicate_matric_no": "Matric number already exists",
    "duplicate_email": "Email address already exists",
    "duplicate_username": "Username already exists",
    "invalid_role": "Invalid role specified.",
    "self_demotion": "You cannot remove your own admin privileges!",
    "self_action": "You cannot deactivate or delete your own account.",
}


def _error(code: str) -> str:
    return ERROR_MESSAGES.get(code, "An error occurred. Please try again.")


def _list_target() -> str:
    return url_for("member_pages.list_members")


def _member_target(member_id: int) -> str:
    return url_for("member_pages.view_member", member_id=member_id)


def _form_page(template: str, *, values, errors=None, member=None, status: int = 200) -> Render:
    return Render(
        template,
        {
            "values": values,
            "errors": errors or [],
            "member": member,
            "levels": LEVELS,
            "statuses": MEMBERSHIP_STATUSES,
            "departments": department_choices(),
        },
        status=status,
    )


@member_pages_bp.get("/")
@require_role(Role.EXECUTIVE)
def list_members(ctx: PageContext):
    try:
        filters = MemberListFilter.model_validate(request.args.to_dict())
    except ValidationError:
        filters = MemberListFilter()
    result = search_members(filters)
    return Render(
        "members/list.html",
        {
            "page": result,
            "filters": filters,
            "departments": department_choices(),
            "levels": LEVELS,
            "statuses": MEMBERSHIP_STATUSES,
            "sortable": SORTABLE_COLUMNS,
            "roles": list(Role),
        },
    )


@member_pages_bp.get("/<int:member_id>")
@require_role(Role.EXECUTIVE)
def view_member(ctx: PageContext, member_id: int):
    member = get_member(member_id)
    if member is None:
        raise NotFound(_error("not_found"), target=_list_target())
    return Render(
        "members/view.html",
        {"member": member, "project_count": project_count_for(member_id), "roles": list(Role)},
    )


@member_pages_bp.route("/new", methods=["GET", "POST"])
@require_role(Role.EXECUTIVE)
@csrf_protected
def add_member(ctx: PageContext):
    if request.method == "GET":
        return _form_page("members/form.html", values={})
    try:
        data = MemberForm.model_validate(request.form.to_dict())
    except ValidationError as exc:
        return _form_page("members/form.html", values=request.form, errors=form_errors(exc))
    try:
        member = create_member(data, ctx.identity)
    except ValueError as exc:
        return _form_page("members/form.html", values=request.form, errors=[_error(str(exc))])
    return ctx.redirect_with_message(
        url_for("member_pages.view_member", member_id=member.id),
        f"Member {member.full_name} added successfully!",
        Severity.SUCCESS,
    )


@member_pages_bp.route("/<int:member_id>/edit", methods=["GET", "POST"])
@require_role(Role.EXECUTIVE)
@csrf_protected
def edit_member(ctx: PageContext, member_id: int):
    member = get_member(member_id)
    if member is None:
        raise NotFound(_error("not_found"), target=_list_target())
    if request.method == "GET":
        if outranks(member, ctx.identity):
            return ctx.redirect_with_message(_member_target(member_id), FORBIDDEN_CHANGE, Severity.ERROR)
        values = {field: getattr(member, field) for field in MemberForm.model_fields if field != "password"}
        return _form_page("members/form.html", values=values, member=member)
    try:
        data = MemberForm.model_validate(request.form.to_dict())
        member = update_member(member_id, data, ctx.identity)
    except ValidationError as exc:
        return _form_page("members/form.html", values=request.form, errors=form_errors(exc), member=member)
    except AuthorizationFailure as exc:
        return _form_page(
            "members/form.html", values=request.form, errors=[exc.message], member=member, status=403
        )
    except ValueError as exc:
        return _form_page("members/form.html", values=request.form, errors=[_error(str(exc))], member=member)
    return ctx.redirect_with_message(
        _member_target(member.id),
        "Member updated successfully!",
        Severity.SUCCESS,
    )


@member_pages_bp.post("/<int:member_id>/approve")
@require_role(Role.EXECUTIVE)
@csrf_protected
def approve(ctx: PageContext, member_id: int):
    try:
        approve_member(member_id, ctx.identity)
    except ValueError as exc:
        return ctx.redirect_with_message(_list_target(), _error(str(exc)), Severity.ERROR)
    return ctx.redirect_with_message(
        _list_target(),
        "Member approved successfully! They can now log in to access the dashboard.",
        Severity.SUCCESS,
    )


@member_pages_bp.post("/<int:member_id>/reject")
@require_role(Role.EXECUTIVE)
@csrf_protected
def reject(ctx: PageContext, member_id: int):
    try:
        reject_member(member_id, ctx.identity)
    except AuthorizationFailure as exc:
        return ctx.redirect_with_message(_member_target(member_id), exc.message, exc.severity)
    except ValueError as exc:
        return ctx.redirect_with_message(_list_target(), _error(str(exc)), Severity.ERROR)
    return ctx.redirect_with_message(
        _list_target(), "Member rejected. Account has been set to inactive.", Severity.ERROR
    )


@member_pages_bp.post("/<int:member_id>/role")
@require_role(Role.ADMIN)
@csrf_protected
def change_role(ctx: PageContext, member_id: int):
    try:
        member, changed = change_member_role(ctx.identity, member_id, request.form.get("role"))
    except ValueError as exc:
        code = str(exc)
        target = _list_target() if code == "not_found" else _member_target(member_id)
        return ctx.redirect_with_message(target, _error(code), Severity.ERROR)
    if not changed:
        return ctx.redirect_with_message(_member_target(member_id), "Member already has this role.", Severity.INFO)
    return ctx.redirect_with_message(
        _member_target(member_id),
        f"Successfully updated {member.full_name}'s role to {member.role_enum.label}!",
        Severity.SUCCESS,
    )


@member_pages_bp.get("/<int:member_id>/delete")
@require_role(Role.EXECUTIVE)
def confirm_delete(ctx: PageContext, member_id: int):
    member = get_member(member_id)
    if member is None:
        raise NotFound(_error("not_found"), target=_list_target())
    return Render(
        "members/delete.html",
        {"member": member, "project_count": project_count_for(member_id)},
    )


@member_pages_bp.post("/<int:member_id>/deactivate")
@require_role(Role.EXECUTIVE)
@csrf_protected
def deactivate(ctx: PageContext, member_id: int):
    try:
        member = deactivate_member(member_id, ctx.identity)
    except AuthorizationFailure as exc:
        return ctx.redirect_with_message(_member_target(member_id), exc.message, exc.severity)
    except ValueError as exc:
        return ctx.redirect_with_message(_list_target(), _error(str(exc)), Severity.ERROR)
    return ctx.redirect_with_message(
        _list_target(), f"{member.full_name} has been marked as inactive.", Severity.SUCCESS
    )


@member_pages_bp.post("/<int:member_id>/delete")
@require_role(Role.ADMIN)
@csrf_protected
def delete(ctx: PageContext, member_id: int):
    try:
        name = delete_member(member_id, ctx.identity)
    except ValueError as exc:
        return ctx.redirect_with_message(_list_target(), _error(str(exc)), Severity.ERROR)
    return ctx.redirect_with_message(
        _list_target(), f"{name} has been permanently deleted.", Severity.SUCCESS
    )
