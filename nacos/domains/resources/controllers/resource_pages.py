"""Resource library pages."""

from __future__ import annotations

from flask import Blueprint, current_app, request, url_for
from pydantic import ValidationError

from nacos.core.auth.constants import Role, Severity
from nacos.core.auth.context import PageContext
from nacos.core.auth.errors import NotFound
from nacos.core.auth.responses import Render
from nacos.core.utils.decorators import csrf_protected, require_role
from nacos.core.utils.validation import form_errors
from nacos.domains.members.schemas import LEVELS
from nacos.domains.resources.models import RESOURCE_TYPES
from nacos.domains.resources.schemas import ResourceForm, ResourceListFilter
from nacos.domains.resources.services import (
    create_resource,
    delete_resource,
    get_resource,
    list_resources,
    update_resource,
)

resource_pages_bp = Blueprint("resource_pages", __name__)

NOT_FOUND = "Resource not found."


def _error(code: str) -> str:
    if code == "invalid_file_type":
        return "Invalid file type."
    if code == "file_too_large":
        limit = current_app.config["RESOURCE_MAX_BYTES"] // (1024 * 1024)
        return f"File size exceeds {limit}MB limit."
    if code == "not_found":
        return NOT_FOUND
    return "An error occurred. Please try again."


def _form_page(values, errors=None, resource=None) -> Render:
    return Render(
        "resources/form.html",
        {
            "values": values,
            "errors": errors or [],
            "resource": resource,
            "types": RESOURCE_TYPES,
            "levels": LEVELS,
        },
    )


@resource_pages_bp.get("/")
@require_role(Role.EXECUTIVE)
def resources_home(ctx: PageContext):
    try:
        filters = ResourceListFilter.model_validate(request.args.to_dict())
    except ValidationError:
        filters = ResourceListFilter()
    return Render(
        "resources/list.html",
        {"page": list_resources(filters), "filters": filters, "types": RESOURCE_TYPES, "levels": LEVELS},
    )


@resource_pages_bp.route("/new", methods=["GET", "POST"])
@require_role(Role.EXECUTIVE)
@csrf_protected
def add_resource(ctx: PageContext):
    if request.method == "GET":
        return _form_page({})
    try:
        data = ResourceForm.model_validate(request.form.to_dict())
    except ValidationError as exc:
        return _form_page(request.form, form_errors(exc))
    try:
        create_resource(data, ctx.identity, request.files.get("resource_file"))
    except ValueError as exc:
        return _form_page(request.form, [_error(str(exc))])
    return ctx.redirect_with_message(
        url_for("resource_pages.resources_home"), "Resource added successfully!", Severity.SUCCESS
    )


@resource_pages_bp.route("/<int:resource_id>/edit", methods=["GET", "POST"])
@require_role(Role.EXECUTIVE)
@csrf_protected
def edit_resource(ctx: PageContext, resource_id: int):
    resource = get_resource(resource_id)
    if resource is None:
        raise NotFound(NOT_FOUND, target=url_for("resource_pages.resources_home"))
    if request.method == "GET":
        values = {field: getattr(resource, field) for field in ResourceForm.model_fields}
        return _form_page(values, resource=resource)
    try:
        data = ResourceForm.model_validate(request.form.to_dict())
    except ValidationError as exc:
        return _form_page(request.form, form_errors(exc), resource)
    try:
        update_resource(resource_id, data, request.files.get("resource_file"))
    except ValueError as exc:
        return _form_page(request.form, [_error(str(exc))], resource)
    return ctx.redirect_with_message(
        url_for("resource_pages.resources_home"), "Resource updated successfully!", Severity.SUCCESS
    )


@resource_pages_bp.post("/<int:resource_id>/delete")
@require_role(Role.EXECUTIVE)
@csrf_protected
def remove_resource(ctx: PageContext, resource_id: int):
    target = url_for("resource_pages.resources_home")
    if not delete_resource(resource_id):
        return ctx.redirect_with_message(target, NOT_FOUND, Severity.ERROR)
    return ctx.redirect_with_message(target, "Resource deleted successfully!", Severity.SUCCESS)
