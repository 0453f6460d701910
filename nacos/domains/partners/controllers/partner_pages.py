"""Partner management pages."""

from __future__ import annotations

from flask import Blueprint, current_app, request, url_for
from pydantic import ValidationError

from nacos.core.auth.constants import Role, Severity
from nacos.core.auth.context import PageContext
from nacos.core.auth.errors import NotFound
from nacos.core.auth.responses import Render
from nacos.core.utils.decorators import csrf_protected, require_role
from nacos.core.utils.validation import form_errors
from nacos.domains.partners.models import PARTNER_STATUSES, PARTNER_TYPES
from nacos.domains.partners.schemas import PartnerForm, PartnerListFilter
from nacos.domains.partners.services import (
    create_partner,
    delete_partner,
    delete_partner_request,
    get_partner,
    list_partner_requests,
    list_partners,
    set_featured,
    update_partner,
)

partner_pages_bp = Blueprint("partner_pages", __name__)

NOT_FOUND = "Partner not found."


def _error(code: str) -> str:
    if code == "invalid_file_type":
        return "Invalid logo type. Use JPG, PNG, GIF, or SVG."
    if code == "file_too_large":
        return f"Logo size exceeds {current_app.config['LOGO_MAX_BYTES'] // (1024 * 1024)}MB."
    if code == "not_found":
        return NOT_FOUND
    return "An error occurred."


def _home() -> str:
    return url_for("partner_pages.partners_home")


def _form_page(values, errors=None, partner=None) -> Render:
    return Render(
        "partners/form.html",
        {
            "values": values,
            "errors": errors or [],
            "partner": partner,
            "types": PARTNER_TYPES,
            "statuses": PARTNER_STATUSES,
        },
    )


@partner_pages_bp.get("/")
@require_role(Role.EXECUTIVE)
def partners_home(ctx: PageContext):
    try:
        filters = PartnerListFilter.model_validate(request.args.to_dict())
    except ValidationError:
        filters = PartnerListFilter()
    return Render(
        "partners/list.html",
        {"page": list_partners(filters), "filters": filters, "types": PARTNER_TYPES},
    )


@partner_pages_bp.route("/new", methods=["GET", "POST"])
@require_role(Role.EXECUTIVE)
@csrf_protected
def add_partner(ctx: PageContext):
    if request.method == "GET":
        return _form_page({})
    try:
        data = PartnerForm.model_validate(request.form.to_dict())
    except ValidationError as exc:
        return _form_page(request.form, form_errors(exc))
    try:
        create_partner(data, request.files.get("logo"))
    except ValueError as exc:
        return _form_page(request.form, [_error(str(exc))])
    return ctx.redirect_with_message(_home(), "Partner added successfully!", Severity.SUCCESS)


@partner_pages_bp.route("/<int:partner_id>/edit", methods=["GET", "POST"])
@require_role(Role.EXECUTIVE)
@csrf_protected
def edit_partner(ctx: PageContext, partner_id: int):
    partner = get_partner(partner_id)
    if partner is None:
        raise NotFound(NOT_FOUND, target=_home())
    if request.method == "GET":
        values = {field: getattr(partner, field) for field in PartnerForm.model_fields}
        return _form_page(values, partner=partner)
    try:
        data = PartnerForm.model_validate(request.form.to_dict())
    except ValidationError as exc:
        return _form_page(request.form, form_errors(exc), partner)
    try:
        update_partner(partner_id, data, request.files.get("logo"))
    except ValueError as exc:
        return _form_page(request.form, [_error(str(exc))], partner)
    return ctx.redirect_with_message(_home(), "Partner updated successfully!", Severity.SUCCESS)


@partner_pages_bp.post("/<int:partner_id>/featured")
@require_role(Role.EXECUTIVE)
@csrf_protected
def toggle_featured(ctx: PageContext, partner_id: int):
    action = request.form.get("action")
    if action not in ("on", "off"):
        return ctx.redirect_with_message(_home(), "Invalid request.", Severity.ERROR)
    try:
        partner = set_featured(partner_id, action == "on")
    except ValueError as exc:
        return ctx.redirect_with_message(_home(), _error(str(exc)), Severity.ERROR)
    state = "featured" if partner.is_featured else "no longer featured"
    return ctx.redirect_with_message(_home(), f"{partner.name} is {state}.", Severity.SUCCESS)


@partner_pages_bp.post("/<int:partner_id>/delete")
@require_role(Role.EXECUTIVE)
@csrf_protected
def remove_partner(ctx: PageContext, partner_id: int):
    if not delete_partner(partner_id):
        return ctx.redirect_with_message(_home(), NOT_FOUND, Severity.ERROR)
    return ctx.redirect_with_message(_home(), "Partner deleted successfully!", Severity.SUCCESS)


@partner_pages_bp.get("/requests")
@require_role(Role.EXECUTIVE)
def partner_requests(ctx: PageContext):
    return Render("partners/requests.html", {"requests": list_partner_requests()})


@partner_pages_bp.post("/requests/<int:request_id>/delete")
@require_role(Role.EXECUTIVE)
@csrf_protected
def remove_partner_request(ctx: PageContext, request_id: int):
    target = url_for("partner_pages.partner_requests")
    if not delete_partner_request(request_id):
        return ctx.redirect_with_message(target, "Request not found.", Severity.ERROR)
    return ctx.redirect_with_message(target, "Request deleted.", Severity.SUCCESS)
