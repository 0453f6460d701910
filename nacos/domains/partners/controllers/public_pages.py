"""Public partnership request form."""

from __future__ import annotations

from flask import Blueprint, request, url_for
from pydantic import ValidationError

from nacos.core.auth.constants import Severity
from nacos.core.auth.context import PageContext
from nacos.core.auth.responses import Render
from nacos.core.utils.decorators import csrf_protected
from nacos.domains.partners.schemas import REQUEST_FIELD_ERRORS, PartnerRequestForm
from nacos.domains.partners.services import submit_partner_request

public_partner_bp = Blueprint("public_partner", __name__)


def _request_errors(exc: ValidationError) -> list[str]:
    messages = []
    for error in exc.errors():
        field = str(error["loc"][0]) if error.get("loc") else ""
        message = REQUEST_FIELD_ERRORS.get(field, "Please check the form and try again.")
        if message not in messages:
            messages.append(message)
    return messages


@public_partner_bp.route("/partner-request", methods=["GET", "POST"])
@csrf_protected
def partner_request():
    if request.method == "GET":
        return Render("public/partner_request.html", {"values": {}, "errors": []})
    try:
        data = PartnerRequestForm.model_validate(request.form.to_dict())
    except ValidationError as exc:
        return Render("public/partner_request.html", {"values": request.form, "errors": _request_errors(exc)})
    ctx = PageContext.current()
    submit_partner_request(data, remote_addr=ctx.remote_addr)
    return ctx.redirect_with_message(
        url_for("public_partner.partner_request"),
        "Thank you! Your partnership request has been received. We will be in touch soon.",
        Severity.SUCCESS,
    )
