"""Admin sign-in and sign-out pages."""

from __future__ import annotations

from flask import Blueprint, current_app, request, url_for
from pydantic import ValidationError

from nacos.core.auth.auth_service import login_member, logout_member
from nacos.core.auth.constants import Severity
from nacos.core.auth.context import PageContext
from nacos.core.auth.errors import AuthenticationFailure
from nacos.core.auth.responses import Redirect, Render
from nacos.core.auth.schemas import LoginRequest
from nacos.core.utils.decorators import csrf_protected
from nacos.extensions import limiter

auth_pages_bp = Blueprint("auth_pages", __name__)

MISSING_CREDENTIALS = "Please enter both username and password."
LOGGED_OUT = "You have been successfully logged out."


def _login_rate_limit() -> str:
    return current_app.config.get("LOGIN_RATE_LIMIT", "10/minute")


def _login_page(username: str = "", error: str | None = None) -> Render:
    return Render("auth/login.html", {"username": username, "error": error})


@auth_pages_bp.route("/login", methods=["GET", "POST"])
@limiter.limit(_login_rate_limit, methods=["POST"])
@csrf_protected
def login():
    ctx = PageContext.current()
    identity = ctx.current_identity()
    if identity is not None and identity.role.is_admin_tier:
        return Redirect(url_for("admin_pages.dashboard"))
    if request.method == "GET":
        return _login_page()

    try:
        data = LoginRequest.model_validate(request.form.to_dict())
    except ValidationError:
        return _login_page(request.form.get("username", ""), MISSING_CREDENTIALS)

    try:
        identity = login_member(ctx.authority, data.username, data.password, remote_addr=ctx.remote_addr)
    except AuthenticationFailure as exc:
        return _login_page(data.username, exc.message)
    return ctx.redirect_with_message(
        url_for("admin_pages.dashboard"),
        f"Welcome back, {identity.display_name}!",
        Severity.SUCCESS,
    )


@auth_pages_bp.post("/logout")
@csrf_protected
def logout():
    ctx = PageContext.current()
    logout_member(ctx.authority, ctx.current_identity())
    return ctx.redirect_with_message(url_for("auth_pages.login"), LOGGED_OUT, Severity.SUCCESS)
