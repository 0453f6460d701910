"""Reusable decorators for page controllers."""

from __future__ import annotations

from functools import wraps
from typing import Callable, TypeVar

from flask import current_app, request, url_for

from nacos.core.auth.audit import record_security_event
from nacos.core.auth.constants import Role
from nacos.core.auth.context import PageContext
from nacos.core.auth.errors import CSRFFailure
from nacos.core.auth.events import AUTH_CSRF_REJECTED, OUTCOME_DENIED
from nacos.core.auth.gate import AuthorizationGate

F = TypeVar("F", bound=Callable)

UNSAFE_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


def require_role(role: Role):
    """Run the authorization gate; the view receives the PageContext first."""

    def decorator(fn: F) -> F:
        @wraps(fn)
        def wrapper(*args, **kwargs):  # type: ignore[misc]
            ctx = PageContext.current()
            gate = AuthorizationGate(ctx, login_target=url_for("auth_pages.login"))
            denied = gate.require_role(role)
            if denied is not None:
                return denied
            return fn(ctx, *args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def csrf_protected(fn: F) -> F:
    """Validate the csrf_token form field (or X-CSRF-Token header) on unsafe methods.

    Stack below ``require_role`` so the gate runs first.
    """

    @wraps(fn)
    def wrapper(*args, **kwargs):  # type: ignore[misc]
        if request.method not in UNSAFE_METHODS or not current_app.config.get("WTF_CSRF_ENABLED", True):
            return fn(*args, **kwargs)
        ctx = PageContext.current()
        token = request.form.get("csrf_token") or request.headers.get("X-CSRF-Token")
        if not ctx.csrf.verify_token(token):
            record_security_event(
                AUTH_CSRF_REJECTED,
                outcome=OUTCOME_DENIED,
                actor=ctx.current_identity(),
                subject=request.path,
                level="warning",
            )
            raise CSRFFailure()
        return fn(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


__all__ = ["require_role", "csrf_protected"]
