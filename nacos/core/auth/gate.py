"""Authorization gate: the first check of every protected handler."""

from __future__ import annotations

from typing import Callable, Optional

from nacos.core.auth.audit import record_security_event
from nacos.core.auth.constants import Role, Severity
from nacos.core.auth.context import PageContext
from nacos.core.auth.errors import ACCESS_DENIED, LOGIN_REQUIRED
from nacos.core.auth.events import (
    AUTH_ACCESS_DENIED,
    AUTH_SESSION_ADDRESS_CHANGED,
    AUTH_SESSION_EXPIRED,
    OUTCOME_DENIED,
)
from nacos.core.auth.responses import Redirect
from nacos.core.auth.session_services import INVALIDATED_ADDRESS_CHANGED

SESSION_EXPIRED = "Your session has expired. Please log in again."


class AuthorizationGate:
    """Fail-closed role check. Returns a redirect on failure, None to proceed."""

    def __init__(
        self,
        ctx: PageContext,
        *,
        login_target: str,
        audit: Optional[Callable[..., object]] = None,
    ) -> None:
        self.ctx = ctx
        self.login_target = login_target
        self.audit = audit or record_security_event

    def require_role(self, role: Role) -> Optional[Redirect]:
        required = Role.parse(role)
        identity = self.ctx.current_identity()
        if identity is None:
            reason = self.ctx.authority.invalidation_reason
            if reason:
                event = AUTH_SESSION_ADDRESS_CHANGED if reason == INVALIDATED_ADDRESS_CHANGED else AUTH_SESSION_EXPIRED
                self.audit(event, outcome=OUTCOME_DENIED, subject=reason, level="warning")
                return self.ctx.redirect_with_message(self.login_target, SESSION_EXPIRED, Severity.ERROR)
            return self.ctx.redirect_with_message(self.login_target, LOGIN_REQUIRED, Severity.ERROR)

        if required is None or not identity.role.satisfies(required):
            self.audit(
                AUTH_ACCESS_DENIED,
                outcome=OUTCOME_DENIED,
                actor=identity,
                subject=f"requires {required.value if required else role!r}",
                level="warning",
            )
            return self.ctx.redirect_with_message(self.login_target, ACCESS_DENIED, Severity.ERROR)
        return None


__all__ = ["AuthorizationGate", "SESSION_EXPIRED"]
