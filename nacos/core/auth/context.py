"""Per-request bundle handed to page handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from flask import g, request, session as flask_session

from nacos.core.auth.constants import Severity
from nacos.core.auth.csrf import CSRFGuard
from nacos.core.auth.flash import FlashMessenger
from nacos.core.auth.responses import Redirect
from nacos.core.auth.session_models import Identity
from nacos.core.auth.session_services import SessionAuthority, authority_for
from nacos.core.auth.session_store import ServerSession


@dataclass
class PageContext:
    """The session and the components bound to it for one request."""

    session: ServerSession
    authority: SessionAuthority
    csrf: CSRFGuard
    flash: FlashMessenger
    remote_addr: Optional[str] = None
    identity: Optional[Identity] = None

    @classmethod
    def for_session(
        cls,
        session: ServerSession,
        authority: Optional[SessionAuthority] = None,
        remote_addr: Optional[str] = None,
    ) -> "PageContext":
        return cls(
            session=session,
            authority=authority or SessionAuthority(session),
            csrf=CSRFGuard(session),
            flash=FlashMessenger(session),
            remote_addr=remote_addr,
        )

    @classmethod
    def current(cls) -> "PageContext":
        """Context for the active Flask request, built once per request."""
        session = flask_session._get_current_object()  # type: ignore[attr-defined]
        ctx = g.get("page_context")
        # g outlives the request when an app context is already pushed
        if ctx is None or ctx.session is not session:
            ctx = cls.for_session(session, authority_for(session), remote_addr=request.remote_addr)
            g.page_context = ctx
        return ctx

    def current_identity(self) -> Optional[Identity]:
        if self.identity is None:
            self.identity = self.authority.current_identity(self.remote_addr)
        return self.identity

    def redirect_with_message(
        self, target: str, message: str, severity: Severity = Severity.INFO
    ) -> Redirect:
        return self.flash.redirect_with_message(target, message, severity)


__all__ = ["PageContext"]
