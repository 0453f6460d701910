from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from nacos.core.auth.constants import SESSION_KEY_FLASH, Role, Severity
from nacos.core.auth.context import PageContext
from nacos.core.auth.errors import ACCESS_DENIED, LOGIN_REQUIRED
from nacos.core.auth.events import AUTH_ACCESS_DENIED, AUTH_SESSION_ADDRESS_CHANGED, AUTH_SESSION_EXPIRED
from nacos.core.auth.gate import SESSION_EXPIRED, AuthorizationGate
from nacos.core.auth.responses import Redirect
from nacos.core.auth.session_models import Identity
from nacos.core.auth.session_services import SessionAuthority
from nacos.core.auth.session_store import ServerSession

pytestmark = pytest.mark.unit

LOGIN = "/admin/login"


class AuditSpy:
    def __init__(self) -> None:
        self.events = []

    def __call__(self, event, **kwargs):
        self.events.append((event, kwargs))


def _context(identity=None, *, remote_addr="10.0.0.1", clock=None, **authority_kwargs):
    session = ServerSession(sid="s1")
    authority = SessionAuthority(session, clock=clock, **authority_kwargs)
    if identity is not None:
        authority.login(identity, remote_addr=remote_addr)
    return PageContext.for_session(session, authority, remote_addr=remote_addr)


def _identity(role: Role) -> Identity:
    return Identity(id=5, username="someone", display_name="Some One", role=role)


class TestAuthorizationGate:
    def test_anonymous_is_redirected_to_login(self):
        ctx = _context()
        audit = AuditSpy()
        outcome = AuthorizationGate(ctx, login_target=LOGIN, audit=audit).require_role(Role.EXECUTIVE)
        assert outcome == Redirect(LOGIN)
        assert ctx.flash.take_flash().message == LOGIN_REQUIRED
        assert audit.events == []

    @pytest.mark.parametrize(
        "role,required",
        [(Role.MEMBER, Role.EXECUTIVE), (Role.MEMBER, Role.ADMIN), (Role.EXECUTIVE, Role.ADMIN)],
    )
    def test_insufficient_role_is_denied_and_audited(self, role, required):
        ctx = _context(_identity(role))
        audit = AuditSpy()
        outcome = AuthorizationGate(ctx, login_target=LOGIN, audit=audit).require_role(required)
        assert outcome == Redirect(LOGIN)
        flash = ctx.flash.take_flash()
        assert flash.message == ACCESS_DENIED
        assert flash.severity is Severity.ERROR
        assert [event for event, _ in audit.events] == [AUTH_ACCESS_DENIED]

    @pytest.mark.parametrize(
        "role,required",
        [(Role.ADMIN, Role.ADMIN), (Role.ADMIN, Role.EXECUTIVE), (Role.EXECUTIVE, Role.EXECUTIVE), (Role.MEMBER, Role.MEMBER)],
    )
    def test_sufficient_role_proceeds(self, role, required):
        ctx = _context(_identity(role))
        assert AuthorizationGate(ctx, login_target=LOGIN, audit=AuditSpy()).require_role(required) is None
        assert SESSION_KEY_FLASH not in ctx.session

    def test_unknown_required_role_fails_closed(self):
        ctx = _context(_identity(Role.ADMIN))
        outcome = AuthorizationGate(ctx, login_target=LOGIN, audit=AuditSpy()).require_role("owner")
        assert outcome == Redirect(LOGIN)

    def test_expired_session_gets_its_own_message(self):
        start = datetime(2025, 3, 1, 9, 0)
        times = iter([start, start + timedelta(hours=2)])
        ctx = _context(_identity(Role.ADMIN), clock=lambda: next(times), idle_seconds=1800)
        audit = AuditSpy()
        outcome = AuthorizationGate(ctx, login_target=LOGIN, audit=audit).require_role(Role.EXECUTIVE)
        assert outcome == Redirect(LOGIN)
        assert ctx.flash.take_flash().message == SESSION_EXPIRED
        assert [event for event, _ in audit.events] == [AUTH_SESSION_EXPIRED]

    def test_address_change_is_audited(self):
        ctx = _context(_identity(Role.ADMIN), bind_remote_addr=True)
        ctx.remote_addr = "192.168.1.50"
        audit = AuditSpy()
        AuthorizationGate(ctx, login_target=LOGIN, audit=audit).require_role(Role.EXECUTIVE)
        assert [event for event, _ in audit.events] == [AUTH_SESSION_ADDRESS_CHANGED]
        assert ctx.flash.take_flash().message == SESSION_EXPIRED
