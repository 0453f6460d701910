"""Session authority: binds, reads and drops the authenticated identity."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Optional

from flask import current_app

from nacos.core.auth.constants import (
    IDENTITY_KEYS,
    SESSION_KEY_CSRF_SID,
    SESSION_KEY_DISPLAY_NAME,
    SESSION_KEY_IDENTITY_ID,
    SESSION_KEY_LOGIN_AT,
    SESSION_KEY_REMOTE_ADDR,
    SESSION_KEY_ROLE,
    SESSION_KEY_USERNAME,
    Role,
)
from nacos.core.auth.session_models import Identity
from nacos.core.auth.session_store import ServerSession

SESSION_KEY_ROTATED_AT = "_rotated_at"

INVALIDATED_EXPIRED = "expired"
INVALIDATED_ADDRESS_CHANGED = "address_changed"
INVALIDATED_UNKNOWN_ROLE = "unknown_role"


class SessionAuthority:
    """Identity operations over one explicit session object."""

    def __init__(
        self,
        session: ServerSession,
        *,
        idle_seconds: int = 1800,
        ttl_seconds: int = 86400,
        regenerate_seconds: int = 1800,
        bind_remote_addr: bool = False,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.session = session
        self.idle_seconds = idle_seconds
        self.ttl_seconds = ttl_seconds
        self.regenerate_seconds = regenerate_seconds
        self.bind_remote_addr = bind_remote_addr
        self.clock = clock or datetime.utcnow
        self.invalidation_reason: Optional[str] = None

    def login(self, identity: Identity, remote_addr: Optional[str] = None) -> None:
        """Start a fresh authenticated session for ``identity``.

        Everything the anonymous session held (including its CSRF token) is
        dropped and the id is regenerated.
        """
        now = self.clock()
        self.session.clear()
        self.session.regenerate()
        self.session.created_at = now
        self.session.touch(now)
        self.session[SESSION_KEY_IDENTITY_ID] = identity.id
        self.session[SESSION_KEY_USERNAME] = identity.username
        self.session[SESSION_KEY_DISPLAY_NAME] = identity.display_name
        self.session[SESSION_KEY_ROLE] = identity.role.value
        self.session[SESSION_KEY_LOGIN_AT] = now.isoformat()
        self.session[SESSION_KEY_ROTATED_AT] = now.timestamp()
        if remote_addr:
            self.session[SESSION_KEY_REMOTE_ADDR] = remote_addr
        self.invalidation_reason = None

    def current_identity(self, remote_addr: Optional[str] = None) -> Optional[Identity]:
        identity_id = self.session.get(SESSION_KEY_IDENTITY_ID)
        if identity_id is None:
            return None

        now = self.clock()
        if self.session.is_expired(self.idle_seconds, self.ttl_seconds, now=now):
            return self._invalidate(INVALIDATED_EXPIRED)

        role = Role.parse(self.session.get(SESSION_KEY_ROLE))
        if role is None:
            return self._invalidate(INVALIDATED_UNKNOWN_ROLE)

        bound_addr = self.session.get(SESSION_KEY_REMOTE_ADDR)
        if self.bind_remote_addr and bound_addr and remote_addr and bound_addr != remote_addr:
            return self._invalidate(INVALIDATED_ADDRESS_CHANGED)

        self._maybe_rotate(now)
        return Identity(
            id=int(identity_id),
            username=self.session.get(SESSION_KEY_USERNAME) or "",
            display_name=self.session.get(SESSION_KEY_DISPLAY_NAME) or "",
            role=role,
        )

    def is_authenticated(self, remote_addr: Optional[str] = None) -> bool:
        return self.current_identity(remote_addr) is not None

    def has_role(self, role: Role, remote_addr: Optional[str] = None) -> bool:
        identity = self.current_identity(remote_addr)
        return identity is not None and identity.role.satisfies(role)

    def logout(self) -> None:
        for key in IDENTITY_KEYS:
            self.session.pop(key, None)
        self.session.destroy()

    def _invalidate(self, reason: str) -> None:
        self.invalidation_reason = reason
        for key in IDENTITY_KEYS:
            self.session.pop(key, None)
        self.session.pop(SESSION_KEY_ROTATED_AT, None)
        return None

    def _maybe_rotate(self, now: datetime) -> None:
        if not self.regenerate_seconds:
            return
        rotated_at = self.session.get(SESSION_KEY_ROTATED_AT)
        last = datetime.fromtimestamp(rotated_at) if rotated_at else self.session.created_at
        if now - last > timedelta(seconds=self.regenerate_seconds):
            old_sid = self.session.sid
            new_sid = self.session.regenerate()
            self.session[SESSION_KEY_ROTATED_AT] = now.timestamp()
            # Same owner, new id: forms rendered before the rotation stay valid.
            if self.session.get(SESSION_KEY_CSRF_SID) == old_sid:
                self.session[SESSION_KEY_CSRF_SID] = new_sid


def authority_for(session: ServerSession) -> SessionAuthority:
    """Build an authority configured from the running app."""
    config = current_app.config
    return SessionAuthority(
        session,
        idle_seconds=config.get("SESSION_IDLE_TIMEOUT_SECONDS", 1800),
        ttl_seconds=config.get("SESSION_TTL_SECONDS", 86400),
        regenerate_seconds=config.get("SESSION_REGENERATE_SECONDS", 1800),
        bind_remote_addr=config.get("SESSION_BIND_REMOTE_ADDR", False),
    )


__all__ = ["SessionAuthority", "authority_for"]
