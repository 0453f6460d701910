"""Session-scoped CSRF tokens.

One token per session validates every form rendered in that session. The token
remembers the session id it was issued under, so a regenerated or foreign
session never accepts it.
"""

from __future__ import annotations

import secrets

from nacos.core.auth.constants import SESSION_KEY_CSRF_SID, SESSION_KEY_CSRF_TOKEN
from nacos.core.auth.session_store import ServerSession


class CSRFGuard:
    def __init__(self, session: ServerSession) -> None:
        self.session = session

    def issue_token(self) -> str:
        """Return a stable CSRF token per-session."""
        token = self.session.get(SESSION_KEY_CSRF_TOKEN)
        if not token or self.session.get(SESSION_KEY_CSRF_SID) != self.session.sid:
            token = secrets.token_hex(32)
            self.session[SESSION_KEY_CSRF_TOKEN] = token
            self.session[SESSION_KEY_CSRF_SID] = self.session.sid
        return token

    def verify_token(self, submitted: str | None) -> bool:
        """Validate a provided CSRF token against the session."""
        if not submitted or not isinstance(submitted, str):
            return False
        expected = self.session.get(SESSION_KEY_CSRF_TOKEN)
        if not expected:
            return False
        if self.session.get(SESSION_KEY_CSRF_SID) != self.session.sid:
            return False
        return secrets.compare_digest(submitted.encode("utf-8"), expected.encode("utf-8"))


__all__ = ["CSRFGuard"]
