"""Authentication service layer: credential check, session binding, audit."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from nacos.core.auth.audit import record_security_event
from nacos.core.auth.credentials import CredentialVerifier
from nacos.core.auth.errors import AuthenticationFailure
from nacos.core.auth.events import (
    AUTH_LOGIN_FAILED,
    AUTH_LOGIN_SUCCEEDED,
    AUTH_LOGOUT,
    OUTCOME_FAILURE,
    OUTCOME_SUCCESS,
)
from nacos.core.auth.session_models import Identity
from nacos.core.auth.session_services import SessionAuthority
from nacos.core.members.repository import find_identity_by_id
from nacos.extensions import db

logger = logging.getLogger(__name__)


def login_member(
    authority: SessionAuthority,
    username: str,
    password: str,
    *,
    remote_addr: Optional[str] = None,
    verifier: Optional[CredentialVerifier] = None,
) -> Identity:
    """Verify credentials and bind the identity to the session.

    Only admin-tier accounts may sign in to the back-office; a valid member
    account fails exactly like a wrong password. Raises
    ``AuthenticationFailure`` on any failure and leaves the session untouched.
    """
    verifier = verifier or CredentialVerifier()
    identity = verifier.verify(username, password)
    if identity is None or not identity.role.is_admin_tier:
        record_security_event(
            AUTH_LOGIN_FAILED,
            outcome=OUTCOME_FAILURE,
            actor_name=username[:255] if username else None,
            level="warning",
            details={"reason": "bad_credentials" if identity is None else "not_admin_tier"},
        )
        raise AuthenticationFailure()

    authority.login(identity, remote_addr)
    member = find_identity_by_id(identity.id)
    if member is not None:
        member.last_login = datetime.utcnow()
    record_security_event(AUTH_LOGIN_SUCCEEDED, outcome=OUTCOME_SUCCESS, actor=identity, commit=False)
    db.session.commit()
    logger.info("Member %s logged in", identity.id)
    return identity


def logout_member(authority: SessionAuthority, identity: Optional[Identity]) -> None:
    if identity is not None:
        record_security_event(AUTH_LOGOUT, outcome=OUTCOME_SUCCESS, actor=identity)
    authority.logout()


__all__ = ["login_member", "logout_member"]
