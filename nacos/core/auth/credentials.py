"""Credential verification against the member store."""

from __future__ import annotations

from typing import Callable, Optional

from nacos.core.auth.password import burn_password_check, verify_password
from nacos.core.auth.session_models import Identity
from nacos.core.members.repository import find_account_by_username


class CredentialVerifier:
    """Check a username/password pair.

    Returns an Identity only when the account exists, is active and the bcrypt
    hash matches. Every failure looks the same to the caller.
    """

    def __init__(self, lookup: Optional[Callable[[str], object]] = None) -> None:
        self.lookup = lookup or find_account_by_username

    def verify(self, username: str, password: str) -> Optional[Identity]:
        if not username or not password:
            return None
        account = self.lookup(username)
        if account is None:
            burn_password_check(password)
            return None
        if not verify_password(password, getattr(account, "password_hash", None)):
            return None
        if not account.is_active_account:
            return None
        return Identity.from_member(account)


__all__ = ["CredentialVerifier"]
