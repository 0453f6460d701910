"""Request-boundary failures. Each one ends in a flash message, never a crash."""

from __future__ import annotations

from typing import Optional

from nacos.core.auth.constants import Severity

GENERIC_LOGIN_FAILURE = "Invalid username or password, or account is inactive."
GENERIC_CSRF_FAILURE = "Invalid request. Please try again."
LOGIN_REQUIRED = "Please login to access admin dashboard."
ACCESS_DENIED = "Access denied. Admin privileges required."
FORBIDDEN_CHANGE = "You do not have permission to change this account."


class NacosError(Exception):
    """Base for failures surfaced to the user as flash + redirect."""

    default_message = "An error occurred. Please try again."

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        severity: Severity = Severity.ERROR,
        target: Optional[str] = None,
    ) -> None:
        self.message = message or self.default_message
        self.severity = severity
        self.target = target
        super().__init__(self.message)


class AuthenticationFailure(NacosError):
    default_message = GENERIC_LOGIN_FAILURE


class AuthorizationFailure(NacosError):
    default_message = ACCESS_DENIED


class CSRFFailure(NacosError):
    default_message = GENERIC_CSRF_FAILURE


class NotFound(NacosError):
    default_message = "The requested record was not found."


__all__ = [
    "NacosError",
    "AuthenticationFailure",
    "AuthorizationFailure",
    "CSRFFailure",
    "NotFound",
    "GENERIC_LOGIN_FAILURE",
    "GENERIC_CSRF_FAILURE",
    "LOGIN_REQUIRED",
    "ACCESS_DENIED",
    "FORBIDDEN_CHANGE",
]
