"""Auth constants: roles, flash severities, session keys and lifecycle states."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Closed set of account roles. Admin-tier roles are admin and executive."""

    ADMIN = "admin"
    EXECUTIVE = "executive"
    MEMBER = "member"

    @classmethod
    def parse(cls, value) -> Optional["Role"]:
        """Return the matching role or None; unknown strings never map to a role."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def label(self) -> str:
        return _ROLE_LABELS[self]

    def satisfies(self, required: "Role") -> bool:
        return required in _ROLE_GRANTS[self]

    @property
    def is_admin_tier(self) -> bool:
        return self.satisfies(Role.EXECUTIVE)


# Every Role member must appear in both tables.
_ROLE_LABELS = {
    Role.ADMIN: "Administrator",
    Role.EXECUTIVE: "Executive",
    Role.MEMBER: "Regular Member",
}
_ROLE_GRANTS = {
    Role.ADMIN: frozenset({Role.ADMIN, Role.EXECUTIVE, Role.MEMBER}),
    Role.EXECUTIVE: frozenset({Role.EXECUTIVE, Role.MEMBER}),
    Role.MEMBER: frozenset({Role.MEMBER}),
}


class Severity(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


# Membership lifecycle; only active accounts may authenticate.
MEMBERSHIP_PENDING = "pending"
MEMBERSHIP_ACTIVE = "active"
MEMBERSHIP_INACTIVE = "inactive"
MEMBERSHIP_SUSPENDED = "suspended"
MEMBERSHIP_STATUSES = (
    MEMBERSHIP_PENDING,
    MEMBERSHIP_ACTIVE,
    MEMBERSHIP_INACTIVE,
    MEMBERSHIP_SUSPENDED,
)

# Session attribute keys
SESSION_KEY_IDENTITY_ID = "identity_id"
SESSION_KEY_USERNAME = "username"
SESSION_KEY_DISPLAY_NAME = "display_name"
SESSION_KEY_ROLE = "role"
SESSION_KEY_LOGIN_AT = "login_at"
SESSION_KEY_REMOTE_ADDR = "remote_addr"
SESSION_KEY_CSRF_TOKEN = "_csrf_token"
SESSION_KEY_CSRF_SID = "_csrf_sid"
SESSION_KEY_FLASH = "_flash"

IDENTITY_KEYS = (
    SESSION_KEY_IDENTITY_ID,
    SESSION_KEY_USERNAME,
    SESSION_KEY_DISPLAY_NAME,
    SESSION_KEY_ROLE,
    SESSION_KEY_LOGIN_AT,
    SESSION_KEY_REMOTE_ADDR,
)

# Session lifecycle states for persisted sessions
SESSION_STATE_ACTIVE = "active"
SESSION_STATE_INVALIDATED = "invalidated"
SESSION_STATE_EXPIRED = "expired"

__all__ = [
    "Role",
    "Severity",
    "MEMBERSHIP_PENDING",
    "MEMBERSHIP_ACTIVE",
    "MEMBERSHIP_INACTIVE",
    "MEMBERSHIP_SUSPENDED",
    "MEMBERSHIP_STATUSES",
    "SESSION_KEY_IDENTITY_ID",
    "SESSION_KEY_USERNAME",
    "SESSION_KEY_DISPLAY_NAME",
    "SESSION_KEY_ROLE",
    "SESSION_KEY_LOGIN_AT",
    "SESSION_KEY_REMOTE_ADDR",
    "SESSION_KEY_CSRF_TOKEN",
    "SESSION_KEY_CSRF_SID",
    "SESSION_KEY_FLASH",
    "IDENTITY_KEYS",
    "SESSION_STATE_ACTIVE",
    "SESSION_STATE_INVALIDATED",
    "SESSION_STATE_EXPIRED",
]
