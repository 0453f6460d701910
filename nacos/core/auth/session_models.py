"""Value objects cached in the session (identity, flash message)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from nacos.core.auth.constants import Role, Severity


@dataclass(frozen=True)
class Identity:
    """Authenticated principal; the session caches id, name and role only."""

    id: int
    username: str
    display_name: str
    role: Role
    active: bool = True

    @classmethod
    def from_member(cls, member) -> Optional["Identity"]:
        role = Role.parse(member.role)
        if role is None:
            return None
        return cls(
            id=member.id,
            username=member.username,
            display_name=member.full_name or member.username,
            role=role,
            active=member.is_active_account,
        )


@dataclass(frozen=True)
class FlashMessage:
    message: str
    severity: Severity = Severity.INFO

    def to_session(self) -> dict:
        return {"message": self.message, "severity": self.severity.value}

    @classmethod
    def from_session(cls, value) -> Optional["FlashMessage"]:
        if not isinstance(value, dict) or not value.get("message"):
            return None
        try:
            severity = Severity(value.get("severity", Severity.INFO.value))
        except ValueError:
            severity = Severity.INFO
        return cls(message=str(value["message"]), severity=severity)


__all__ = ["Identity", "FlashMessage"]
