"""Lookups the auth core performs against the member store."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import func

from nacos.core.members.models import Member
from nacos.extensions import db


def find_account_by_username(name: str) -> Optional[Member]:
    """Match on username first, then on matric number (members sign in with either)."""
    cleaned = (name or "").strip()
    if not cleaned:
        return None
    account = Member.query.filter(func.lower(Member.username) == cleaned.lower()).first()
    if account:
        return account
    return Member.query.filter(Member.matric_no == cleaned.upper()).first()


def find_identity_by_id(member_id: int) -> Optional[Member]:
    return db.session.get(Member, member_id)


__all__ = ["find_account_by_username", "find_identity_by_id"]
